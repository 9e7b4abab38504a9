from typing import ContextManager, Protocol


class ProfileLocks(Protocol):
    def hold(self, profile_id: int) -> ContextManager[None]:
        ...
