import threading
import weakref
from contextlib import contextmanager
from typing import Iterator

from ...application.ports.profile_locks import ProfileLocks


class InMemoryProfileLocks(ProfileLocks):
    """One lock per profile id, shared by every request in this process.

    Entries live only while some request holds or waits on the lock.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: "weakref.WeakValueDictionary[int, threading.Lock]" = weakref.WeakValueDictionary()

    def _lock_for(self, profile_id: int) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(profile_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[profile_id] = lock
            return lock

    @contextmanager
    def hold(self, profile_id: int) -> Iterator[None]:
        lock = self._lock_for(profile_id)
        with lock:
            yield
