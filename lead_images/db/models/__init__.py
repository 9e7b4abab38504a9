# Models package (re-export feature modules for stable imports)
from .profiles.profile import Profile
from .media.image import ProfileImage

__all__ = [
    "Profile",
    "ProfileImage",
]
