# Routers package
from . import profiles_router
from . import images_router

__all__ = [
    "profiles_router",
    "images_router",
]
