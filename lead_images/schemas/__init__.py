# Schemas package (re-export feature modules for stable imports)
from .profiles.profile import *
from .images.image import *
from .common.common import *
