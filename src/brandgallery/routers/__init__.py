"""Brand Gallery API routers package."""

from . import auth
from . import galleries
from . import photos
from . import purchases
from . import sheets

__all__ = [
    "auth",
    "galleries",
    "photos",
    "purchases",
    "sheets",
]
