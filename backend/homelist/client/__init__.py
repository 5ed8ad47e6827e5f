from .api import ApartmentsApi, resolve_api_base_url
from .controller import ApartmentsController, ListingState, NullViewport, Viewport
from .images import ResilientImageLoader

__all__ = [
    "ApartmentsApi",
    "ApartmentsController",
    "ListingState",
    "NullViewport",
    "ResilientImageLoader",
    "Viewport",
    "resolve_api_base_url",
]
