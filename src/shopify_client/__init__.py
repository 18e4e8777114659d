from .client import ShopifyClient
from .errors import ShopifyHTTPError, ShopifyRateLimitError
from .filters import SmartCollectionFilter
from .models import CollectionImage, SmartCollection, SmartCollectionRule
from .resources import SmartCollections, SmartCollectionService
from .settings import ClientSettings

__all__ = [
    "ShopifyClient",
    "ShopifyHTTPError",
    "ShopifyRateLimitError",
    "ClientSettings",
    "SmartCollectionFilter",
    "SmartCollection",
    "SmartCollectionRule",
    "CollectionImage",
    "SmartCollections",
    "SmartCollectionService",
]
