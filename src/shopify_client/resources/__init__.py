from .smart_collections import SmartCollections, SmartCollectionService

__all__ = [
    "SmartCollections",
    "SmartCollectionService",
]
