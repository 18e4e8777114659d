from __future__ import annotations

from typing import AsyncIterator, List, Optional, Protocol, Sequence, runtime_checkable

from ..filters import SmartCollectionFilter
from ..models import SmartCollection
from ..request import QueryParam
from .base import Resource


@runtime_checkable
class SmartCollectionService(Protocol):
    """Operations any smart collection client (real or fake) provides."""

    async def count(self, filter: Optional[SmartCollectionFilter] = None) -> int: ...

    async def list(self, filter: Optional[SmartCollectionFilter] = None) -> List[SmartCollection]: ...

    async def get(self, collection_id: int) -> SmartCollection: ...

    async def create(self, collection: SmartCollection) -> SmartCollection: ...

    async def update(self, collection_id: int, collection: SmartCollection) -> SmartCollection: ...

    async def update_product_order(
        self, collection_id: int, product_ids: Sequence[int]
    ) -> SmartCollection: ...

    async def delete(self, collection_id: int) -> None: ...


class SmartCollections(Resource):
    """
    Shopify smart collections (/admin/smart_collections).

    One HTTP call per method. Filters become query parameters; entities are
    wrapped in a ``smart_collection`` root on the way out and unwrapped from
    it on the way back.
    """

    def _params(self, filter: Optional[SmartCollectionFilter]) -> Optional[List[QueryParam]]:
        return filter.to_parameters() if filter is not None else None

    async def count(self, filter: Optional[SmartCollectionFilter] = None) -> int:
        req = self._prepare("smart_collections/count.json", self._params(filter))
        return int(await self._get(req, root_element="count"))

    async def list(self, filter: Optional[SmartCollectionFilter] = None) -> List[SmartCollection]:
        """Up to 250 smart collections (the API's default page is 50)."""
        req = self._prepare("smart_collections.json", self._params(filter))
        items = await self._get(req, root_element="smart_collections")
        return [SmartCollection.from_dict(it) for it in items]

    async def iter_all(
        self, filter: Optional[SmartCollectionFilter] = None, *, page_size: int = 250
    ) -> AsyncIterator[SmartCollection]:
        async for it in self._list(
            "smart_collections.json",
            root_element="smart_collections",
            params=self._params(filter),
            page_size=page_size,
        ):
            yield SmartCollection.from_dict(it)

    async def get(self, collection_id: int) -> SmartCollection:
        req = self._prepare(f"smart_collections/{collection_id}.json")
        return SmartCollection.from_dict(await self._get(req, root_element="smart_collection"))

    async def create(self, collection: SmartCollection) -> SmartCollection:
        # The id is assigned by Shopify; anything set locally is not sent.
        req = self._prepare("smart_collections.json")
        body = {"smart_collection": collection.to_dict(include_id=False)}
        return SmartCollection.from_dict(await self._post(req, body, root_element="smart_collection"))

    async def update(self, collection_id: int, collection: SmartCollection) -> SmartCollection:
        req = self._prepare(f"smart_collections/{collection_id}.json")
        body = {"smart_collection": collection.to_dict()}
        return SmartCollection.from_dict(await self._put(req, body, root_element="smart_collection"))

    async def update_product_order(
        self, collection_id: int, product_ids: Sequence[int]
    ) -> SmartCollection:
        """Set product order for a collection whose sort_order is "manual"."""
        req = self._prepare(f"smart_collections/{collection_id}/order.json")
        body = {"products": list(product_ids)}
        return SmartCollection.from_dict(await self._put(req, body, root_element="smart_collection"))

    async def delete(self, collection_id: int) -> None:
        req = self._prepare(f"smart_collections/{collection_id}.json")
        await self._delete(req)
