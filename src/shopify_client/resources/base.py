from __future__ import annotations

from typing import TYPE_CHECKING, Any, AsyncIterator, Dict, Iterable, Optional

from ..request import QueryParam, ShopifyRequest

if TYPE_CHECKING:
    from shopify_client.client import ShopifyClient


class Resource:
    def __init__(self, client: "ShopifyClient") -> None:
        self._c = client

    # convenience pass-throughs
    def _prepare(self, path: str, params: Optional[Iterable[QueryParam]] = None) -> ShopifyRequest:
        req = self._c.prepare_request(path)
        if params:
            req.add_params(params)
        return req

    async def _get(self, req: ShopifyRequest, *, root_element: str) -> Any:
        return await self._c.execute_request(req, "GET", root_element=root_element)

    async def _post(self, req: ShopifyRequest, json: Dict[str, Any], *, root_element: str) -> Any:
        return await self._c.execute_request(req, "POST", json=json, root_element=root_element)

    async def _put(self, req: ShopifyRequest, json: Dict[str, Any], *, root_element: str) -> Any:
        return await self._c.execute_request(req, "PUT", json=json, root_element=root_element)

    async def _delete(self, req: ShopifyRequest) -> None:
        await self._c.execute_request(req, "DELETE", decode=False)

    def _list(
        self,
        path: str,
        *,
        root_element: str,
        params: Optional[Iterable[QueryParam]] = None,
        page_size: Optional[int] = None,
    ) -> AsyncIterator[Dict[str, Any]]:
        return self._c.list_paged(path, root_element=root_element, params=params, page_size=page_size)
