from __future__ import annotations

from typing import Any, AsyncIterator, Dict, Iterable, List, Optional, Sequence

import httpx

from .errors import ShopifyHTTPError, ShopifyRateLimitError
from .filters import SmartCollectionFilter
from .logging import configure_logging, logger
from .models import SmartCollection
from .paging import clamp_page_size, next_since_id
from .request import QueryParam, ShopifyRequest
from .resources import SmartCollections
from .settings import ClientSettings
from .urls import build_url, normalize_shop_url

_PAGING_KEYS = {"limit", "page", "since_id"}


def _parse_retry_after(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


class ShopifyClient:
    """
    Thin, async Shopify Admin REST client.

    - Typed models in, typed models out for resources; raw JSON via execute_request().
    - Stdlib logging (default JSON output when configured).
    - Access-token auth via the X-Shopify-Access-Token header.
    - since_id paging via list_paged().
    - Convenience methods delegate to resource classes.
    """

    def __init__(
        self,
        shop_url: str | None = None,
        *,
        access_token: str | None = None,
        api_version: str | None = None,
        timeout: float = 30.0,
        retries: int = 3,
        verify_ssl: bool = True,
        settings: ClientSettings | None = None,
        log_level: str | None = None,
        log_format: str | None = None,  # "json" (default) or "text"
        log_destination: str | None = None,
    ) -> None:
        if settings:
            configure_logging(
                level=log_level or settings.log_level,
                fmt=(log_format or settings.log_format),
                destination=(log_destination or settings.log_destination),
            )
            shop_url = shop_url or settings.shop_url
            access_token = access_token or settings.access_token
            api_version = api_version or settings.api_version
            timeout = timeout if timeout != 30.0 else settings.timeout
            retries = retries if retries != 3 else settings.retries
            verify_ssl = verify_ssl if verify_ssl is not True else settings.verify_ssl
        elif log_level or log_format or log_destination:
            configure_logging(
                level=log_level or "WARNING",
                fmt=(log_format or "json"),
                destination=log_destination,
            )

        if not shop_url:
            raise ValueError("shop_url is required")

        self.shop_url = normalize_shop_url(shop_url)
        self.api_version = api_version
        self.timeout = float(timeout)
        self.retries = int(retries)
        self.verify_ssl = bool(verify_ssl)
        self._access_token = access_token

        # Opened lazily on first request; see _ensure_client().
        self._client: Optional[httpx.AsyncClient] = None

        self._smart_collections = SmartCollections(self)

    # ---------- lifecycle ----------

    def _build_client(self) -> httpx.AsyncClient:
        headers: Dict[str, str] = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if self._access_token:
            headers["X-Shopify-Access-Token"] = self._access_token
        return httpx.AsyncClient(
            headers=headers,
            timeout=self.timeout,
            verify=self.verify_ssl,
        )

    def _ensure_client(self) -> httpx.AsyncClient:
        """
        (Re)create the httpx.AsyncClient if it is not open.
        This makes client.aclose() safe mid-process (e.g., notebooks).
        """
        if self._client is None:
            logger.debug("Creating HTTP client")
            self._client = self._build_client()
        return self._client

    async def aclose(self) -> None:
        """Idempotent close of the underlying HTTP client."""
        client, self._client = self._client, None
        if client is not None:
            try:
                await client.aclose()
            except Exception as e:
                logger.warning("Error during client.aclose(): %s", e)

    async def __aenter__(self) -> "ShopifyClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # -------------------------
    # Request pipeline
    # -------------------------

    def prepare_request(self, path: str) -> ShopifyRequest:
        return ShopifyRequest(path=path)

    async def execute_request(
        self,
        request: ShopifyRequest,
        method: str,
        *,
        json: Optional[Any] = None,
        root_element: Optional[str] = None,
        decode: bool = True,
    ) -> Any:
        """
        Send ``request`` and decode the response.

        With ``root_element`` the value under that top-level key is returned and a
        missing key is an error; without it the whole decoded body is returned
        ({} for an empty body). With ``decode=False`` the body of a 2xx response is
        ignored and None is returned.
        """
        path = request.path
        url = build_url(self.shop_url, path, self.api_version)
        params = list(request.query_params) or None
        logger.info("Request %s %s params=%s", method, path, params)

        resp: httpx.Response | None = None
        for attempt in range(self.retries + 1):
            client = self._ensure_client()
            try:
                resp = await client.request(method, url, params=params, json=json)
            except httpx.TransportError as e:
                logger.error(
                    "Transport error on %s %s: %s",
                    method,
                    path,
                    e,
                    extra={"method": method, "path": path, "attempt": attempt + 1},
                )
                raise ShopifyHTTPError(0, path, {"message": str(e) or type(e).__name__}) from e
            if resp.status_code >= 500 and method.upper() == "GET" and attempt < self.retries:
                logger.warning(
                    "Retrying %s %s after server error %s (attempt %s)",
                    method,
                    path,
                    resp.status_code,
                    attempt + 1,
                    extra={
                        "method": method,
                        "path": path,
                        "status": resp.status_code,
                        "attempt": attempt + 1,
                    },
                )
                continue
            break

        assert resp is not None
        request_id = resp.headers.get("X-Request-Id")
        if resp.status_code // 100 != 2:
            self._raise_for_status(resp, method, path, request_id)

        if not decode:
            return None

        log_extra = {
            "method": method,
            "path": path,
            "status": resp.status_code,
            "request_id": request_id,
        }
        if not resp.content:
            data: Any = {}
        else:
            try:
                data = resp.json()
            except ValueError as e:
                logger.error("Undecodable JSON on %s: %s", path, e, extra=log_extra)
                raise ShopifyHTTPError(
                    resp.status_code,
                    path,
                    {"message": "Response body is not valid JSON", "body": resp.text[:500]},
                    request_id=request_id,
                ) from e

        if root_element is None:
            return data
        if not isinstance(data, dict) or root_element not in data:
            logger.error("Missing root element %r on %s", root_element, path, extra=log_extra)
            raise ShopifyHTTPError(
                resp.status_code,
                path,
                {"message": f"Missing root element '{root_element}' in response"},
                request_id=request_id,
            )
        return data[root_element]

    @staticmethod
    def _raise_for_status(
        resp: httpx.Response, method: str, path: str, request_id: Optional[str]
    ) -> None:
        try:
            payload = resp.json()
        except ValueError:
            payload = {"message": resp.text}
        if not isinstance(payload, dict):
            payload = {"errors": payload}
        logger.error(
            "HTTP %s on %s: %s",
            resp.status_code,
            path,
            payload,
            extra={
                "method": method,
                "path": path,
                "status": resp.status_code,
                "request_id": request_id,
            },
        )
        if resp.status_code == 429:
            raise ShopifyRateLimitError(
                resp.status_code,
                path,
                payload,
                request_id=request_id,
                retry_after=_parse_retry_after(resp.headers.get("Retry-After")),
            )
        raise ShopifyHTTPError(resp.status_code, path, payload, request_id=request_id)

    # -------------------------
    # Paging helpers
    # -------------------------

    async def list_paged(
        self,
        path: str,
        *,
        root_element: str,
        params: Optional[Iterable[QueryParam]] = None,
        page_size: Optional[int] = None,
    ) -> AsyncIterator[Dict[str, Any]]:
        """Walk every page of a list endpoint using since_id cursors."""
        page_size = clamp_page_size(page_size)
        params = list(params or [])
        since_id = dict(params).get("since_id")
        base = [(k, v) for k, v in params if k not in _PAGING_KEYS]

        while True:
            req = self.prepare_request(path).add_params(base)
            req.add_params([("limit", page_size)])
            if since_id is not None:
                req.add_params([("since_id", since_id)])
            items: List[Dict[str, Any]] = await self.execute_request(
                req, "GET", root_element=root_element
            )
            for it in items:
                yield it

            if len(items) < page_size:
                break
            cursor = next_since_id(items)
            if cursor is None:
                break
            since_id = cursor

    # --------------------------------
    # Public convenience (delegations)
    # --------------------------------

    @property
    def smart_collections(self) -> SmartCollections:
        return self._smart_collections

    async def count_smart_collections(self, filter: SmartCollectionFilter | None = None) -> int:
        return await self._smart_collections.count(filter)

    async def get_smart_collections(
        self, filter: SmartCollectionFilter | None = None
    ) -> List[SmartCollection]:
        return await self._smart_collections.list(filter)

    async def get_smart_collection(self, collection_id: int) -> SmartCollection:
        return await self._smart_collections.get(collection_id)

    async def create_smart_collection(self, collection: SmartCollection) -> SmartCollection:
        return await self._smart_collections.create(collection)

    async def update_smart_collection(
        self, collection_id: int, collection: SmartCollection
    ) -> SmartCollection:
        return await self._smart_collections.update(collection_id, collection)

    async def update_smart_collection_product_order(
        self, collection_id: int, product_ids: Sequence[int]
    ) -> SmartCollection:
        return await self._smart_collections.update_product_order(collection_id, product_ids)

    async def delete_smart_collection(self, collection_id: int) -> None:
        await self._smart_collections.delete(collection_id)
