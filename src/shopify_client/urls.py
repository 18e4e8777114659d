from __future__ import annotations

from typing import Optional

import httpx


def normalize_shop_url(shop_url: str) -> str:
    """
    Turn any of "my-shop.myshopify.com", "https://my-shop.myshopify.com/" or
    "https://my-shop.myshopify.com/admin" into "https://my-shop.myshopify.com".
    """
    raw = shop_url.strip()
    if not raw:
        raise ValueError("shop_url is required")
    if "://" not in raw:
        raw = f"https://{raw}"
    url = httpx.URL(raw)
    if not url.host:
        raise ValueError(f"Invalid shop_url: {shop_url!r}")
    base = f"{url.scheme}://{url.host}"
    if url.port:
        base = f"{base}:{url.port}"
    return base


def build_url(shop_url: str, path: str, api_version: Optional[str] = None) -> str:
    prefix = f"/admin/api/{api_version}" if api_version else "/admin"
    return f"{shop_url}{prefix}/{path.lstrip('/')}"
