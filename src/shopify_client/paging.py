from typing import Any, Dict, List, Optional

Json = Dict[str, Any]

# Shopify's hard ceiling for the ``limit`` query parameter on REST list endpoints.
MAX_PAGE_SIZE = 250


def clamp_page_size(page_size: Optional[int]) -> int:
    if not page_size or page_size > MAX_PAGE_SIZE:
        return MAX_PAGE_SIZE
    return max(1, int(page_size))


def next_since_id(items: List[Json]) -> Optional[int]:
    """Largest id on a page, i.e. the cursor for the following page."""
    ids = [it["id"] for it in items if isinstance(it, dict) and it.get("id") is not None]
    return max(ids) if ids else None
