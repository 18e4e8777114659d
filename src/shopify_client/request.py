from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Tuple

QueryParam = Tuple[str, Any]


@dataclass
class ShopifyRequest:
    """A single outbound call: path relative to the admin root, plus ordered query pairs."""

    path: str
    query_params: List[QueryParam] = field(default_factory=list)

    def add_params(self, params: Iterable[QueryParam]) -> "ShopifyRequest":
        self.query_params.extend(params)
        return self
