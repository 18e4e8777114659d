from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, List, Optional, Sequence, Tuple, Union

from .request import QueryParam

FieldList = Union[str, Sequence[str]]


def _encode(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(_encode(v) for v in value)
    return str(value)


@dataclass
class SmartCollectionFilter:
    """
    Query predicates for listing and counting smart collections.

    Every field is optional; unset fields are not sent. ``to_parameters()``
    yields one pair per set field, in the order the fields are declared.
    """

    ids: Optional[Sequence[int]] = None
    since_id: Optional[int] = None
    title: Optional[str] = None
    product_id: Optional[int] = None
    handle: Optional[str] = None
    updated_at_min: Optional[datetime] = None
    updated_at_max: Optional[datetime] = None
    published_at_min: Optional[datetime] = None
    published_at_max: Optional[datetime] = None
    published_status: Optional[str] = None  # "published" | "unpublished" | "any"
    limit: Optional[int] = None
    page: Optional[int] = None
    fields: Optional[FieldList] = None

    def to_parameters(self) -> List[QueryParam]:
        params: List[Tuple[str, str]] = []
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, (list, tuple, set, frozenset)) and not value:
                continue
            params.append((f.name, _encode(value)))
        return params
