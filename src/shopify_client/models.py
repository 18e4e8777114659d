from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

Json = Dict[str, Any]


def _parse_dt(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    # Shopify sends "2024-01-15T10:00:00-05:00"; older payloads may end in "Z".
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def _dt_out(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _drop_none(data: Json) -> Json:
    return {k: v for k, v in data.items() if v is not None}


@dataclass
class SmartCollectionRule:
    column: str
    relation: str
    condition: str

    @classmethod
    def from_dict(cls, data: Json) -> "SmartCollectionRule":
        return cls(
            column=data.get("column", ""),
            relation=data.get("relation", ""),
            condition=data.get("condition", ""),
        )

    def to_dict(self) -> Json:
        return {"column": self.column, "relation": self.relation, "condition": self.condition}


@dataclass
class CollectionImage:
    src: Optional[str] = None
    alt: Optional[str] = None
    attachment: Optional[str] = None  # base64 payload, write-only
    width: Optional[int] = None
    height: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Json) -> "CollectionImage":
        return cls(
            src=data.get("src"),
            alt=data.get("alt"),
            attachment=data.get("attachment"),
            width=data.get("width"),
            height=data.get("height"),
            created_at=_parse_dt(data.get("created_at")),
        )

    def to_dict(self) -> Json:
        return _drop_none(
            {
                "src": self.src,
                "alt": self.alt,
                "attachment": self.attachment,
                "width": self.width,
                "height": self.height,
                "created_at": _dt_out(self.created_at),
            }
        )


_KNOWN_KEYS = {
    "id",
    "title",
    "handle",
    "body_html",
    "sort_order",
    "template_suffix",
    "published",
    "published_at",
    "published_scope",
    "updated_at",
    "disjunctive",
    "rules",
    "image",
    "products",
    "admin_graphql_api_id",
}


@dataclass
class SmartCollection:
    """
    A Shopify smart collection.

    ``id`` is assigned by the shop; leave it unset when creating. Keys the
    API returns that are not modelled here are kept in ``extra`` and sent
    back unchanged by ``to_dict()``.
    """

    id: Optional[int] = None
    title: Optional[str] = None
    handle: Optional[str] = None
    body_html: Optional[str] = None
    sort_order: Optional[str] = None  # "manual", "best-selling", "alpha-asc", ...
    template_suffix: Optional[str] = None
    published: Optional[bool] = None  # write-only toggle
    published_at: Optional[datetime] = None
    published_scope: Optional[str] = None
    updated_at: Optional[datetime] = None
    disjunctive: Optional[bool] = None
    rules: List[SmartCollectionRule] = field(default_factory=list)
    image: Optional[CollectionImage] = None
    products: Optional[List[int]] = None  # ordered product ids in manual sort mode
    admin_graphql_api_id: Optional[str] = None
    extra: Json = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Json) -> "SmartCollection":
        image = data.get("image")
        products = data.get("products")
        return cls(
            id=data.get("id"),
            title=data.get("title"),
            handle=data.get("handle"),
            body_html=data.get("body_html"),
            sort_order=data.get("sort_order"),
            template_suffix=data.get("template_suffix"),
            published=data.get("published"),
            published_at=_parse_dt(data.get("published_at")),
            published_scope=data.get("published_scope"),
            updated_at=_parse_dt(data.get("updated_at")),
            disjunctive=data.get("disjunctive"),
            rules=[SmartCollectionRule.from_dict(r) for r in data.get("rules") or []],
            image=CollectionImage.from_dict(image) if image else None,
            products=[int(p) for p in products] if products is not None else None,
            admin_graphql_api_id=data.get("admin_graphql_api_id"),
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
        )

    def to_dict(self, *, include_id: bool = True) -> Json:
        out = dict(self.extra)
        out.update(
            _drop_none(
                {
                    "id": self.id if include_id else None,
                    "title": self.title,
                    "handle": self.handle,
                    "body_html": self.body_html,
                    "sort_order": self.sort_order,
                    "template_suffix": self.template_suffix,
                    "published": self.published,
                    "published_at": _dt_out(self.published_at),
                    "published_scope": self.published_scope,
                    "updated_at": _dt_out(self.updated_at),
                    "disjunctive": self.disjunctive,
                    "image": self.image.to_dict() if self.image else None,
                    "products": list(self.products) if self.products is not None else None,
                    "admin_graphql_api_id": self.admin_graphql_api_id,
                }
            )
        )
        if self.rules:
            out["rules"] = [r.to_dict() for r in self.rules]
        if not include_id:
            out.pop("id", None)
        return out
