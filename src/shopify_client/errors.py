from __future__ import annotations

from typing import Any, List, Optional


class ShopifyHTTPError(RuntimeError):
    def __init__(
        self,
        status_code: int,
        path: str,
        payload: dict | None,
        *,
        request_id: Optional[str] = None,
    ):
        self.status_code = status_code
        self.path = path
        self.payload = payload or {}
        self.request_id = request_id
        self.errors = _collect_errors(self.payload)
        msg = _format_error(status_code, self.errors) or f"HTTP {status_code} on {path}"
        super().__init__(msg)


class ShopifyRateLimitError(ShopifyHTTPError):
    """429 from the API; ``retry_after`` is in seconds when the server sent it."""

    def __init__(
        self,
        status_code: int,
        path: str,
        payload: dict | None,
        *,
        request_id: Optional[str] = None,
        retry_after: Optional[float] = None,
    ):
        self.retry_after = retry_after
        super().__init__(status_code, path, payload, request_id=request_id)


def _collect_errors(payload: dict) -> List[str]:
    # Shopify uses several shapes:
    #   {"errors": "Not Found"}
    #   {"errors": ["a", "b"]}
    #   {"errors": {"title": ["can't be blank"]}}
    #   {"error": "invalid_request", "error_description": "..."}
    errors: Any = payload.get("errors")
    out: List[str] = []
    if isinstance(errors, str):
        out.append(errors)
    elif isinstance(errors, list):
        out.extend(str(e) for e in errors)
    elif isinstance(errors, dict):
        for field, messages in errors.items():
            if isinstance(messages, list):
                out.extend(f"{field}: {m}" for m in messages)
            else:
                out.append(f"{field}: {messages}")
    if payload.get("error"):
        desc = payload.get("error_description")
        out.append(f"{payload['error']}: {desc}" if desc else str(payload["error"]))
    if not out and payload.get("message"):
        out.append(str(payload["message"]))
    return out


def _format_error(status_code: int, errors: List[str]) -> str:
    if not errors:
        return ""
    return f"HTTP {status_code}: {'; '.join(errors)}"
