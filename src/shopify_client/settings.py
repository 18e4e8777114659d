from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

LogFormat = Literal["json", "text"]


@dataclass
class ClientSettings:
    """
    Centralized configuration for ShopifyClient.

    Pass an instance of this to ShopifyClient(settings=...) to apply defaults.
    Any explicit keyword args to ShopifyClient(...) will override these.
    """

    # --- Shop / auth ---
    shop_url: str = ""  # "my-shop.myshopify.com" or "https://my-shop.myshopify.com"
    access_token: Optional[str] = None
    api_version: Optional[str] = None  # e.g. "2024-01"; None -> unversioned /admin/

    # --- HTTP behavior ---
    timeout: float = 30.0
    retries: int = 3
    verify_ssl: bool = True

    # --- Logging ---
    log_level: str = "WARNING"  # "DEBUG" | "INFO" | "WARNING" | "ERROR" | "CRITICAL"
    log_format: LogFormat = "json"  # "json" (default) or "text"
    log_destination: str | None = None
    # None or "stderr" -> stderr, "stdout" -> stdout, any other string -> treated as a file path.
