# src/config/settings.py

"""Central configuration for the catalog_manager frontend."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the catalog_manager frontend."""

    # --- Remote product API ---
    API_URL: str = os.getenv(
        "CATALOG_API_URL", "https://fakestoreapi.com/products"
    )
    REQUEST_DELAY: float = 1.0          # Base backoff between retries
    REQUEST_TIMEOUT: int = 15           # Seconds before a request times out
    MAX_RETRIES: int = 3                # Retry count on transient failures

    # --- Resilience ---
    CIRCUIT_BREAKER_THRESHOLD: int = 3  # Consecutive failures to trip
    CIRCUIT_BREAKER_COOLDOWN: float = 30.0
    MAX_DELAY_MULTIPLIER: int = 8       # Cap for adaptive backoff

    # --- Caching ---
    CATALOG_CACHE_TTL: float = 60.0     # List fetch lifetime (secs)

    # --- Catalog ---
    CATEGORIES: list[str] = [
        "electronics",
        "jewelery",
        "men's clothing",
        "women's clothing",
    ]
    POPULAR_RATING: float = 4.5         # "Popular" badge above this rate
    FREE_SHIPPING_PRICE: float = 50.0   # "Free Shipping" badge above this

    # --- HTTP client ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
    }

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"

    # --- Logging ---
    CONSOLE_LOG_LEVEL: str = os.getenv("CATALOG_LOG_LEVEL", "WARNING")
