# src/clients/product_api.py

"""HTTP client for the remote product API (list, fetch, create, update, delete)."""

import json
import logging
import threading
import time
from dataclasses import replace
from typing import Any

from curl_cffi import CurlMime
from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.models.payload import MultipartPayload, ProductPayload
from src.models.product import Product, Rating

_RETRYABLE_STATUS = (429, 500, 502, 503, 504)


def _sent_product(product_id: int, payload: ProductPayload) -> Product:
    """Product as submitted, for servers that accept an update without echoing it."""
    if isinstance(payload, Product):
        return replace(payload, id=product_id)
    fields = payload.fields
    return Product(
        id=product_id,
        title=fields.get("title", ""),
        price=float(fields.get("price") or 0),
        description=fields.get("description", ""),
        category=fields.get("category", ""),
    )


class ProductApiClient:
    """Thin resilient wrapper around the product REST endpoints.

    Every call returns ``None`` (or ``False`` / ``[]``) on failure instead
    of raising; the reason is logged.  Transient failures are retried with
    an escalating delay and repeated failures trip a circuit breaker so the
    UI stops hammering an API that is down.
    """

    def __init__(self, base_url: str | None = None) -> None:
        self.logger = logging.getLogger("catalog_manager.api")
        self.settings = Settings()
        self.base_url = (base_url or self.settings.API_URL).rstrip("/")
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._current_delay: float = self.settings.REQUEST_DELAY
        self._consecutive_failures: int = 0
        self._circuit_open: bool = False
        self._circuit_opened_at: float = 0.0
        # curl sessions and breaker counters are not safe across to_thread workers
        self._lock = threading.Lock()

    # ── Resilience ───────────────────────────────────────

    def _check_circuit(self) -> bool:
        """Return True if the circuit breaker blocks this request.

        After CIRCUIT_BREAKER_COOLDOWN seconds the breaker half-opens and
        lets a single probe through.
        """
        if not self._circuit_open:
            return False
        elapsed = time.time() - self._circuit_opened_at
        if elapsed >= self.settings.CIRCUIT_BREAKER_COOLDOWN:
            self.logger.info(
                "Circuit breaker half-open after %.0fs", elapsed
            )
            self._circuit_open = False
            return False
        self.logger.warning("Circuit breaker open, request skipped")
        return True

    def _record_success(self) -> None:
        self._consecutive_failures = 0
        self._circuit_open = False
        self._circuit_opened_at = 0.0
        self._current_delay = self.settings.REQUEST_DELAY

    def _record_failure(self) -> None:
        """Track failure and open circuit breaker if needed."""
        self._consecutive_failures += 1
        if (
            self._consecutive_failures
            >= self.settings.CIRCUIT_BREAKER_THRESHOLD
        ):
            self._circuit_open = True
            self._circuit_opened_at = time.time()
            self.logger.error(
                "Circuit breaker opened after %d consecutive failures",
                self._consecutive_failures,
            )

    def _escalate_delay(self) -> None:
        """Double the current delay up to the configured max."""
        max_delay = (
            self.settings.REQUEST_DELAY
            * self.settings.MAX_DELAY_MULTIPLIER
        )
        self._current_delay = min(self._current_delay * 2, max_delay)
        self.logger.warning(
            "Rate-limited, delay escalated to %.1fs",
            self._current_delay,
        )

    # ── Transport ────────────────────────────────────────

    def _send(
        self,
        method: str,
        url: str,
        payload: ProductPayload | dict[str, Any] | None,
    ) -> curl_requests.Response:
        """Issue one request, encoding *payload* as JSON or multipart."""
        headers = dict(self.settings.DEFAULT_HEADERS)
        timeout = self.settings.REQUEST_TIMEOUT

        if isinstance(payload, MultipartPayload):
            mime = CurlMime()
            try:
                for name, value in payload.fields.items():
                    mime.addpart(name=name, data=value.encode("utf-8"))
                mime.addpart(
                    name="image",
                    content_type=payload.file.content_type,
                    filename=payload.file.filename,
                    data=payload.file.data,
                )
                return self.session.request(
                    method,
                    url,
                    headers=headers,
                    multipart=mime,
                    timeout=timeout,
                )
            finally:
                mime.close()

        if payload is None:
            return self.session.request(
                method, url, headers=headers, timeout=timeout
            )

        body = (
            payload.to_dict() if isinstance(payload, Product) else payload
        )
        return self.session.request(
            method,
            url,
            headers={**headers, "Content-Type": "application/json"},
            json=body,
            timeout=timeout,
        )

    def _request(
        self,
        method: str,
        url: str,
        payload: ProductPayload | dict[str, Any] | None = None,
    ) -> curl_requests.Response | None:
        """Run one logical call; concurrent callers are serialised."""
        with self._lock:
            return self._request_with_retries(method, url, payload)

    def _request_with_retries(
        self,
        method: str,
        url: str,
        payload: ProductPayload | dict[str, Any] | None,
    ) -> curl_requests.Response | None:
        """Send with retries, adaptive delay, and circuit breaker."""
        if self._check_circuit():
            return None
        for attempt in range(self.settings.MAX_RETRIES):
            try:
                resp = self._send(method, url, payload)
                if 200 <= resp.status_code < 300:
                    self._record_success()
                    return resp
                self.logger.warning(
                    "%s %s returned HTTP %d on attempt %d",
                    method,
                    url,
                    resp.status_code,
                    attempt + 1,
                )
                if resp.status_code not in _RETRYABLE_STATUS:
                    # The API answered; the request itself is wrong
                    self._record_success()
                    return None
                if resp.status_code == 429:
                    self._escalate_delay()
                time.sleep(self._current_delay)
            except Exception as exc:
                self.logger.warning(
                    "%s %s failed on attempt %d: %s",
                    method,
                    url,
                    attempt + 1,
                    exc,
                    exc_info=True,
                )
                time.sleep(self._current_delay * (attempt + 1))
        self._record_failure()
        return None

    def _decode(self, resp: curl_requests.Response) -> Any:
        """Parse a JSON body; an empty or malformed body yields ``None``."""
        text = resp.text
        if not text or not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            self.logger.error(
                "Malformed JSON from %s: %.120s", self.base_url, text
            )
            return None

    def _product_from(self, resp: curl_requests.Response | None) -> Product | None:
        if resp is None:
            return None
        data = self._decode(resp)
        if not isinstance(data, dict):
            return None
        return Product.from_dict(data)

    # ── Endpoints ────────────────────────────────────────

    def fetch_products(self) -> list[Product]:
        """Fetch the whole catalog; empty list on failure."""
        resp = self._request("GET", self.base_url)
        if resp is None:
            self.logger.warning("Failed to fetch product list")
            return []
        data = self._decode(resp)
        if not isinstance(data, list):
            self.logger.error("Product list response is not a list")
            return []
        products = [
            Product.from_dict(item) for item in data if isinstance(item, dict)
        ]
        self.logger.info("Fetched %d products", len(products))
        return products

    def fetch_product(self, product_id: int) -> Product | None:
        """Fetch one product; ``None`` when missing or unreachable."""
        product = self._product_from(
            self._request("GET", f"{self.base_url}/{product_id}")
        )
        if product is None:
            self.logger.info("Product %s not found", product_id)
        return product

    def create_product(self, payload: ProductPayload) -> Product | None:
        """POST a new product; structured drafts start with a zero rating."""
        body: ProductPayload | dict[str, Any] = payload
        if isinstance(payload, Product):
            record = payload.to_dict()
            record.pop("id", None)
            record["rating"] = Rating().to_dict()
            body = record
        created = self._product_from(
            self._request("POST", self.base_url, body)
        )
        if created is not None:
            self.logger.info("Created product id=%d", created.id)
        return created

    def update_product(
        self, product_id: int, payload: ProductPayload,
    ) -> Product | None:
        """PUT an edited product."""
        resp = self._request("PUT", f"{self.base_url}/{product_id}", payload)
        if resp is None:
            return None
        updated = self._product_from(resp)
        if updated is None:
            # 2xx without a product body (202/204): echo what was sent
            updated = _sent_product(product_id, payload)
        self.logger.info("Updated product id=%d", product_id)
        return updated

    def delete_product(self, product_id: int) -> bool:
        """DELETE a product; True when the API accepted it."""
        resp = self._request("DELETE", f"{self.base_url}/{product_id}")
        if resp is None:
            self.logger.warning("Delete of product %s failed", product_id)
            return False
        self.logger.info("Deleted product id=%s", product_id)
        return True
