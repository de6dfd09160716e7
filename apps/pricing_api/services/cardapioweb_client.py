# apps/pricing_api/services/cardapioweb_client.py

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import requests

from apps.pricing_api.services.catalog.coerce import children

log = logging.getLogger("pricing_api.cardapioweb")


class CatalogError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class CatalogConfigError(CatalogError):
    pass


class CatalogFetchError(CatalogError):
    pass


class CardapioWebClient:
    """
    CardapioWeb partner API client (read-only catalog).

    Design goals:
    - Simple, explicit REST usage
    - Non-success responses surface once, with the upstream body
    - Only rate limits (429) and transport errors are retried
    """

    CATALOG_PATH = "/api/partner/v1/catalog"
    TIMEOUT_SECONDS = 20.0
    MAX_RETRIES = 3
    RETRY_BACKOFF_SECONDS = 1.5

    def __init__(
        self,
        base_url: Optional[str],
        api_key: Optional[str],
        *,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        if not base_url:
            raise CatalogConfigError("Missing env CARDAPIOWEB_BASE_URL")
        if not api_key:
            raise CatalogConfigError("Missing env CARDAPIOWEB_API_KEY")

        self.base_url = base_url.strip().rstrip("/")
        self.api_key = api_key.strip()
        self.timeout = timeout if timeout is not None else self.TIMEOUT_SECONDS
        self.max_retries = max(1, max_retries if max_retries is not None else self.MAX_RETRIES)
        self.session = session or requests.Session()

        self.headers = {
            "Accept": "application/json",
            "X-API-KEY": self.api_key,
        }

    # ---------------------------------------------------------
    # Low-level request handler
    # ---------------------------------------------------------
    def _request(self, method: str, path: str, *, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"

        last_error: Optional[Exception] = None

        for attempt in range(1, self.max_retries + 1):
            try:
                response = self.session.request(
                    method=method,
                    url=url,
                    headers=self.headers,
                    params=params,
                    timeout=self.timeout,
                )
            except requests.RequestException as e:
                last_error = e
                log.warning("CardapioWeb request failed (attempt %s/%s): %s", attempt, self.max_retries, e)
                if attempt < self.max_retries:
                    time.sleep(self.RETRY_BACKOFF_SECONDS * attempt)
                    continue
                break

            if response.status_code == 429 and attempt < self.max_retries:
                retry_after = response.headers.get("Retry-After")
                try:
                    sleep_for = float(retry_after) if retry_after else self.RETRY_BACKOFF_SECONDS
                except ValueError:
                    sleep_for = self.RETRY_BACKOFF_SECONDS
                log.warning("CardapioWeb rate limited, sleeping %ss", sleep_for)
                time.sleep(sleep_for)
                continue

            if not response.ok:
                raise CatalogFetchError(f"CardapioWeb API error {response.status_code}: {response.text}")

            try:
                return response.json()
            except ValueError as e:
                raise CatalogFetchError(f"CardapioWeb returned invalid JSON: {e}")

        raise CatalogFetchError(f"CardapioWeb request failed after retries: {last_error}")

    # ---------------------------------------------------------
    # Public helpers
    # ---------------------------------------------------------
    def fetch_catalog(self) -> Dict[str, Any]:
        payload = self._request("GET", self.CATALOG_PATH)
        if not isinstance(payload, dict):
            raise CatalogFetchError("CardapioWeb catalog payload is not a JSON object")
        log.info("Fetched partner catalog (%s categories)", len(children(payload, "categories")))
        return payload
