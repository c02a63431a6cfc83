# src/scrapers/flipkart_client.py

"""Client for the Flipkart affiliate product feed API."""

import logging
from typing import Any
from urllib.parse import quote

from curl_cffi import requests as curl_requests

from src.config.settings import Settings, SyncConfig


class FlipkartAPIError(Exception):
    """Raised when a Flipkart API call fails or returns an unusable body."""


class FlipkartClient:
    """Fetches the category directory and per-category product listings.

    Every call is a single blocking GET: no retries and no backoff, so
    one failed request is one failed unit of work for the caller.
    """

    def __init__(self, config: SyncConfig) -> None:
        self.logger = logging.getLogger("affiliate_sync.flipkart")
        self.config = config
        self.settings = Settings()
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )

    def _headers(self) -> dict[str, str]:
        """Credential headers sent with every request."""
        return {
            self.settings.AFFILIATE_ID_HEADER: self.config.tracking_id,
            self.settings.AFFILIATE_TOKEN_HEADER: self.config.token,
            "Accept": "application/json",
        }

    def _get_json(self, url: str) -> Any:
        """GET *url* and decode the JSON body."""
        self.logger.debug("GET %s", url)
        try:
            resp = self.session.get(
                url,
                headers=self._headers(),
                timeout=self.config.request_timeout,
            )
        except Exception as exc:
            raise FlipkartAPIError(
                f"Request to {url} failed: {exc}"
            ) from exc

        if resp.status_code != 200:
            raise FlipkartAPIError(
                f"HTTP {resp.status_code} from {url}"
            )
        try:
            return resp.json()
        except ValueError as exc:
            raise FlipkartAPIError(
                f"Response from {url} is not valid JSON"
            ) from exc

    def categories_url(self) -> str:
        """Categories endpoint for the configured affiliate id."""
        return self.settings.CATEGORIES_URL.format(
            affiliate_id=quote(self.config.tracking_id, safe="")
        )

    def fetch_categories(self) -> dict[str, str]:
        """Return a mapping of category key to product listing URL.

        Raises:
            FlipkartAPIError: on transport errors, non-200 responses, or a
                body without the expected ``apiGroups`` structure.
        """
        body = self._get_json(self.categories_url())
        try:
            listings = body["apiGroups"]["affiliate"]["apiListings"]
            categories = {
                key: value["availableVariants"][
                    self.settings.API_VERSION
                ][self.settings.API_METHOD]
                for key, value in listings.items()
            }
        except (KeyError, TypeError, AttributeError) as exc:
            raise FlipkartAPIError(
                f"Unexpected categories response shape: missing {exc}"
            ) from exc

        self.logger.info(
            "Fetched %d categories from Flipkart", len(categories)
        )
        return categories

    def fetch_products(self, listing_url: str) -> list[dict[str, Any]]:
        """Return the raw ``products`` array of one category listing.

        Raises:
            FlipkartAPIError: on transport errors, non-200 responses, or a
                body without a ``products`` list.
        """
        body = self._get_json(listing_url)
        products = (
            body.get("products") if isinstance(body, dict) else None
        )
        if not isinstance(products, list):
            raise FlipkartAPIError(
                f"Listing response from {listing_url} has no products array"
            )
        self.logger.info(
            "Fetched %d products from %s", len(products), listing_url
        )
        return products
