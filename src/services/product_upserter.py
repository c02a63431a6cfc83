# src/services/product_upserter.py

"""Create-or-update of local products from Flipkart product entries."""

import logging
from enum import Enum
from typing import Any

from src.config.settings import Settings, SyncConfig
from src.models.flipkart_product import FlipkartProduct
from src.models.product import AffiliateProduct
from src.storage.product_store import ProductRepository

logger = logging.getLogger("affiliate_sync.upsert")

_PRICE_FIELDS: tuple[str, ...] = (
    "currency",
    "maximum_retail_price",
    "vendor_selling_price",
    "vendor_special_price",
    "discount_percentage",
)

# Update toggle -> record fields it overwrites on an existing product.
# Category path, brand and the external id are never touched on update.
TOGGLE_FIELDS: dict[str, tuple[str, ...]] = {
    "full_content": (
        "name",
        "product_description",
        "image_urls",
        *_PRICE_FIELDS,
        "product_url",
        "in_stock",
        "cod_available",
        "offers",
        "size",
        "color",
        "seller_name",
        "seller_average_rating",
    ),
    "price": _PRICE_FIELDS,
    "available": ("in_stock",),
    "size": ("size",),
    "color": ("color",),
    "offers": ("offers",),
}


class UpsertOutcome(Enum):
    """What ``create_or_update`` did with a product entry."""

    CREATED = "created"
    UPDATED = "updated"


def fields_for_toggles(config: SyncConfig) -> list[str]:
    """Union of record fields covered by the enabled toggles, in order."""
    selected: list[str] = []
    for toggle in config.enabled_toggles():
        for name in TOGGLE_FIELDS[toggle]:
            if name not in selected:
                selected.append(name)
    return selected


class ProductUpserter:
    """Apply one Flipkart product entry to the product repository."""

    def __init__(
        self,
        repository: ProductRepository,
        config: SyncConfig,
        uid: int = 0,
    ) -> None:
        self.repository = repository
        self.config = config
        self.uid = uid
        self._update_fields = fields_for_toggles(config)

    def create_or_update(self, raw: dict[str, Any]) -> UpsertOutcome:
        """Create the product if unseen, else apply the enabled toggles.

        Raises:
            ProductParseError: when *raw* lacks a required key.
        """
        incoming = FlipkartProduct.from_api(raw)
        values = incoming.record_fields()
        existing = self.repository.find_by_product_id(
            incoming.product_id
        )

        if existing is None:
            product = AffiliateProduct(
                **values,
                status=True,
                plugin_id=Settings.PLUGIN_ID,
                additional_data="",
                uid=self.uid,
            )
            self.repository.save(product)
            logger.debug("Created product %s", incoming.product_id)
            return UpsertOutcome.CREATED

        self.apply_updates(existing, values)
        self.repository.save(existing)
        logger.debug(
            "Updated product %s (%s)",
            incoming.product_id,
            ", ".join(self._update_fields) or "no toggles enabled",
        )
        return UpsertOutcome.UPDATED

    def apply_updates(
        self,
        product: AffiliateProduct,
        values: dict[str, Any],
    ) -> None:
        """Overwrite the toggle-selected fields of *product* in place."""
        for name in self._update_fields:
            setattr(product, name, values[name])
