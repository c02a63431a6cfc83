# src/models/flipkart_product.py

"""Typed view of a product entry from the Flipkart product listing API."""

from dataclasses import dataclass
from typing import Any

from src.config.settings import Settings

_BASE = "productBaseInfoV1"
_SHIPPING = "productShippingInfoV1"


class ProductParseError(ValueError):
    """Raised when a product entry lacks a key or has a wrongly typed value."""


def _dig(data: Any, *path: str) -> Any:
    """Walk nested dict keys, raising ProductParseError on the first gap."""
    node = data
    for depth, key in enumerate(path):
        if not isinstance(node, dict) or key not in node:
            trail = ".".join(path[: depth + 1])
            raise ProductParseError(f"missing key '{trail}'")
        node = node[key]
    return node


def _text(data: Any, *path: str) -> str | None:
    """String leaf, or None for JSON null."""
    value = _dig(data, *path)
    if value is not None and not isinstance(value, str):
        raise ProductParseError(
            f"'{'.'.join(path)}' must be a string, got {type(value).__name__}"
        )
    return value


def _number(data: Any, *path: str) -> float | None:
    """Numeric leaf as float, or None for JSON null. Booleans are rejected."""
    value = _dig(data, *path)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ProductParseError(
            f"'{'.'.join(path)}' must be a number, got {type(value).__name__}"
        )
    return float(value)


def _flag(data: Any, *path: str) -> bool | None:
    """Boolean leaf, or None for JSON null."""
    value = _dig(data, *path)
    if value is not None and not isinstance(value, bool):
        raise ProductParseError(
            f"'{'.'.join(path)}' must be a boolean, got {type(value).__name__}"
        )
    return value


@dataclass(frozen=True)
class FlipkartProduct:
    """One entry of a ``products`` array, flattened to the fields we store.

    Keys must all be present and leaves must have their JSON type; ``null``
    leaf values are kept as ``None``.
    """

    product_id: str
    title: str | None
    description: str | None
    image_url: str | None
    category_path: str | None
    currency: str | None
    maximum_retail_price: float | None
    selling_price: float | None
    special_price: float | None
    product_url: str | None
    brand: str | None
    in_stock: bool | None
    cod_available: bool | None
    discount_percentage: float | None
    offers: list[str]
    size: str | None
    color: str | None
    seller_name: str | None
    seller_average_rating: float | None

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "FlipkartProduct":
        """Parse a raw product dict, failing fast on missing or malformed keys."""
        _dig(raw, _SHIPPING)

        product_id = _text(raw, _BASE, "productId")
        if not product_id:
            raise ProductParseError(f"empty '{_BASE}.productId'")

        offers = _dig(raw, _BASE, "offers")
        if offers is None:
            offers = []
        elif not isinstance(offers, list) or not all(
            isinstance(o, str) for o in offers
        ):
            raise ProductParseError("'offers' is not a list of strings")

        return cls(
            product_id=product_id,
            title=_text(raw, _BASE, "title"),
            description=_text(raw, _BASE, "productDescription"),
            image_url=_text(raw, _BASE, "imageUrls", Settings.IMAGE_VARIANT),
            category_path=_text(raw, _BASE, "categoryPath"),
            currency=_text(raw, _BASE, "maximumRetailPrice", "currency"),
            maximum_retail_price=_number(
                raw, _BASE, "maximumRetailPrice", "amount"
            ),
            selling_price=_number(
                raw, _BASE, "flipkartSellingPrice", "amount"
            ),
            special_price=_number(
                raw, _BASE, "flipkartSpecialPrice", "amount"
            ),
            product_url=_text(raw, _BASE, "productUrl"),
            brand=_text(raw, _BASE, "productBrand"),
            in_stock=_flag(raw, _BASE, "inStock"),
            cod_available=_flag(raw, _BASE, "codAvailable"),
            discount_percentage=_number(raw, _BASE, "discountPercentage"),
            offers=list(offers),
            size=_text(raw, _BASE, "attributes", "size"),
            color=_text(raw, _BASE, "attributes", "color"),
            seller_name=_text(raw, _SHIPPING, "sellerName"),
            seller_average_rating=_number(
                raw, _SHIPPING, "sellerAverageRating"
            ),
        )

    @property
    def offers_joined(self) -> str:
        """Offers as the comma-joined string stored on the record."""
        return ",".join(self.offers)

    def record_fields(self) -> dict[str, Any]:
        """Map onto ``AffiliateProduct`` field names."""
        return {
            "product_id": self.product_id,
            "name": self.title,
            "product_description": self.description,
            "image_urls": self.image_url,
            "product_family": self.category_path,
            "currency": self.currency,
            "maximum_retail_price": self.maximum_retail_price,
            "vendor_selling_price": self.selling_price,
            "vendor_special_price": self.special_price,
            "product_url": self.product_url,
            "product_brand": self.brand,
            "in_stock": self.in_stock,
            "cod_available": self.cod_available,
            "discount_percentage": self.discount_percentage,
            "offers": self.offers_joined,
            "size": self.size,
            "color": self.color,
            "seller_name": self.seller_name,
            "seller_average_rating": self.seller_average_rating,
        }
