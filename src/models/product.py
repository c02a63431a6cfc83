# src/models/product.py

"""Local product record synchronised from the affiliate network."""

from dataclasses import dataclass


@dataclass
class AffiliateProduct:
    """A product row in the local store, keyed by ``product_id``."""

    product_id: str
    name: str | None = None
    product_description: str | None = None
    image_urls: str | None = None
    product_family: str | None = None
    currency: str | None = None
    maximum_retail_price: float | None = None
    vendor_selling_price: float | None = None
    vendor_special_price: float | None = None
    product_url: str | None = None
    product_brand: str | None = None
    in_stock: bool | None = None
    cod_available: bool | None = None
    discount_percentage: float | None = None
    offers: str = ""
    size: str | None = None
    color: str | None = None
    seller_name: str | None = None
    seller_average_rating: float | None = None
    status: bool = True
    plugin_id: str = ""
    additional_data: str = ""
    uid: int = 0
    id: int | None = None         # Assigned by the store on first save
    created_at: str = ""          # ISO timestamp, set by the store
