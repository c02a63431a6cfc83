# src/storage/product_store.py

"""SQLite-backed store for synchronised affiliate products."""

import logging
import sqlite3
from abc import ABC, abstractmethod
from dataclasses import asdict, fields
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings
from src.models.product import AffiliateProduct

logger = logging.getLogger("affiliate_sync.store")

_SCHEMA = """\
CREATE TABLE IF NOT EXISTS affiliates_product (
    id                    INTEGER PRIMARY KEY AUTOINCREMENT,
    product_id            TEXT    NOT NULL UNIQUE,
    name                  TEXT,
    product_description   TEXT,
    image_urls            TEXT,
    product_family        TEXT,
    currency              TEXT,
    maximum_retail_price  REAL,
    vendor_selling_price  REAL,
    vendor_special_price  REAL,
    product_url           TEXT,
    product_brand         TEXT,
    in_stock              INTEGER,
    cod_available         INTEGER,
    discount_percentage   REAL,
    offers                TEXT    NOT NULL DEFAULT '',
    size                  TEXT,
    color                 TEXT,
    seller_name           TEXT,
    seller_average_rating REAL,
    status                INTEGER NOT NULL DEFAULT 1,
    plugin_id             TEXT    NOT NULL DEFAULT '',
    additional_data       TEXT    NOT NULL DEFAULT '',
    uid                   INTEGER NOT NULL DEFAULT 0,
    created_at            TEXT    NOT NULL
);
"""

# Columns written on insert/update (id is managed by SQLite)
_COLUMNS: tuple[str, ...] = tuple(
    f.name for f in fields(AffiliateProduct) if f.name != "id"
)
_BOOL_COLUMNS = frozenset({"in_stock", "cod_available", "status"})


class ProductRepository(ABC):
    """Storage seam used by the upsert engine."""

    @abstractmethod
    def find_by_product_id(
        self, product_id: str,
    ) -> AffiliateProduct | None:
        """Return the record for an external product id, if any."""
        ...

    @abstractmethod
    def save(self, product: AffiliateProduct) -> AffiliateProduct:
        """Insert a new record or persist changes to an existing one."""
        ...


def _row_to_product(row: sqlite3.Row) -> AffiliateProduct:
    """Convert a result row back into an AffiliateProduct."""
    data = dict(row)
    for column in _BOOL_COLUMNS:
        if data[column] is not None:
            data[column] = bool(data[column])
    return AffiliateProduct(**data)


class SQLiteProductStore(ProductRepository):
    """Product repository on a single SQLite file."""

    def __init__(self, db_path: Path | None = None) -> None:
        path = db_path or Settings.DB_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(path))
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)
        logger.debug("SQLiteProductStore opened at %s", path)

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()

    # ── Lookups ──────────────────────────────────────────

    def find_by_product_id(
        self, product_id: str,
    ) -> AffiliateProduct | None:
        """Return the record for *product_id*, first match if several."""
        row = self._conn.execute(
            "SELECT * FROM affiliates_product "
            "WHERE product_id = ? ORDER BY id LIMIT 1",
            (product_id,),
        ).fetchone()
        return _row_to_product(row) if row else None

    def count(self) -> int:
        """Return the number of stored products."""
        row = self._conn.execute(
            "SELECT COUNT(*) FROM affiliates_product"
        ).fetchone()
        return int(row[0])

    def all_products(self) -> list[AffiliateProduct]:
        """Return every stored product ordered by row id."""
        rows = self._conn.execute(
            "SELECT * FROM affiliates_product ORDER BY id"
        ).fetchall()
        return [_row_to_product(r) for r in rows]

    # ── Persistence ──────────────────────────────────────

    def save(self, product: AffiliateProduct) -> AffiliateProduct:
        """Insert when ``product.id`` is unset, otherwise update in place.

        Raises ``sqlite3.IntegrityError`` when inserting a second row
        for an external id that is already stored.
        """
        if product.id is None:
            if not product.created_at:
                product.created_at = datetime.now().isoformat()
            values = asdict(product)
            placeholders = ", ".join("?" for _ in _COLUMNS)
            cur = self._conn.execute(
                f"INSERT INTO affiliates_product ({', '.join(_COLUMNS)}) "
                f"VALUES ({placeholders})",
                tuple(values[c] for c in _COLUMNS),
            )
            product.id = cur.lastrowid
            logger.debug(
                "Inserted product %s as row %s",
                product.product_id,
                product.id,
            )
        else:
            values = asdict(product)
            assignments = ", ".join(f"{c} = ?" for c in _COLUMNS)
            self._conn.execute(
                f"UPDATE affiliates_product SET {assignments} "
                "WHERE id = ?",
                (*(values[c] for c in _COLUMNS), product.id),
            )
            logger.debug("Updated product %s", product.product_id)
        self._conn.commit()
        return product
