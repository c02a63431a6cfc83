# src/config/settings.py

"""Central configuration for the affiliate_sync importer."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class ConfigurationError(Exception):
    """Raised when the importer is disabled or missing credentials."""


class Settings:
    """Central configuration for the affiliate_sync importer."""

    # --- Flipkart affiliate API ---
    PLUGIN_ID: str = "affiliates_connect_flipkart"
    CATEGORIES_URL: str = (
        "https://affiliate-api.flipkart.net/affiliate/api/{affiliate_id}.json"
    )
    API_VERSION: str = "v1.1.0"         # Listing variant to import
    API_METHOD: str = "get"
    IMAGE_VARIANT: str = "400x400"      # Key into productBaseInfoV1.imageUrls
    AFFILIATE_ID_HEADER: str = "Fk-Affiliate-Id"
    AFFILIATE_TOKEN_HEADER: str = "Fk-Affiliate-Token"

    # --- Networking ---
    REQUEST_TIMEOUT: int = 30           # Default seconds before a request times out
    IMPERSONATE_BROWSER: str = "chrome131"

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    DB_PATH: Path = Path(
        os.getenv("AFFILIATE_SYNC_DB", str(BASE_DIR / "data" / "products.db"))
    )
    LOGS_DIR: Path = BASE_DIR / "logs"

    # --- Update toggles (toggle name -> environment variable) ---
    TOGGLE_ENV: dict[str, str] = {
        "full_content": "FLIPKART_UPDATE_FULL_CONTENT",
        "price": "FLIPKART_UPDATE_PRICE",
        "available": "FLIPKART_UPDATE_AVAILABLE",
        "size": "FLIPKART_UPDATE_SIZE",
        "color": "FLIPKART_UPDATE_COLOR",
        "offers": "FLIPKART_UPDATE_OFFERS",
    }


_TRUTHY = frozenset({"1", "true", "yes", "on"})


def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean environment variable ("1", "true", "yes", "on")."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def env_timeout(name: str, default: int = Settings.REQUEST_TIMEOUT) -> int:
    """Read a positive whole number of seconds from the environment.

    Raises:
        ConfigurationError: when the value is not a positive integer.
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        seconds = int(raw.strip())
    except ValueError:
        raise ConfigurationError(
            f"{name} must be a whole number of seconds, got {raw!r}"
        ) from None
    if seconds <= 0:
        raise ConfigurationError(
            f"{name} must be greater than zero, got {seconds}"
        )
    return seconds


@dataclass(frozen=True)
class SyncConfig:
    """Admin configuration consumed by the import job.

    Mirrors the settings form of the affiliate module: an enable flag,
    the affiliate credentials and one boolean per update toggle.
    """

    native_api: bool = False
    tracking_id: str = ""
    token: str = ""
    full_content: bool = False
    price: bool = False
    available: bool = False
    size: bool = False
    color: bool = False
    offers: bool = False
    request_timeout: int = Settings.REQUEST_TIMEOUT

    @classmethod
    def from_env(cls) -> "SyncConfig":
        """Build a configuration from environment variables (and ``.env``)."""
        toggles = {
            name: env_flag(var)
            for name, var in Settings.TOGGLE_ENV.items()
        }
        return cls(
            native_api=env_flag("FLIPKART_NATIVE_API"),
            tracking_id=os.getenv("FLIPKART_TRACKING_ID", "").strip(),
            token=os.getenv("FLIPKART_TOKEN", "").strip(),
            request_timeout=env_timeout("FLIPKART_REQUEST_TIMEOUT"),
            **toggles,
        )

    def enabled_toggles(self) -> list[str]:
        """Return the names of the update toggles that are switched on."""
        return [
            name for name in Settings.TOGGLE_ENV
            if getattr(self, name)
        ]

    def validate(self) -> None:
        """Raise ConfigurationError unless the native API can be used."""
        if not self.native_api:
            raise ConfigurationError(
                "Configure flipkart native api to import data"
            )
        missing = [
            var
            for var, value in (
                ("FLIPKART_TRACKING_ID", self.tracking_id),
                ("FLIPKART_TOKEN", self.token),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                "Configure flipkart native api to import data "
                f"(missing: {', '.join(missing)})"
            )
