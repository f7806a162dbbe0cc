"""
Voxbone Python SDK - Configuration

This module contains the settings model, API endpoint paths and the
process-wide defaults used when a client is created without explicit values.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


PRODUCTION_URL = "https://api.voxbone.com/ws-voxbone/services/rest/"
SANDBOX_URL = "https://sandbox.voxbone.com/ws-voxbone/services/rest/"


class Settings(BaseSettings):
    """
    SDK settings, read from ``VOXBONE_*`` environment variables or ``.env``.

    Attributes:
        user: API user name (basic auth)
        password: API password (basic auth)
        url: Base URL of the REST API
        default_page_number: Page number sent when a listing has no pagination
        default_page_size: Page size sent when a listing has no pagination
        timeout: Request timeout in seconds
        log_level: Level used by the CLI logging setup
    """

    model_config = SettingsConfigDict(
        env_prefix="VOXBONE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    user: str = ""
    password: str = ""
    url: str = Field(default=PRODUCTION_URL, description="REST API base URL")

    # Pagination is mandatory on every listing endpoint
    default_page_number: int = 0
    default_page_size: int = 20

    timeout: float = 30.0
    log_level: str = "info"

    @field_validator("url")
    @classmethod
    def normalize_url(cls, v: str) -> str:
        """Endpoint paths are relative, so the base URL must end with a slash."""
        v = v.strip()
        if not v:
            raise ValueError("url must not be empty")
        return v if v.endswith("/") else v + "/"

    @field_validator("default_page_number")
    @classmethod
    def validate_page_number(cls, v: int) -> int:
        if v < 0:
            raise ValueError("default_page_number must not be negative")
        return v

    @field_validator("default_page_size")
    @classmethod
    def validate_page_size(cls, v: int) -> int:
        if not 0 < v <= Limits.MAX_PAGE_SIZE:
            raise ValueError(f"default_page_size must be between 1 and {Limits.MAX_PAGE_SIZE}")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class Endpoints:
    """API endpoint paths, relative to the base URL."""

    # Ordering
    CARTS = "ordering/cart"
    CART = "ordering/cart/{cart_identifier}"
    CART_PRODUCT = "ordering/cart/{cart_identifier}/product"
    CART_CHECKOUT = "ordering/cart/{cart_identifier}/checkout"
    ORDERS = "ordering/order"
    CANCEL = "ordering/cancel"
    ACCOUNT_BALANCE = "ordering/accountbalance"

    # Inventory
    COUNTRIES = "inventory/country"
    DIDS = "inventory/did"
    DID_GROUPS = "inventory/didgroup"


class Limits:
    """API limits and defaults."""

    MAX_PAGE_SIZE = 5000

    # Feature code requested when the caller does not name any (voice)
    VOICE_FEATURE_ID = 50
    SMS_FEATURE_ID = 25
