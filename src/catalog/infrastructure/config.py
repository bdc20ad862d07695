"""Application configuration using pydantic-settings."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CatalogSettings(BaseSettings):
    """Settings loaded from ``CATALOG_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage
    data_dir: Path = Path("data")
    products_file: str = "products.json"
    categories_file: str = "categories.json"

    # Search
    default_page_size: int = Field(default=20, ge=1)
    max_page_size: int = Field(default=100, ge=1)
    related_limit: int = Field(default=4, ge=1)
    max_related_limit: int = Field(default=20, ge=1)

    # Application
    log_level: str = "WARNING"

    @model_validator(mode="after")
    def validate_page_sizes(self) -> CatalogSettings:
        """Keep defaults inside their maxima and related lookups inside one page."""
        if self.default_page_size > self.max_page_size:
            raise ValueError("default_page_size must not exceed max_page_size")
        if self.related_limit > self.max_related_limit:
            raise ValueError("related_limit must not exceed max_related_limit")
        # Related lookups search with one extra slot for the source product.
        if self.max_related_limit + 1 > self.max_page_size:
            raise ValueError("max_related_limit must be less than max_page_size")
        return self
