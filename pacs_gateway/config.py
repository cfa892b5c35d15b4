"""
Configuration management using Pydantic Settings

All values can be overridden through environment variables prefixed with
``PACS_`` (e.g. ``PACS_STRICT_NAMESPACES=true``) or a local ``.env`` file.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_prefix="PACS_",
        env_file=".env",
        extra="ignore",
    )

    # Application
    app_name: str = "pacs-gateway"
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="text",
        description="Log format: 'json' for structured logging, 'text' for plain text",
    )

    # Parsing
    strict_namespaces: bool = Field(
        default=False,
        description="Only accept the explicitly supported schema versions",
    )
    default_currency: str = Field(
        default="USD",
        description="Currency assumed when an amount carries no Ccy attribute",
    )
    default_minor_units: int = Field(
        default=2,
        ge=0,
        le=4,
        description="Decimal places assumed for currencies missing from the ISO 4217 table",
    )

    # XSD validation
    schema_dir: Optional[Path] = Field(
        default=None,
        description="Directory holding the pacs.008 / pacs.002 XSD files",
    )
    pacs008_schema_file: str = "pacs.008.001.08.xsd"
    pacs002_schema_file: str = "pacs.002.001.10.xsd"

    # Builders
    message_id_prefix: str = Field(
        default="MCB",
        description="Prefix for generated pacs.002 message identifiers",
    )
    acsp_reason_code: str = "G000"
    acsp_additional_info: str = "Accepted for processing; funds hold placed"

    @field_validator("default_currency")
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("log_format")
    @classmethod
    def known_format(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v


settings = Settings()
