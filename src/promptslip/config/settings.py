"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class QRSettings(BaseSettings):
    """QR image rendering settings."""

    model_config = SettingsConfigDict(env_prefix="PROMPTSLIP_QR_")

    # Module size in pixels and quiet zone in modules
    box_size: int = Field(default=8, ge=1)
    border: int = Field(default=4, ge=0)

    # L, M, Q or H
    error_correction: Literal["L", "M", "Q", "H"] = "M"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="PROMPTSLIP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = False

    # Receipt printer
    paper: Literal["58mm", "80mm"] = "58mm"
    codec: str = "cp874"  # Thai code page, matches Command.CODEPAGE_THAI
    feed_lines: int = Field(default=3, ge=1, le=255)

    # PromptPay id used by the CLI when no target is given
    merchant_target: str = ""

    qr: QRSettings = Field(default_factory=QRSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
