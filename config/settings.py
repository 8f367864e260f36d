"""Pydantic settings for ROE/HF Monitor configuration."""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Backend API
    api_base_url: str = Field(
        default="http://localhost:8080/api/v1",
        description="Base URL of the ROE/HF backend",
    )
    http_timeout_seconds: int = Field(default=30, ge=1, le=300, description="HTTP request timeout")
    api_rate_limit: int = Field(default=30, ge=1, description="Max requests per rate window")
    api_rate_window: int = Field(default=60, ge=1, description="Rate window in seconds")

    # Position defaults
    network: str = Field(default="avalanche", description="Network name")
    default_collateral_vault: str = Field(
        default="0x39dE0f00189306062D79eDEC6DcA5bb6bFd108f9",
        description="Collateral vault address",
    )
    default_borrow_vault: str = Field(
        default="0xA45189636c04388ADBb4D865100DD155e55682EC",
        description="Borrow vault address",
    )
    default_leverage: float = Field(default=3.0, gt=0, description="Position leverage")
    collateral_rewards_apy_pct: float = Field(default=1.87, description="Collateral rewards APY (%)")
    borrow_rewards_apy_pct: float = Field(default=0.0, description="Borrow rewards APY (%)")
    liquidation_threshold_pct: Optional[float] = Field(default=None, ge=0, le=100)

    # Live refresh
    refresh_interval_seconds: int = Field(default=60, ge=5, le=3600, description="Latest point poll interval")
    tick_tolerance_seconds: int = Field(default=60, ge=1, description="Series tick tolerance")

    # Chart
    samples_per_pixel: float = Field(default=1.0, gt=0, description="Render points per pixel column")
    brush_step: float = Field(default=0.001, gt=0, lt=1, description="Minimum brush slider step")

    @field_validator("api_base_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v):
        """Normalize the base URL so paths can be appended."""
        if isinstance(v, str):
            return v.strip().rstrip("/")
        return v

    @field_validator("network", mode="before")
    @classmethod
    def normalize_network(cls, v):
        """Networks are matched lowercase by the backend."""
        if isinstance(v, str):
            return v.strip().lower()
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
