"""Configuration module for ROE/HF Monitor."""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
