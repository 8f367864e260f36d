"""Screens for ROE/HF Monitor."""

from .monitor import MonitorScreen

__all__ = ["MonitorScreen"]
