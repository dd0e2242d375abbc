"""Lojista: sales and expense ledger with windowed reporting."""

from __future__ import annotations

from .config import BaseConfig, DevConfig

__all__ = ["BaseConfig", "DevConfig"]

__version__ = "0.1.0"
