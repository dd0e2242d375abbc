"""Service module exports."""

from . import aggregation, dashboard, export_csv, windows

__all__ = [
    "aggregation",
    "dashboard",
    "export_csv",
    "windows",
]
