"""
Inventory Manager – single-user product inventory backed by SQLite.

Shared utilities (config, logging, paths) live at the package root; the
inventory store, rendering and interactive shell live under `inventory`.
"""

__all__ = [
    "config",
    "logging",
    "paths",
]
