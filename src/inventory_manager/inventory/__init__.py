"""Inventory store, rendering and interactive shell.

Modules:
- db: connection handle and schema creation
- repository: product CRUD, search, filter and aggregate queries
- report: inventory summary
- render: fixed-width text tables
- validation: loop-free input validators
- shell: interactive menu
- frontend: JSON API over the repository
"""

from .db import DatabaseInitError, InventoryDatabase, InventoryError, ensure_schema
from .models import InventoryReport, MutationResult, Product, ValidationResult
from .repository import ProductRepository
from .report import generate_report
from .shell import InventoryShell

__all__ = [
    "DatabaseInitError",
    "InventoryDatabase",
    "InventoryError",
    "InventoryReport",
    "InventoryShell",
    "MutationResult",
    "Product",
    "ProductRepository",
    "ValidationResult",
    "ensure_schema",
    "generate_report",
]
