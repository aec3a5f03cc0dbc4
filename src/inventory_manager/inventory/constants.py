from __future__ import annotations

from typing import Tuple

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS products (
  id        INTEGER PRIMARY KEY AUTOINCREMENT,
  name      TEXT NOT NULL,
  quantity  INTEGER NOT NULL,
  price     REAL NOT NULL
);
"""

# Column widths for the listing table: ID, Name, Quantity, Price.
COLUMN_WIDTHS: Tuple[int, int, int, int] = (5, 25, 10, 9)

TABLE_BORDER = "+-------+---------------------------+------------+------------+"
TABLE_HEADER = "| ID    | Name                      | Quantity   | Price      |"

MENU_CHOICES: Tuple[Tuple[int, str], ...] = (
    (1, "Add Product"),
    (2, "View All Products"),
    (3, "Update Product"),
    (4, "Delete Product"),
    (5, "Search Products by Name"),
    (6, "Filter Products by Quantity"),
    (7, "Generate Report"),
    (8, "Exit"),
)

MENU_MIN = MENU_CHOICES[0][0]
MENU_MAX = MENU_CHOICES[-1][0]
EXIT_CHOICE = MENU_MAX

# SQLite INTEGER is a signed 64-bit value; sqlite3 refuses to bind anything wider.
SQLITE_INT_MIN = -(2**63)
SQLITE_INT_MAX = 2**63 - 1

# Keeps SUM(quantity * price) finite for any stored quantity.
MAX_PRICE = 1_000_000_000.0
