from __future__ import annotations

import sqlite3
from typing import List, Optional, Tuple

from ..logging import get_logger
from .db import InventoryDatabase
from .models import MutationResult, Product


LOG = get_logger("repository")


_SELECT_COLUMNS = "SELECT id, name, quantity, price FROM products"


class ProductRepository:
    """CRUD, search and aggregate queries over the products table.

    Every method runs one parameterized statement (two for the aggregate) on
    the database handle it was given. Engine errors, and integers too wide
    for SQLite to bind, are logged and turned into a failure value (`None` or
    `MutationResult.FAILURE`); business rules such as
    non-negative quantities are the caller's job.
    """

    def __init__(self, db: InventoryDatabase) -> None:
        self.db = db

    # --------------- Writes ---------------
    def add(self, name: str, quantity: int, price: float) -> Optional[int]:
        try:
            with self.db.cursor() as cur:
                cur.execute(
                    "INSERT INTO products (name, quantity, price) VALUES (?, ?, ?);",
                    (name, int(quantity), float(price)),
                )
                new_id = cur.lastrowid
            self.db.connection.commit()
        except (sqlite3.Error, OverflowError) as e:
            LOG.error(f"Execution failed (INSERT): {e}")
            self._rollback()
            return None
        LOG.debug(f"Inserted product id={new_id} name={name!r}")
        return int(new_id) if new_id is not None else None

    def update(self, product_id: int, name: str, quantity: int, price: float) -> MutationResult:
        try:
            with self.db.cursor() as cur:
                cur.execute(
                    "UPDATE products SET name = ?, quantity = ?, price = ? WHERE id = ?;",
                    (name, int(quantity), float(price), int(product_id)),
                )
                changed = cur.rowcount
            self.db.connection.commit()
        except (sqlite3.Error, OverflowError) as e:
            LOG.error(f"Update failed: {e}")
            self._rollback()
            return MutationResult.FAILURE
        if changed == 0:
            LOG.debug(f"Update matched no row for id={product_id}")
            return MutationResult.NOT_FOUND
        return MutationResult.SUCCESS

    def delete(self, product_id: int) -> MutationResult:
        try:
            with self.db.cursor() as cur:
                cur.execute("DELETE FROM products WHERE id = ?;", (int(product_id),))
                changed = cur.rowcount
            self.db.connection.commit()
        except (sqlite3.Error, OverflowError) as e:
            LOG.error(f"Deletion failed: {e}")
            self._rollback()
            return MutationResult.FAILURE
        if changed == 0:
            LOG.debug(f"Delete matched no row for id={product_id}")
            return MutationResult.NOT_FOUND
        return MutationResult.SUCCESS

    # --------------- Reads ---------------
    def get_all(self) -> Optional[List[Product]]:
        return self._select(f"{_SELECT_COLUMNS};", (), "VIEW")

    def get(self, product_id: int) -> Optional[Product]:
        rows = self._select(f"{_SELECT_COLUMNS} WHERE id = ?;", (int(product_id),), "GET")
        if not rows:
            return None
        return rows[0]

    def search_by_name(self, term: str) -> Optional[List[Product]]:
        """Case-insensitive substring match on the product name."""
        pattern = f"%{term}%"
        return self._select(f"{_SELECT_COLUMNS} WHERE LOWER(name) LIKE LOWER(?);", (pattern,), "SEARCH")

    def filter_by_quantity(self, threshold: int) -> Optional[List[Product]]:
        """Products with quantity strictly below threshold, lowest first."""
        return self._select(
            f"{_SELECT_COLUMNS} WHERE quantity < ? ORDER BY quantity;",
            (int(threshold),),
            "FILTER",
        )

    def count_and_total_value(self) -> Optional[Tuple[int, float]]:
        """Return (row count, sum of quantity * price); an empty table sums to 0.0."""
        try:
            with self.db.cursor() as cur:
                cur.execute("SELECT COUNT(*) FROM products;")
                count = int(cur.fetchone()[0])
            with self.db.cursor() as cur:
                cur.execute("SELECT SUM(quantity * price) FROM products;")
                total = cur.fetchone()[0]
        except (sqlite3.Error, OverflowError) as e:
            LOG.error(f"Failed to compute inventory totals: {e}")
            return None
        return count, float(total) if total is not None else 0.0

    # --------------- Helpers ---------------
    def _select(self, sql: str, params: tuple, label: str) -> Optional[List[Product]]:
        try:
            with self.db.cursor() as cur:
                cur.execute(sql, params)
                rows = cur.fetchall()
        except (sqlite3.Error, OverflowError) as e:
            LOG.error(f"Error running query ({label}): {e}")
            return None
        return [Product.from_row(row) for row in rows]

    def _rollback(self) -> None:
        try:
            self.db.connection.rollback()
        except sqlite3.Error:
            LOG.exception("Rollback failed")
