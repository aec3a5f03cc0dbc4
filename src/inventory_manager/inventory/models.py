from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar


T = TypeVar("T")


@dataclass
class Product:
    id: int
    name: str
    quantity: int
    price: float

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Product":
        return cls(
            id=int(row["id"]),
            name=str(row["name"]),
            quantity=int(row["quantity"]),
            price=float(row["price"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "quantity": self.quantity,
            "price": self.price,
        }


class MutationResult(Enum):
    """Outcome of an update or delete.

    NOT_FOUND means the statement ran but matched no row; it is not an error.
    """

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    FAILURE = "failure"


@dataclass
class InventoryReport:
    total_items: int
    total_value: float

    def to_dict(self) -> Dict[str, Any]:
        return {"total_items": self.total_items, "total_value": round(self.total_value, 2)}


@dataclass
class ValidationResult(Generic[T]):
    ok: bool
    value: Optional[T] = None
    reason: Optional[str] = None

    @classmethod
    def valid(cls, value: T) -> "ValidationResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def invalid(cls, reason: str) -> "ValidationResult[T]":
        return cls(ok=False, reason=reason)
