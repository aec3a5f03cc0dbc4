"""Input validators shared by the interactive shell and the HTTP API.

Each validator takes raw input (a string typed at the prompt, or a decoded
JSON value) and returns a ValidationResult. None of them loop or prompt.
"""

from __future__ import annotations

import math
from typing import Any, Optional

from .constants import MAX_PRICE, MENU_MAX, MENU_MIN, SQLITE_INT_MAX, SQLITE_INT_MIN
from .models import ValidationResult


def _parse_int(raw: Any) -> Optional[int]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str):
        try:
            value = int(raw.strip())
        except ValueError:
            return None
    else:
        return None
    if not SQLITE_INT_MIN <= value <= SQLITE_INT_MAX:
        return None
    return value


def _parse_float(raw: Any) -> Optional[float]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def validate_menu_choice(raw: Any) -> ValidationResult[int]:
    choice = _parse_int(raw)
    if choice is None or not MENU_MIN <= choice <= MENU_MAX:
        return ValidationResult.invalid(f"Invalid choice. Please enter a number between {MENU_MIN} and {MENU_MAX}.")
    return ValidationResult.valid(choice)


def validate_product_id(raw: Any) -> ValidationResult[int]:
    product_id = _parse_int(raw)
    if product_id is None or product_id <= 0:
        return ValidationResult.invalid("Invalid input. Please enter a positive number for ID.")
    return ValidationResult.valid(product_id)


def validate_name(raw: Any) -> ValidationResult[str]:
    if not isinstance(raw, str) or not raw.strip():
        return ValidationResult.invalid("Product name cannot be empty. Please try again.")
    return ValidationResult.valid(raw.strip())


def validate_quantity(raw: Any) -> ValidationResult[int]:
    quantity = _parse_int(raw)
    if quantity is None or quantity < 0:
        return ValidationResult.invalid("Invalid input. Please enter a non-negative number for quantity.")
    return ValidationResult.valid(quantity)


def validate_price(raw: Any) -> ValidationResult[float]:
    price = _parse_float(raw)
    if price is None or price < 0.0:
        return ValidationResult.invalid("Invalid input. Please enter a non-negative number for price.")
    if price > MAX_PRICE:
        return ValidationResult.invalid(f"Invalid input. Price cannot exceed {MAX_PRICE:,.2f}.")
    return ValidationResult.valid(price)


def validate_threshold(raw: Any) -> ValidationResult[int]:
    threshold = _parse_int(raw)
    if threshold is None or threshold < 0:
        return ValidationResult.invalid("Invalid input. Please enter a non-negative number.")
    return ValidationResult.valid(threshold)


def validate_search_term(raw: Any) -> ValidationResult[str]:
    # Surrounding spaces are part of the substring being searched for.
    if not isinstance(raw, str) or raw == "":
        return ValidationResult.invalid("Search term cannot be empty.")
    return ValidationResult.valid(raw)
