from __future__ import annotations

from typing import Iterable, List

from .constants import COLUMN_WIDTHS, TABLE_BORDER, TABLE_HEADER
from .models import InventoryReport, Product


def format_product_row(product: Product) -> str:
    """Render one product; long names overflow their column, never truncated."""
    id_w, name_w, qty_w, price_w = COLUMN_WIDTHS
    return (
        f"| {product.id:<{id_w}}"
        f"| {product.name:<{name_w}}"
        f"| {product.quantity:>{qty_w}}"
        f"| ${product.price:>{price_w}.2f} |"
    )


def format_product_table(products: Iterable[Product]) -> str:
    lines: List[str] = [TABLE_BORDER, TABLE_HEADER, TABLE_BORDER]
    lines.extend(format_product_row(p) for p in products)
    lines.append(TABLE_BORDER)
    return "\n".join(lines)


def format_listing(title: str, products: Iterable[Product]) -> str:
    return f"\n--- {title} ---\n{format_product_table(products)}"


def format_report(report: InventoryReport) -> str:
    return "\n".join(
        [
            "",
            "--- Inventory Report ---",
            f"Total unique products: {report.total_items}",
            f"Total inventory value: ${report.total_value:.2f}",
            "------------------------",
        ]
    )
