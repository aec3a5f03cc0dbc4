from __future__ import annotations

from typing import Optional

from ..logging import get_logger
from .models import InventoryReport
from .repository import ProductRepository


LOG = get_logger("report")


def generate_report(repository: ProductRepository) -> Optional[InventoryReport]:
    """Summarize the inventory as product count and total stock value."""
    totals = repository.count_and_total_value()
    if totals is None:
        LOG.warning("Inventory report unavailable; aggregate query failed")
        return None
    count, value = totals
    report = InventoryReport(total_items=count, total_value=value)
    LOG.debug(f"Inventory report: {report}")
    return report
