from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, Iterator

import pytest

from inventory_manager.inventory import InventoryDatabase, InventoryShell, ProductRepository
from inventory_manager.inventory.models import Product
from inventory_manager.inventory.render import format_product_row


def _scripted(*lines: str) -> Callable[[], str]:
    """Feed prompt answers in order, then behave like a closed stdin."""
    it: Iterator[str] = iter(lines)

    def _next() -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    return _next


@pytest.fixture
def repo(tmp_path: Path):
    db = InventoryDatabase(str(tmp_path / "inventory.db")).open()
    yield ProductRepository(db)
    db.close()


def _run(repo: ProductRepository, *lines: str) -> str:
    out = io.StringIO()
    InventoryShell(repo, input_fn=_scripted(*lines), out=out).run()
    return out.getvalue()


def test_add_then_view(repo: ProductRepository) -> None:
    output = _run(repo, "1", "Gadget", "5", "9.99", "2", "8")
    assert "Product 'Gadget' added successfully." in output
    [product] = repo.get_all()
    assert format_product_row(product) in output
    assert "--- Current Inventory ---" in output
    assert output.rstrip().endswith("Exiting program.")


def test_menu_reprompts_until_valid_choice(repo: ProductRepository) -> None:
    output = _run(repo, "0", "abc", "9", "8")
    assert output.count("Invalid choice. Please enter a number between 1 and 8.") == 3
    assert output.count("--- Inventory Management Menu ---") == 1


def test_add_retries_each_field(repo: ProductRepository) -> None:
    output = _run(repo, "1", "", "Widget", "-1", "x", "3", "-2", "2.5", "8")
    assert output.count("Product name cannot be empty. Please try again.") == 1
    assert output.count("non-negative number for quantity") == 2
    assert output.count("non-negative number for price") == 1
    [product] = repo.get_all()
    assert (product.name, product.quantity, product.price) == ("Widget", 3, 2.5)


def test_update_existing_and_missing(repo: ProductRepository) -> None:
    new_id = repo.add("Widget", 1, 1.0)
    output = _run(
        repo,
        "3", str(new_id), "Widget Pro", "4", "3.25",
        "3", "0", "42", "Ghost", "1", "1",
        "8",
    )
    assert "Product updated successfully." in output
    assert "Invalid input. Please enter a positive number for ID." in output
    assert "No product found with ID 42. Update failed." in output
    assert repo.get(new_id) == Product(id=new_id, name="Widget Pro", quantity=4, price=3.25)


def test_delete_existing_and_missing(repo: ProductRepository) -> None:
    new_id = repo.add("Widget", 1, 1.0)
    output = _run(repo, "4", str(new_id), "4", "77", "8")
    assert "Product deleted successfully." in output
    assert "No product found with ID 77. Deletion failed." in output
    assert repo.get_all() == []


def test_search(repo: ProductRepository) -> None:
    repo.add("Widget", 2, 1.0)
    output = _run(repo, "5", "wid", "5", "zzz", "5", "", "8")
    assert '--- Search Results for "wid" ---' in output
    assert "Widget" in output
    assert 'No products found matching "zzz".' in output
    assert "Search term cannot be empty." in output


def test_filter(repo: ProductRepository) -> None:
    repo.add("Low", 2, 1.0)
    repo.add("High", 50, 1.0)
    output = _run(repo, "6", "-3", "10", "6", "1", "8")
    assert "Invalid input. Please enter a non-negative number." in output
    assert "--- Products with Quantity Less Than 10 ---" in output
    assert "Low" in output and "High" not in output
    assert "No products found with quantity less than 1." in output


def test_report(repo: ProductRepository) -> None:
    repo.add("A", 1, 1.00)
    repo.add("B", 2, 2.00)
    output = _run(repo, "7", "8")
    assert "Total unique products: 2" in output
    assert "Total inventory value: $5.00" in output


def test_end_of_input_ends_session(repo: ProductRepository) -> None:
    output = _run(repo, "1", "Gadget")
    assert output.rstrip().endswith("Exiting program.")
    assert repo.get_all() == []


def test_oversized_numbers_are_reprompted(repo: ProductRepository) -> None:
    huge = "99999999999999999999"
    output = _run(
        repo,
        "1", "Gadget", huge, "1", "1e308", "1.0",
        "4", huge, "5",
        "6", huge, "3",
        "8",
    )
    assert output.count("non-negative number for quantity") == 1
    assert output.count("Price cannot exceed") == 1
    assert output.count("positive number for ID") == 1
    assert output.count("Invalid input. Please enter a non-negative number.") == 1
    assert "No product found with ID 5. Deletion failed." in output
    assert output.rstrip().endswith("Exiting program.")
    [product] = repo.get_all()
    assert (product.name, product.quantity, product.price) == ("Gadget", 1, 1.0)
