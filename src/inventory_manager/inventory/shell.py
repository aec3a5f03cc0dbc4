from __future__ import annotations

import sys
from typing import Callable, Dict, Optional, TextIO

from ..logging import get_logger
from .constants import EXIT_CHOICE, MENU_CHOICES
from .models import MutationResult, ValidationResult
from .render import format_listing, format_report
from .report import generate_report
from .repository import ProductRepository
from .validation import (
    validate_menu_choice,
    validate_name,
    validate_price,
    validate_product_id,
    validate_quantity,
    validate_search_term,
    validate_threshold,
)


LOG = get_logger("shell")


class _SessionEnded(Exception):
    """Input stream closed or interrupted while waiting at a prompt."""


class InventoryShell:
    """Interactive menu over a ProductRepository.

    Input comes from `input_fn` (called without arguments, one line per call)
    and all user-facing text goes to `out`. Prompts retry until the validator
    accepts the answer; end of input leaves the loop like the Exit choice.
    """

    def __init__(
        self,
        repository: ProductRepository,
        *,
        input_fn: Callable[[], str] = input,
        out: Optional[TextIO] = None,
    ) -> None:
        self.repository = repository
        self._input = input_fn
        self._out = out if out is not None else sys.stdout
        self._actions: Dict[int, Callable[[], None]] = {
            1: self.add_product,
            2: self.view_products,
            3: self.update_product,
            4: self.delete_product,
            5: self.search_products,
            6: self.filter_products,
            7: self.show_report,
        }

    # --------------- I/O ---------------
    def _write(self, text: str = "") -> None:
        self._out.write(text + "\n")

    def _read(self, prompt: str) -> str:
        self._out.write(prompt)
        self._out.flush()
        try:
            return self._input()
        except (EOFError, KeyboardInterrupt) as e:
            self._write()
            raise _SessionEnded() from e

    def _prompt(self, prompt: str, validator: Callable[[str], ValidationResult]):
        while True:
            result = validator(self._read(prompt))
            if result.ok:
                return result.value
            self._write(result.reason or "Invalid input.")

    # --------------- Loop ---------------
    def display_menu(self) -> None:
        self._write()
        self._write("--- Inventory Management Menu ---")
        for number, label in MENU_CHOICES:
            self._write(f"{number}. {label}")

    def run(self) -> None:
        LOG.debug("Interactive session started")
        try:
            while True:
                self.display_menu()
                choice = self._prompt("Enter your choice: ", validate_menu_choice)
                if choice == EXIT_CHOICE:
                    break
                self._actions[choice]()
        except _SessionEnded:
            LOG.info("Input closed; leaving interactive session")
        self._write("Exiting program.")

    # --------------- Actions ---------------
    def add_product(self) -> None:
        self._write()
        self._write("--- Add New Product ---")
        name = self._prompt("Enter Product Name: ", validate_name)
        quantity = self._prompt("Enter Quantity: ", validate_quantity)
        price = self._prompt("Enter Price: ", validate_price)
        new_id = self.repository.add(name, quantity, price)
        if new_id is None:
            self._write(f"Failed to add product '{name}'.")
            return
        self._write(f"Product '{name}' added successfully.")

    def view_products(self) -> None:
        products = self.repository.get_all()
        if products is None:
            self._write("Failed to retrieve products.")
            return
        self._write(format_listing("Current Inventory", products))

    def update_product(self) -> None:
        self._write()
        self._write("--- Update Product ---")
        self.view_products()
        product_id = self._prompt("Enter Product ID to update: ", validate_product_id)
        name = self._prompt("Enter Product Name: ", validate_name)
        quantity = self._prompt("Enter Quantity: ", validate_quantity)
        price = self._prompt("Enter Price: ", validate_price)
        outcome = self.repository.update(product_id, name, quantity, price)
        if outcome is MutationResult.SUCCESS:
            self._write("Product updated successfully.")
        elif outcome is MutationResult.NOT_FOUND:
            self._write(f"No product found with ID {product_id}. Update failed.")
        else:
            self._write("Failed to update product.")

    def delete_product(self) -> None:
        self._write()
        self._write("--- Delete Product ---")
        self.view_products()
        product_id = self._prompt("Enter Product ID to delete: ", validate_product_id)
        outcome = self.repository.delete(product_id)
        if outcome is MutationResult.SUCCESS:
            self._write("Product deleted successfully.")
        elif outcome is MutationResult.NOT_FOUND:
            self._write(f"No product found with ID {product_id}. Deletion failed.")
        else:
            self._write("Failed to delete product.")

    def search_products(self) -> None:
        self._write()
        self._write("--- Search Products by Name ---")
        term = self._read("Enter search term: ")
        checked = validate_search_term(term)
        if not checked.ok:
            self._write(checked.reason)
            return
        products = self.repository.search_by_name(checked.value)
        if products is None:
            self._write("Failed to search products.")
            return
        self._write(format_listing(f'Search Results for "{term}"', products))
        if not products:
            self._write(f'No products found matching "{term}".')

    def filter_products(self) -> None:
        self._write()
        self._write("--- Filter Products by Quantity ---")
        threshold = self._prompt("Enter maximum quantity threshold: ", validate_threshold)
        products = self.repository.filter_by_quantity(threshold)
        if products is None:
            self._write("Failed to filter products.")
            return
        self._write(format_listing(f"Products with Quantity Less Than {threshold}", products))
        if not products:
            self._write(f"No products found with quantity less than {threshold}.")

    def show_report(self) -> None:
        report = generate_report(self.repository)
        if report is None:
            self._write("Failed to generate report.")
            return
        self._write(format_report(report))
