"""Logic layer for product stock."""

from loguru import logger

from groomdesk.app.logic.store import EntityStore
from groomdesk.core.domain_models import Product, ProductDraft, Table


class ProductStore(EntityStore[Product]):
    table = Table.PRODUCTS.value
    model = Product
    order_by = "name"

    def sort_key(self, item: Product) -> str:
        return item.name.casefold()

    def add(self, draft: ProductDraft) -> Product:
        return self.create(draft)

    def search(self, term: str) -> list[Product]:
        needle = term.strip().casefold()
        if not needle:
            return list(self.items)
        return [p for p in self.items if needle in p.name.casefold()]

    def adjust_quantity(self, product_id: str, change: int) -> int | None:
        """Add `change` to the stock of a product, never going below zero.

        Returns:
            The new local quantity, or None if the product is unknown
        """
        product = self.get(product_id)
        if product is None:
            logger.warning(f"Cannot adjust unknown product {product_id}")
            return None

        new_quantity = max(0, product.quantity + change)
        if new_quantity == product.quantity:
            return new_quantity

        self._update(product_id, {"quantity": new_quantity})
        current = self.get(product_id)
        return current.quantity if current else None

    def total_value(self) -> float:
        return sum(p.quantity * p.price for p in self.items)
