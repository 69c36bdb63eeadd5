"""Inventory ledger: availability checks and signed stock adjustments.

Multi-line adjustments are all-or-nothing: every line is validated against
the projected quantities before any product is mutated, and all touched
products are persisted in the caller's unit of work.

Check-then-act across requests is serialised by StockLocks. Callers hold the
locks for every product an operation touches, across the whole command, so
the commit happens before another request can read the same stock.
"""

import threading
from collections.abc import Iterable
from contextlib import contextmanager
from dataclasses import dataclass

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.errors import InsufficientStockError, ProductNotFoundError
from ordering.inventory.product import Product

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StockDelta:
    product_id: str
    color: str
    size: str
    delta: int


class StockLocks:
    """One re-entrant lock per product, always acquired in sorted order."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[str, threading.RLock] = {}

    def _lock_for(self, product_id: str) -> threading.RLock:
        with self._guard:
            return self._locks.setdefault(product_id, threading.RLock())

    @contextmanager
    def hold(self, *product_ids):
        locks = [self._lock_for(pid) for pid in sorted({str(pid) for pid in product_ids})]
        for lock in locks:
            lock.acquire()
        try:
            yield
        finally:
            for lock in reversed(locks):
                lock.release()


stock_locks = StockLocks()


class InventoryLedger:
    def _repo(self):
        return current_domain.repository_for(Product)

    def find_product(self, product_id) -> Product | None:
        if not product_id:
            return None
        try:
            return self._repo().get(str(product_id))
        except ObjectNotFoundError:
            return None

    def remaining(self, product_id, color, size) -> int:
        product = self.find_product(product_id)
        return product.stock_of(color, size) if product else 0

    def check_availability(self, product_id, color, size, quantity) -> bool:
        product = self.find_product(product_id)
        if product is None:
            return False
        variation = product.variation_for(color, size)
        if variation is None:
            return False
        return quantity <= variation.quantity

    def apply_delta(self, product_id, color, size, signed_delta) -> Product:
        return self.apply_deltas([StockDelta(str(product_id), color, size, signed_delta)])[0]

    def apply_deltas(self, deltas: Iterable[StockDelta]) -> list[Product]:
        """Validate every delta against projected stock, then apply them all."""
        deltas = list(deltas)
        products: dict[str, Product] = {}
        projected: dict[tuple[str, str, str], int] = {}

        for line in deltas:
            product_id = str(line.product_id)
            if product_id not in products:
                product = self.find_product(product_id)
                if product is None:
                    raise ProductNotFoundError("Product not found.", product_id=product_id)
                products[product_id] = product

            product = products[product_id]
            variation = product.variation_for(line.color, line.size)
            if variation is None:
                raise ProductNotFoundError(
                    f"Product {product.name} has no variant ({line.color} - {line.size}).",
                    product_id=product_id,
                    color=line.color,
                    size=line.size,
                )

            key = (product_id, line.color, line.size)
            current = projected.get(key, variation.quantity)
            if current + line.delta < 0:
                raise InsufficientStockError(
                    f"Product {product.name} ({line.color} - {line.size}) is out of stock. Remaining: {current}",
                    remaining=current,
                    product_id=product_id,
                    color=line.color,
                    size=line.size,
                )
            projected[key] = current + line.delta

        for line in deltas:
            products[str(line.product_id)].adjust_stock(line.color, line.size, line.delta)

        repo = self._repo()
        for product in products.values():
            repo.add(product)

        logger.info(
            "Stock adjusted",
            lines=len(deltas),
            products=sorted(products),
        )
        return list(products.values())

    def credit_back(self, deltas: Iterable[StockDelta]) -> list[Product]:
        """Return stock for lines whose product and variant still exist.

        Lines pointing at removed products or variants are skipped with a
        warning; the rest are applied together.
        """
        applicable = []
        for line in deltas:
            product = self.find_product(line.product_id)
            if product is None or product.variation_for(line.color, line.size) is None:
                logger.warning(
                    "Skipping stock credit for missing product or variant",
                    product_id=str(line.product_id),
                    color=line.color,
                    size=line.size,
                )
                continue
            applicable.append(line)

        if not applicable:
            return []
        return self.apply_deltas(applicable)
