"""Wholesale directory: customer membership and product wholesale prices"""

import logging
import threading
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Dict, List, Optional
from utils.money import to_money

logger = logging.getLogger(__name__)


class WholesaleDirectory(ABC):
    """
    Storage contract for wholesale customers and prices.

    Writes are last-write-wins. Identities are case-sensitive and stored as given.
    """

    @abstractmethod
    def add_customer(self, identity: str) -> None:
        """Register a wholesale customer (idempotent)"""

    @abstractmethod
    def is_wholesale_customer(self, identity: str) -> bool:
        """Check directory membership"""

    @abstractmethod
    def list_customers(self) -> List[str]:
        """List all wholesale customer identities"""

    @abstractmethod
    def _store_price(self, product_id: str, price: Decimal) -> None:
        pass

    @abstractmethod
    def wholesale_price_of(self, product_id: str) -> Optional[Decimal]:
        """Get the wholesale price for a product, or None if not configured"""

    @abstractmethod
    def list_prices(self) -> Dict[str, Decimal]:
        """Get the full product -> wholesale price mapping"""

    def set_wholesale_price(self, product_id: str, price) -> Decimal:
        """
        Set (or overwrite) the wholesale price for a product

        Args:
            product_id: Storefront product identifier
            price: Non-negative amount, rounded to cents

        Returns:
            The stored price
        """
        amount = to_money(price)
        if amount < 0:
            raise ValueError(f"Wholesale price must be non-negative, got {amount}")
        self._store_price(str(product_id), amount)
        logger.info(f"Wholesale price set: product {product_id} -> ${amount}")
        return amount


class InMemoryWholesaleDirectory(WholesaleDirectory):
    """Process-local directory guarded by a single lock"""

    def __init__(self):
        self._customers: Dict[str, None] = {}  # dict keeps insertion order
        self._prices: Dict[str, Decimal] = {}
        self._lock = threading.Lock()

    def add_customer(self, identity: str) -> None:
        with self._lock:
            self._customers[identity] = None
        logger.info(f"Wholesale customer added: {identity}")

    def is_wholesale_customer(self, identity: str) -> bool:
        with self._lock:
            return identity in self._customers

    def list_customers(self) -> List[str]:
        with self._lock:
            return list(self._customers)

    def _store_price(self, product_id: str, price: Decimal) -> None:
        with self._lock:
            self._prices[product_id] = price

    def wholesale_price_of(self, product_id: str) -> Optional[Decimal]:
        with self._lock:
            return self._prices.get(str(product_id))

    def list_prices(self) -> Dict[str, Decimal]:
        with self._lock:
            return dict(self._prices)


def create_directory(backend: str, url: Optional[str] = None) -> WholesaleDirectory:
    """
    Build the configured directory backend

    Args:
        backend: One of "memory", "redis" or "postgres"
        url: Connection URL for redis/postgres backends
    """
    if backend == "memory":
        logger.info("Using in-memory wholesale directory")
        return InMemoryWholesaleDirectory()
    if backend == "redis":
        from database.redis_store import RedisWholesaleDirectory
        return RedisWholesaleDirectory(url)
    if backend == "postgres":
        from database.postgres_store import PostgresWholesaleDirectory
        return PostgresWholesaleDirectory(url)
    raise ValueError(f"Unknown directory backend: {backend}")
