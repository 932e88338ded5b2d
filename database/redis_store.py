"""Redis-backed wholesale directory"""

import redis
import logging
from decimal import Decimal
from typing import Optional, List, Dict
from config.settings import REDIS_URL
from database.directory import WholesaleDirectory
from utils.error_handler import DatabaseError
from utils.retry import retry_db_operation

logger = logging.getLogger(__name__)

CUSTOMERS_KEY = "wholesale:customers"
PRICES_KEY = "wholesale:prices"


class RedisWholesaleDirectory(WholesaleDirectory):
    """Wholesale customers in a Redis set, prices in a Redis hash"""

    def __init__(self, url: str = None, client: Optional[redis.Redis] = None):
        """Initialize Redis connection with connection pooling"""
        if client is not None:
            self.client = client
            return

        try:
            pool = redis.ConnectionPool.from_url(
                url or REDIS_URL,
                decode_responses=True,
                max_connections=50,
                socket_connect_timeout=5,
                socket_timeout=5,
                socket_keepalive=True,
                retry_on_timeout=True,
                health_check_interval=30
            )

            self.client = redis.Redis(connection_pool=pool)
            self.client.ping()
            logger.info("✓ Redis connection pool established (max_connections=50)")
        except redis.exceptions.RedisError as e:
            logger.error(f"❌ Failed to connect to Redis: {e}")
            self.client = None

    def _require_client(self) -> redis.Redis:
        if not self.client:
            raise DatabaseError("Redis not available", details={"backend": "redis"})
        return self.client

    @retry_db_operation()
    def add_customer(self, identity: str) -> None:
        self._require_client().sadd(CUSTOMERS_KEY, identity)
        logger.info(f"Wholesale customer added: {identity}")

    @retry_db_operation()
    def is_wholesale_customer(self, identity: str) -> bool:
        return bool(self._require_client().sismember(CUSTOMERS_KEY, identity))

    @retry_db_operation()
    def list_customers(self) -> List[str]:
        return sorted(self._require_client().smembers(CUSTOMERS_KEY))

    @retry_db_operation()
    def _store_price(self, product_id: str, price: Decimal) -> None:
        # Stored as a string to keep exact decimal values
        self._require_client().hset(PRICES_KEY, product_id, str(price))

    @retry_db_operation()
    def wholesale_price_of(self, product_id: str) -> Optional[Decimal]:
        data = self._require_client().hget(PRICES_KEY, str(product_id))
        if data is None:
            return None
        return Decimal(data)

    @retry_db_operation()
    def list_prices(self) -> Dict[str, Decimal]:
        data = self._require_client().hgetall(PRICES_KEY)
        return {product_id: Decimal(price) for product_id, price in data.items()}

    def close(self):
        """Close Redis connection"""
        if self.client:
            self.client.close()
            logger.info("Redis connection closed")
