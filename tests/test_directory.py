from decimal import Decimal
from unittest.mock import MagicMock

import pytest
import redis
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from database.directory import InMemoryWholesaleDirectory, create_directory
from database.postgres_store import PostgresWholesaleDirectory
from database.redis_store import CUSTOMERS_KEY, PRICES_KEY, RedisWholesaleDirectory
from utils.error_handler import DatabaseError


@pytest.fixture
def sql_directory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    return PostgresWholesaleDirectory(engine=engine)


@pytest.fixture(params=["memory", "sql"])
def any_directory(request, sql_directory):
    if request.param == "memory":
        return InMemoryWholesaleDirectory()
    return sql_directory


def test_add_customer_is_idempotent(any_directory):
    any_directory.add_customer("a@b.com")
    any_directory.add_customer("a@b.com")

    assert any_directory.list_customers() == ["a@b.com"]
    assert any_directory.is_wholesale_customer("a@b.com") is True
    assert any_directory.is_wholesale_customer("A@B.COM") is False


def test_set_price_last_write_wins(any_directory):
    any_directory.set_wholesale_price("P1", Decimal("10"))
    stored = any_directory.set_wholesale_price("P1", Decimal("12.345"))

    assert stored == Decimal("12.35")
    assert any_directory.wholesale_price_of("P1") == Decimal("12.35")
    assert any_directory.list_prices() == {"P1": Decimal("12.35")}


def test_missing_price_is_none(any_directory):
    assert any_directory.wholesale_price_of("nope") is None


def test_negative_price_rejected(any_directory):
    with pytest.raises(ValueError):
        any_directory.set_wholesale_price("P1", Decimal("-1"))

    assert any_directory.wholesale_price_of("P1") is None


def test_numeric_product_ids_stored_as_strings():
    directory = InMemoryWholesaleDirectory()
    directory.set_wholesale_price(123456789, "9.99")

    assert directory.wholesale_price_of("123456789") == Decimal("9.99")


def test_create_directory_memory_and_unknown():
    assert isinstance(create_directory("memory"), InMemoryWholesaleDirectory)
    with pytest.raises(ValueError):
        create_directory("mongo")


def test_redis_directory_commands():
    client = MagicMock()
    client.sismember.return_value = 1
    client.smembers.return_value = {"b@c.com", "a@b.com"}
    client.hget.return_value = "10.00"
    client.hgetall.return_value = {"P1": "10.00", "P2": "0.50"}
    directory = RedisWholesaleDirectory(client=client)

    directory.add_customer("a@b.com")
    directory.set_wholesale_price("P1", Decimal("10"))

    client.sadd.assert_called_once_with(CUSTOMERS_KEY, "a@b.com")
    client.hset.assert_called_once_with(PRICES_KEY, "P1", "10.00")
    assert directory.is_wholesale_customer("a@b.com") is True
    assert directory.list_customers() == ["a@b.com", "b@c.com"]
    assert directory.wholesale_price_of("P1") == Decimal("10.00")
    assert directory.list_prices() == {"P1": Decimal("10.00"), "P2": Decimal("0.50")}


def test_redis_directory_missing_price():
    client = MagicMock()
    client.hget.return_value = None

    assert RedisWholesaleDirectory(client=client).wholesale_price_of("P9") is None


def test_redis_directory_retries_connection_errors():
    client = MagicMock()
    client.sismember.side_effect = [redis.exceptions.ConnectionError("reset"), 1]

    assert RedisWholesaleDirectory(client=client).is_wholesale_customer("a@b.com") is True
    assert client.sismember.call_count == 2


def test_redis_directory_unavailable_raises_database_error():
    directory = RedisWholesaleDirectory(client=MagicMock())
    directory.client = None

    with pytest.raises(DatabaseError):
        directory.is_wholesale_customer("a@b.com")
