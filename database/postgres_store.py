"""PostgreSQL-backed wholesale directory"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional, List, Dict
from sqlalchemy import create_engine, Column, String, Numeric, DateTime, select
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.exc import SQLAlchemyError
from config.settings import DATABASE_URL
from database.directory import WholesaleDirectory
from utils.error_handler import DatabaseError
from utils.retry import retry_db_operation

logger = logging.getLogger(__name__)

Base = declarative_base()


class WholesaleCustomer(Base):
    """Wholesale customer model"""
    __tablename__ = "wholesale_customers"

    identity = Column(String(255), primary_key=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class WholesalePrice(Base):
    """Wholesale price model"""
    __tablename__ = "wholesale_prices"

    product_id = Column(String(255), primary_key=True)
    price = Column(Numeric(12, 2), nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class PostgresWholesaleDirectory(WholesaleDirectory):
    """Wholesale directory persisted with SQLAlchemy, one transaction per operation"""

    def __init__(self, database_url: str = None, engine=None):
        """Initialize database connection with pooling"""
        try:
            if engine is None:
                pool_config = {
                    'pool_size': 10,
                    'max_overflow': 20,
                    'pool_timeout': 30,
                    'pool_recycle': 3600,
                    'pool_pre_ping': True,
                    'connect_args': {
                        'connect_timeout': 10,
                        'application_name': 'wholesale_checkout'
                    }
                }
                engine = create_engine(database_url or DATABASE_URL, **pool_config)

            self.engine = engine
            self.SessionLocal = sessionmaker(
                bind=self.engine,
                autocommit=False,
                autoflush=False,
                expire_on_commit=False
            )

            # Create tables if they don't exist
            Base.metadata.create_all(self.engine)
            logger.info("✓ PostgreSQL wholesale directory ready")
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to connect to PostgreSQL: {e}")
            self.engine = None
            self.SessionLocal = None

    def get_session(self) -> Session:
        """Get database session"""
        if not self.SessionLocal:
            raise DatabaseError("PostgreSQL not available", details={"backend": "postgres"})
        return self.SessionLocal()

    @retry_db_operation()
    def add_customer(self, identity: str) -> None:
        with self.get_session() as session, session.begin():
            session.merge(WholesaleCustomer(identity=identity))
        logger.info(f"Wholesale customer added: {identity}")

    @retry_db_operation()
    def is_wholesale_customer(self, identity: str) -> bool:
        with self.get_session() as session:
            return session.get(WholesaleCustomer, identity) is not None

    @retry_db_operation()
    def list_customers(self) -> List[str]:
        with self.get_session() as session:
            rows = session.execute(
                select(WholesaleCustomer.identity).order_by(WholesaleCustomer.identity)
            )
            return [row[0] for row in rows]

    @retry_db_operation()
    def _store_price(self, product_id: str, price: Decimal) -> None:
        with self.get_session() as session, session.begin():
            session.merge(WholesalePrice(product_id=product_id, price=price))

    @retry_db_operation()
    def wholesale_price_of(self, product_id: str) -> Optional[Decimal]:
        with self.get_session() as session:
            row = session.get(WholesalePrice, str(product_id))
            if row is None:
                return None
            return Decimal(row.price)

    @retry_db_operation()
    def list_prices(self) -> Dict[str, Decimal]:
        with self.get_session() as session:
            rows = session.execute(
                select(WholesalePrice.product_id, WholesalePrice.price).order_by(WholesalePrice.product_id)
            )
            return {product_id: Decimal(price) for product_id, price in rows}

    def close(self):
        """Dispose of the connection pool"""
        if self.engine:
            self.engine.dispose()
            logger.info("PostgreSQL connection pool disposed")
