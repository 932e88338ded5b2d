"""
Pricing reconciliation

Re-prices a cart with wholesale prices and works out the fixed discount that
brings the storefront's regular total down to the wholesale total.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable
from database.directory import WholesaleDirectory
from utils.error_handler import NotAuthorizedError
from utils.money import to_money

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CartItem:
    product_id: str
    quantity: int
    price: Decimal  # regular unit price charged by the storefront


@dataclass(frozen=True)
class ReconciliationResult:
    requires_discount: bool
    cart_total: Decimal
    wholesale_total: Decimal
    discount_amount: Decimal
    has_wholesale_items: bool


def reconcile(
    directory: WholesaleDirectory,
    customer_identity: str,
    items: Iterable[CartItem],
    cart_total: Decimal
) -> ReconciliationResult:
    """
    Compute the wholesale total of a cart and the discount needed to reach it

    Args:
        directory: Wholesale directory to read membership and prices from
        customer_identity: Customer email
        items: Cart items with their regular unit prices
        cart_total: Total as charged by the storefront's regular pricing

    Returns:
        ReconciliationResult. ``requires_discount`` is only True when the
        discount amount is strictly positive.

    Raises:
        NotAuthorizedError: customer is not a wholesale customer
    """
    if not directory.is_wholesale_customer(customer_identity):
        raise NotAuthorizedError(identity=customer_identity)

    wholesale_total = Decimal("0")
    has_wholesale_items = False

    for item in items:
        wholesale_price = directory.wholesale_price_of(item.product_id)
        if wholesale_price is not None:
            line_total = wholesale_price * item.quantity
            has_wholesale_items = True
            logger.debug(
                f"Product {item.product_id}: wholesale ${wholesale_price} x {item.quantity} = ${line_total}"
            )
        else:
            line_total = item.price * item.quantity
            logger.debug(
                f"Product {item.product_id}: no wholesale price, regular ${item.price} x {item.quantity} = ${line_total}"
            )
        wholesale_total += line_total

    cart_total = to_money(cart_total)
    wholesale_total = to_money(wholesale_total)
    discount_amount = cart_total - wholesale_total

    logger.info(f"Cart total: ${cart_total}, wholesale total: ${wholesale_total}")

    if not has_wholesale_items:
        logger.info("No wholesale items found, proceeding with regular checkout")
        return ReconciliationResult(
            requires_discount=False,
            cart_total=cart_total,
            wholesale_total=wholesale_total,
            discount_amount=Decimal("0.00"),
            has_wholesale_items=False
        )

    if discount_amount <= 0:
        logger.info(f"No discount needed, wholesale total is not lower (difference ${discount_amount})")
        return ReconciliationResult(
            requires_discount=False,
            cart_total=cart_total,
            wholesale_total=wholesale_total,
            discount_amount=Decimal("0.00"),
            has_wholesale_items=True
        )

    logger.info(f"Discount amount needed: ${discount_amount}")
    return ReconciliationResult(
        requires_discount=True,
        cart_total=cart_total,
        wholesale_total=wholesale_total,
        discount_amount=discount_amount,
        has_wholesale_items=True
    )
