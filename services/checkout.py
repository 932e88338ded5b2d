"""
Wholesale checkout orchestration

START -> AUTHORIZED -> RECONCILED -> PASSTHROUGH
                                 -> PROVISIONING -> ISSUED | FAILED
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode
from database.directory import WholesaleDirectory
from services.discount_codes import DiscountCodeGenerator
from services.provisioner import DiscountProvisioner, DiscountRequest
from services.reconciliation import CartItem, reconcile
from utils.error_handler import CheckoutError, NotAuthorizedError, ProvisioningFailedError
from utils.money import format_money

logger = logging.getLogger(__name__)


class CheckoutState(str, Enum):
    START = "start"
    AUTHORIZED = "authorized"
    RECONCILED = "reconciled"
    PASSTHROUGH = "passthrough"
    PROVISIONING = "provisioning"
    ISSUED = "issued"
    FAILED = "failed"


@dataclass(frozen=True)
class CheckoutDirective:
    requires_discount: bool
    checkout_url: str
    state: CheckoutState
    discount_code: Optional[str] = None
    discount_amount: Optional[Decimal] = None
    wholesale_total: Optional[Decimal] = None

    def to_response(self) -> Dict[str, Any]:
        if not self.requires_discount:
            return {
                "requiresDiscount": False,
                "checkoutUrl": self.checkout_url
            }
        return {
            "requiresDiscount": True,
            "discountCode": self.discount_code,
            "discountAmount": format_money(self.discount_amount),
            "wholesaleTotal": format_money(self.wholesale_total),
            "checkoutUrl": self.checkout_url
        }


class CheckoutOrchestrator:
    """Turns a wholesale customer's cart into a checkout directive"""

    def __init__(
        self,
        directory: WholesaleDirectory,
        generator: DiscountCodeGenerator,
        provisioner: DiscountProvisioner,
        checkout_path: str = "/checkout"
    ):
        self.directory = directory
        self.generator = generator
        self.provisioner = provisioner
        self.checkout_path = checkout_path

    def _transition(self, customer_identity: str, state: CheckoutState) -> CheckoutState:
        logger.debug(f"Checkout for {customer_identity} -> {state.value}")
        return state

    async def process(
        self,
        customer_identity: str,
        items: List[CartItem],
        cart_total: Decimal
    ) -> CheckoutDirective:
        """
        Process a wholesale checkout

        Raises:
            NotAuthorizedError: customer is not a wholesale customer
            ProvisioningFailedError: the discount could not be created in Shopify
            CheckoutError: anything else went wrong
        """
        logger.info(f"Processing wholesale checkout for: {customer_identity} ({len(items)} items)")
        state = self._transition(customer_identity, CheckoutState.START)

        try:
            # reconcile performs the membership check and raises NotAuthorizedError
            result = reconcile(self.directory, customer_identity, items, cart_total)
            state = self._transition(customer_identity, CheckoutState.AUTHORIZED)
            state = self._transition(customer_identity, CheckoutState.RECONCILED)

            if not result.requires_discount:
                state = self._transition(customer_identity, CheckoutState.PASSTHROUGH)
                return CheckoutDirective(
                    requires_discount=False,
                    checkout_url=self.checkout_path,
                    state=state
                )

            code = self.generator.generate(customer_identity, result.discount_amount)
            request = DiscountRequest(
                customer_identity=customer_identity,
                amount=result.discount_amount,
                code=code
            )
            state = self._transition(customer_identity, CheckoutState.PROVISIONING)

            try:
                await self.provisioner.provision(request)
            except ProvisioningFailedError:
                self._transition(customer_identity, CheckoutState.FAILED)
                raise

            state = self._transition(customer_identity, CheckoutState.ISSUED)
            logger.info(f"Discount code created successfully: {code}")
            return CheckoutDirective(
                requires_discount=True,
                checkout_url=f"{self.checkout_path}?{urlencode({'discount': code})}",
                state=state,
                discount_code=code,
                discount_amount=result.discount_amount,
                wholesale_total=result.wholesale_total
            )

        except (NotAuthorizedError, ProvisioningFailedError):
            raise
        except Exception as e:
            logger.error(f"Error processing wholesale checkout in state {state.value}: {e}", exc_info=True)
            raise CheckoutError()
