"""
Discount provisioning in Shopify

Two dependent steps: create a price rule, then create the discount code bound
to it. A failure in the second step leaves the price rule in Shopify; its id is
reported on the error and logged for manual cleanup.
"""

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal
from typing import Any, Dict, List, Optional
from services.discount_codes import Clock, utc_now
from services.shopify_client import ShopifyAdminAPI
from utils.error_handler import ProvisioningFailedError, ShopifyAPIError
from utils.money import format_money

logger = logging.getLogger(__name__)

STEP_PRICE_RULE = "create_price_rule"
STEP_DISCOUNT_CODE = "create_discount_code"


@dataclass(frozen=True)
class DiscountRequest:
    customer_identity: str
    amount: Decimal
    code: str


@dataclass(frozen=True)
class StepResult:
    step: str
    ok: bool
    resource_id: Optional[int] = None
    error: Optional[Dict[str, Any]] = None


@dataclass
class ProvisioningResult:
    code: str
    price_rule_id: int
    steps: List[StepResult] = field(default_factory=list)


class DiscountProvisioner:
    """Creates single-use, time-limited fixed-amount discounts"""

    def __init__(
        self,
        client: ShopifyAdminAPI,
        validity: timedelta = timedelta(hours=24),
        clock: Clock = utc_now
    ):
        self.client = client
        self.validity = validity
        self.clock = clock

    def build_price_rule(self, request: DiscountRequest) -> dict:
        starts_at = self.clock()
        ends_at = starts_at + self.validity
        return {
            "title": f"Wholesale Discount - {request.customer_identity}",
            "target_type": "line_item",
            "target_selection": "all",
            "allocation_method": "across",
            "value_type": "fixed_amount",
            "value": f"-{format_money(request.amount)}",
            "customer_selection": "all",
            "once_per_customer": False,
            "usage_limit": 1,
            "starts_at": starts_at.isoformat(),
            "ends_at": ends_at.isoformat()
        }

    async def _create_price_rule(self, request: DiscountRequest) -> StepResult:
        try:
            data = await self.client.create_price_rule(self.build_price_rule(request))
        except ShopifyAPIError as e:
            return StepResult(STEP_PRICE_RULE, ok=False, error=_error_payload(e))

        price_rule = data.get("price_rule") if isinstance(data, dict) else None
        price_rule_id = price_rule.get("id") if isinstance(price_rule, dict) else None
        if price_rule_id is None:
            return StepResult(
                STEP_PRICE_RULE,
                ok=False,
                error={"message": "Price rule response is missing an id", "response": data}
            )

        logger.info(f"Price rule created with ID: {price_rule_id}")
        return StepResult(STEP_PRICE_RULE, ok=True, resource_id=price_rule_id)

    async def _create_discount_code(self, request: DiscountRequest, price_rule_id: int) -> StepResult:
        try:
            data = await self.client.create_discount_code(price_rule_id, request.code)
        except ShopifyAPIError as e:
            return StepResult(STEP_DISCOUNT_CODE, ok=False, error=_error_payload(e))

        discount_code = data.get("discount_code") if isinstance(data, dict) else None
        if not isinstance(discount_code, dict):
            return StepResult(
                STEP_DISCOUNT_CODE,
                ok=False,
                error={"message": "Discount code response is malformed", "response": data}
            )

        logger.info(f"Discount code created: {request.code}")
        return StepResult(STEP_DISCOUNT_CODE, ok=True, resource_id=discount_code.get("id"))

    async def provision(self, request: DiscountRequest) -> ProvisioningResult:
        """
        Create the price rule and discount code for a request

        Raises:
            ProvisioningFailedError: either step failed
        """
        logger.info(f"Creating discount: {request.code} for ${format_money(request.amount)}")
        steps: List[StepResult] = []

        rule_step = await self._create_price_rule(request)
        steps.append(rule_step)
        if not rule_step.ok:
            raise ProvisioningFailedError(
                message="Failed to create price rule",
                details=rule_step.error,
                steps=steps
            )

        code_step = await self._create_discount_code(request, rule_step.resource_id)
        steps.append(code_step)
        if not code_step.ok:
            logger.error(
                f"Orphaned price rule {rule_step.resource_id} left in Shopify for "
                f"{request.customer_identity}: discount code {request.code} was not created"
            )
            raise ProvisioningFailedError(
                message="Failed to create discount code",
                details=code_step.error,
                steps=steps,
                orphaned_price_rule_id=rule_step.resource_id
            )

        return ProvisioningResult(code=request.code, price_rule_id=rule_step.resource_id, steps=steps)


def _error_payload(error: ShopifyAPIError) -> Dict[str, Any]:
    return {
        "message": error.message,
        "status_code": error.status_code,
        "response": error.details
    }
