"""Checkout entry point consumed by the storefront front-end"""

import logging
from fastapi import APIRouter, Depends
from api.dependencies import get_orchestrator
from api.schemas import CheckoutRequest
from services.checkout import CheckoutOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["checkout"])


@router.post("/process-wholesale-checkout")
async def process_wholesale_checkout(
    body: CheckoutRequest,
    orchestrator: CheckoutOrchestrator = Depends(get_orchestrator)
):
    """
    Reconcile a wholesale customer's cart and issue a discount code if needed

    Returns {requiresDiscount, checkoutUrl} or, when a discount was issued,
    {requiresDiscount, discountCode, discountAmount, wholesaleTotal, checkoutUrl}.
    403 for non-wholesale customers, 500 when the discount could not be created.
    """
    directive = await orchestrator.process(
        customer_identity=body.customer_email,
        items=[item.to_cart_item() for item in body.cart_items],
        cart_total=body.cart_total
    )
    return directive.to_response()
