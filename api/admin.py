"""
Admin and theme endpoints
Manage wholesale customers and prices; read-only lookups for the storefront theme
"""

import logging
from typing import Dict, List
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse
from api.admin_page import ADMIN_PAGE_HTML
from api.dependencies import get_directory
from api.schemas import WholesaleCustomerIn, WholesalePriceIn
from database.directory import WholesaleDirectory
from utils.money import format_money

logger = logging.getLogger(__name__)

router = APIRouter(tags=["admin"])


@router.get("/", response_class=HTMLResponse)
async def admin_page():
    """Admin page for managing wholesale customers and prices"""
    return HTMLResponse(content=ADMIN_PAGE_HTML)


@router.get("/api/wholesale-customers")
async def list_wholesale_customers(directory: WholesaleDirectory = Depends(get_directory)) -> List[str]:
    return directory.list_customers()


@router.post("/api/wholesale-customers")
async def add_wholesale_customer(
    body: WholesaleCustomerIn,
    directory: WholesaleDirectory = Depends(get_directory)
):
    directory.add_customer(body.email)
    return {"success": True, "email": body.email}


@router.get("/api/wholesale-prices")
async def list_wholesale_prices(directory: WholesaleDirectory = Depends(get_directory)) -> Dict[str, str]:
    return {product_id: format_money(price) for product_id, price in directory.list_prices().items()}


@router.post("/api/wholesale-prices")
async def set_wholesale_price(
    body: WholesalePriceIn,
    directory: WholesaleDirectory = Depends(get_directory)
):
    try:
        price = directory.set_wholesale_price(body.product_id, body.price)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"success": True, "productId": body.product_id, "price": format_money(price)}


@router.get("/api/check-wholesale/{email}")
async def check_wholesale(email: str, directory: WholesaleDirectory = Depends(get_directory)):
    """Membership check for theme integration"""
    return {"isWholesale": directory.is_wholesale_customer(email)}


@router.get("/api/wholesale-price/{product_id}")
async def get_wholesale_price(product_id: str, directory: WholesaleDirectory = Depends(get_directory)):
    """Wholesale price lookup for theme integration"""
    price = directory.wholesale_price_of(product_id)
    return {"price": format_money(price) if price is not None else None}
