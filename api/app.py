from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from config.settings import (
    APP_NAME,
    APP_VERSION,
    CHECKOUT_PATH,
    DIRECTORY_BACKEND,
    DATABASE_URL,
    DISCOUNT_CODE_PREFIX,
    DISCOUNT_VALIDITY_HOURS,
    ENVIRONMENT,
    LOG_LEVEL,
    REDIS_URL,
    SHOPIFY_ACCESS_TOKEN,
    SHOPIFY_STORE_DOMAIN
)
from api.admin import router as admin_router
from api.checkout import router as checkout_router
from database.directory import WholesaleDirectory, create_directory
from services.checkout import CheckoutOrchestrator
from services.discount_codes import DiscountCodeGenerator
from services.provisioner import DiscountProvisioner
from services.shopify_client import ShopifyAdminAPI
from utils.error_handler import register_error_handlers

logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def build_orchestrator(directory: WholesaleDirectory, shopify: ShopifyAdminAPI) -> CheckoutOrchestrator:
    """Wire the checkout flow from settings"""
    return CheckoutOrchestrator(
        directory=directory,
        generator=DiscountCodeGenerator(prefix=DISCOUNT_CODE_PREFIX),
        provisioner=DiscountProvisioner(shopify, validity=timedelta(hours=DISCOUNT_VALIDITY_HOURS)),
        checkout_path=CHECKOUT_PATH
    )


def create_app(
    directory: Optional[WholesaleDirectory] = None,
    shopify: Optional[ShopifyAdminAPI] = None
) -> FastAPI:
    """
    Build the FastAPI application

    Args:
        directory: Wholesale directory; built from DIRECTORY_BACKEND when omitted
        shopify: Shopify client; built from the SHOPIFY_* settings when omitted
    """
    app = FastAPI(
        title=APP_NAME,
        version=APP_VERSION,
        description="Wholesale pricing and checkout discounts for Shopify storefronts"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    if directory is None:
        url = REDIS_URL if DIRECTORY_BACKEND == "redis" else DATABASE_URL
        directory = create_directory(DIRECTORY_BACKEND, url)
    if shopify is None:
        shopify = ShopifyAdminAPI()

    app.state.directory = directory
    app.state.shopify = shopify
    app.state.orchestrator = build_orchestrator(directory, shopify)

    app.include_router(admin_router)
    app.include_router(checkout_router)

    @app.on_event("startup")
    async def startup_event():
        logger.info(f"{APP_NAME} started (environment: {ENVIRONMENT})")
        logger.info(f"Wholesale directory backend: {type(app.state.directory).__name__}")
        if not app.state.shopify.configured:
            logger.warning("⚠️ Shopify API not configured: set SHOPIFY_STORE_DOMAIN and SHOPIFY_ACCESS_TOKEN")

    @app.on_event("shutdown")
    async def shutdown_event():
        await app.state.shopify.close()
        close = getattr(app.state.directory, "close", None)
        if close:
            close()

    @app.get("/health")
    async def health():
        """Health check endpoint"""
        return {"status": "ok", "service": APP_NAME}

    @app.get("/test-deployment")
    async def test_deployment():
        """Report what is deployed and whether Shopify credentials are present"""
        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "environment": ENVIRONMENT,
            "hasShopifyToken": bool(SHOPIFY_ACCESS_TOKEN),
            "hasShopifyDomain": bool(SHOPIFY_STORE_DOMAIN),
            "version": APP_VERSION
        }

    return app


app = create_app()
