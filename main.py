"""
PeachTree Wholesale Manager
Wholesale pricing for Shopify storefronts with per-checkout discount codes
"""

import uvicorn
import logging
from config.settings import PORT, APP_NAME, DIRECTORY_BACKEND, SHOPIFY_ACCESS_TOKEN, LOG_LEVEL

logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    """Start the API server"""
    logger.info(f"🚀 Starting {APP_NAME}...")
    logger.info(f"📡 Server will listen on port {PORT}")
    logger.info("="*60)
    logger.info("⚙️  Configuration:")
    logger.info(f"  - Wholesale directory backend: {DIRECTORY_BACKEND}")
    logger.info(f"  - Shopify API configured: {bool(SHOPIFY_ACCESS_TOKEN)}")
    logger.info("="*60)
    if not SHOPIFY_ACCESS_TOKEN:
        logger.info("\nIMPORTANT: Add these environment variables for Shopify integration:")
        logger.info("  SHOPIFY_STORE_DOMAIN=your-store.myshopify.com")
        logger.info("  SHOPIFY_ACCESS_TOKEN=your-access-token")
        logger.info("="*60 + "\n")

    uvicorn.run(
        "api.app:app",
        host="0.0.0.0",
        port=PORT,
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()
