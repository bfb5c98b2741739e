"""
Mello's Storefront - Main FastAPI Application

Single entry point for the storefront API routes.
Deployed as one Vercel serverless function.
"""
import sys
from pathlib import Path
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

# Project root on sys.path for Vercel, which runs this file directly
_base_path = Path(__file__).parent.parent
if str(_base_path) not in sys.path:
    sys.path.insert(0, str(_base_path))

from storefront.checkout import is_stripe_configured
from storefront.logging import get_logger
from storefront.routers import checkout_router, method_not_allowed_handler, products_router

logger = get_logger(__name__)


# ==================== FASTAPI APP ====================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    if not is_stripe_configured():
        logger.warning("STRIPE_SECRET_KEY is not set; checkout requests will fail with 500")
    yield


app = FastAPI(
    title="Mello's Storefront",
    description="Animatronic upgrade storefront: catalog and hosted checkout",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(checkout_router)
app.include_router(products_router)
app.add_exception_handler(StarletteHTTPException, method_not_allowed_handler)


@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "service": "storefront"}
