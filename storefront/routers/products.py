"""Read-only product catalog endpoint."""
from fastapi import APIRouter, Depends

from storefront.catalog import Catalog
from .deps import get_catalog

router = APIRouter(tags=["products"])


@router.get("/api/products")
async def list_products(catalog: Catalog = Depends(get_catalog)):
    """Deduplicated catalog in display order."""
    return catalog.to_list()
