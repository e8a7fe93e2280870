"""
Catalog API — option lists for the estimator screens. Read-only.
"""

from fastapi import APIRouter, Depends

from ..catalog import PricingCatalog, get_catalog
from ..line_items import ProductFamily

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("/options")
def get_options(
    family: ProductFamily = ProductFamily.CARGO,
    catalog: PricingCatalog = Depends(get_catalog),
):
    """Every selectable value for one product family."""
    return catalog.describe_options(family)


@router.get("/services")
def get_services(catalog: PricingCatalog = Depends(get_catalog)):
    """Startup locations and shipping regions with their flat prices."""
    return {
        "catalog_version": catalog.version,
        "startup_locations": {
            name: catalog.startup_cost(name) for name in catalog.startup_locations()
        },
        "shipping_regions": {
            name: catalog.shipping_cost(name) for name in catalog.shipping_regions()
        },
    }
