"""
Pricing catalog — supplier price list and read-only lookups.

Pure data access. No session state lives here.
"""

from .catalog import CatalogError, PricingCatalog, get_catalog, load_catalog

__all__ = ["CatalogError", "PricingCatalog", "get_catalog", "load_catalog"]
