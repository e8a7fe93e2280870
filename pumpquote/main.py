from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .database import engine, Base
from .catalog import get_catalog
from .routers import catalog, estimate
from . import models  # noqa: F401  registers tables on Base

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("pumpquote")

# Create tables (handles new tables but won't add columns to existing ones)
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Pump Quote Estimator",
    description=f"Marine pump system quote estimation for {settings.COMPANY_NAME}",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(catalog.router, prefix="/api")
app.include_router(estimate.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "pumpquote", "catalog_version": get_catalog().version}


@app.on_event("startup")
def load_pricing_catalog():
    """Load and validate the price list before the first request. A bad catalog stops startup."""
    pricing = get_catalog()
    logger.info("Pricing catalog %s ready (%d cargo pump types)",
                pricing.version, len(pricing.cargo_pump_types()))
