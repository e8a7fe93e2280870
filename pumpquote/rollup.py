"""
Cost Rollup — turns an estimate's line items and parameters into the
self-cost, sales price and bottom price.

Pure math, no I/O. Order matters: admin is charged on equipment only,
agent commission on the subtotal including services, and both profit and
bottom markup on the total self cost.

Input: EngineState (line items + EstimateParameters)
Output: CostBreakdown, every amount ceil'd, in NOK plus USD/EUR conversions
"""

import logging
import math
from typing import Optional

from pydantic import BaseModel

from .catalog import PricingCatalog
from .config import settings
from .formatting import ceil_amount
from .line_items import EngineState, EstimateParameters
from .regions import effective_region

logger = logging.getLogger(__name__)

CURRENCIES = ("NOK", "USD", "EUR")

AMOUNT_FIELDS = (
    "equipment_cost",
    "admin_amount",
    "full_cost",
    "startup_cost",
    "shipping_cost",
    "extra_days_cost",
    "sub_total",
    "agent_amount",
    "total_self_cost",
    "profit_amount",
    "sales_price",
    "bottom_amount",
    "bottom_price",
    "target_price",
)


class CostBreakdown(BaseModel):
    currency: str = "NOK"
    equipment_cost: float = 0.0
    admin_amount: float = 0.0
    full_cost: float = 0.0
    startup_cost: float = 0.0
    shipping_cost: float = 0.0
    extra_days_cost: float = 0.0
    sub_total: float = 0.0
    agent_amount: float = 0.0
    total_self_cost: float = 0.0
    profit_amount: float = 0.0
    sales_price: float = 0.0
    bottom_amount: float = 0.0
    bottom_price: float = 0.0
    target_price: float = 0.0
    effective_region: str = ""
    line_totals: dict[str, float] = {}
    converted: dict[str, dict[str, float]] = {}

    def amount(self, field: str, currency: str = "NOK") -> float:
        """One amount in the requested currency."""
        if currency == self.currency:
            return getattr(self, field)
        return self.converted[currency][field]


def _settle(value: float) -> float:
    """Drop binary noise from the percentage chain (1189200 * 5 / 100 and the like) before rounding up."""
    if value is None or not math.isfinite(value):
        return value
    return round(value, 9)


def convert(amount: float, currency: str, parameters: EstimateParameters,
            base_currency: str = "NOK") -> float:
    """NOK → currency at the operator-entered rate. A zero rate yields NaN."""
    if currency == base_currency:
        return amount
    if currency == "USD":
        rate = parameters.usd_rate
    elif currency == "EUR":
        rate = parameters.eur_rate
    else:
        raise ValueError(f"Unknown currency: {currency}. Available: {list(CURRENCIES)}")
    if rate == 0:
        return math.nan
    return amount / rate


class CostRollupCalculator:
    """Stateless apart from the injected catalog and the commissioning day rate."""

    def __init__(self, catalog: PricingCatalog, extra_day_rate: Optional[float] = None):
        self.catalog = catalog
        self.extra_day_rate = settings.EXTRA_DAY_RATE if extra_day_rate is None else extra_day_rate
        self.base_currency = settings.BASE_CURRENCY

    def compute(self, state: EngineState) -> CostBreakdown:
        p = state.parameters

        equipment_cost = self._calculate_equipment_cost(state)
        admin_amount = equipment_cost * p.admin_percent / 100
        full_cost = equipment_cost + admin_amount

        # --- Services ---
        region = effective_region(p)
        startup_cost = self.catalog.startup_cost(p.startup_location)
        shipping_cost = self.catalog.shipping_cost(region)
        extra_days_cost = self._calculate_extra_days_cost(p.extra_commissioning_days)

        sub_total = full_cost + startup_cost + shipping_cost + extra_days_cost
        agent_amount = sub_total * p.agent_commission_percent / 100
        total_self_cost = sub_total + agent_amount

        # --- Prices ---
        profit_amount = total_self_cost * p.profit_margin_percent / 100
        sales_price = total_self_cost + profit_amount
        bottom_amount = total_self_cost * p.bottom_markup_percent / 100
        bottom_price = total_self_cost + bottom_amount

        raw = {
            "equipment_cost": equipment_cost,
            "admin_amount": admin_amount,
            "full_cost": full_cost,
            "startup_cost": startup_cost,
            "shipping_cost": shipping_cost,
            "extra_days_cost": extra_days_cost,
            "sub_total": sub_total,
            "agent_amount": agent_amount,
            "total_self_cost": total_self_cost,
            "profit_amount": profit_amount,
            "sales_price": sales_price,
            "bottom_amount": bottom_amount,
            "bottom_price": bottom_price,
            "target_price": sales_price,
        }

        converted = {}
        for currency in CURRENCIES:
            if currency == self.base_currency:
                continue
            converted[currency] = {
                name: ceil_amount(_settle(convert(value, currency, p, self.base_currency)))
                for name, value in raw.items()
            }

        line_totals = {item.id: ceil_amount(_settle(item.line_total)) for item in state.line_items}

        if not math.isfinite(sales_price):
            logger.debug("Non-finite sales price for %s estimate", state.family.value)

        return CostBreakdown(
            currency=self.base_currency,
            effective_region=region,
            line_totals=line_totals,
            converted=converted,
            **{name: ceil_amount(_settle(value)) for name, value in raw.items()},
        )

    def _calculate_equipment_cost(self, state: EngineState) -> float:
        """Sum of quantity × unit price over every row, zero-quantity rows included."""
        return sum(item.line_total for item in state.line_items)

    def _calculate_extra_days_cost(self, days: float) -> float:
        if not math.isfinite(days):
            return days
        return max(0.0, days) * self.extra_day_rate
