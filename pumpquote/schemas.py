from pydantic import BaseModel, Field
from typing import Any, Literal, Optional

from .line_items import ProductFamily
from .snapshots import FlowSpec

Currency = Literal["NOK", "USD", "EUR"]


class ParameterUpdate(BaseModel):
    """Operator-entered parameters. Rejected here so NaN never reaches a stored estimate."""
    usd_rate: Optional[float] = Field(None, gt=0, allow_inf_nan=False)
    eur_rate: Optional[float] = Field(None, gt=0, allow_inf_nan=False)
    admin_percent: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    agent_commission_percent: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    profit_margin_percent: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    bottom_markup_percent: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    extra_commissioning_days: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    shipping_region: Optional[str] = None
    shipping_auto_map: Optional[bool] = None
    startup_location: Optional[str] = None
    comments: Optional[str] = None


class StartEstimateRequest(BaseModel):
    family: ProductFamily
    project_id: Optional[str] = None
    parameters: Optional[ParameterUpdate] = None


class EditRequest(BaseModel):
    line_id: str
    field: str
    value: Any = None


class AddLineRequest(BaseModel):
    category: str  # Validated by the engine, only repeatable categories are accepted


class PriceRequest(BaseModel):
    currency: Currency = "NOK"
    price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)  # Defaults to the sales price
    flow_spec: FlowSpec = FlowSpec()


class EstimateResponse(BaseModel):
    session_id: str
    family: ProductFamily
    project_id: Optional[str] = None
    status: str = "active"
    catalog_version: str = ""
    state: dict
    breakdown: dict


class UsePriceResponse(BaseModel):
    resolved_price: float
    currency: Currency
    total_self_cost_in_currency: float
    snapshot: dict
    diff: dict


class GenerateQuoteResponse(BaseModel):
    """Everything the quote document needs: the full selection, the money and the flow data."""
    session_id: str
    family: ProductFamily
    project_id: Optional[str] = None
    catalog_version: str = ""
    state: dict
    breakdown: dict
    flow_spec: FlowSpec
    resolved_price: float
    currency: Currency
    snapshot: dict
    diff: dict
