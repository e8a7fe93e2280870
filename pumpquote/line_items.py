"""
Line item model — one priced row of an estimate, plus the session state.

Each row carries a category-specific selection. The selection is a tagged
union on `category`, so a motor row can never hold valve fields and vice
versa. line_total is always derived, never stored.
"""

import enum
import math
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from .config import settings


class ProductFamily(str, enum.Enum):
    CARGO = "cargo"
    ANTI_HEELING = "anti_heeling"


class Category(str, enum.Enum):
    CARGO_PUMP = "cargo_pump"
    ANTI_HEELING_PUMP = "anti_heeling_pump"
    PUMP_ADDITION = "pump_addition"
    TRUNK = "trunk"
    ACCESSORY = "accessory"
    MOTOR = "motor"
    MOTOR_ADDITION = "motor_addition"
    STARTER = "starter"
    STARTER_ADDITION = "starter_addition"
    LEVEL_SWITCH = "level_switch"
    VALVE_PNEUMATIC = "valve_pneumatic"
    VALVE_ELECTRIC = "valve_electric"
    VALVE_EXTRA = "valve_extra"
    CLASS_CERTIFICATION = "class_certification"
    MEASUREMENT = "measurement"
    CONTROL_SYSTEM = "control_system"
    OTHER_EQUIPMENT = "other_equipment"


PUMP_CATEGORIES = (Category.CARGO_PUMP, Category.ANTI_HEELING_PUMP)
VALVE_CATEGORIES = (Category.VALVE_PNEUMATIC, Category.VALVE_ELECTRIC)
OPTION_CATEGORIES = (Category.TRUNK, Category.ACCESSORY)
FLAT_RATE_CATEGORIES = (
    Category.PUMP_ADDITION,
    Category.MOTOR_ADDITION,
    Category.STARTER_ADDITION,
    Category.VALVE_EXTRA,
    Category.MEASUREMENT,
    Category.CONTROL_SYSTEM,
    Category.OTHER_EQUIPMENT,
)

NONE_OPTION = "None"


# --- Selections (one shape per category) ---

class CargoPumpSelection(BaseModel):
    category: Literal["cargo_pump"] = "cargo_pump"
    pump_type: str
    variant: str = "CS"  # 'CS' | 'CST' | 'CSTV'
    length: int = 5      # metres


class AntiHeelingPumpSelection(BaseModel):
    category: Literal["anti_heeling_pump"] = "anti_heeling_pump"
    pump_type: str
    flange_type: str = ""  # Recorded only, not priced


class OptionSelection(BaseModel):
    """Trunk or optional accessory, scoped to the pump type it was picked for."""
    category: Literal["trunk", "accessory"]
    pump_type: str = ""
    option: str = NONE_OPTION


class MotorSelection(BaseModel):
    category: Literal["motor"] = "motor"
    variant: str = "Non-EX"  # 'Non-EX' | 'EX-Proof'
    model: str = ""
    kw: Optional[float] = None  # Disambiguates models listed at more than one rating


class StarterSelection(BaseModel):
    category: Literal["starter"] = "starter"
    starter_type: str = "DOL"
    kw_range: str = ""


class ValveSelection(BaseModel):
    category: Literal["valve_pneumatic", "valve_electric"]
    acting_mode: str = "single"  # 'single' | 'double'
    model: str = ""


class LevelSwitchSelection(BaseModel):
    category: Literal["level_switch"] = "level_switch"
    model: str = ""


class ClassCertificationSelection(BaseModel):
    category: Literal["class_certification"] = "class_certification"
    society: str = "DNV"
    bracket: str = ""


class FlatRateSelection(BaseModel):
    """Fixed-label addition rows (pump/motor/starter additions, extras, control system...)."""
    category: Literal[
        "pump_addition",
        "motor_addition",
        "starter_addition",
        "valve_extra",
        "measurement",
        "control_system",
        "other_equipment",
    ]
    label: str


Selection = Annotated[
    Union[
        CargoPumpSelection,
        AntiHeelingPumpSelection,
        OptionSelection,
        MotorSelection,
        StarterSelection,
        ValveSelection,
        LevelSwitchSelection,
        ClassCertificationSelection,
        FlatRateSelection,
    ],
    Field(discriminator="category"),
]


class LineItem(BaseModel):
    id: str
    selection: Selection
    quantity: float = 0.0
    unit_price: float = 0.0

    @property
    def category(self) -> Category:
        return Category(self.selection.category)

    @property
    def line_total(self) -> float:
        return self.quantity * self.unit_price


# --- Session state ---

class EstimateParameters(BaseModel):
    """Operator-entered rates and percentages. Not validated here — see CostRollupCalculator."""
    usd_rate: float = Field(default_factory=lambda: settings.DEFAULT_USD_RATE)
    eur_rate: float = Field(default_factory=lambda: settings.DEFAULT_EUR_RATE)
    admin_percent: float = Field(default_factory=lambda: settings.DEFAULT_ADMIN_PCT)
    agent_commission_percent: float = Field(
        default_factory=lambda: settings.DEFAULT_AGENT_COMMISSION_PCT
    )
    profit_margin_percent: float = Field(default_factory=lambda: settings.DEFAULT_PROFIT_MARGIN_PCT)
    bottom_markup_percent: float = Field(default_factory=lambda: settings.DEFAULT_BOTTOM_MARKUP_PCT)
    extra_commissioning_days: float = 0.0
    shipping_region: str = ""
    shipping_auto_map: bool = True
    startup_location: str = ""
    comments: str = ""


class EngineState(BaseModel):
    family: ProductFamily
    catalog_version: str = ""
    line_items: list[LineItem] = []
    parameters: EstimateParameters = Field(default_factory=EstimateParameters)

    def line(self, line_id: str) -> Optional[LineItem]:
        for item in self.line_items:
            if item.id == line_id:
                return item
        return None

    def first(self, *categories: Category) -> Optional[LineItem]:
        for item in self.line_items:
            if item.category in categories:
                return item
        return None

    def lines(self, *categories: Category) -> list[LineItem]:
        return [item for item in self.line_items if item.category in categories]

    def pump(self) -> Optional[LineItem]:
        return self.first(*PUMP_CATEGORIES)


def parse_quantity(value, default: float = 0.0) -> float:
    """Parse a quantity from user input. Negative or non-numeric input yields the default."""
    if value is None:
        return default
    try:
        quantity = float(str(value).strip())
    except (ValueError, TypeError):
        return default
    if not math.isfinite(quantity) or quantity < 0:
        return default
    return quantity
