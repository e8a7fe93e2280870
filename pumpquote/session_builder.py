"""
Builds the starting line-item set for a new estimation session.

Cargo pumps are hydraulic deepwell pumps, so a cargo estimate carries pump,
trunk, accessory and certification rows. An anti-heeling estimate carries the
whole electric drive train: motor, starter, level switch and crossover valves.
Rows that are not included start at quantity 0 and are never removed.
"""

import re
from typing import Optional

from .catalog import PricingCatalog
from .line_items import (
    AntiHeelingPumpSelection,
    CargoPumpSelection,
    Category,
    ClassCertificationSelection,
    EngineState,
    EstimateParameters,
    FlatRateSelection,
    LevelSwitchSelection,
    LineItem,
    MotorSelection,
    NONE_OPTION,
    OptionSelection,
    ProductFamily,
    StarterSelection,
    ValveSelection,
)

# Crossover valves fitted on a standard anti-heeling system
DEFAULT_PNEUMATIC_VALVES = 2
DEFAULT_ELECTRIC_VALVES = 1

# Flat-rate rows included by default, everything else starts at 0
DEFAULT_INCLUDED = {
    (Category.CONTROL_SYSTEM, "Standard desk mounting"),
}


def _slug(label: str) -> str:
    return re.sub(r"[^a-z0-9]+", "_", label.lower()).strip("_")


def _priced(catalog: PricingCatalog, line_id: str, selection, quantity: float) -> LineItem:
    item = LineItem(id=line_id, selection=selection, quantity=quantity)
    item.unit_price = catalog.lookup(item.category, selection.model_dump())
    return item


def default_line(catalog: PricingCatalog, category: Category, line_id: str,
                 quantity: float = 1.0, pump_type: str = "") -> LineItem:
    """A single row with catalog-derived defaults for its category."""
    category = Category(category)

    if category == Category.CARGO_PUMP:
        pump_type = pump_type or next(iter(catalog.cargo_pump_types()), "")
        lengths = catalog.pump_lengths(pump_type)
        length = lengths[0] if lengths else 0
        variants = catalog.variants_for(pump_type, length)
        selection = CargoPumpSelection(
            pump_type=pump_type, length=length, variant=variants[0] if variants else "CS",
        )
    elif category == Category.ANTI_HEELING_PUMP:
        flanges = catalog.flange_types()
        selection = AntiHeelingPumpSelection(
            pump_type=pump_type or next(iter(catalog.anti_heeling_pump_types()), ""),
            flange_type=flanges[0] if flanges else "",
        )
    elif category in (Category.TRUNK, Category.ACCESSORY):
        selection = OptionSelection(category=category.value, pump_type=pump_type, option=NONE_OPTION)
    elif category == Category.MOTOR:
        variant = next(iter(catalog.motor_variants()), "")
        models = catalog.motor_models(variant)
        first = models[0] if models else {"model": "", "kw": None}
        selection = MotorSelection(variant=variant, model=first["model"], kw=first["kw"])
    elif category == Category.STARTER:
        starter_type = next(iter(catalog.starter_types()), "")
        ranges = catalog.kw_ranges(starter_type)
        selection = StarterSelection(starter_type=starter_type, kw_range=ranges[0] if ranges else "")
    elif category in (Category.VALVE_PNEUMATIC, Category.VALVE_ELECTRIC):
        models = catalog.valve_models(category, "single")
        selection = ValveSelection(
            category=category.value, acting_mode="single", model=models[0] if models else "",
        )
    elif category == Category.LEVEL_SWITCH:
        selection = LevelSwitchSelection(model=next(iter(catalog.level_switch_models()), ""))
    elif category == Category.CLASS_CERTIFICATION:
        society = next(iter(catalog.societies()), "")
        brackets = catalog.brackets(society)
        selection = ClassCertificationSelection(
            society=society, bracket=brackets[0] if brackets else "",
        )
    else:
        raise ValueError(f"Category {category.value} needs a label, use flat_rate_lines()")

    return _priced(catalog, line_id, selection, quantity)


def flat_rate_lines(catalog: PricingCatalog, category: Category) -> list[LineItem]:
    """One row per label in a flat-rate table."""
    lines = []
    for label in catalog.flat_rate_labels(category):
        quantity = 1.0 if (category, label) in DEFAULT_INCLUDED else 0.0
        selection = FlatRateSelection(category=category.value, label=label)
        lines.append(_priced(catalog, f"{category.value}.{_slug(label)}", selection, quantity))
    return lines


def build_line_items(catalog: PricingCatalog, family: ProductFamily) -> list[LineItem]:
    family = ProductFamily(family)

    if family == ProductFamily.CARGO:
        pump = default_line(catalog, Category.CARGO_PUMP, "pump")
        pump_type = pump.selection.pump_type
        return [
            pump,
            default_line(catalog, Category.TRUNK, "trunk", pump_type=pump_type),
            default_line(catalog, Category.ACCESSORY, "accessory", pump_type=pump_type),
            *flat_rate_lines(catalog, Category.PUMP_ADDITION),
            default_line(catalog, Category.CLASS_CERTIFICATION, "class_certification"),
            *flat_rate_lines(catalog, Category.MEASUREMENT),
            *flat_rate_lines(catalog, Category.OTHER_EQUIPMENT),
        ]

    items = [
        default_line(catalog, Category.ANTI_HEELING_PUMP, "pump"),
        *flat_rate_lines(catalog, Category.PUMP_ADDITION),
        default_line(catalog, Category.MOTOR, "motor"),
        *flat_rate_lines(catalog, Category.MOTOR_ADDITION),
        default_line(catalog, Category.STARTER, "starter"),
        *flat_rate_lines(catalog, Category.STARTER_ADDITION),
        default_line(catalog, Category.LEVEL_SWITCH, "level_switch"),
    ]
    for n in range(1, DEFAULT_PNEUMATIC_VALVES + 1):
        items.append(default_line(catalog, Category.VALVE_PNEUMATIC, f"valve_pneumatic_{n}"))
    for n in range(1, DEFAULT_ELECTRIC_VALVES + 1):
        items.append(default_line(catalog, Category.VALVE_ELECTRIC, f"valve_electric_{n}", quantity=0.0))
    items += [
        *flat_rate_lines(catalog, Category.VALVE_EXTRA),
        default_line(catalog, Category.CLASS_CERTIFICATION, "class_certification"),
        *flat_rate_lines(catalog, Category.MEASUREMENT),
        *flat_rate_lines(catalog, Category.CONTROL_SYSTEM),
        *flat_rate_lines(catalog, Category.OTHER_EQUIPMENT),
    ]
    return items


def build_initial_state(catalog: PricingCatalog, family: ProductFamily,
                        parameters: Optional[EstimateParameters] = None) -> EngineState:
    return EngineState(
        family=ProductFamily(family),
        catalog_version=catalog.version,
        line_items=build_line_items(catalog, family),
        parameters=parameters or EstimateParameters(),
    )
