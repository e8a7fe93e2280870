"""
Selection Rules Engine — applies one field edit to an estimate and
re-derives everything that depends on it.

apply() is a pure transformation: it deep-copies the incoming EngineState,
runs the direct rule for the edited field, then runs the fix-up passes until
nothing changes (bounded by MAX_FIXUP_PASSES). The caller's state is never
touched.

Rules:
1. Pump quantity fans out to motor, starter and every valve; the pump
   addition follows only while it is active (quantity > 0).
2. Pump type change resets trunk/accessory to "None", moves a cargo pump to
   the first length of the new type and re-validates the variant.
3. Motor variant change selects the variant's first model.
4. EX-proof actuator quantity = sum of valve quantities on an EX-Proof motor,
   else 0 (fix-up pass, runs after every edit).
5. Valve acting-mode change keeps the model only if the new table offers it.
6. Trunk/accessory prices resolve from the current pump type's lists.
"""

import logging
import math
from typing import Any, Optional

from .catalog import PricingCatalog
from .config import settings
from .line_items import (
    Category,
    EngineState,
    EstimateParameters,
    LineItem,
    NONE_OPTION,
    OPTION_CATEGORIES,
    PUMP_CATEGORIES,
    ProductFamily,
    VALVE_CATEGORIES,
    parse_quantity,
)
from .session_builder import build_initial_state, default_line

logger = logging.getLogger(__name__)

EX_PROOF_VARIANT = "EX-Proof"
EX_ACTUATOR_LABEL = "EX-proof actuator"

# Rows that always follow the pump quantity
FAN_OUT_CATEGORIES = (Category.MOTOR, Category.STARTER, *VALVE_CATEGORIES)

# Rows a session may add more of
REPEATABLE_CATEGORIES = VALVE_CATEGORIES


class SelectionRulesEngine:
    """Stateless apart from the injected catalog. One instance can serve every session."""

    def __init__(self, catalog: PricingCatalog, max_fixup_passes: Optional[int] = None):
        self.catalog = catalog
        self.max_fixup_passes = (
            settings.MAX_FIXUP_PASSES if max_fixup_passes is None else max_fixup_passes
        )
        self._field_handlers = {
            Category.CARGO_PUMP: self._edit_cargo_pump,
            Category.ANTI_HEELING_PUMP: self._edit_anti_heeling_pump,
            Category.TRUNK: self._edit_option,
            Category.ACCESSORY: self._edit_option,
            Category.MOTOR: self._edit_motor,
            Category.STARTER: self._edit_starter,
            Category.VALVE_PNEUMATIC: self._edit_valve,
            Category.VALVE_ELECTRIC: self._edit_valve,
            Category.LEVEL_SWITCH: self._edit_level_switch,
            Category.CLASS_CERTIFICATION: self._edit_class_certification,
        }
        self._fixups = (self._fixup_ex_proof_actuator,)

    # --- Public operations ---

    def start_session(self, family: ProductFamily,
                      parameters: Optional[EstimateParameters] = None) -> EngineState:
        """Fresh state with catalog defaults, fix-ups already applied."""
        state = build_initial_state(self.catalog, family, parameters)
        return self._run_fixups(state)

    def apply(self, state: EngineState, line_id: str, field: str, value: Any) -> EngineState:
        """
        Apply one field edit and return the next state.

        Unknown line ids and fields are logged and ignored, and the returned
        state then equals the input.
        """
        next_state = state.model_copy(deep=True)
        item = next_state.line(line_id)
        if item is None:
            logger.warning("Edit ignored: no line item %r", line_id)
            return next_state

        if field == "quantity":
            self._set_quantity(next_state, item, value)
        else:
            handler = self._field_handlers.get(item.category, self._edit_flat_rate)
            if not handler(next_state, item, field, value):
                logger.warning("Edit ignored: %s has no editable field %r", item.category.value, field)
                return next_state

        return self._run_fixups(next_state)

    def set_parameter(self, state: EngineState, name: str, value: Any) -> EngineState:
        """
        Replace one rollup parameter, coerced to the field's type.

        Numbers that don't parse become NaN, so a bad rate or percentage shows
        up in the breakdown instead of raising. Range checks belong to the caller.
        """
        if name not in EstimateParameters.model_fields:
            logger.warning("Parameter ignored: unknown name %r", name)
            return state.model_copy(deep=True)
        next_state = state.model_copy(deep=True)
        next_state.parameters = next_state.parameters.model_copy(
            update={name: _coerce_parameter(name, value)}
        )
        return self._run_fixups(next_state)

    def add_line_item(self, state: EngineState, category: Category) -> EngineState:
        """
        Append another row of a repeatable category (valves), with catalog
        defaults and the pump's current quantity.
        """
        category = Category(category)
        if category not in REPEATABLE_CATEGORIES:
            raise ValueError(
                f"Cannot add rows of category {category.value}. "
                f"Repeatable: {[c.value for c in REPEATABLE_CATEGORIES]}"
            )
        next_state = state.model_copy(deep=True)
        existing = {item.id for item in next_state.line_items}
        n = len(next_state.lines(category)) + 1
        while f"{category.value}_{n}" in existing:
            n += 1
        pump = next_state.pump()
        quantity = pump.quantity if pump else 1.0
        next_state.line_items.append(
            default_line(self.catalog, category, f"{category.value}_{n}", quantity=quantity)
        )
        return self._run_fixups(next_state)

    # --- Pricing helper ---

    def _reprice(self, item: LineItem) -> None:
        item.unit_price = self.catalog.lookup(item.category, item.selection.model_dump())

    # --- Quantity (rule 1) ---

    def _set_quantity(self, state: EngineState, item: LineItem, value: Any) -> None:
        quantity = parse_quantity(value)
        item.quantity = quantity
        if item.category not in PUMP_CATEGORIES:
            return

        for line in state.line_items:
            if line.category in FAN_OUT_CATEGORIES:
                line.quantity = quantity
            elif line.category == Category.PUMP_ADDITION and line.quantity > 0:
                line.quantity = quantity

    # --- Pumps (rule 2) ---

    def _edit_cargo_pump(self, state: EngineState, item: LineItem, field: str, value: Any) -> bool:
        selection = item.selection
        if field == "pump_type":
            selection.pump_type = str(value)
            lengths = self.catalog.pump_lengths(selection.pump_type)
            if lengths:
                selection.length = lengths[0]
            selection.variant = self._valid_variant(selection)
            self._reset_pump_options(state, selection.pump_type)
        elif field == "length":
            try:
                selection.length = int(float(str(value).strip()))
            except (ValueError, TypeError):
                return False
            selection.variant = self._valid_variant(selection)
        elif field == "variant":
            selection.variant = str(value)
        else:
            return False
        self._reprice(item)
        return True

    def _valid_variant(self, selection) -> str:
        available = self.catalog.variants_for(selection.pump_type, selection.length)
        if selection.variant in available or not available:
            return selection.variant
        return available[0]

    def _edit_anti_heeling_pump(self, state: EngineState, item: LineItem, field: str, value: Any) -> bool:
        selection = item.selection
        if field == "pump_type":
            selection.pump_type = str(value)
            self._reset_pump_options(state, selection.pump_type)
        elif field == "flange_type":
            selection.flange_type = str(value)
        else:
            return False
        self._reprice(item)
        return True

    def _reset_pump_options(self, state: EngineState, pump_type: str) -> None:
        for line in state.lines(*OPTION_CATEGORIES):
            line.selection.pump_type = pump_type
            line.selection.option = NONE_OPTION
            line.unit_price = 0.0

    # --- Trunk / accessory (rule 6) ---

    def _edit_option(self, state: EngineState, item: LineItem, field: str, value: Any) -> bool:
        if field != "option":
            return False
        pump = state.pump()
        if pump is not None:
            item.selection.pump_type = pump.selection.pump_type
        item.selection.option = str(value) if value else NONE_OPTION
        self._reprice(item)
        return True

    # --- Motor (rule 3) ---

    def _edit_motor(self, state: EngineState, item: LineItem, field: str, value: Any) -> bool:
        selection = item.selection
        if field == "variant":
            selection.variant = str(value)
            models = self.catalog.motor_models(selection.variant)
            if models:
                selection.model = models[0]["model"]
                selection.kw = models[0]["kw"]
            else:
                selection.model = ""
                selection.kw = None
        elif field == "model":
            selection.model = str(value)
            matches = [m for m in self.catalog.motor_models(selection.variant)
                       if m["model"] == selection.model]
            selection.kw = matches[0]["kw"] if matches else None
        elif field == "kw":
            try:
                selection.kw = float(value)
            except (ValueError, TypeError):
                return False
        else:
            return False
        self._reprice(item)
        return True

    # --- Starter ---

    def _edit_starter(self, state: EngineState, item: LineItem, field: str, value: Any) -> bool:
        selection = item.selection
        if field == "starter_type":
            selection.starter_type = str(value)
            ranges = self.catalog.kw_ranges(selection.starter_type)
            if selection.kw_range not in ranges:
                selection.kw_range = ranges[0] if ranges else ""
        elif field == "kw_range":
            selection.kw_range = str(value)
        else:
            return False
        self._reprice(item)
        return True

    # --- Valves (rule 5) ---

    def _edit_valve(self, state: EngineState, item: LineItem, field: str, value: Any) -> bool:
        selection = item.selection
        if field == "acting_mode":
            selection.acting_mode = str(value)
            models = self.catalog.valve_models(item.category, selection.acting_mode)
            if selection.model not in models:
                selection.model = models[0] if models else ""
        elif field == "model":
            selection.model = str(value)
        else:
            return False
        # Re-resolved, never carried over from the previous mode
        self._reprice(item)
        return True

    # --- Level switch / class certification / flat rate ---

    def _edit_level_switch(self, state: EngineState, item: LineItem, field: str, value: Any) -> bool:
        if field != "model":
            return False
        item.selection.model = str(value)
        self._reprice(item)
        return True

    def _edit_class_certification(self, state: EngineState, item: LineItem, field: str, value: Any) -> bool:
        selection = item.selection
        if field == "society":
            selection.society = str(value)
            brackets = self.catalog.brackets(selection.society)
            if selection.bracket not in brackets:
                selection.bracket = brackets[0] if brackets else ""
        elif field == "bracket":
            selection.bracket = str(value)
        else:
            return False
        self._reprice(item)
        return True

    def _edit_flat_rate(self, state: EngineState, item: LineItem, field: str, value: Any) -> bool:
        if field != "label":
            return False
        item.selection.label = str(value)
        self._reprice(item)
        return True

    # --- Fix-up passes ---

    def _run_fixups(self, state: EngineState) -> EngineState:
        for _ in range(self.max_fixup_passes):
            before = state.model_copy(deep=True)
            for fixup in self._fixups:
                fixup(state)
            if state == before:
                return state
        if self.max_fixup_passes:
            logger.warning("Fix-up passes did not settle after %d iterations", self.max_fixup_passes)
        return state

    def _fixup_ex_proof_actuator(self, state: EngineState) -> None:
        """Rule 4 — EX-proof actuators are only ordered for EX-Proof motors, one per valve."""
        actuator = None
        for line in state.lines(Category.OTHER_EQUIPMENT):
            if line.selection.label == EX_ACTUATOR_LABEL:
                actuator = line
                break
        if actuator is None:
            return

        motor = state.first(Category.MOTOR)
        if motor is not None and motor.selection.variant == EX_PROOF_VARIANT:
            actuator.quantity = sum(v.quantity for v in state.lines(*VALVE_CATEGORIES))
        else:
            actuator.quantity = 0.0


TRUE_WORDS = ("1", "true", "yes", "on")


def _coerce_parameter(name: str, value: Any):
    """Bring a raw parameter value to the type EstimateParameters declares for it."""
    annotation = EstimateParameters.model_fields[name].annotation
    if annotation is bool:
        if isinstance(value, str):
            return value.strip().lower() in TRUE_WORDS
        return bool(value)
    if annotation is float:
        try:
            return float(str(value).strip())
        except (ValueError, TypeError):
            return math.nan
    return "" if value is None else str(value)
