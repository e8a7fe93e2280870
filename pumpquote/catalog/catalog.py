"""
Pricing catalog with read-only lookups over the supplier price list.

lookup() never raises. A selector that doesn't resolve prices at 0 so the
estimator stays editable while selections are still incomplete. The only
hard failure is a malformed catalog, which raises CatalogError at load time.
"""

import copy
import json
import logging
import math
from functools import lru_cache
from pathlib import Path
from typing import Optional

from ..config import settings
from ..line_items import Category, FLAT_RATE_CATEGORIES, NONE_OPTION, ProductFamily
from .pricing_data import CATALOG_VERSION, PRICING_DATA

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """Raised when catalog data is missing sections or carries invalid prices."""


REQUIRED_SECTIONS = (
    "anti_heeling",
    "cargo_pumps",
    "startup_locations",
    "shipping_by_region",
    "class_certification",
)

ANTI_HEELING_SECTIONS = (
    "pumps",
    "motors",
    "starters",
    "level_switches",
    "valves_pneumatic",
    "valves_electric",
    "pump_additions",
    "motor_additions",
    "starter_additions",
    "valve_extras",
    "control_system",
    "measurement",
    "other_equipment",
)

FLAT_RATE_TABLES = {
    Category.PUMP_ADDITION: "pump_additions",
    Category.MOTOR_ADDITION: "motor_additions",
    Category.STARTER_ADDITION: "starter_additions",
    Category.VALVE_EXTRA: "valve_extras",
    Category.MEASUREMENT: "measurement",
    Category.CONTROL_SYSTEM: "control_system",
    Category.OTHER_EQUIPMENT: "other_equipment",
}

VALVE_TABLES = {
    Category.VALVE_PNEUMATIC: "valves_pneumatic",
    Category.VALVE_ELECTRIC: "valves_electric",
}

OPTION_LISTS = {
    Category.TRUNK: "trunk",
    Category.ACCESSORY: "optional_accessories",
}

PUMP_VARIANTS = ("CS", "CST", "CSTV")
ACTING_MODES = ("single", "double")
CERTIFICATION_PARTS = ("pump", "price2", "price3", "system")

# Sizes that are never offered with an electric actuator
ELECTRIC_EXCLUDED_PREFIX = "DN200"


class PricingCatalog:
    """
    Immutable price list.

    Built once per process (see get_catalog) and handed to the rules engine
    and the rollup calculator. Accessors return fresh lists, so callers can't
    mutate the underlying tables.
    """

    def __init__(self, data: dict):
        _validate(data)
        self._data = copy.deepcopy(data)
        self.version = str(self._data.get("version") or CATALOG_VERSION)

    @property
    def _ah(self) -> dict:
        return self._data["anti_heeling"]

    # --- Generic entry point ---

    def lookup(self, category, selector: dict) -> float:
        """
        Resolve a (category, selector) pair to a unit price in NOK.

        selector is the selection's fields as a dict, e.g.
        {"pump_type": "SD100", "variant": "CST", "length": 18}.
        Anything unresolvable returns 0.0.
        """
        try:
            category = Category(category)
            price = self._resolve(category, selector or {})
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.debug("Unresolvable selection %s %s: %s", category, selector, e)
            return 0.0
        if price is None or not math.isfinite(price):
            logger.debug("No catalog entry for %s %s", category, selector)
            return 0.0
        return float(price)

    def _resolve(self, category: Category, s: dict) -> Optional[float]:
        if category == Category.CARGO_PUMP:
            return self.cargo_pump_price(s.get("pump_type"), s.get("variant"), s.get("length"))
        if category == Category.ANTI_HEELING_PUMP:
            return self.anti_heeling_pump_price(s.get("pump_type"))
        if category in OPTION_LISTS:
            return self.option_price(category, s.get("pump_type"), s.get("option"))
        if category == Category.MOTOR:
            return self.motor_price(s.get("variant"), s.get("model"), s.get("kw"))
        if category == Category.STARTER:
            return self.starter_price(s.get("starter_type"), s.get("kw_range"))
        if category in VALVE_TABLES:
            return self.valve_price(category, s.get("acting_mode"), s.get("model"))
        if category == Category.LEVEL_SWITCH:
            return self.level_switch_price(s.get("model"))
        if category == Category.CLASS_CERTIFICATION:
            return self.class_certification_price(s.get("society"), s.get("bracket"))
        if category in FLAT_RATE_TABLES:
            return self.flat_rate_price(category, s.get("label"))
        return None

    # --- Pumps ---

    def cargo_pump_types(self) -> list[str]:
        return list(self._data["cargo_pumps"].keys())

    def cargo_pump_description(self, pump_type: str) -> str:
        return self._data["cargo_pumps"].get(pump_type, {}).get("description", "")

    def pump_lengths(self, pump_type: str) -> list[int]:
        rows = self._data["cargo_pumps"].get(pump_type, {}).get("prices", [])
        return [row["length"] for row in rows]

    def variants_for(self, pump_type: str, length) -> list[str]:
        """Variant columns priced for one length row, in CS/CST/CSTV order."""
        row = self._length_row(pump_type, length)
        if row is None:
            return []
        return [v for v in PUMP_VARIANTS if v in row]

    def _length_row(self, pump_type: str, length) -> Optional[dict]:
        try:
            length = int(length)
        except (TypeError, ValueError):
            return None
        for row in self._data["cargo_pumps"].get(pump_type, {}).get("prices", []):
            if row["length"] == length:
                return row
        return None

    def cargo_pump_price(self, pump_type: str, variant: str, length) -> float:
        row = self._length_row(pump_type, length)
        if row is None or variant not in PUMP_VARIANTS:
            return 0.0
        return row.get(variant, 0.0)

    def anti_heeling_pump_types(self) -> list[str]:
        return list(self._ah["pumps"].keys())

    def flange_types(self) -> list[str]:
        return list(self._ah.get("flange_types", []))

    def anti_heeling_pump_price(self, pump_type: str) -> float:
        return self._ah["pumps"].get(pump_type, 0.0)

    # --- Trunk / optional accessories (cargo pumps only) ---

    def _option_list(self, category, pump_type: str) -> list[dict]:
        key = OPTION_LISTS[Category(category)]
        return self._data["cargo_pumps"].get(pump_type, {}).get(key, [])

    def trunk_options(self, pump_type: str) -> list[str]:
        return [NONE_OPTION] + [o["name"] for o in self._option_list(Category.TRUNK, pump_type)]

    def accessory_options(self, pump_type: str) -> list[str]:
        return [NONE_OPTION] + [o["name"] for o in self._option_list(Category.ACCESSORY, pump_type)]

    def option_price(self, category, pump_type: str, option: str) -> float:
        if not option or option == NONE_OPTION:
            return 0.0
        for entry in self._option_list(category, pump_type):
            if entry["name"] == option:
                return entry["price"]
        return 0.0

    # --- Motors ---

    def motor_variants(self) -> list[str]:
        return list(self._ah["motors"].keys())

    def motor_models(self, variant: str) -> list[dict]:
        """[{"model": ..., "kw": ...}, ...] in list order."""
        return [
            {"model": m["model"], "kw": m["kw"]}
            for m in self._ah["motors"].get(variant, [])
        ]

    def _motor_entry(self, variant: str, model: str, kw=None) -> Optional[dict]:
        for entry in self._ah["motors"].get(variant, []):
            if entry["model"] != model:
                continue
            if kw is None or float(entry["kw"]) == float(kw):
                return entry
        return None

    def motor_price(self, variant: str, model: str, kw=None) -> float:
        """Base price plus the EX surcharge, where the variant carries one."""
        entry = self._motor_entry(variant, model, kw)
        if entry is None:
            return 0.0
        return entry["price"] + entry.get("iict4", 0)

    # --- Starters ---

    def starter_types(self) -> list[str]:
        return list(self._ah["starters"].keys())

    def kw_ranges(self, starter_type: str) -> list[str]:
        return list(self._ah["starters"].get(starter_type, {}).keys())

    def starter_price(self, starter_type: str, kw_range: str) -> float:
        return self._ah["starters"].get(starter_type, {}).get(kw_range, 0.0)

    # --- Valves ---

    def valve_models(self, category, acting_mode: str) -> list[str]:
        category = Category(category)
        table = self._ah[VALVE_TABLES[category]].get(acting_mode, {})
        models = list(table.keys())
        if category == Category.VALVE_ELECTRIC:
            models = [m for m in models if not m.startswith(ELECTRIC_EXCLUDED_PREFIX)]
        return models

    def valve_price(self, category, acting_mode: str, model: str) -> float:
        if model not in self.valve_models(category, acting_mode):
            return 0.0
        return self._ah[VALVE_TABLES[Category(category)]][acting_mode][model]

    # --- Level switches ---

    def level_switch_models(self) -> list[str]:
        return list(self._ah["level_switches"].keys())

    def level_switch_price(self, model: str) -> float:
        return self._ah["level_switches"].get(model, 0.0)

    # --- Class certification ---

    def societies(self) -> list[str]:
        return list(self._data["class_certification"].keys())

    def resolve_society(self, society: str) -> str:
        """Requested society, or the first defined one when unknown."""
        table = self._data["class_certification"]
        if society in table:
            return society
        return next(iter(table), "")

    def brackets(self, society: str) -> list[str]:
        resolved = self.resolve_society(society)
        return list(self._data["class_certification"].get(resolved, {}).keys())

    def class_certification_price(self, society: str, bracket: str) -> float:
        """
        Sum of pump + price2 + price3 + system for (society, bracket).

        Unknown bracket falls back to the society's first bracket; unknown
        society falls back to the first society.
        """
        resolved = self.resolve_society(society)
        brackets = self._data["class_certification"].get(resolved, {})
        if not brackets:
            return 0.0
        entry = brackets.get(bracket)
        if entry is None:
            entry = next(iter(brackets.values()))
        return sum(entry.get(part, 0) for part in CERTIFICATION_PARTS)

    # --- Flat-rate additions ---

    def flat_rate_labels(self, category) -> list[str]:
        return list(self._ah[FLAT_RATE_TABLES[Category(category)]].keys())

    def flat_rate_price(self, category, label: str) -> float:
        return self._ah[FLAT_RATE_TABLES[Category(category)]].get(label, 0.0)

    # --- Services ---

    def startup_locations(self) -> list[str]:
        return list(self._data["startup_locations"].keys())

    def startup_cost(self, location: str) -> float:
        if not location:
            return 0.0
        return self._data["startup_locations"].get(location, {}).get("average", 0.0)

    def shipping_regions(self) -> list[str]:
        return list(self._data["shipping_by_region"].keys())

    def shipping_cost(self, region: str) -> float:
        if not region:
            return 0.0
        return self._data["shipping_by_region"].get(region, 0.0)

    # --- Option lists for the rendering layer ---

    def describe_options(self, family: ProductFamily) -> dict:
        """Every selectable value for a product family, shaped for a UI."""
        family = ProductFamily(family)
        shared = {
            "catalog_version": self.version,
            "societies": {s: self.brackets(s) for s in self.societies()},
            "startup_locations": self.startup_locations(),
            "shipping_regions": self.shipping_regions(),
            "flat_rate": {
                c.value: self.flat_rate_labels(c) for c in FLAT_RATE_CATEGORIES
            },
        }
        if family == ProductFamily.CARGO:
            shared["pumps"] = {
                t: {
                    "description": self.cargo_pump_description(t),
                    "lengths": {
                        str(length): self.variants_for(t, length)
                        for length in self.pump_lengths(t)
                    },
                    "trunk": self.trunk_options(t),
                    "accessories": self.accessory_options(t),
                }
                for t in self.cargo_pump_types()
            }
            return shared

        shared["pumps"] = self.anti_heeling_pump_types()
        shared["flange_types"] = self.flange_types()
        shared["motors"] = {v: self.motor_models(v) for v in self.motor_variants()}
        shared["starters"] = {t: self.kw_ranges(t) for t in self.starter_types()}
        shared["level_switches"] = self.level_switch_models()
        shared["valves"] = {
            c.value: {mode: self.valve_models(c, mode) for mode in ACTING_MODES}
            for c in VALVE_TABLES
        }
        return shared


# --- Load-time validation ---

def _check_amount(path: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise CatalogError(f"Price at {path} is not a number: {value!r}")
    if not math.isfinite(value) or value < 0:
        raise CatalogError(f"Price at {path} must be a finite, non-negative amount: {value!r}")


def _check_flat_table(path: str, table) -> None:
    if not isinstance(table, dict):
        raise CatalogError(f"Section {path} must be a mapping")
    for key, value in table.items():
        _check_amount(f"{path}.{key}", value)


def _validate(data: dict) -> None:
    if not isinstance(data, dict):
        raise CatalogError("Catalog data must be a mapping")
    missing = [s for s in REQUIRED_SECTIONS if s not in data]
    if missing:
        raise CatalogError(f"Catalog is missing sections: {missing}")
    try:
        _check_structure(data)
    except (AttributeError, TypeError, KeyError) as e:
        raise CatalogError(f"Catalog entry has the wrong shape: {e!r}") from e


def _check_structure(data: dict) -> None:
    ah = data["anti_heeling"]
    missing = [s for s in ANTI_HEELING_SECTIONS if s not in ah]
    if missing:
        raise CatalogError(f"anti_heeling is missing sections: {missing}")

    _check_flat_table("anti_heeling.pumps", ah["pumps"])
    for variant, entries in ah["motors"].items():
        for i, entry in enumerate(entries):
            path = f"anti_heeling.motors.{variant}[{i}]"
            if "model" not in entry or "kw" not in entry:
                raise CatalogError(f"{path} needs model and kw")
            _check_amount(f"{path}.price", entry.get("price"))
            if "iict4" in entry:
                _check_amount(f"{path}.iict4", entry["iict4"])
    for starter_type, ranges in ah["starters"].items():
        _check_flat_table(f"anti_heeling.starters.{starter_type}", ranges)
    for section in VALVE_TABLES.values():
        for mode, table in ah[section].items():
            _check_flat_table(f"anti_heeling.{section}.{mode}", table)
    for section in ("level_switches", *FLAT_RATE_TABLES.values()):
        _check_flat_table(f"anti_heeling.{section}", ah[section])

    for pump_type, pump in data["cargo_pumps"].items():
        rows = pump.get("prices")
        if not rows:
            raise CatalogError(f"cargo_pumps.{pump_type} has no price rows")
        for row in rows:
            path = f"cargo_pumps.{pump_type}.length={row.get('length')}"
            if not isinstance(row.get("length"), int):
                raise CatalogError(f"{path} has no integer length")
            variants = [v for v in PUMP_VARIANTS if v in row]
            if not variants:
                raise CatalogError(f"{path} prices no variant")
            for v in variants:
                _check_amount(f"{path}.{v}", row[v])
        for key in OPTION_LISTS.values():
            for entry in pump.get(key, []):
                _check_amount(f"cargo_pumps.{pump_type}.{key}.{entry.get('name')}", entry.get("price"))

    for location, entry in data["startup_locations"].items():
        _check_amount(f"startup_locations.{location}.average", entry.get("average"))
    _check_flat_table("shipping_by_region", data["shipping_by_region"])

    for society, brackets in data["class_certification"].items():
        if not brackets:
            raise CatalogError(f"class_certification.{society} has no brackets")
        for bracket, parts in brackets.items():
            for part in CERTIFICATION_PARTS:
                _check_amount(f"class_certification.{society}.{bracket}.{part}", parts.get(part))


def load_catalog(path: Optional[str] = None) -> PricingCatalog:
    """
    Build the catalog from a JSON file (path or settings.CATALOG_PATH),
    falling back to the bundled price list.
    """
    path = path or settings.CATALOG_PATH
    if not path:
        catalog = PricingCatalog(PRICING_DATA)
        logger.info("Loaded bundled pricing catalog %s", catalog.version)
        return catalog

    try:
        with open(Path(path)) as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise CatalogError(f"Catalog file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"Catalog file is not valid JSON: {path} ({e})") from e

    catalog = PricingCatalog(data)
    logger.info("Loaded pricing catalog %s from %s", catalog.version, path)
    return catalog


@lru_cache(maxsize=1)
def get_catalog() -> PricingCatalog:
    """Process-wide catalog, loaded on first use. FastAPI dependency."""
    return load_catalog()
