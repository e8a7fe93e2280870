"""
Pricing catalog tests — lookups, fallbacks and load-time validation.

Tests:
1-6.   Cargo pump lookups
7-11.  Anti-heeling drive train lookups
12-14. Class certification fallbacks
15-20. Loading and validation (fail fast)
"""

import copy
import json
import math

import pytest

from pumpquote.catalog import CatalogError, PricingCatalog, load_catalog
from pumpquote.catalog.pricing_data import PRICING_DATA
from pumpquote.line_items import Category, ProductFamily


def _sample_data():
    return copy.deepcopy(PRICING_DATA)


# ============================================================
# Cargo pumps
# ============================================================

def test_cargo_pump_price_by_type_length_variant(catalog):
    price = catalog.lookup(Category.CARGO_PUMP, {"pump_type": "SD100", "variant": "CST", "length": 18})
    assert price == 235000


def test_cargo_pump_unknown_length_is_zero(catalog):
    assert catalog.lookup(Category.CARGO_PUMP, {"pump_type": "SD100", "variant": "CS", "length": 99}) == 0.0


def test_cargo_pump_missing_variant_is_zero(catalog):
    """SD300L has no CSTV column."""
    assert "CSTV" not in catalog.variants_for("SD300L", 14)
    assert catalog.lookup(Category.CARGO_PUMP, {"pump_type": "SD300L", "variant": "CSTV", "length": 14}) == 0.0


def test_pump_lengths_in_catalog_order(catalog):
    lengths = catalog.pump_lengths("SD100")
    assert lengths[0] == 5
    assert lengths == sorted(lengths)


def test_trunk_none_is_free(catalog):
    assert catalog.lookup(Category.TRUNK, {"pump_type": "SD100", "option": "None"}) == 0.0
    assert catalog.trunk_options("SD100")[0] == "None"


def test_trunk_resolves_against_its_own_pump_type(catalog):
    option = "TRUNK H=500 SD125 T=12 MA EN 1.4462"
    assert catalog.lookup(Category.TRUNK, {"pump_type": "SD125", "option": option}) == 4000
    # Same option text on another pump type resolves to nothing
    assert catalog.lookup(Category.TRUNK, {"pump_type": "SD100", "option": option}) == 0.0


# ============================================================
# Anti-heeling drive train
# ============================================================

def test_motor_price_includes_ex_surcharge(catalog):
    price = catalog.lookup(Category.MOTOR, {"variant": "EX-Proof", "model": "200MLA", "kw": 37})
    assert price == 58000 + 5000


def test_motor_duplicate_model_disambiguated_by_kw(catalog):
    assert catalog.motor_price("Non-EX", "280MLB", 160) == 106500
    assert catalog.motor_price("Non-EX", "280MLB", 200) == 126000


def test_electric_valves_never_offer_dn200(catalog):
    for mode in ("single", "double"):
        models = catalog.valve_models(Category.VALVE_ELECTRIC, mode)
        assert models
        assert not any(m.startswith("DN200") for m in models)
    assert "DN200 Wafer" in catalog.valve_models(Category.VALVE_PNEUMATIC, "single")


def test_valve_price_by_mode(catalog):
    assert catalog.lookup(Category.VALVE_PNEUMATIC, {"acting_mode": "double", "model": "DN250 Lug"}) == 12800
    assert catalog.lookup(Category.VALVE_ELECTRIC, {"acting_mode": "single", "model": "DN200 Wafer"}) == 0.0


def test_unresolvable_selector_never_raises(catalog):
    assert catalog.lookup(Category.STARTER, {"starter_type": "NOPE", "kw_range": "0-20kW"}) == 0.0
    assert catalog.lookup("not_a_category", {}) == 0.0
    assert catalog.lookup(Category.MOTOR, None) == 0.0


# ============================================================
# Class certification
# ============================================================

def test_class_certification_sums_parts(catalog):
    price = catalog.lookup(Category.CLASS_CERTIFICATION, {"society": "KR", "bracket": "<100kW"})
    assert price == 5000 + 4000 + 500 + 4000


def test_unknown_bracket_falls_back_to_first(catalog):
    price = catalog.class_certification_price("CCS", "<100kW")
    assert price == catalog.class_certification_price("CCS", "<50kW")


def test_unknown_society_falls_back_to_first(catalog):
    assert catalog.resolve_society("XYZ") == "DNV"
    assert catalog.class_certification_price("XYZ", "<100kW") == 3000


# ============================================================
# Loading and validation
# ============================================================

def test_bundled_catalog_loads_with_version():
    catalog = load_catalog()
    assert catalog.version == "2025-pricelist"
    assert "SD100" in catalog.cargo_pump_types()


def test_missing_section_fails_fast():
    data = _sample_data()
    del data["shipping_by_region"]
    with pytest.raises(CatalogError):
        PricingCatalog(data)


def test_negative_price_fails_fast():
    data = _sample_data()
    data["anti_heeling"]["pumps"]["RBP-250"] = -1
    with pytest.raises(CatalogError):
        PricingCatalog(data)


def test_non_numeric_price_fails_fast():
    data = _sample_data()
    data["cargo_pumps"]["SD100"]["prices"][0]["CS"] = "165k"
    with pytest.raises(CatalogError):
        PricingCatalog(data)


def test_wrongly_shaped_entries_fail_fast():
    data = _sample_data()
    data["cargo_pumps"]["SD100"] = []
    with pytest.raises(CatalogError):
        PricingCatalog(data)

    data = _sample_data()
    data["startup_locations"]["Japan"] = 56000
    with pytest.raises(CatalogError):
        PricingCatalog(data)

    data = _sample_data()
    data["anti_heeling"]["motors"]["Non-EX"] = [42]
    with pytest.raises(CatalogError):
        PricingCatalog(data)


def test_load_from_json_file(tmp_path):
    data = _sample_data()
    data["version"] = "test-list"
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(data))

    catalog = load_catalog(str(path))
    assert catalog.version == "test-list"
    assert catalog.anti_heeling_pump_price("RBP-300") == 63000


def test_load_missing_or_corrupt_file(tmp_path):
    with pytest.raises(CatalogError):
        load_catalog(str(tmp_path / "missing.json"))

    corrupt = tmp_path / "corrupt.json"
    corrupt.write_text("{not json")
    with pytest.raises(CatalogError):
        load_catalog(str(corrupt))


def test_catalog_is_not_mutated_by_callers(catalog):
    models = catalog.motor_models("Non-EX")
    models.clear()
    assert catalog.motor_models("Non-EX")
    assert not math.isnan(catalog.startup_cost("Japan"))


def test_describe_options_per_family(catalog):
    cargo = catalog.describe_options(ProductFamily.CARGO)
    assert "SD100" in cargo["pumps"]
    assert cargo["pumps"]["SD100"]["lengths"]["18"] == ["CS", "CST", "CSTV"]

    ah = catalog.describe_options(ProductFamily.ANTI_HEELING)
    assert ah["pumps"] == ["RBP-250", "RBP-300", "RBP-400"]
    assert "EX-Proof" in ah["motors"]
