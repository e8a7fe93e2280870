"""
Cost rollup tests — formula order, rounding, services and currency conversion.

No catalog writes, no database. Pure math.
"""

import math

from pumpquote.formatting import ceil_amount, format_amount
from pumpquote.line_items import (
    EngineState,
    EstimateParameters,
    FlatRateSelection,
    LineItem,
    ProductFamily,
)
from pumpquote.regions import effective_region, region_for_location


def _sample_state(equipment=1_000_000.0, **params):
    defaults = {
        "usd_rate": 10.0,
        "eur_rate": 11.0,
        "admin_percent": 0,
        "agent_commission_percent": 0,
        "profit_margin_percent": 0,
        "bottom_markup_percent": 0,
    }
    defaults.update(params)
    line = LineItem(
        id="other_equipment.spare_parts",
        selection=FlatRateSelection(category="other_equipment", label="Spare parts"),
        quantity=1,
        unit_price=equipment,
    )
    return EngineState(
        family=ProductFamily.ANTI_HEELING,
        line_items=[line],
        parameters=EstimateParameters(**defaults),
    )


# ============================================================
# Formula
# ============================================================

def test_scenario_c_admin_on_equipment(calculator):
    result = calculator.compute(_sample_state(admin_percent=40))
    assert result.equipment_cost == 1_000_000
    assert result.admin_amount == 400_000
    assert result.full_cost == 1_400_000


def test_scenario_d_profit_and_usd(calculator):
    result = calculator.compute(_sample_state(profit_margin_percent=50, usd_rate=8.7))
    assert result.total_self_cost == 1_000_000
    assert result.sales_price == 1_500_000
    assert result.target_price == 1_500_000
    assert result.converted["USD"]["sales_price"] == 172_414


def test_full_chain_order(calculator):
    state = _sample_state(
        admin_percent=10,
        agent_commission_percent=5,
        profit_margin_percent=35,
        bottom_markup_percent=20,
        extra_commissioning_days=2,
        startup_location="Norway (Vard, Ulstein, etc.)",
    )
    result = calculator.compute(state)

    assert result.full_cost == 1_100_000
    assert result.startup_cost == 50_600
    assert result.shipping_cost == 4_500
    assert result.extra_days_cost == 34_100
    assert result.sub_total == 1_100_000 + 50_600 + 4_500 + 34_100
    # Commission is charged on the subtotal, markups on the self cost
    assert result.agent_amount == 59_460
    assert result.total_self_cost == 1_248_660
    assert result.sales_price == 1_685_691
    assert result.bottom_price == 1_498_392


def test_zero_quantity_rows_cost_nothing(calculator):
    state = _sample_state()
    state.line_items[0].quantity = 0
    assert calculator.compute(state).equipment_cost == 0


def test_negative_extra_days_clamped(calculator):
    result = calculator.compute(_sample_state(extra_commissioning_days=-3))
    assert result.extra_days_cost == 0


def test_line_totals_are_ceiled(calculator):
    result = calculator.compute(_sample_state(equipment=1000.2))
    assert result.line_totals == {"other_equipment.spare_parts": 1001}
    assert result.equipment_cost == 1001


def test_zero_rate_yields_nan(calculator):
    result = calculator.compute(_sample_state(usd_rate=0))
    assert math.isnan(result.converted["USD"]["sales_price"])
    assert result.converted["EUR"]["sales_price"] == math.ceil(1_000_000 / 11)


def test_compute_is_deterministic(calculator):
    state = _sample_state(admin_percent=12.5, profit_margin_percent=33.3)
    assert calculator.compute(state) == calculator.compute(state)


def test_amount_helper_by_currency(calculator):
    result = calculator.compute(_sample_state(usd_rate=10))
    assert result.amount("total_self_cost") == 1_000_000
    assert result.amount("total_self_cost", "USD") == 100_000


# ============================================================
# Shipping regions
# ============================================================

def test_region_keyword_buckets():
    assert region_for_location("Norway (Vard, Ulstein, etc.)") == "Norway"
    assert region_for_location("Turkey") == "Romania/Turkey/East-Europe"
    assert region_for_location("HHI") == "Asia"
    assert region_for_location("China - Shanghai area") == "Asia"
    assert region_for_location("Houston yard") == "USA"
    assert region_for_location("Germany") == "Europe"
    assert region_for_location("") == ""


def test_region_keyword_inside_longer_word():
    assert region_for_location("Ulsteinvik yard") == "Norway"
    assert region_for_location("Korean yard (Okpo)") == "Asia"
    assert region_for_location("NORWEGIAN coast") == "Norway"


def test_short_yard_code_does_not_match_inside_words():
    assert region_for_location("SHI") == "Asia"
    assert region_for_location("Germany shipyard") == "Europe"


def test_region_drives_shipping_cost(calculator):
    result = calculator.compute(_sample_state(startup_location="Ulsteinvik yard"))
    assert result.effective_region == "Norway"
    assert result.shipping_cost == 4_500


def test_region_auto_map_off_uses_chosen_region(calculator):
    state = _sample_state(shipping_auto_map=False, shipping_region="Canada", startup_location="Japan")
    assert effective_region(state.parameters) == "Canada"
    result = calculator.compute(state)
    assert result.shipping_cost == 60_000
    assert result.startup_cost == 56_000


def test_unknown_region_ships_free(calculator):
    state = _sample_state(shipping_auto_map=False, shipping_region="Atlantis")
    assert calculator.compute(state).shipping_cost == 0


# ============================================================
# Formatting
# ============================================================

def test_ceil_amount_always_rounds_up():
    assert ceil_amount(1000.0000004) == 1001
    assert ceil_amount(1234.01) == 1235
    assert ceil_amount(1000.0) == 1000
    assert math.isnan(ceil_amount(float("nan")))


def test_format_amount_matches_ceil():
    for value in (0, 0.5, 999.999, 1000.0000004, 1_234_567.2):
        assert format_amount(value) == f"{math.ceil(value):,}"


def test_rollup_float_noise_does_not_add_a_unit(calculator):
    # 0.1 * 3 * 10 == 3.0000000000000004
    result = calculator.compute(_sample_state(equipment=0.1 * 3 * 10))
    assert result.equipment_cost == 3
    assert result.line_totals == {"other_equipment.spare_parts": 3}


def test_format_amount():
    assert format_amount(1_400_000) == "1,400,000"
    assert format_amount(1234.2) == "1,235"
    assert format_amount(172413.79, "USD") == "USD 172,414"
    assert format_amount(float("nan")) == "—"
    assert format_amount(float("inf"), "NOK") == "—"
