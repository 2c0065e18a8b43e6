"""
Session 4 acceptance tests: quote aggregation (compute_quote).

Tests:
1-3.  Scenarios end to end
4-6.  Skipped configurations (splice, U-join, missing material)
7-9.  Grand totals, currency, idempotence
10-12. Discount and cash total
"""

import pytest

from worktop import compute_quote, validate
from worktop.models import (
    Configuration,
    SkipReason,
    StraightSpliceGeometry,
    UJoinGeometry,
)
from worktop.pricing_engine import QuotePricingEngine
from tests.conftest import cut_config, left_join_config, make_material, right_join_config


# ============================================================
# 1-3. Scenarios
# ============================================================

def test_cut_scenario_quote(materials, fee_schedule):
    quote = compute_quote([cut_config(a=1200, b=600)], materials, fee_schedule)
    assert len(quote.line_items) == 1
    item = quote.line_items[0]
    assert item.material.net == 12000
    assert item.length_cut.net == 0
    assert quote.grand_total_net == 14362
    assert quote.grand_total_vat == 3878
    assert quote.grand_total_gross == 18240
    assert quote.currency == "HUF"
    assert quote.skipped == []


def test_left_join_scenario_quote(materials, fee_schedule):
    config = left_join_config(a=800, b=600, c=1000, d=300)
    assert validate(config, materials["m1"]).ok

    quote = compute_quote([config], materials, fee_schedule)
    item = quote.line_items[0]
    # (800 + 700) mm × 10 000 / m
    assert item.material.net == 15000
    assert item.length_cut.net == 827
    assert item.join.gross == 26000
    assert item.total_net == 15000 + 827 + 20472
    assert item.total_vat == 4050 + 223 + 5528
    assert item.total_gross == 46100


def test_line_items_keep_input_order(materials, fee_schedule):
    configs = [right_join_config(), cut_config(), left_join_config()]
    quote = compute_quote(configs, materials, fee_schedule)
    assert [i.config_index for i in quote.line_items] == [0, 1, 2]
    assert [i.assembly_type.value for i in quote.line_items] == ["right_join", "cut", "left_join"]


# ============================================================
# 4-6. Skipped configurations
# ============================================================

def test_splice_and_u_join_reported_not_priceable(materials, fee_schedule):
    configs = [
        Configuration(geometry=StraightSpliceGeometry(a=2000, b=600, c=1000, d=600), material_id="m1"),
        cut_config(),
        Configuration(geometry=UJoinGeometry(), material_id="m1"),
    ]
    quote = compute_quote(configs, materials, fee_schedule)
    assert [i.config_index for i in quote.line_items] == [1]
    assert [(s.config_index, s.reason) for s in quote.skipped] == [
        (0, SkipReason.NOT_PRICEABLE),
        (2, SkipReason.NOT_PRICEABLE),
    ]
    assert "straight_splice" in quote.skipped[0].message
    assert "priceable: cut, left_join, right_join" in quote.skipped[0].message
    assert quote.grand_total_gross == 18240


def test_missing_material_skipped(materials, fee_schedule):
    stale = cut_config().model_copy(update={"material_id": "deleted"})
    quote = compute_quote([stale, Configuration()], materials, fee_schedule)
    assert quote.line_items == []
    assert [s.reason for s in quote.skipped] == [SkipReason.MISSING_MATERIAL, SkipReason.NOT_PRICEABLE]
    assert quote.grand_total_gross == 0


def test_empty_quote_uses_default_currency(fee_schedule):
    quote = compute_quote([], {}, fee_schedule)
    assert quote.grand_total_net == 0
    assert quote.currency == "HUF"


# ============================================================
# 7-9. Totals, currency, purity
# ============================================================

def test_grand_totals_are_sums_of_line_totals(materials, fee_schedule):
    configs = [cut_config(), left_join_config(), right_join_config()]
    quote = compute_quote(configs, materials, fee_schedule)
    assert quote.grand_total_net == sum(i.total_net for i in quote.line_items)
    assert quote.grand_total_vat == sum(i.total_vat for i in quote.line_items)
    assert quote.grand_total_gross == sum(i.total_gross for i in quote.line_items)


def test_currency_from_last_priced_material(fee_schedule):
    materials = {
        "m1": make_material(id="m1", currency="HUF"),
        "m2": make_material(id="m2", currency="EUR", price_per_meter=30),
    }
    configs = [
        cut_config().model_copy(update={"material_id": "m2"}),
        cut_config(),
    ]
    assert compute_quote(configs, materials, fee_schedule).currency == "HUF"
    assert compute_quote(list(reversed(configs)), materials, fee_schedule).currency == "EUR"


def test_compute_quote_is_idempotent(materials, fee_schedule):
    configs = [cut_config(), left_join_config(), right_join_config()]
    first = compute_quote(configs, materials, fee_schedule)
    second = QuotePricingEngine().compute_quote(configs, materials, fee_schedule)
    assert first == second
    assert first.model_dump() == second.model_dump()


# ============================================================
# 10-12. Discount / cash
# ============================================================

def test_no_discount_final_total_equals_gross(materials, fee_schedule):
    quote = compute_quote([cut_config()], materials, fee_schedule)
    assert quote.final_total_after_discount == 18240
    assert quote.cash_total == 18240


def test_discount_applied_to_gross(materials, fee_schedule):
    quote = compute_quote([left_join_config()], materials, fee_schedule, discount_percent=10)
    # 46 100 × 0.9
    assert quote.final_total_after_discount == 41490
    assert quote.cash_total == 41490
    assert quote.grand_total_gross == 46100

    quote = compute_quote([cut_config(a=1234)], materials, fee_schedule, discount_percent=3)
    expected = round(quote.grand_total_gross * 0.97)
    assert abs(quote.final_total_after_discount - expected) <= 1
    assert quote.cash_total % 5 == 0


def test_invalid_discount_raises(materials, fee_schedule):
    with pytest.raises(ValueError):
        compute_quote([cut_config()], materials, fee_schedule, discount_percent=101)
    with pytest.raises(ValueError):
        compute_quote([cut_config()], materials, fee_schedule, discount_percent=-1)
