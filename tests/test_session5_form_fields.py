"""
Session 5 acceptance tests: flat form fields -> Configuration.

Tests:
1-4. Assembly type, geometry selection, blank and non-finite values
5-7. Corner treatments (radius / chamfer / conflict)
8-9. Edge banding labels and positions
10-11. Cutouts (list and stored JSON)
12.  Parsed configuration validates and prices like a hand-built one
"""

import json

import pytest
from pydantic import ValidationError

from worktop import compute_quote, validate
from worktop.form_fields import configuration_from_fields, corner_from_fields, parse_number
from worktop.models import (
    AssemblyType,
    Chamfer,
    CornerConflict,
    CutoutMember,
    EdgeBanding,
    EdgeColor,
    LeftJoinGeometry,
    NoTreatment,
    Radius,
    UJoinGeometry,
)
from tests.conftest import cut_config


def _cut_fields(**overrides):
    fields = {
        "assembly_type": "Levágás",
        "linear_material_id": "m1",
        "dimension_a": "1200",
        "dimension_b": "600",
    }
    fields.update(overrides)
    return fields


# ============================================================
# 1-4. Assembly type / geometry
# ============================================================

def test_hungarian_labels_and_enum_values_accepted():
    assert configuration_from_fields(_cut_fields()).assembly_type == AssemblyType.CUT
    config = configuration_from_fields({"assembly_type": "Összemarás Balos", "dimension_a": 800,
                                        "dimension_b": 600, "dimension_c": 1000, "dimension_d": 300})
    assert isinstance(config.geometry, LeftJoinGeometry)
    assert config.geometry.c == 1000
    assert configuration_from_fields({"assembly_type": "right_join"}).assembly_type == AssemblyType.RIGHT_JOIN
    assert isinstance(configuration_from_fields({"assembly_type": "U-szögbemarás"}).geometry, UJoinGeometry)


def test_unknown_assembly_type_raises():
    with pytest.raises(ValueError):
        configuration_from_fields({"assembly_type": "Szögbemarás"})


def test_blank_values_become_missing(material):
    config = configuration_from_fields(_cut_fields(dimension_a="", dimension_b=None))
    assert config.geometry.a is None
    result = validate(config, material)
    assert [f.field for f in result.failures] == ["A", "B"]

    assert configuration_from_fields({}).geometry is None
    assert parse_number("12,5") == 12.5
    assert parse_number("abc", 0.0) == 0.0


def test_non_finite_values_treated_as_blank(material):
    assert parse_number("inf") is None
    assert parse_number("-Infinity", 0.0) == 0.0
    assert parse_number("nan") is None

    config = configuration_from_fields(_cut_fields(dimension_a="inf", rounding_r1="nan"))
    assert config.geometry.a is None
    assert isinstance(config.corners[0], NoTreatment)
    assert [f.field for f in validate(config, material).failures] == ["A"]


def test_negative_dimension_is_a_precondition_violation():
    with pytest.raises(ValidationError):
        configuration_from_fields(_cut_fields(dimension_a="-5"))


# ============================================================
# 5-7. Corners
# ============================================================

def test_corner_from_fields_modes():
    assert isinstance(corner_from_fields(None, None, None), NoTreatment)
    assert corner_from_fields("30", "", "") == Radius(value=30)
    assert corner_from_fields("", "50", "40") == Chamfer(l1=50, l2=40)
    assert corner_from_fields(None, "50", None) == Chamfer(l1=50, l2=0)


def test_corner_conflict_detected():
    corner = corner_from_fields("30", "50", "40")
    assert isinstance(corner, CornerConflict)
    assert corner.radius == 30


def test_corner_fields_map_to_slots(material):
    config = configuration_from_fields(_cut_fields(
        rounding_r1="100", cut_l3="20", cut_l4="30", rounding_r4="50", cut_l7="10", cut_l8="10",
    ))
    assert config.corners[0] == Radius(value=100)
    assert config.corners[1] == Chamfer(l1=20, l2=30)
    assert isinstance(config.corners[2], NoTreatment)
    assert isinstance(config.corners[3], CornerConflict)
    assert [f.field for f in validate(config, material).failures] == ["corner4"]


# ============================================================
# 8-9. Edge banding
# ============================================================

def test_edge_banding_labels():
    config = configuration_from_fields(_cut_fields(
        edge_banding="ABS", edge_color_choice="Egyéb szín", edge_color_text="white",
        edge_position1=True, edge_position3="true",
    ))
    assert config.edge_banding == EdgeBanding.TYPE_B
    assert config.edge_color == EdgeColor.OTHER
    assert config.edge_color_text == "white"
    assert config.edge_positions == (True, False, True, False, False, False)

    default = configuration_from_fields(_cut_fields(edge_banding="Nincs élzáró"))
    assert default.edge_banding == EdgeBanding.NONE
    assert default.edge_color == EdgeColor.MATCHING


def test_unknown_edge_banding_raises():
    with pytest.raises(ValueError):
        configuration_from_fields(_cut_fields(edge_banding="PVC"))


# ============================================================
# 10-11. Cutouts
# ============================================================

def test_cutouts_from_list():
    config = configuration_from_fields(_cut_fields(cutouts=[
        {"width": "500", "height": 400, "offset_from_edge1": 100, "offset_from_edge2": 50},
    ]))
    assert len(config.cutouts) == 1
    assert config.cutouts[0].width == 500
    assert config.cutouts[0].target_member == CutoutMember.MAIN


def test_cutouts_from_stored_json():
    stored = json.dumps([
        {"width": 500, "height": 400, "offsetFromEdge1": 100, "offsetFromEdge2": 50},
        {"width": 300, "height": 200, "targetMember": "perpendicular"},
    ])
    config = configuration_from_fields({
        "assembly_type": "Összemarás jobbos", "cutouts": stored,
    })
    assert config.cutouts[0].offset_from_edge1 == 100
    assert config.cutouts[1].target_member == CutoutMember.PERPENDICULAR


# ============================================================
# 12. Round through the engine
# ============================================================

def test_parsed_configuration_prices_like_hand_built(materials, fee_schedule):
    parsed = configuration_from_fields(_cut_fields())
    assert parsed == cut_config(a=1200, b=600)
    quote = compute_quote([parsed], materials, fee_schedule)
    assert quote.grand_total_gross == 18240
