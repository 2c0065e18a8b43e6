"""
Form adapter: flat worktop form fields -> Configuration.

The configurator form (and the saved quote rows) carry every possible field
side by side: dimension_a..f, rounding_r1..4, cut_l1..8, edge_position1..6.
This module turns that loose record into the typed model, choosing the
geometry variant from the assembly type and a treatment per corner.

Corner n uses rounding_r{n} and the chamfer pair cut_l{2n-1} / cut_l{2n}.
"""

import json
import logging
import math

from .models import (
    AssemblyType,
    Chamfer,
    Configuration,
    CornerConflict,
    Cutout,
    CutoutMember,
    CutGeometry,
    EdgeBanding,
    EdgeColor,
    LeftJoinGeometry,
    NoTreatment,
    Radius,
    RightJoinGeometry,
    StraightSpliceGeometry,
    UJoinGeometry,
)

logger = logging.getLogger(__name__)

# Configurator labels as shown to the shop staff, plus the enum values
ASSEMBLY_TYPE_LABELS = {
    "Levágás": AssemblyType.CUT,
    "Hossztoldás": AssemblyType.STRAIGHT_SPLICE,
    "Összemarás Balos": AssemblyType.LEFT_JOIN,
    "Összemarás jobbos": AssemblyType.RIGHT_JOIN,
    "U-szögbemarás": AssemblyType.U_JOIN,
}

EDGE_BANDING_LABELS = {
    "Nincs élzáró": EdgeBanding.NONE,
    "LAM": EdgeBanding.TYPE_A,
    "ABS": EdgeBanding.TYPE_B,
}

EDGE_COLOR_LABELS = {
    "Színazonos": EdgeColor.MATCHING,
    "Egyéb szín": EdgeColor.OTHER,
}

GEOMETRY_CLASSES = {
    AssemblyType.CUT: (CutGeometry, "ab"),
    AssemblyType.STRAIGHT_SPLICE: (StraightSpliceGeometry, "abcd"),
    AssemblyType.LEFT_JOIN: (LeftJoinGeometry, "abcd"),
    AssemblyType.RIGHT_JOIN: (RightJoinGeometry, "abcd"),
    AssemblyType.U_JOIN: (UJoinGeometry, "abcdef"),
}

# Alternative keys accepted for cutout records
_CUTOUT_KEYS = {
    "width": ("width",),
    "height": ("height",),
    "offset_from_edge1": ("offset_from_edge1", "offsetFromEdge1"),
    "offset_from_edge2": ("offset_from_edge2", "offsetFromEdge2"),
    "target_member": ("target_member", "targetMember"),
}


def parse_number(value, default=None):
    """Parse a numeric form value. Blank, None, unparseable or non-finite -> default."""
    if value is None:
        return default
    if isinstance(value, bool):
        return default
    try:
        text = str(value).strip().replace(",", ".")
        if not text:
            return default
        number = float(text)
    except (ValueError, TypeError):
        return default
    # "inf" and "nan" parse as floats but are not dimensions
    return number if math.isfinite(number) else default


def parse_flag(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def parse_assembly_type(value) -> AssemblyType:
    if isinstance(value, AssemblyType):
        return value
    if value in ASSEMBLY_TYPE_LABELS:
        return ASSEMBLY_TYPE_LABELS[value]
    try:
        return AssemblyType(value)
    except ValueError:
        raise ValueError(f"Unknown assembly type: {value!r}") from None


def _parse_labelled(value, labels: dict, enum_cls, default):
    if value is None or value == "":
        return default
    if value in labels:
        return labels[value]
    try:
        return enum_cls(value)
    except ValueError:
        raise ValueError(f"Unknown {enum_cls.__name__} value: {value!r}") from None


def corner_from_fields(radius, l1, l2):
    """
    Treatment for one corner. A radius and a complete chamfer pair on the
    same corner is kept as a conflict for the validator to reject.
    """
    radius = parse_number(radius, 0.0)
    l1 = parse_number(l1, 0.0)
    l2 = parse_number(l2, 0.0)
    has_chamfer = l1 > 0 and l2 > 0

    if radius > 0 and has_chamfer:
        return CornerConflict(radius=radius, l1=l1, l2=l2)
    if radius > 0:
        return Radius(value=radius)
    if l1 > 0 or l2 > 0:
        # Half-entered chamfer: kept, but not billed until both sides are set
        return Chamfer(l1=l1, l2=l2)
    return NoTreatment()


def _cutout_from_record(record: dict) -> Cutout:
    values = {}
    for name, keys in _CUTOUT_KEYS.items():
        for key in keys:
            if key in record and record[key] not in (None, ""):
                values[name] = record[key]
                break

    for name in ("width", "height", "offset_from_edge1", "offset_from_edge2"):
        if name in values:
            values[name] = parse_number(values[name], 0.0)
    if "target_member" in values:
        values["target_member"] = CutoutMember(values["target_member"])
    return Cutout(**values)


def parse_cutouts(value) -> tuple:
    """Cutouts arrive as a list of dicts, or as the JSON string stored with saved quotes."""
    if not value:
        return ()
    if isinstance(value, str):
        value = json.loads(value)
    return tuple(_cutout_from_record(record) for record in value)


def configuration_from_fields(fields: dict) -> Configuration:
    """
    Build a Configuration from a flat form record.

    Raises ValueError for unknown assembly types or labels, and
    pydantic.ValidationError for negative dimensions or too many cutouts.
    """
    raw_type = fields.get("assembly_type")
    geometry = None
    if raw_type:
        assembly_type = parse_assembly_type(raw_type)
        geometry_cls, letters = GEOMETRY_CLASSES[assembly_type]
        geometry = geometry_cls(**{
            letter: parse_number(fields.get(f"dimension_{letter}"))
            for letter in letters
        })

    corners = tuple(
        corner_from_fields(
            fields.get(f"rounding_r{n}"),
            fields.get(f"cut_l{2 * n - 1}"),
            fields.get(f"cut_l{2 * n}"),
        )
        for n in range(1, 5)
    )

    material_id = fields.get("linear_material_id") or fields.get("material_id") or None

    configuration = Configuration(
        geometry=geometry,
        material_id=str(material_id) if material_id is not None else None,
        no_postforming_edge=parse_flag(fields.get("no_postforming_edge", False)),
        corners=corners,
        edge_banding=_parse_labelled(fields.get("edge_banding"), EDGE_BANDING_LABELS,
                                     EdgeBanding, EdgeBanding.NONE),
        edge_color=_parse_labelled(fields.get("edge_color_choice"), EDGE_COLOR_LABELS,
                                   EdgeColor, EdgeColor.MATCHING),
        edge_color_text=fields.get("edge_color_text") or None,
        edge_positions=tuple(parse_flag(fields.get(f"edge_position{n}", False)) for n in range(1, 7)),
        cutouts=parse_cutouts(fields.get("cutouts")),
    )
    logger.debug("Parsed form fields into %s configuration",
                 configuration.assembly_type.value if configuration.assembly_type else "unselected")
    return configuration
