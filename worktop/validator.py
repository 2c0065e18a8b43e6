"""
Geometry constraint validator.

Decides whether a Configuration can be produced from its selected Material.
Two entry points share one rule set:

    validate(configuration, material)    -> ValidationResult with every failure
    is_complete(configuration, material) -> bool, stops at the first failure

Both walk the same generator, so they always agree on accept/reject.
Failures are returned as data, never raised.
"""

import logging
from typing import Iterator, Optional

from .config import settings
from .models import (
    AssemblyType,
    Configuration,
    CornerConflict,
    CutoutMember,
    JOINED_ASSEMBLY_TYPES,
    Material,
    Radius,
    ValidationFailure,
    ValidationResult,
)

logger = logging.getLogger(__name__)

# Dimensions that must be positive, per assembly type
REQUIRED_DIMENSIONS = {
    AssemblyType.CUT: ("a", "b"),
    AssemblyType.STRAIGHT_SPLICE: ("a", "b", "c", "d"),
    AssemblyType.LEFT_JOIN: ("a", "b", "c", "d"),
    AssemblyType.RIGHT_JOIN: ("a", "b", "c", "d"),
    AssemblyType.U_JOIN: (),
}


def validate(configuration: Configuration, material: Optional[Material]) -> ValidationResult:
    failures = list(_iter_failures(configuration, material))
    if failures:
        logger.debug("Configuration rejected with %d failure(s): %s",
                     len(failures), [f.field for f in failures])
    return ValidationResult(ok=not failures, failures=failures)


def is_complete(configuration: Configuration, material: Optional[Material]) -> bool:
    return next(_iter_failures(configuration, material), None) is None


def _fail(field: str, message: str, bound: Optional[float] = None) -> ValidationFailure:
    return ValidationFailure(field=field, message=message, bound=bound)


def _postforming_margin(configuration: Configuration) -> float:
    return settings.POSTFORMING_MARGIN_MM if configuration.no_postforming_edge else 0.0


def _iter_failures(configuration: Configuration, material: Optional[Material]) -> Iterator[ValidationFailure]:
    geometry = configuration.geometry

    # --- Required selections ---
    if geometry is None:
        yield _fail("assembly_type", "Assembly type must be selected")
    if configuration.material_id is None or material is None:
        yield _fail("material_id", "Material must be selected")
        material = None
    elif material.id != configuration.material_id:
        yield _fail(
            "material_id",
            f"Material {material.id} does not match the configured material {configuration.material_id}",
        )
        material = None

    # --- Corner exclusivity ---
    for number, corner in enumerate(configuration.corners, start=1):
        if isinstance(corner, CornerConflict):
            yield _fail(
                f"corner{number}",
                f"Corner {number} has both a radius ({corner.radius:g} mm) and a chamfer "
                f"({corner.l1:g} × {corner.l2:g} mm); only one treatment is allowed",
            )

    if geometry is None or material is None:
        return

    # --- Required dimensions ---
    missing = False
    for name in REQUIRED_DIMENSIONS[geometry.kind]:
        value = getattr(geometry, name)
        if not value:
            missing = True
            yield _fail(name.upper(), f"Dimension {name.upper()} is required and must be greater than 0", 0)
    if missing:
        return

    # --- Per-assembly dimensional rules ---
    rules = _DIMENSION_RULES.get(geometry.kind)
    if rules is not None:
        yield from rules(configuration, material)

    yield from _cutout_failures(configuration)


# ============================================================
# Dimensional rules
# ============================================================

def _width_failure(field: str, value: float, material: Material, margin: float,
                   strict: bool = False) -> Optional[ValidationFailure]:
    """Depth of a member against the usable stock width."""
    limit = material.width - margin
    if margin > 0:
        detail = f"material width {material.width:g} mm minus {margin:g} mm postforming margin"
    else:
        detail = f"material width {material.width:g} mm"

    if strict and not value < limit:
        return _fail(field, f"{field} must be less than {limit:g} mm ({detail})", limit)
    if not strict and value > limit:
        return _fail(field, f"{field} must not exceed {limit:g} mm ({detail})", limit)
    return None


def _radius_value(corner) -> float:
    return corner.value if isinstance(corner, Radius) else 0.0


def _radius_failures(configuration: Configuration, bound_13: float, label_13: str,
                     bound_24: float, label_24: str) -> Iterator[ValidationFailure]:
    """
    Corners 1 and 3 share one edge, corners 2 and 4 the other. Each radius
    must fit the edge, and the pair on one edge must fit it together.
    """
    r1, r2, r3, r4 = (_radius_value(c) for c in configuration.corners)

    for field, value, bound, label in (
        ("R1", r1, bound_13, label_13),
        ("R3", r3, bound_13, label_13),
        ("R2", r2, bound_24, label_24),
        ("R4", r4, bound_24, label_24),
    ):
        if value > bound:
            yield _fail(field, f"{field} ({value:g} mm) must not exceed {label} ({bound:g} mm)", bound)

    if r1 + r3 > bound_13:
        yield _fail("R1+R3", f"R1 + R3 ({r1 + r3:g} mm) must not exceed {label_13} ({bound_13:g} mm)", bound_13)
    if r2 + r4 > bound_24:
        yield _fail("R2+R4", f"R2 + R4 ({r2 + r4:g} mm) must not exceed {label_24} ({bound_24:g} mm)", bound_24)


def _cut_rules(configuration: Configuration, material: Material) -> Iterator[ValidationFailure]:
    g = configuration.geometry
    margin = _postforming_margin(configuration)

    if not g.a < material.length:
        yield _fail("A", f"A must be less than the material length ({material.length:g} mm)", material.length)

    failure = _width_failure("B", g.b, material, margin, strict=margin > 0)
    if failure:
        yield failure

    yield from _radius_failures(configuration, g.b, "B", g.b, "B")


def _join_common_rules(configuration: Configuration, material: Material) -> Iterator[ValidationFailure]:
    """Depth limits and radius rules shared by both join directions."""
    g = configuration.geometry
    margin = _postforming_margin(configuration)

    for field, value in (("B", g.b), ("D", g.d)):
        failure = _width_failure(field, value, material, margin)
        if failure:
            yield failure

    yield from _radius_failures(configuration, g.d, "D", g.b, "B")


def _left_join_rules(configuration: Configuration, material: Material) -> Iterator[ValidationFailure]:
    g = configuration.geometry
    allowance = settings.MACHINING_ALLOWANCE_MM
    max_perpendicular = material.length - allowance

    if g.a > material.length:
        yield _fail("A", f"A must not exceed the material length ({material.length:g} mm)", material.length)
    if g.c - g.d > max_perpendicular:
        yield _fail(
            "C",
            f"C - D ({g.c - g.d:g} mm) must not exceed {max_perpendicular:g} mm "
            f"(material length minus {allowance:g} mm machining allowance)",
            max_perpendicular,
        )
    yield from _join_common_rules(configuration, material)


def _right_join_rules(configuration: Configuration, material: Material) -> Iterator[ValidationFailure]:
    g = configuration.geometry
    allowance = settings.MACHINING_ALLOWANCE_MM
    max_main = material.length - allowance

    if g.a - g.d > max_main:
        yield _fail(
            "A",
            f"A - D ({g.a - g.d:g} mm) must not exceed {max_main:g} mm "
            f"(material length minus {allowance:g} mm machining allowance)",
            max_main,
        )
    if g.c > material.length:
        yield _fail("C", f"C must not exceed the material length ({material.length:g} mm)", material.length)
    yield from _join_common_rules(configuration, material)


# StraightSplice: positivity only. UJoin: type and material only.
_DIMENSION_RULES = {
    AssemblyType.CUT: _cut_rules,
    AssemblyType.LEFT_JOIN: _left_join_rules,
    AssemblyType.RIGHT_JOIN: _right_join_rules,
}


# ============================================================
# Cutouts
# ============================================================

def _cutout_failures(configuration: Configuration) -> Iterator[ValidationFailure]:
    """
    Each cutout must sit inside the kept extent of its member.

    Main member: (A, B). Perpendicular member: (C, D), with offsets in that
    member's own rotated frame, measured from its far edge.
    """
    geometry = configuration.geometry
    if geometry.kind == AssemblyType.U_JOIN:
        return

    joined = geometry.kind in JOINED_ASSEMBLY_TYPES

    for number, cutout in enumerate(configuration.cutouts, start=1):
        prefix = f"cutout{number}"

        if cutout.target_member == CutoutMember.PERPENDICULAR:
            if not joined:
                yield _fail(
                    f"{prefix}.target_member",
                    f"Cutout {number} targets the perpendicular member, "
                    f"which only exists on joined assemblies",
                )
                continue
            kept_width, kept_height = geometry.perpendicular_extents()
            member = "perpendicular member"
        else:
            kept_width, kept_height = geometry.main_extents()
            member = "main member"

        reach_1 = cutout.offset_from_edge1 + cutout.width
        if reach_1 > kept_width:
            yield _fail(
                f"{prefix}.offset_from_edge1",
                f"Cutout {number}: offset from edge 1 + width ({reach_1:g} mm) "
                f"exceeds the {member} ({kept_width:g} mm)",
                kept_width,
            )

        reach_2 = cutout.offset_from_edge2 + cutout.height
        if reach_2 > kept_height:
            yield _fail(
                f"{prefix}.offset_from_edge2",
                f"Cutout {number}: offset from edge 2 + height ({reach_2:g} mm) "
                f"exceeds the {member} ({kept_height:g} mm)",
                kept_height,
            )
