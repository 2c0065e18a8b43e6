"""
Domain models for the worktop quoting engine.

Everything here is immutable. Constructing a model with malformed values
(negative dimensions, negative prices, more than three cutouts) raises
pydantic.ValidationError: that is a caller contract breach, not a
validation failure. Geometric feasibility is checked separately by
validator.py and reported as data.

All lengths are millimeters. All money is whole currency units.
"""

import enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .rounding import net_from_gross_fee, round_unit


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# --- Enums ---

class AssemblyType(str, enum.Enum):
    CUT = "cut"
    STRAIGHT_SPLICE = "straight_splice"
    LEFT_JOIN = "left_join"
    RIGHT_JOIN = "right_join"
    U_JOIN = "u_join"


# Assemblies with a second member milled at 90° to the main one
JOINED_ASSEMBLY_TYPES = (AssemblyType.LEFT_JOIN, AssemblyType.RIGHT_JOIN)


class EdgeBanding(str, enum.Enum):
    NONE = "none"
    TYPE_A = "type_a"   # LAM
    TYPE_B = "type_b"   # ABS


class EdgeColor(str, enum.Enum):
    MATCHING = "matching"
    OTHER = "other"


class CutoutMember(str, enum.Enum):
    MAIN = "main"
    PERPENDICULAR = "perpendicular"


class SkipReason(str, enum.Enum):
    NOT_PRICEABLE = "not_priceable"
    MISSING_MATERIAL = "missing_material"


# --- Catalog inputs ---

class Material(_Frozen):
    """A stock linear worktop as loaded from the catalog."""
    id: str
    name: str = ""
    width: float = Field(gt=0)
    length: float = Field(gt=0)
    thickness: Optional[float] = Field(None, gt=0)
    price_per_meter: float = Field(ge=0)
    on_stock: bool = True
    vat_percent: float = Field(27.0, ge=0, le=100)
    currency: str = "HUF"


class FeeAmount(_Frozen):
    """
    One fee as stored. Gross is authoritative whenever present; net-only
    values are legacy records and get their gross derived from net.
    """
    gross: Optional[float] = Field(None, ge=0)
    net: Optional[float] = Field(None, ge=0)

    @model_validator(mode="after")
    def _has_a_value(self):
        if self.gross is None and self.net is None:
            raise ValueError("fee needs a gross or a net value")
        return self

    @property
    def gross_authoritative(self) -> bool:
        return self.gross is not None

    def net_amount(self, rate: float) -> int:
        if self.gross is not None:
            return net_from_gross_fee(self.gross, rate)
        return round_unit(self.net)

    def gross_amount(self, rate: float) -> int:
        if self.gross is not None:
            return round_unit(self.gross)
        return round_unit(self.net * (1 + rate))


class FeeSchedule(_Frozen):
    cross_cut: FeeAmount
    length_cut_per_meter: FeeAmount
    radius_cut: FeeAmount
    angle_cut: FeeAmount
    cutout: FeeAmount
    edge_banding_per_meter: FeeAmount
    join: FeeAmount
    # When None, fee categories use the VAT rate of the configuration's material
    vat_percent: Optional[float] = Field(None, ge=0, le=100)
    currency: Optional[str] = None


# --- Geometry: one variant per assembly type ---

class _Geometry(_Frozen):
    @property
    def kind(self) -> AssemblyType:
        return AssemblyType(self.assembly_type)

    def main_extents(self) -> tuple:
        """(length, width) of the main member after cutting."""
        return (self.a, self.b)

    def perpendicular_extents(self) -> Optional[tuple]:
        return None


class CutGeometry(_Geometry):
    """Single straight piece: A = length along the stock, B = depth."""
    assembly_type: Literal["cut"] = "cut"
    a: Optional[float] = Field(None, ge=0)
    b: Optional[float] = Field(None, ge=0)


class StraightSpliceGeometry(_Geometry):
    assembly_type: Literal["straight_splice"] = "straight_splice"
    a: Optional[float] = Field(None, ge=0)
    b: Optional[float] = Field(None, ge=0)
    c: Optional[float] = Field(None, ge=0)
    d: Optional[float] = Field(None, ge=0)


class _JoinGeometry(_Geometry):
    """
    L-shaped assembly. A/B are the main member's length and depth,
    C/D the perpendicular member's length and depth.
    """
    a: Optional[float] = Field(None, ge=0)
    b: Optional[float] = Field(None, ge=0)
    c: Optional[float] = Field(None, ge=0)
    d: Optional[float] = Field(None, ge=0)

    def perpendicular_extents(self) -> Optional[tuple]:
        return (self.c, self.d)


class LeftJoinGeometry(_JoinGeometry):
    assembly_type: Literal["left_join"] = "left_join"


class RightJoinGeometry(_JoinGeometry):
    assembly_type: Literal["right_join"] = "right_join"


class UJoinGeometry(_Geometry):
    """Kept in the model for completeness; never priced."""
    assembly_type: Literal["u_join"] = "u_join"
    a: Optional[float] = Field(None, ge=0)
    b: Optional[float] = Field(None, ge=0)
    c: Optional[float] = Field(None, ge=0)
    d: Optional[float] = Field(None, ge=0)
    e: Optional[float] = Field(None, ge=0)
    f: Optional[float] = Field(None, ge=0)


Geometry = Annotated[
    Union[CutGeometry, StraightSpliceGeometry, LeftJoinGeometry, RightJoinGeometry, UJoinGeometry],
    Field(discriminator="assembly_type"),
]


# --- Corner treatments ---

class NoTreatment(_Frozen):
    mode: Literal["none"] = "none"


class Radius(_Frozen):
    mode: Literal["radius"] = "radius"
    value: float = Field(ge=0)


class Chamfer(_Frozen):
    mode: Literal["chamfer"] = "chamfer"
    l1: float = Field(ge=0)
    l2: float = Field(ge=0)

    @property
    def complete(self) -> bool:
        return self.l1 > 0 and self.l2 > 0


class CornerConflict(_Frozen):
    """
    A corner that arrived with both a radius and a chamfer pair.
    Only the form adapter produces this; the validator always rejects it.
    """
    mode: Literal["conflict"] = "conflict"
    radius: float = Field(ge=0)
    l1: float = Field(ge=0)
    l2: float = Field(ge=0)


CornerTreatment = Annotated[
    Union[NoTreatment, Radius, Chamfer, CornerConflict],
    Field(discriminator="mode"),
]

_NO_CORNERS = (NoTreatment(), NoTreatment(), NoTreatment(), NoTreatment())
_NO_EDGES = (False, False, False, False, False, False)


class Cutout(_Frozen):
    """Sink/hob cutout. Offsets are measured in the target member's own frame."""
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    offset_from_edge1: float = Field(0.0, ge=0)
    offset_from_edge2: float = Field(0.0, ge=0)
    target_member: CutoutMember = CutoutMember.MAIN


class Configuration(_Frozen):
    """
    One worktop piece as assembled by the form layer.
    geometry=None means no assembly type has been selected yet.
    """
    geometry: Optional[Geometry] = None
    material_id: Optional[str] = None
    no_postforming_edge: bool = False
    corners: tuple[CornerTreatment, CornerTreatment, CornerTreatment, CornerTreatment] = _NO_CORNERS
    edge_banding: EdgeBanding = EdgeBanding.NONE
    edge_color: EdgeColor = EdgeColor.MATCHING
    edge_color_text: Optional[str] = None
    edge_positions: tuple[bool, bool, bool, bool, bool, bool] = _NO_EDGES
    cutouts: tuple[Cutout, ...] = Field((), max_length=3)

    @property
    def assembly_type(self) -> Optional[AssemblyType]:
        return self.geometry.kind if self.geometry is not None else None

    def with_corner(self, index: int, treatment) -> "Configuration":
        """Copy with corner `index` (0-3) replaced. Setting one mode clears the other."""
        corners = list(self.corners)
        corners[index] = treatment
        return self.model_copy(update={"corners": tuple(corners)})


# --- Outputs ---

CATEGORY_NAMES = (
    "material",
    "cross_cut",
    "length_cut",
    "radius_cut",
    "angle_cut",
    "cutout",
    "edge_banding",
    "join",
)


class CategoryAmount(_Frozen):
    net: int = 0
    vat: int = 0
    gross: int = 0
    details: str = ""


class QuoteLineItem(_Frozen):
    config_index: int
    material_id: str
    material_name: str = ""
    assembly_type: AssemblyType
    on_stock: bool
    currency: str
    material: CategoryAmount
    cross_cut: CategoryAmount
    length_cut: CategoryAmount
    radius_cut: CategoryAmount
    angle_cut: CategoryAmount
    cutout: CategoryAmount
    edge_banding: CategoryAmount
    join: CategoryAmount
    total_net: int
    total_vat: int
    total_gross: int

    def categories(self) -> dict:
        return {name: getattr(self, name) for name in CATEGORY_NAMES}


class SkippedConfiguration(_Frozen):
    config_index: int
    reason: SkipReason
    message: str


class Quote(_Frozen):
    line_items: list[QuoteLineItem] = []
    skipped: list[SkippedConfiguration] = []
    grand_total_net: int = 0
    grand_total_vat: int = 0
    grand_total_gross: int = 0
    currency: str
    discount_percent: float = 0.0
    final_total_after_discount: int = 0
    cash_total: int = 0


class ValidationFailure(_Frozen):
    field: str
    message: str
    bound: Optional[float] = None


class ValidationResult(_Frozen):
    ok: bool
    failures: list[ValidationFailure] = []
