"""
Abstract base class for all assembly-type calculators.

Input: a validated Configuration, its Material, the FeeSchedule
Output: QuoteLineItem with the eight fee categories

Subclasses only describe their shape: how much stock they consume, which
edges get a length cut, what each edge-banding position measures. The
category arithmetic and the rounding rules live here.
"""

import logging
import math
from abc import ABC, abstractmethod

from ..models import (
    AssemblyType,
    CategoryAmount,
    Chamfer,
    Configuration,
    EdgeBanding,
    FeeAmount,
    FeeSchedule,
    Material,
    QuoteLineItem,
    Radius,
)
from ..rounding import gross_from_net, round_unit, vat_from_net, vat_rate

logger = logging.getLogger(__name__)


class BaseAssemblyCalculator(ABC):
    """All assembly-type calculators inherit from this."""

    assembly_type: AssemblyType = None

    # Fixed-fee quantities that depend only on the assembly type
    CROSS_CUTS = 0
    JOINS = 0

    def calculate(self, configuration: Configuration, material: Material,
                  fee_schedule: FeeSchedule, config_index: int = 0) -> QuoteLineItem:
        """Price one configuration. Assumes it already passed the validator."""
        geometry = configuration.geometry
        material_rate = vat_rate(material.vat_percent)
        fee_rate = vat_rate(
            fee_schedule.vat_percent if fee_schedule.vat_percent is not None else material.vat_percent
        )

        categories = {
            "material": self.material_cost(geometry, material, material_rate),
            "cross_cut": self.fixed_fee(
                fee_schedule.cross_cut, self.CROSS_CUTS, fee_rate, "cross cut"),
            "length_cut": self.length_cut_cost(geometry, material, fee_schedule.length_cut_per_meter, fee_rate),
            "radius_cut": self.fixed_fee(
                fee_schedule.radius_cut, self.count_radii(configuration), fee_rate, "radius cut"),
            "angle_cut": self.fixed_fee(
                fee_schedule.angle_cut, self.count_chamfers(configuration), fee_rate, "angle cut"),
            "cutout": self.fixed_fee(
                fee_schedule.cutout, len(configuration.cutouts), fee_rate, "cutout"),
            "edge_banding": self.edge_banding_cost(configuration, fee_schedule.edge_banding_per_meter, fee_rate),
            "join": self.fixed_fee(fee_schedule.join, self.JOINS, fee_rate, "join"),
        }

        total_net = sum(c.net for c in categories.values())
        total_vat = sum(c.vat for c in categories.values())
        # Not the sum of category gross values: those can differ by a rounding residue
        total_gross = gross_from_net(total_net, total_vat)

        logger.debug("Priced config %d (%s, %s): net %d, vat %d, gross %d",
                     config_index, self.assembly_type.value, material.id,
                     total_net, total_vat, total_gross)

        return QuoteLineItem(
            config_index=config_index,
            material_id=material.id,
            material_name=material.name,
            assembly_type=self.assembly_type,
            on_stock=material.on_stock,
            currency=material.currency,
            total_net=total_net,
            total_vat=total_vat,
            total_gross=total_gross,
            **categories,
        )

    # --- Shape description, per assembly type ---

    @abstractmethod
    def consumed_length_mm(self, geometry) -> float:
        """Linear stock actually used, for on-stock (per meter) pricing."""

    @abstractmethod
    def needed_length_mm(self, geometry) -> float:
        """Length to cover with whole boards, for per-board pricing."""

    @abstractmethod
    def length_cut_runs(self, geometry, material: Material) -> list:
        """[(label, mm), ...] for each member cut lengthwise below stock width."""

    @abstractmethod
    def edge_lengths_mm(self, geometry) -> tuple:
        """Length of each selectable edge-banding position, in position order."""

    # --- Category arithmetic ---

    def material_cost(self, geometry, material: Material, rate: float) -> CategoryAmount:
        if material.on_stock:
            length_mm = self.consumed_length_mm(geometry)
            raw_net = length_mm * material.price_per_meter / 1000.0
            details = (f"{self.mm_to_m(length_mm):.3f} m × "
                       f"{material.price_per_meter:g} {material.currency}/m")
        else:
            boards = math.ceil(self.needed_length_mm(geometry) / material.length)
            raw_net = boards * material.price_per_meter * material.length / 1000.0
            details = (f"{boards} board(s) × {self.mm_to_m(material.length):.3f} m × "
                       f"{material.price_per_meter:g} {material.currency}/m")
        return self.proportional_amount(raw_net, rate, details)

    def length_cut_cost(self, geometry, material: Material, fee: FeeAmount, rate: float) -> CategoryAmount:
        runs = self.length_cut_runs(geometry, material)
        if not runs:
            return CategoryAmount()
        total_mm = sum(mm for _, mm in runs)
        net_per_meter = fee.net_amount(rate)
        details = ", ".join(f"{label}: {self.mm_to_m(mm):.3f} m" for label, mm in runs)
        return self.proportional_amount(
            total_mm * net_per_meter / 1000.0, rate,
            f"{details} × {net_per_meter} /m",
        )

    def edge_banding_cost(self, configuration: Configuration, fee: FeeAmount, rate: float) -> CategoryAmount:
        if configuration.edge_banding == EdgeBanding.NONE:
            return CategoryAmount()

        lengths = self.edge_lengths_mm(configuration.geometry)
        # zip stops at the positions this shape offers
        selected = [
            (position, length)
            for position, (flag, length) in enumerate(zip(configuration.edge_positions, lengths), start=1)
            if flag
        ]
        if not selected:
            return CategoryAmount()

        total_mm = sum(length for _, length in selected)
        net_per_meter = fee.net_amount(rate)
        positions = ", ".join(str(p) for p, _ in selected)
        return self.proportional_amount(
            total_mm * net_per_meter / 1000.0, rate,
            f"{self.mm_to_m(total_mm):.3f} m {configuration.edge_banding.value} "
            f"(positions {positions}) × {net_per_meter} /m",
        )

    def count_radii(self, configuration: Configuration) -> int:
        return sum(1 for c in configuration.corners if isinstance(c, Radius) and c.value > 0)

    def count_chamfers(self, configuration: Configuration) -> int:
        return sum(1 for c in configuration.corners if isinstance(c, Chamfer) and c.complete)

    # --- Helper methods for all calculators ---

    def fixed_fee(self, fee: FeeAmount, quantity: int, rate: float, label: str) -> CategoryAmount:
        """
        Fixed fee × quantity. Gross is the stored gross × quantity, VAT is
        whatever is left after the derived net.
        """
        if quantity <= 0:
            return CategoryAmount()
        net = quantity * fee.net_amount(rate)
        gross = quantity * fee.gross_amount(rate)
        return CategoryAmount(
            net=net,
            vat=gross - net,
            gross=gross,
            details=f"{quantity} × {label} ({fee.gross_amount(rate)} gross)",
        )

    def proportional_amount(self, raw_net: float, rate: float, details: str) -> CategoryAmount:
        """Round the net first, then VAT from the rounded net, gross = net + VAT."""
        net = round_unit(raw_net)
        vat = vat_from_net(net, rate)
        return CategoryAmount(net=net, vat=vat, gross=gross_from_net(net, vat), details=details)

    def kept_length(self, length: float, removed: float) -> float:
        """Length left after milling away `removed`, never below zero."""
        return max(0.0, length - removed)

    def mm_to_m(self, mm: float) -> float:
        return mm / 1000.0
