"""
Calculator registry: one shared calculator per priceable assembly type.

Calculators hold no state, so a single instance per type serves every quote.
Straight splices and U-joins validate but have no price yet; the quote
engine reports them as not priceable, naming the types that are.
"""

from typing import Optional

from ..models import AssemblyType
from .base import BaseAssemblyCalculator
from .cut import CutCalculator
from .joins import LeftJoinCalculator, RightJoinCalculator

_CALCULATORS: dict[AssemblyType, BaseAssemblyCalculator] = {
    calculator.assembly_type: calculator
    for calculator in (CutCalculator(), LeftJoinCalculator(), RightJoinCalculator())
}


def find_calculator(assembly_type: Optional[AssemblyType]) -> Optional[BaseAssemblyCalculator]:
    """Calculator for the type, or None when the type is unselected or not priceable."""
    return _CALCULATORS.get(assembly_type)


def get_calculator(assembly_type: AssemblyType) -> BaseAssemblyCalculator:
    calculator = find_calculator(assembly_type)
    if calculator is None:
        raise ValueError(
            f"Assembly type {assembly_type} cannot be priced. "
            f"Priceable: {', '.join(priceable_types())}"
        )
    return calculator


def priceable_types() -> list[str]:
    return [t.value for t in _CALCULATORS]
