"""
Straight cut calculator: one piece cut to length A and depth B.
"""

from ..models import AssemblyType, Material
from .base import BaseAssemblyCalculator


class CutCalculator(BaseAssemblyCalculator):

    assembly_type = AssemblyType.CUT
    CROSS_CUTS = 1

    def consumed_length_mm(self, geometry) -> float:
        return geometry.a

    def needed_length_mm(self, geometry) -> float:
        return geometry.a

    def length_cut_runs(self, geometry, material: Material) -> list:
        # Full-width pieces keep the factory edge
        if geometry.b < material.width:
            return [("A", geometry.a)]
        return []

    def edge_lengths_mm(self, geometry) -> tuple:
        # Positions 1-4 walk the rectangle: B, A, B, A
        return (geometry.b, geometry.a, geometry.b, geometry.a)
