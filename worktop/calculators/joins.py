"""
Joined (L-shaped) assembly calculators.

Main member: length A, depth B. Perpendicular member: length C, depth D.
The members are milled together, so one of them loses D of its length to
the joint: the perpendicular member for a left join, the main member for a
right join.

Derived lengths (C-D, A-D, C-B) are clamped at zero: a member shorter than
the depth it is milled against contributes nothing, never a negative amount.
"""

from ..models import AssemblyType, Material
from .base import BaseAssemblyCalculator


class _JoinedAssemblyCalculator(BaseAssemblyCalculator):

    JOINS = 1

    def needed_length_mm(self, geometry) -> float:
        return geometry.a + self.kept_length(geometry.c, geometry.d)

    def length_cut_runs(self, geometry, material: Material) -> list:
        # Each member is checked on its own; both, one or neither may apply
        runs = []
        if geometry.d < material.width:
            runs.append(("C-D", self.kept_length(geometry.c, geometry.d)))
        if geometry.a < material.width:
            runs.append(("A", geometry.a))
        return [(label, mm) for label, mm in runs if mm > 0]

    def edge_lengths_mm(self, geometry) -> tuple:
        g = geometry
        return (g.c, g.a, g.b, self.kept_length(g.a, g.d), self.kept_length(g.c, g.b), g.d)


class LeftJoinCalculator(_JoinedAssemblyCalculator):

    assembly_type = AssemblyType.LEFT_JOIN

    def consumed_length_mm(self, geometry) -> float:
        return geometry.a + self.kept_length(geometry.c, geometry.d)


class RightJoinCalculator(_JoinedAssemblyCalculator):

    assembly_type = AssemblyType.RIGHT_JOIN

    def consumed_length_mm(self, geometry) -> float:
        return self.kept_length(geometry.a, geometry.d) + geometry.c
