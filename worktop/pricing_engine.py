"""
Stage 4: Quote aggregation.

Runs the per-assembly calculators over an ordered list of configurations and
sums the results into a Quote. Pure math, no I/O.

Input: validated Configurations + Material lookup by id + FeeSchedule
Output: Quote (line items, skipped configurations, grand totals)

Validation is a precondition, not repeated here. Configurations that cannot
be priced (straight splices, U-joins, unknown material) are left out of the
line items and reported in Quote.skipped.
"""

import logging
from typing import Mapping, Optional, Sequence

from .calculators.registry import find_calculator, priceable_types
from .config import settings
from .models import (
    Configuration,
    FeeSchedule,
    Material,
    Quote,
    SkippedConfiguration,
    SkipReason,
)
from .rounding import round_cash, round_unit

logger = logging.getLogger(__name__)


class QuotePricingEngine:
    """
    Assembles the Quote from per-configuration line items.
    Stateless: one instance can serve concurrent requests.
    """

    def compute_quote(self, configurations: Sequence[Configuration],
                      materials: Mapping[str, Material],
                      fee_schedule: FeeSchedule,
                      discount_percent: float = 0.0) -> Quote:
        if not 0 <= discount_percent <= 100:
            raise ValueError(f"discount_percent must be between 0 and 100, got {discount_percent}")

        line_items = []
        skipped = []
        currency: Optional[str] = None

        for index, configuration in enumerate(configurations):
            assembly_type = configuration.assembly_type

            calculator = find_calculator(assembly_type)
            if calculator is None:
                label = assembly_type.value if assembly_type is not None else "none"
                skipped.append(SkippedConfiguration(
                    config_index=index,
                    reason=SkipReason.NOT_PRICEABLE,
                    message=(f"Assembly type '{label}' is not yet priceable "
                             f"(priceable: {', '.join(priceable_types())})"),
                ))
                continue

            material = materials.get(configuration.material_id) if configuration.material_id else None
            if material is None:
                skipped.append(SkippedConfiguration(
                    config_index=index,
                    reason=SkipReason.MISSING_MATERIAL,
                    message=f"Material '{configuration.material_id}' not found",
                ))
                continue

            line_items.append(calculator.calculate(configuration, material, fee_schedule, config_index=index))
            # Single-currency assumption: the last priced material wins
            currency = material.currency

        if skipped:
            logger.warning("Skipped %d of %d configuration(s): %s",
                           len(skipped), len(configurations),
                           [(s.config_index, s.reason.value) for s in skipped])

        grand_total_net = sum(item.total_net for item in line_items)
        grand_total_vat = sum(item.total_vat for item in line_items)
        grand_total_gross = sum(item.total_gross for item in line_items)

        final_total = round_unit(grand_total_gross * (1 - discount_percent / 100.0))

        quote = Quote(
            line_items=line_items,
            skipped=skipped,
            grand_total_net=grand_total_net,
            grand_total_vat=grand_total_vat,
            grand_total_gross=grand_total_gross,
            currency=currency or fee_schedule.currency or settings.DEFAULT_CURRENCY,
            discount_percent=discount_percent,
            final_total_after_discount=final_total,
            cash_total=round_cash(final_total),
        )
        logger.info("Quote computed: %d line item(s), gross %d %s",
                    len(line_items), grand_total_gross, quote.currency)
        return quote


_engine = QuotePricingEngine()


def compute_quote(configurations: Sequence[Configuration],
                  materials: Mapping[str, Material],
                  fee_schedule: FeeSchedule,
                  discount_percent: float = 0.0) -> Quote:
    return _engine.compute_quote(configurations, materials, fee_schedule, discount_percent)
