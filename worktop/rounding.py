"""
Monetary rounding: Hungarian invoicing rules.

Whole currency units only. Net is rounded first, VAT is calculated from the
rounded net, gross = rounded net + rounded VAT.

Fees stored gross-first go the other way: the stored gross is the source of
truth and the net is derived from it. The gross column keeps the stored value
so a fixed price like 26 000 never drifts to 25 999 after a net/VAT round-trip.
"""

import math


def round_unit(amount: float) -> int:
    """Round to the nearest whole unit. Halves round up (invoice rounding, not banker's)."""
    return int(math.floor(amount + 0.5))


def vat_rate(vat_percent: float) -> float:
    """27 -> 0.27"""
    return vat_percent / 100.0


def vat_from_net(net: float, rate: float) -> int:
    return round_unit(net * rate)


def gross_from_net(net: float, vat: float) -> int:
    return round_unit(net + vat)


def net_from_gross_fee(gross_fee: float, rate: float) -> int:
    """
    Net figure for a gross-authoritative fee.

    26000 gross at 27% -> 20472 net. The caller reports the original 26000 as
    gross and 26000 - 20472 = 5528 as VAT.
    """
    return round_unit(gross_fee / (1 + rate))


def round_cash(amount: float) -> int:
    """
    Cash payment rounding to the nearest 5 units.

    Last digit 1-2 -> down to 0, 3-7 -> 5, 8-9 -> up to the next 10.
    """
    whole = round_unit(amount)
    last_digit = whole % 10
    base = whole - last_digit
    if last_digit <= 2:
        return base
    if last_digit <= 7:
        return base + 5
    return base + 10
