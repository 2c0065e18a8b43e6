"""
Worktop quoting engine.

    validate(configuration, material)      -> ValidationResult
    is_complete(configuration, material)   -> bool
    compute_quote(configurations, materials, fee_schedule) -> Quote
"""

from .pricing_engine import compute_quote
from .validator import is_complete, validate

__all__ = ["compute_quote", "is_complete", "validate"]
