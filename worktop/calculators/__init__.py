"""
Stage 3: Per-configuration fee calculation.

Pure Python math. No I/O.
Given a validated Configuration, its Material and the FeeSchedule,
produce a QuoteLineItem with eight whole-unit fee categories.
"""
