"""Performance monitoring utilities for nlucore."""

from nlucore.perf.stage_timer import StageTimer, STAGE_BUDGETS_MS

__all__ = ["StageTimer", "STAGE_BUDGETS_MS"]
