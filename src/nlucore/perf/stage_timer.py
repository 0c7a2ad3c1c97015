"""
Stage-level timing utility for nlucore.

Provides a context manager to measure how long training, classification
and entity scans take, and to warn when soft performance budgets are exceeded.
"""

import time
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

# Soft performance budgets (ms) - warn-only, never raise
STAGE_BUDGETS_MS: Dict[str, int] = {
    "train": 2000,
    "classify": 20,
    "find_entities": 100,
}


class StageTimer:
    """
    Context manager for timing one stage.

    Usage:
        with StageTimer(trace, "train"):
            # stage code here
            pass

    Stores duration (ms) into trace["timings"][stage_name] = duration_ms
    Emits warning if stage exceeds soft budget (never raises).

    Args:
        trace: Dictionary to store timings (will create trace["timings"] if needed)
        stage_name: Name of the stage being timed
        budget_ms: Optional budget override (defaults to STAGE_BUDGETS_MS[stage_name])
        context: Extra fields attached to the budget warning
    """

    def __init__(
        self,
        trace: Optional[Dict[str, Any]],
        stage_name: str,
        budget_ms: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        self.trace = trace
        self.stage_name = stage_name
        self.budget_ms = budget_ms if budget_ms is not None else STAGE_BUDGETS_MS.get(stage_name)
        self.context = context or {}
        self.start_time: Optional[float] = None
        self.duration_ms: Optional[float] = None

    def __enter__(self):
        """Start timing."""
        if isinstance(self.trace, dict):
            self.trace.setdefault("timings", {})
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Stop timing and record duration."""
        if self.start_time is None:
            return False

        self.duration_ms = (time.perf_counter() - self.start_time) * 1000.0

        if isinstance(self.trace, dict):
            self.trace.setdefault("timings", {})[self.stage_name] = round(self.duration_ms, 2)

        if self.budget_ms is not None and self.duration_ms > self.budget_ms:
            logger.warning(
                f"Stage '{self.stage_name}' exceeded performance budget",
                extra={
                    'stage': self.stage_name,
                    'duration_ms': round(self.duration_ms, 2),
                    'budget_ms': self.budget_ms,
                    **self.context,
                }
            )

        # Never suppress exceptions
        return False
