from __future__ import annotations

import math

from core.exceptions import ValidationError

HOURS_PER_DAY = 8


def task_duration_days(estimated_hours: float | None) -> int:
    """Whole working days occupied by an estimate; partial days round up."""
    hours = float(estimated_hours or 0.0)
    if not math.isfinite(hours) or hours < 0:
        raise ValidationError(
            f"Estimated hours must be a non-negative number (got {estimated_hours!r}).",
            code="TASK_INVALID_ESTIMATE",
        )
    return math.ceil(hours / HOURS_PER_DAY)


__all__ = ["HOURS_PER_DAY", "task_duration_days"]
