"""Achievement progress calculation for a single game."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Final

from helpers import _coerce_count

STATUS_NO_ACHIEVEMENTS: Final[str] = "No Achievements"
STATUS_NOT_STARTED: Final[str] = "Not Started"
STATUS_STARTED: Final[str] = "Started"
STATUS_IN_PROGRESS: Final[str] = "In Progress"
STATUS_ALMOST_THERE: Final[str] = "Almost There"
STATUS_COMPLETE: Final[str] = "Complete"

MIN_BAR_WIDTH: Final[str] = "2px"


@dataclass(frozen=True)
class ProgressDescriptor:
    """Display-ready completion summary for one game."""

    percentage: int
    earned: int
    total: int
    is_complete: bool
    status: str
    bar_width: str

    @property
    def capped_earned(self) -> int:
        return self.earned

    @property
    def display_percentage(self) -> str:
        return f"{self.percentage}%"

    @property
    def css_class(self) -> str:
        return "complete" if self.is_complete else ""

    @property
    def show_ribbon(self) -> bool:
        return self.is_complete

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["displayPercentage"] = self.display_percentage
        data["isComplete"] = data.pop("is_complete")
        data["barWidth"] = data.pop("bar_width")
        data["cssClass"] = self.css_class
        data["showRibbon"] = self.show_ribbon
        return data


NO_ACHIEVEMENTS: Final[ProgressDescriptor] = ProgressDescriptor(
    percentage=0,
    earned=0,
    total=0,
    is_complete=False,
    status=STATUS_NO_ACHIEVEMENTS,
    bar_width=MIN_BAR_WIDTH,
)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _status_for(percentage: int, is_complete: bool) -> str:
    if is_complete:
        return STATUS_COMPLETE
    if percentage == 0:
        return STATUS_NOT_STARTED
    if percentage < 25:
        return STATUS_STARTED
    if percentage < 75:
        return STATUS_IN_PROGRESS
    return STATUS_ALMOST_THERE


def calculate(total: Any, earned: Any) -> ProgressDescriptor:
    """Return the progress descriptor for ``earned`` out of ``total``.

    Both inputs are sanitized on their own: anything non-numeric, non-finite
    or negative counts as ``0`` and fractions are floored. ``earned`` above
    ``total`` is capped.
    """

    total_count = _coerce_count(total)
    earned_count = _coerce_count(earned)

    if total_count == 0:
        return NO_ACHIEVEMENTS

    capped = min(earned_count, total_count)
    percentage = _round_half_up(capped / total_count * 100)
    is_complete = capped == total_count

    # Never hand a zero-width bar to the renderer.
    bar_width = MIN_BAR_WIDTH if percentage < 1 else f"{percentage}%"

    return ProgressDescriptor(
        percentage=percentage,
        earned=capped,
        total=total_count,
        is_complete=is_complete,
        status=_status_for(percentage, is_complete),
        bar_width=bar_width,
    )


__all__ = [
    "MIN_BAR_WIDTH",
    "NO_ACHIEVEMENTS",
    "ProgressDescriptor",
    "STATUS_ALMOST_THERE",
    "STATUS_COMPLETE",
    "STATUS_IN_PROGRESS",
    "STATUS_NOT_STARTED",
    "STATUS_NO_ACHIEVEMENTS",
    "STATUS_STARTED",
    "calculate",
]
