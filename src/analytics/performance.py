from __future__ import annotations

from typing import Dict, Literal, Optional, Sequence

from src.analytics.constants import AHEAD_THRESHOLD, BEHIND_THRESHOLD, ON_TRACK_THRESHOLD
from src.shared.base import ValueSchema
from src.shared.rounding import round_percent

PerformanceStatus = Literal["ahead", "on_track", "behind", "critical", "no_report"]

# no_report means "no data" and deliberately has no rank.
STATUS_RANK: Dict[str, int] = {"ahead": 3, "on_track": 2, "behind": 1, "critical": 0}

STATUS_LABELS: Dict[str, str] = {
    "ahead": "Ahead",
    "on_track": "On Track",
    "behind": "Behind",
    "critical": "Critical",
    "no_report": "No Report",
}


class TargetComparison(ValueSchema):
    actual: float
    target: float
    percent: int
    status: PerformanceStatus


class RepTargets(ValueSchema):
    daily_calls: float
    daily_hours: float
    daily_bookings: float
    daily_pipeline: float


def classify_percent(percent: float) -> PerformanceStatus:
    if percent >= AHEAD_THRESHOLD:
        return "ahead"
    if percent >= ON_TRACK_THRESHOLD:
        return "on_track"
    if percent >= BEHIND_THRESHOLD:
        return "behind"
    return "critical"


def get_performance_status(actual: float, target: float) -> PerformanceStatus:
    # No target set means there is nothing to fall short of.
    if target == 0:
        return "on_track"
    return classify_percent(actual / target * 100)


def calculate_target_comparison(actual: float, target: float) -> TargetComparison:
    # A zero target gives percent 0 with status on_track.
    percent = round_percent(actual, target) if target > 0 else 0
    return TargetComparison(
        actual=actual,
        target=target,
        percent=percent,
        status=get_performance_status(actual, target),
    )


def get_overall_status(comparisons: Optional[Sequence[TargetComparison]]) -> PerformanceStatus:
    if not comparisons:
        return "no_report"
    average = sum(comparison.percent for comparison in comparisons) / len(comparisons)
    return classify_percent(average)


def get_completion_percentage(fulfilled: float, purchased: float) -> int:
    if purchased == 0:
        return 0
    return round_percent(fulfilled, purchased)


def get_progress_width(percent: float) -> float:
    return max(0, min(percent, 100))


def get_status_label(status: str) -> str:
    return STATUS_LABELS.get(status, "Unknown")
