from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import ConfigDict, Field, model_validator

from src.analytics.performance import PerformanceStatus, RepTargets, TargetComparison
from src.shared.base import BaseSchema


class RepIdentity(BaseSchema):
    id: str
    name: str
    email: Optional[str] = None
    targets: RepTargets


class MetricComparisons(BaseSchema):
    calls: TargetComparison
    hours: TargetComparison
    bookings: TargetComparison
    pipeline: TargetComparison

    def as_list(self) -> List[TargetComparison]:
        return [self.calls, self.hours, self.bookings, self.pipeline]


class TodayPerformance(BaseSchema):
    has_report: bool
    report_id: Optional[str] = None
    report_status: Optional[str] = None
    metrics: MetricComparisons
    dialer_time_display: Optional[str] = None
    notes: Optional[str] = None
    screenshot_url: Optional[str] = None
    submitted_at: Optional[datetime] = None
    ai_extracted_calls: Optional[int] = None
    ai_extracted_time_minutes: Optional[int] = None
    ai_confidence_score: Optional[float] = None


class WeeklyStats(BaseSchema):
    reports_submitted: int
    avg_calls: int
    avg_hours: float
    avg_bookings: float
    total_pipeline: float


class RepDashboard(BaseSchema):
    rep: RepIdentity
    today: TodayPerformance
    weekly_stats: WeeklyStats
    overall_status: PerformanceStatus
    overall_status_label: str


class StatusBreakdown(BaseSchema):
    ahead: int = 0
    on_track: int = 0
    behind: int = 0
    critical: int = 0
    no_report: int = 0


class TeamTotals(BaseSchema):
    total_reps: int
    reports_submitted_today: int
    total_calls: int
    total_hours: float
    total_bookings: int
    total_pipeline: float
    status_breakdown: StatusBreakdown


class RepDashboardResponse(BaseSchema):
    report_date: date
    team: TeamTotals
    reps: List[RepDashboard]


class EnrichedDailyReport(BaseSchema):
    id: str
    rep_id: str
    rep_name: Optional[str] = None
    rep_email: Optional[str] = None
    report_date: date
    time_on_dialer_minutes: int
    calls_made: int
    bookings_made: int
    pipeline_value: float
    status: Optional[str] = None
    notes: Optional[str] = None
    submitted_at: Optional[datetime] = None
    reviewed_at: Optional[datetime] = None
    review_notes: Optional[str] = None
    original_calls_made: Optional[int] = None
    original_time_minutes: Optional[int] = None
    original_bookings: Optional[int] = None
    original_pipeline: Optional[float] = None
    targets: Optional[MetricComparisons] = None


class DailyReportFilters(BaseSchema):
    rep_id: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=50, ge=1, le=500)


ReviewAction = Literal["approve", "reject", "edit"]

EDITABLE_METRICS = ("calls_made", "time_on_dialer_minutes", "bookings_made", "pipeline_value")


class ReportReviewRequest(BaseSchema):
    model_config = ConfigDict(extra="forbid")

    action: ReviewAction
    review_notes: Optional[str] = Field(default=None, max_length=2000)
    calls_made: Optional[int] = Field(default=None, ge=0)
    time_on_dialer_minutes: Optional[int] = Field(default=None, ge=0)
    bookings_made: Optional[int] = Field(default=None, ge=0)
    pipeline_value: Optional[float] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _edits_need_edit_action(self) -> "ReportReviewRequest":
        if self.action != "edit" and self.metric_edits():
            raise ValueError("Metric values can only be changed with the edit action")
        return self

    def metric_edits(self) -> Dict[str, Any]:
        return {
            field: getattr(self, field) for field in EDITABLE_METRICS if getattr(self, field) is not None
        }
