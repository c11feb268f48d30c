from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple

from src.analytics.performance import (
    TargetComparison,
    calculate_target_comparison,
    get_overall_status,
    get_status_label,
)
from src.core.errors import NotFoundError
from src.models.reporting import DailyReportRecord, SalesRepRecord
from src.repositories.reporting_repository import ReportingRepository
from src.schemas.reporting import (
    DailyReportFilters,
    EnrichedDailyReport,
    MetricComparisons,
    RepDashboard,
    RepDashboardResponse,
    ReportReviewRequest,
    RepIdentity,
    StatusBreakdown,
    TeamTotals,
    TodayPerformance,
    WeeklyStats,
)
from src.shared.rounding import round_half_up
from src.shared.time import format_duration, minutes_to_decimal_hours

logger = logging.getLogger(__name__)

TREND_LOOKBACK_DAYS = 7

REVIEW_STATUSES = {"approve": "approved", "reject": "rejected", "edit": "edited"}


class ReportingService:
    def __init__(self, repository: ReportingRepository) -> None:
        self.repository = repository

    def get_dashboard(self, report_date: Optional[date] = None) -> RepDashboardResponse:
        as_of = report_date or date.today()
        reps = self.repository.list_active_reps()
        recent_reports = self.repository.list_reports_between(
            as_of - timedelta(days=TREND_LOOKBACK_DAYS), as_of
        )
        todays_reports = [report for report in recent_reports if report.report_date == as_of]
        today_by_rep = {report.rep_id: report for report in todays_reports}
        recent_by_rep: Dict[str, List[DailyReportRecord]] = defaultdict(list)
        for report in recent_reports:
            recent_by_rep[report.rep_id].append(report)

        dashboards = [
            self._build_rep_dashboard(rep, today_by_rep.get(rep.id), recent_by_rep.get(rep.id, []))
            for rep in reps
        ]
        return RepDashboardResponse(
            report_date=as_of,
            team=self._build_team_totals(len(reps), todays_reports, dashboards),
            reps=dashboards,
        )

    def list_reports(self, filters: DailyReportFilters) -> Tuple[List[EnrichedDailyReport], int]:
        records, total = self.repository.list_reports_with_reps(
            rep_id=filters.rep_id,
            start_date=filters.start_date,
            end_date=filters.end_date,
            page=filters.page,
            page_size=filters.page_size,
        )
        return [self._enrich_report(record) for record in records], total

    def review_report(
        self, report_id: str, request: ReportReviewRequest, now: Optional[datetime] = None
    ) -> EnrichedDailyReport:
        existing = self.repository.get_report(report_id)
        if not existing:
            raise NotFoundError("Report not found")

        payload: Dict[str, Any] = {
            "status": REVIEW_STATUSES[request.action],
            "reviewed_at": (now or datetime.now(timezone.utc)).isoformat(),
            "review_notes": request.review_notes or None,
        }
        if request.action == "edit":
            if existing.original_calls_made is None:
                payload.update(
                    original_calls_made=existing.calls_made,
                    original_time_minutes=existing.time_on_dialer_minutes,
                    original_bookings=existing.bookings_made,
                    original_pipeline=existing.pipeline_value,
                )
            payload.update(request.metric_edits())

        record = self.repository.update_report(report_id, payload)
        if not record:
            raise NotFoundError("Report not found")
        logger.info("Report %s marked %s", report_id, payload["status"])
        return self._enrich_report(record)

    def _build_rep_dashboard(
        self,
        rep: SalesRepRecord,
        todays_report: Optional[DailyReportRecord],
        recent_reports: List[DailyReportRecord],
    ) -> RepDashboard:
        if todays_report:
            metrics = self._compare_report(todays_report, rep)
            today = TodayPerformance(
                has_report=True,
                report_id=todays_report.id,
                report_status=todays_report.status or "pending",
                metrics=metrics,
                dialer_time_display=format_duration(todays_report.time_on_dialer_minutes),
                notes=todays_report.notes,
                screenshot_url=todays_report.screenshot_url,
                submitted_at=todays_report.submitted_at,
                ai_extracted_calls=todays_report.ai_extracted_calls,
                ai_extracted_time_minutes=todays_report.ai_extracted_time_minutes,
                ai_confidence_score=todays_report.ai_confidence_score,
            )
            overall_status = get_overall_status(metrics.as_list())
        else:
            today = TodayPerformance(has_report=False, metrics=self._missing_report_metrics(rep))
            overall_status = get_overall_status(None)

        return RepDashboard(
            rep=RepIdentity(id=rep.id, name=rep.name, email=rep.email, targets=rep.targets),
            today=today,
            weekly_stats=self._weekly_stats(recent_reports),
            overall_status=overall_status,
            overall_status_label=get_status_label(overall_status),
        )

    @staticmethod
    def _compare_report(report: DailyReportRecord, rep: SalesRepRecord) -> MetricComparisons:
        hours_worked = report.time_on_dialer_minutes / 60
        return MetricComparisons(
            calls=calculate_target_comparison(report.calls_made, rep.daily_calls_target),
            hours=calculate_target_comparison(hours_worked, rep.daily_hours_target),
            bookings=calculate_target_comparison(report.bookings_made, rep.daily_bookings_target),
            pipeline=calculate_target_comparison(report.pipeline_value, rep.daily_pipeline_target),
        )

    @staticmethod
    def _missing_report_metrics(rep: SalesRepRecord) -> MetricComparisons:
        # A rep who has not reported is critical on every metric, whatever the target.
        def missing(target: float) -> TargetComparison:
            return TargetComparison(actual=0, target=target, percent=0, status="critical")

        return MetricComparisons(
            calls=missing(rep.daily_calls_target),
            hours=missing(rep.daily_hours_target),
            bookings=missing(rep.daily_bookings_target),
            pipeline=missing(rep.daily_pipeline_target),
        )

    @staticmethod
    def _weekly_stats(reports: List[DailyReportRecord]) -> WeeklyStats:
        count = len(reports)
        total_pipeline = sum(report.pipeline_value for report in reports)
        if not count:
            return WeeklyStats(
                reports_submitted=0, avg_calls=0, avg_hours=0, avg_bookings=0, total_pipeline=0
            )
        total_calls = sum(report.calls_made for report in reports)
        total_minutes = sum(report.time_on_dialer_minutes for report in reports)
        total_bookings = sum(report.bookings_made for report in reports)
        return WeeklyStats(
            reports_submitted=count,
            avg_calls=int(round_half_up(total_calls / count)),
            avg_hours=minutes_to_decimal_hours(total_minutes / count),
            avg_bookings=round_half_up(total_bookings / count, 1),
            total_pipeline=total_pipeline,
        )

    @staticmethod
    def _build_team_totals(
        total_reps: int,
        todays_reports: List[DailyReportRecord],
        dashboards: List[RepDashboard],
    ) -> TeamTotals:
        breakdown: Dict[str, int] = defaultdict(int)
        for dashboard in dashboards:
            breakdown[dashboard.overall_status] += 1
        return TeamTotals(
            total_reps=total_reps,
            reports_submitted_today=len(todays_reports),
            total_calls=sum(report.calls_made for report in todays_reports),
            total_hours=minutes_to_decimal_hours(
                sum(report.time_on_dialer_minutes for report in todays_reports)
            ),
            total_bookings=sum(report.bookings_made for report in todays_reports),
            total_pipeline=sum(report.pipeline_value for report in todays_reports),
            status_breakdown=StatusBreakdown(**breakdown),
        )

    def _enrich_report(self, record: DailyReportRecord) -> EnrichedDailyReport:
        rep = record.sales_reps
        return EnrichedDailyReport(
            id=record.id,
            rep_id=record.rep_id,
            rep_name=rep.name if rep else None,
            rep_email=rep.email if rep else None,
            report_date=record.report_date,
            time_on_dialer_minutes=record.time_on_dialer_minutes,
            calls_made=record.calls_made,
            bookings_made=record.bookings_made,
            pipeline_value=record.pipeline_value,
            status=record.status,
            notes=record.notes,
            submitted_at=record.submitted_at,
            reviewed_at=record.reviewed_at,
            review_notes=record.review_notes,
            original_calls_made=record.original_calls_made,
            original_time_minutes=record.original_time_minutes,
            original_bookings=record.original_bookings,
            original_pipeline=record.original_pipeline,
            targets=self._compare_report(record, rep) if rep else None,
        )
