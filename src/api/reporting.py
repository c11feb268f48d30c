from __future__ import annotations

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_reporting_service
from src.schemas.reporting import (
    DailyReportFilters,
    EnrichedDailyReport,
    RepDashboardResponse,
    ReportReviewRequest,
)
from src.services.reporting_service import ReportingService
from src.shared.response import ResponseEnvelope, build_meta, build_pagination

router = APIRouter(prefix="/reporting", tags=["reporting"])


def get_daily_report_filters(
    rep_id: str | None = Query(default=None),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=50, ge=1, le=500),
) -> DailyReportFilters:
    return DailyReportFilters(
        rep_id=rep_id,
        start_date=start_date,
        end_date=end_date,
        page=page,
        page_size=page_size,
    )


@router.get("/dashboard")
def rep_dashboard(
    report_date: date | None = Query(default=None, alias="date"),
    service: ReportingService = Depends(get_reporting_service),
) -> ResponseEnvelope[RepDashboardResponse]:
    data = service.get_dashboard(report_date)
    meta = build_meta(
        source="sales_reps,daily_reports",
        time_window="7d",
        as_of=data.report_date,
    )
    return ResponseEnvelope(data=data, pagination=None, meta=meta)


@router.get("/reports")
def daily_reports(
    filters: DailyReportFilters = Depends(get_daily_report_filters),
    service: ReportingService = Depends(get_reporting_service),
) -> ResponseEnvelope[List[EnrichedDailyReport]]:
    data, total = service.list_reports(filters)
    meta = build_meta(
        source="daily_reports",
        time_window="custom",
        period_start=filters.start_date,
        period_end=filters.end_date,
    )
    pagination = build_pagination(filters.page, filters.page_size, total)
    return ResponseEnvelope(data=data, pagination=pagination, meta=meta)


@router.patch("/reports/{report_id}/review")
def review_report(
    report_id: str,
    request: ReportReviewRequest,
    service: ReportingService = Depends(get_reporting_service),
) -> ResponseEnvelope[EnrichedDailyReport]:
    data = service.review_report(report_id, request)
    meta = build_meta(source="daily_reports", time_window="now", as_of=data.report_date)
    return ResponseEnvelope(data=data, pagination=None, meta=meta)
