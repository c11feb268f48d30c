from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from src.core.supabase import SupabaseClient
from src.models.reporting import DailyReportRecord, SalesRepRecord

MAX_QUERY_ROWS = 5000

REP_COLUMNS = (
    "id,name,email,is_active,daily_calls_target,daily_hours_target,"
    "daily_bookings_target,daily_pipeline_target,weekly_bookings_target,weekly_pipeline_target"
)


class ReportingRepository:
    def __init__(self) -> None:
        self.client = SupabaseClient()

    def list_active_reps(self) -> List[SalesRepRecord]:
        rows, _ = self.client.select(
            table="sales_reps",
            select=REP_COLUMNS,
            filters=[("is_active", "eq.true")],
            limit=MAX_QUERY_ROWS,
            order="name.asc",
        )
        return [SalesRepRecord.model_validate(row) for row in rows]

    def list_reports_between(self, start_date: date, end_date: date) -> List[DailyReportRecord]:
        rows, _ = self.client.select(
            table="daily_reports",
            select="*",
            filters=[
                ("report_date", f"gte.{start_date.isoformat()}"),
                ("report_date", f"lte.{end_date.isoformat()}"),
            ],
            limit=MAX_QUERY_ROWS,
            order="report_date.desc",
        )
        return [DailyReportRecord.model_validate(row) for row in rows]

    def list_reports_with_reps(
        self,
        rep_id: Optional[str],
        start_date: Optional[date],
        end_date: Optional[date],
        page: int,
        page_size: int,
    ) -> Tuple[List[DailyReportRecord], int]:
        filters: List[Tuple[str, str]] = []
        if rep_id:
            filters.append(("rep_id", f"eq.{rep_id}"))
        if start_date:
            filters.append(("report_date", f"gte.{start_date.isoformat()}"))
        if end_date:
            filters.append(("report_date", f"lte.{end_date.isoformat()}"))

        rows, total = self.client.select(
            table="daily_reports",
            select=f"*,sales_reps({REP_COLUMNS})",
            filters=filters,
            limit=page_size,
            offset=(page - 1) * page_size,
            order="report_date.desc",
            count=True,
        )
        return [DailyReportRecord.model_validate(row) for row in rows], total or 0

    def get_report(self, report_id: str) -> Optional[DailyReportRecord]:
        row = self.client.select_one("daily_reports", "*", [("id", f"eq.{report_id}")])
        return DailyReportRecord.model_validate(row) if row else None

    def update_report(self, report_id: str, payload: Dict[str, Any]) -> Optional[DailyReportRecord]:
        rows = self.client.update(
            "daily_reports",
            payload,
            [("id", f"eq.{report_id}"), ("select", f"*,sales_reps({REP_COLUMNS})")],
        )
        return DailyReportRecord.model_validate(rows[0]) if rows else None
