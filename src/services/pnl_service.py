from __future__ import annotations

from datetime import date
from typing import Optional

from src.analytics.pnl import build_pnl_summary
from src.repositories.deals_repository import DealsRepository
from src.schemas.pnl import PeriodFilters, PnlReportResponse
from src.shared.time import resolve_period_window


class PnlService:
    def __init__(self, repository: DealsRepository) -> None:
        self.repository = repository

    def get_report(self, filters: PeriodFilters, today: Optional[date] = None) -> PnlReportResponse:
        start_date, end_date = resolve_period_window(
            filters.period, today, filters.start_date, filters.end_date
        )
        deals = self.repository.list_deals(start_date, end_date)
        recurring_costs = self.repository.list_active_recurring_costs()
        one_time_costs = self.repository.list_one_time_costs(start_date, end_date)
        summary = build_pnl_summary(deals, recurring_costs, one_time_costs, start_date, end_date)
        return PnlReportResponse(
            period=filters.period,
            summary=summary,
            deal_ids=[deal.id for deal in deals],
        )
