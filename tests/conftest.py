from __future__ import annotations

import os
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")

from src.analytics.deal_financials import DealFinancials, compute_deal_financials  # noqa: E402
from src.analytics.performance import RepTargets, calculate_target_comparison  # noqa: E402
from src.api.dependencies import (  # noqa: E402
    get_business_costs_service,
    get_deals_service,
    get_fulfillment_service,
    get_pnl_service,
    get_reporting_service,
)
from src.core.errors import NotFoundError  # noqa: E402
from src.main import create_app  # noqa: E402
from src.schemas.business_costs import (  # noqa: E402
    BusinessCost,
    BusinessCostCreateRequest,
    BusinessCostFilters,
    BusinessCostUpdateRequest,
)
from src.schemas.deals import Deal, DealCreateRequest, DealPreviewRequest, DealUpdateRequest  # noqa: E402
from src.schemas.fulfillment import (  # noqa: E402
    ClientFulfillment,
    ClientScheduleRequest,
    FulfillmentProgress,
    OrderListFilters,
    OrderSummary,
)
from src.schemas.pnl import (  # noqa: E402
    AdditionalCostBreakdown,
    DealCostBreakdown,
    PeriodFilters,
    PnlReportResponse,
    PnlSummary,
)
from src.schemas.reporting import (  # noqa: E402
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

MONDAY = date(2026, 10, 19)


def _metrics() -> MetricComparisons:
    return MetricComparisons(
        calls=calculate_target_comparison(90, 100),
        hours=calculate_target_comparison(5, 6),
        bookings=calculate_target_comparison(2, 2),
        pipeline=calculate_target_comparison(1500, 2000),
    )


class FakeReportingService:
    def get_dashboard(self, report_date: Optional[date] = None) -> RepDashboardResponse:
        as_of = report_date or MONDAY
        return RepDashboardResponse(
            report_date=as_of,
            team=TeamTotals(
                total_reps=1,
                reports_submitted_today=1,
                total_calls=90,
                total_hours=5.0,
                total_bookings=2,
                total_pipeline=1500,
                status_breakdown=StatusBreakdown(on_track=1),
            ),
            reps=[
                RepDashboard(
                    rep=RepIdentity(
                        id="rep-1",
                        name="Jordan Blake",
                        email="jordan@example.com",
                        targets=RepTargets(
                            daily_calls=100, daily_hours=6, daily_bookings=2, daily_pipeline=2000
                        ),
                    ),
                    today=TodayPerformance(has_report=True, report_id="report-1", metrics=_metrics()),
                    weekly_stats=WeeklyStats(
                        reports_submitted=5,
                        avg_calls=88,
                        avg_hours=5.2,
                        avg_bookings=1.8,
                        total_pipeline=7200,
                    ),
                    overall_status="on_track",
                    overall_status_label="On Track",
                )
            ],
        )

    def list_reports(self, filters: DailyReportFilters) -> Tuple[List[EnrichedDailyReport], int]:
        report = EnrichedDailyReport(
            id="report-1",
            rep_id=filters.rep_id or "rep-1",
            rep_name="Jordan Blake",
            report_date=MONDAY,
            time_on_dialer_minutes=300,
            calls_made=90,
            bookings_made=2,
            pipeline_value=1500,
            targets=_metrics(),
        )
        return [report], 1

    def review_report(self, report_id: str, request: ReportReviewRequest) -> EnrichedDailyReport:
        if report_id == "missing":
            raise NotFoundError("Report not found")
        edits = request.metric_edits()
        return EnrichedDailyReport(
            id=report_id,
            rep_id="rep-1",
            rep_name="Jordan Blake",
            report_date=MONDAY,
            time_on_dialer_minutes=edits.get("time_on_dialer_minutes", 300),
            calls_made=edits.get("calls_made", 90),
            bookings_made=edits.get("bookings_made", 2),
            pipeline_value=edits.get("pipeline_value", 1500),
            status={"approve": "approved", "reject": "rejected", "edit": "edited"}[request.action],
            review_notes=request.review_notes,
            original_calls_made=90 if edits else None,
        )


class FakeDealsService:
    def __init__(self) -> None:
        self.financials = compute_deal_financials(1200, 10, 10, 5).rounded()

    def _deal(self, deal_id: str = "deal-1", company_name: str = "Acme Recruitment") -> Deal:
        return Deal(
            id=deal_id,
            company_name=company_name,
            close_date=MONDAY,
            leads_sold=10,
            lead_sale_price=120,
            setter_commission_percent=10,
            sales_rep_commission_percent=5,
            financials=self.financials,
        )

    def list_deals(self, start_date: date, end_date: date) -> List[Deal]:
        _ = start_date, end_date
        return [self._deal()]

    def preview(self, request: DealPreviewRequest) -> DealFinancials:
        return compute_deal_financials(
            request.revenue_inc_vat,
            request.leads_sold,
            request.setter_commission_percent,
            request.sales_rep_commission_percent,
        ).rounded()

    def create_deal(self, request: DealCreateRequest, created_by: Optional[str] = None) -> Deal:
        _ = created_by
        return self._deal(company_name=request.company_name)

    def update_deal(self, deal_id: str, request: DealUpdateRequest) -> Deal:
        if deal_id == "missing":
            raise NotFoundError("Deal not found")
        return self._deal(deal_id=deal_id, company_name=request.company_name or "Acme Recruitment")


class FakePnlService:
    def get_report(self, filters: PeriodFilters, today: Optional[date] = None) -> PnlReportResponse:
        _ = today
        return PnlReportResponse(
            period=filters.period,
            summary=PnlSummary(
                period_start=date(2026, 10, 1),
                period_end=MONDAY,
                total_revenue_inc_vat=1200,
                total_revenue_net=1000,
                vat_deducted=200,
                deal_costs=DealCostBreakdown(
                    operating_expenses=200,
                    setter_costs=100,
                    sales_rep_costs=50,
                    lead_fulfillment_costs=200,
                    total=550,
                ),
                additional_costs=AdditionalCostBreakdown(
                    recurring=100, one_time=0, total=100, by_category={"software": 100}
                ),
                total_costs=650,
                gross_profit=350,
                profit_margin=35.0,
                total_deals=1,
                total_leads_sold=10,
                avg_revenue_per_deal=1000,
                avg_profit_per_deal=350,
            ),
            deal_ids=["deal-1"],
        )


def _progress(completion: int, days_remaining: Optional[int], score: float) -> FulfillmentProgress:
    return FulfillmentProgress(
        leads_purchased=100,
        leads_fulfilled=completion,
        completion_percentage=completion,
        progress_width=min(completion, 100),
        days_remaining=days_remaining,
        is_overdue=days_remaining is not None and days_remaining < 0,
        priority_score=score,
    )


class FakeFulfillmentService:
    def __init__(self) -> None:
        self.last_filters: Optional[OrderListFilters] = None

    def list_orders(self, filters: OrderListFilters, today: Optional[date] = None) -> List[OrderSummary]:
        _ = today
        self.last_filters = filters
        return [
            OrderSummary(
                id="order-1",
                order_number="ORD-001",
                client_id="client-1",
                client_name="Acme Recruitment",
                status="active",
                target_delivery_date=date(2026, 10, 23),
                leads_per_day=20.0,
                created_at=datetime(2026, 10, 1, tzinfo=timezone.utc),
                progress=_progress(20, 4, 804),
            )
        ]

    def list_client_queue(self, today: Optional[date] = None) -> List[ClientFulfillment]:
        _ = today
        return [
            ClientFulfillment(
                id="client-1",
                client_name="Acme Recruitment",
                email="ops@acme.example",
                progress=_progress(50, None, 1499),
            )
        ]

    def schedule_client(self, client_id: str, request: ClientScheduleRequest) -> ClientFulfillment:
        return ClientFulfillment(
            id=client_id,
            client_name="Acme Recruitment",
            email="ops@acme.example",
            onboarding_date=request.onboarding_date,
            target_delivery_date=request.target_delivery_date,
            leads_per_day=20.0,
            progress=_progress(0, 4, 1004),
        )


class FakeBusinessCostsService:
    def _cost(self, cost_id: str = "cost-1", **overrides) -> BusinessCost:
        values = {
            "id": cost_id,
            "name": "CRM seats",
            "amount": Decimal("100.00"),
            "cost_type": "recurring",
            "frequency": "monthly",
            "category": "software",
            "effective_date": date(2026, 1, 1),
            "is_active": True,
        }
        values.update(overrides)
        return BusinessCost(**values)

    def list_costs(self, filters: BusinessCostFilters) -> List[BusinessCost]:
        return [self._cost(category=filters.category or "software")]

    def create_cost(self, request: BusinessCostCreateRequest, created_by: Optional[str] = None) -> BusinessCost:
        _ = created_by
        return self._cost(
            cost_id="cost-2",
            name=request.name,
            amount=request.amount,
            cost_type=request.cost_type,
            frequency=request.frequency,
        )

    def update_cost(self, cost_id: str, request: BusinessCostUpdateRequest) -> BusinessCost:
        if cost_id == "missing":
            raise NotFoundError("Business cost not found")
        return self._cost(cost_id=cost_id, amount=request.amount or Decimal("100.00"))


@pytest.fixture()
def client() -> TestClient:
    app = create_app()
    app.dependency_overrides[get_reporting_service] = FakeReportingService
    app.dependency_overrides[get_deals_service] = FakeDealsService
    app.dependency_overrides[get_pnl_service] = FakePnlService
    app.dependency_overrides[get_fulfillment_service] = FakeFulfillmentService
    app.dependency_overrides[get_business_costs_service] = FakeBusinessCostsService
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
