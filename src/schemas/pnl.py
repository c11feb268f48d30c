from __future__ import annotations

from datetime import date
from typing import Dict, List, Literal, Optional

from src.shared.base import BaseSchema, Money

ReportingPeriod = Literal["daily", "weekly", "monthly", "quarterly", "yearly", "custom"]


class PeriodFilters(BaseSchema):
    period: ReportingPeriod = "monthly"
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class DealCostBreakdown(BaseSchema):
    operating_expenses: Money
    setter_costs: Money
    sales_rep_costs: Money
    lead_fulfillment_costs: Money
    total: Money


class AdditionalCostBreakdown(BaseSchema):
    recurring: Money
    one_time: Money
    total: Money
    by_category: Dict[str, Money]


class PnlSummary(BaseSchema):
    period_start: date
    period_end: date
    total_revenue_inc_vat: Money
    total_revenue_net: Money
    vat_deducted: Money
    deal_costs: DealCostBreakdown
    additional_costs: AdditionalCostBreakdown
    total_costs: Money
    gross_profit: Money
    profit_margin: Money
    total_deals: int
    total_leads_sold: int
    avg_revenue_per_deal: Money
    avg_profit_per_deal: Money


class PnlReportResponse(BaseSchema):
    period: ReportingPeriod
    summary: PnlSummary
    deal_ids: List[str]
