from __future__ import annotations

from collections import defaultdict
from datetime import date
from decimal import Decimal
from math import ceil
from typing import Dict, Iterable, List

from src.models.deals import BusinessCostRecord, DealRecord
from src.schemas.pnl import AdditionalCostBreakdown, DealCostBreakdown, PnlSummary
from src.shared.rounding import round_money
from src.shared.time import months_spanned

ZERO = Decimal("0")


def calculate_recurring_cost_for_period(
    cost: BusinessCostRecord, start_date: date, end_date: date
) -> Decimal:
    # Any overlap with the window bills every month the window spans; no proration.
    if cost.effective_date > end_date:
        return ZERO
    if cost.end_date and cost.end_date < start_date:
        return ZERO

    period_months = months_spanned(start_date, end_date)
    if cost.frequency == "monthly":
        return cost.amount * period_months
    if cost.frequency == "quarterly":
        return cost.amount * ceil(period_months / 3)
    if cost.frequency == "yearly":
        return cost.amount / 12 * period_months
    return ZERO


def _deal_costs(deal: DealRecord) -> Decimal:
    return deal.operating_expense + deal.setter_cost + deal.sales_rep_cost + deal.lead_fulfillment_cost


def build_pnl_summary(
    deals: Iterable[DealRecord],
    recurring_costs: Iterable[BusinessCostRecord],
    one_time_costs: Iterable[BusinessCostRecord],
    start_date: date,
    end_date: date,
) -> PnlSummary:
    deal_list: List[DealRecord] = list(deals)
    total_revenue_inc_vat = sum((deal.revenue_inc_vat for deal in deal_list), ZERO)
    total_revenue_net = sum((deal.revenue_net for deal in deal_list), ZERO)
    deal_costs = DealCostBreakdown(
        operating_expenses=sum((deal.operating_expense for deal in deal_list), ZERO),
        setter_costs=sum((deal.setter_cost for deal in deal_list), ZERO),
        sales_rep_costs=sum((deal.sales_rep_cost for deal in deal_list), ZERO),
        lead_fulfillment_costs=sum((deal.lead_fulfillment_cost for deal in deal_list), ZERO),
        total=sum((_deal_costs(deal) for deal in deal_list), ZERO),
    )

    by_category: Dict[str, Decimal] = defaultdict(Decimal)
    recurring_total = ZERO
    for cost in recurring_costs:
        amount = calculate_recurring_cost_for_period(cost, start_date, end_date)
        recurring_total += amount
        by_category[cost.category] += amount
    one_time_total = ZERO
    for cost in one_time_costs:
        one_time_total += cost.amount
        by_category[cost.category] += cost.amount

    additional_costs = AdditionalCostBreakdown(
        recurring=recurring_total,
        one_time=one_time_total,
        total=recurring_total + one_time_total,
        by_category=dict(by_category),
    )
    total_costs = deal_costs.total + additional_costs.total
    gross_profit = total_revenue_net - total_costs
    profit_margin = gross_profit / total_revenue_net * 100 if total_revenue_net > 0 else ZERO
    deal_count = len(deal_list)

    return PnlSummary(
        period_start=start_date,
        period_end=end_date,
        total_revenue_inc_vat=total_revenue_inc_vat,
        total_revenue_net=total_revenue_net,
        vat_deducted=total_revenue_inc_vat - total_revenue_net,
        deal_costs=deal_costs,
        additional_costs=additional_costs,
        total_costs=total_costs,
        gross_profit=gross_profit,
        profit_margin=round_money(profit_margin),
        total_deals=deal_count,
        total_leads_sold=sum(deal.leads_sold for deal in deal_list),
        avg_revenue_per_deal=round_money(total_revenue_net / deal_count) if deal_count else ZERO,
        avg_profit_per_deal=round_money(gross_profit / deal_count) if deal_count else ZERO,
    )
