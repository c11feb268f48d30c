from __future__ import annotations

from datetime import date
from decimal import Decimal

from src.analytics.pnl import build_pnl_summary, calculate_recurring_cost_for_period
from src.models.deals import BusinessCostRecord, DealRecord

OCTOBER = (date(2026, 10, 1), date(2026, 10, 31))
Q4 = (date(2026, 10, 1), date(2026, 12, 31))


def _cost(frequency=None, amount=300, cost_type="recurring", **overrides) -> BusinessCostRecord:
    values = {
        "id": "cost-1",
        "name": "CRM seats",
        "amount": amount,
        "cost_type": cost_type,
        "frequency": frequency,
        "category": "software",
        "effective_date": date(2026, 1, 1),
    }
    values.update(overrides)
    return BusinessCostRecord(**values)


def _deal(deal_id: str, revenue_inc_vat: int, leads_sold: int) -> DealRecord:
    revenue_net = Decimal(revenue_inc_vat) / Decimal("1.2")
    return DealRecord(
        id=deal_id,
        company_name="Acme Recruitment",
        revenue_inc_vat=revenue_inc_vat,
        revenue_net=revenue_net,
        operating_expense=revenue_net * Decimal("0.2"),
        leads_sold=leads_sold,
        lead_sale_price=100,
        setter_commission_percent=10,
        sales_rep_commission_percent=5,
        setter_cost=revenue_net * Decimal("0.1"),
        sales_rep_cost=revenue_net * Decimal("0.05"),
        lead_fulfillment_cost=leads_sold * 20,
        close_date=date(2026, 10, 5),
    )


def test_recurring_cost_by_frequency():
    assert calculate_recurring_cost_for_period(_cost("monthly"), *Q4) == 900
    assert calculate_recurring_cost_for_period(_cost("quarterly"), *OCTOBER) == 300
    assert calculate_recurring_cost_for_period(_cost("quarterly"), date(2026, 1, 1), date(2026, 4, 30)) == 600
    assert calculate_recurring_cost_for_period(_cost("yearly", amount=1200), *Q4) == 300


def test_recurring_cost_outside_window_is_zero():
    starts_later = _cost("monthly", effective_date=date(2026, 11, 1))
    ended_before = _cost("monthly", end_date=date(2026, 9, 30))
    assert calculate_recurring_cost_for_period(starts_later, *OCTOBER) == 0
    assert calculate_recurring_cost_for_period(ended_before, *OCTOBER) == 0


def test_recurring_cost_without_frequency_is_zero():
    assert calculate_recurring_cost_for_period(_cost(None), *OCTOBER) == 0


def test_pnl_summary_totals():
    deals = [_deal("deal-1", 1200, 10), _deal("deal-2", 2400, 20)]
    recurring = [_cost("monthly", amount=100)]
    one_time = [_cost(cost_type="one_time", amount=50, category="marketing", id="cost-2")]

    summary = build_pnl_summary(deals, recurring, one_time, *OCTOBER)

    assert summary.total_revenue_inc_vat == 3600
    assert summary.total_revenue_net == 3000
    assert summary.vat_deducted == 600
    assert summary.deal_costs.operating_expenses == 600
    assert summary.deal_costs.lead_fulfillment_costs == 600
    assert summary.deal_costs.total == 1650
    assert summary.additional_costs.total == 150
    assert summary.additional_costs.by_category == {"software": 100, "marketing": 50}
    assert summary.total_costs == 1800
    assert summary.gross_profit == 1200
    assert summary.profit_margin == 40
    assert summary.total_deals == 2
    assert summary.total_leads_sold == 30
    assert summary.avg_revenue_per_deal == 1500
    assert summary.avg_profit_per_deal == 600


def test_pnl_summary_without_deals():
    summary = build_pnl_summary([], [], [], *OCTOBER)
    assert summary.total_deals == 0
    assert summary.profit_margin == 0
    assert summary.avg_revenue_per_deal == 0
