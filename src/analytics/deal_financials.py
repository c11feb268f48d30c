from __future__ import annotations

from decimal import Decimal

from src.analytics.constants import (
    LEAD_FULFILLMENT_UNIT_COST,
    OPERATING_EXPENSE_RATE,
    VAT_RATE,
)
from src.shared.base import Money, ValueSchema
from src.shared.rounding import Number, round_money, to_decimal

HUNDRED = Decimal("100")


class DealInputs(ValueSchema):
    revenue_inc_vat: Money
    leads_sold: int
    lead_sale_price: Money
    setter_commission_percent: float = 0.0
    sales_rep_commission_percent: float = 0.0


class DealFinancials(ValueSchema):
    revenue_inc_vat: Money
    revenue_net: Money
    vat_deducted: Money
    operating_expense: Money
    setter_cost: Money
    sales_rep_cost: Money
    lead_fulfillment_cost: Money
    total_costs: Money
    gross_profit: Money
    profit_margin: Money

    def rounded(self) -> "DealFinancials":
        return DealFinancials(
            **{name: round_money(value) for name, value in self.model_dump().items()}
        )


def compute_deal_financials(
    revenue_inc_vat: Number,
    leads_sold: int,
    setter_pct: Number,
    rep_pct: Number,
    *,
    vat_rate: Number = VAT_RATE,
    operating_expense_rate: Number = OPERATING_EXPENSE_RATE,
    lead_unit_cost: Number = LEAD_FULFILLMENT_UNIT_COST,
) -> DealFinancials:
    # Commission percentages apply to net revenue. Range checks belong to the request layer.
    gross = to_decimal(revenue_inc_vat)
    revenue_net = gross / (1 + to_decimal(vat_rate))
    operating_expense = revenue_net * to_decimal(operating_expense_rate)
    setter_cost = revenue_net * to_decimal(setter_pct) / HUNDRED
    sales_rep_cost = revenue_net * to_decimal(rep_pct) / HUNDRED
    lead_fulfillment_cost = leads_sold * to_decimal(lead_unit_cost)
    total_costs = operating_expense + setter_cost + sales_rep_cost + lead_fulfillment_cost
    gross_profit = revenue_net - total_costs
    return DealFinancials(
        revenue_inc_vat=gross,
        revenue_net=revenue_net,
        vat_deducted=gross - revenue_net,
        operating_expense=operating_expense,
        setter_cost=setter_cost,
        sales_rep_cost=sales_rep_cost,
        lead_fulfillment_cost=lead_fulfillment_cost,
        total_costs=total_costs,
        gross_profit=gross_profit,
        profit_margin=gross_profit / revenue_net * HUNDRED if revenue_net > 0 else Decimal("0"),
    )


def compute_from_inputs(inputs: DealInputs, **overrides: Number) -> DealFinancials:
    return compute_deal_financials(
        inputs.revenue_inc_vat,
        inputs.leads_sold,
        inputs.setter_commission_percent,
        inputs.sales_rep_commission_percent,
        **overrides,
    )
