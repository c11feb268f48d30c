from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel

from src.analytics.deal_financials import DealInputs

CostType = Literal["recurring", "one_time"]
CostFrequency = Literal["monthly", "quarterly", "yearly"]


class DealRecord(BaseModel):
    id: str
    company_name: str
    revenue_inc_vat: Decimal
    revenue_net: Decimal
    operating_expense: Decimal
    leads_sold: int
    lead_sale_price: Decimal
    setter_commission_percent: float = 0
    sales_rep_commission_percent: float = 0
    setter_cost: Decimal = Decimal("0")
    sales_rep_cost: Decimal = Decimal("0")
    lead_fulfillment_cost: Decimal = Decimal("0")
    close_date: date
    notes: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def inputs(self) -> DealInputs:
        return DealInputs(
            revenue_inc_vat=self.revenue_inc_vat,
            leads_sold=self.leads_sold,
            lead_sale_price=self.lead_sale_price,
            setter_commission_percent=self.setter_commission_percent,
            sales_rep_commission_percent=self.sales_rep_commission_percent,
        )


class BusinessCostRecord(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    amount: Decimal
    cost_type: CostType
    frequency: Optional[CostFrequency] = None
    category: str = "other"
    effective_date: date
    end_date: Optional[date] = None
    is_active: bool = True
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
