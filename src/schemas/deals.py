from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import ConfigDict, Field

from src.analytics.deal_financials import DealFinancials
from src.shared.base import BaseSchema, Money


class DealCreateRequest(BaseSchema):
    model_config = ConfigDict(extra="forbid")

    company_name: str = Field(min_length=1, max_length=200)
    revenue_inc_vat: Money = Field(gt=0)
    leads_sold: int = Field(gt=0)
    lead_sale_price: Money = Field(gt=0)
    setter_commission_percent: float = Field(default=0, ge=0, le=100)
    sales_rep_commission_percent: float = Field(default=0, ge=0, le=100)
    close_date: date
    notes: Optional[str] = Field(default=None, max_length=2000)


class DealUpdateRequest(BaseSchema):
    model_config = ConfigDict(extra="forbid")

    company_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    revenue_inc_vat: Optional[Money] = Field(default=None, gt=0)
    leads_sold: Optional[int] = Field(default=None, gt=0)
    lead_sale_price: Optional[Money] = Field(default=None, gt=0)
    setter_commission_percent: Optional[float] = Field(default=None, ge=0, le=100)
    sales_rep_commission_percent: Optional[float] = Field(default=None, ge=0, le=100)
    close_date: Optional[date] = None
    notes: Optional[str] = Field(default=None, max_length=2000)


class DealPreviewRequest(BaseSchema):
    model_config = ConfigDict(extra="forbid")

    revenue_inc_vat: Money = Field(gt=0)
    leads_sold: int = Field(gt=0)
    setter_commission_percent: float = Field(default=0, ge=0, le=100)
    sales_rep_commission_percent: float = Field(default=0, ge=0, le=100)


class Deal(BaseSchema):
    id: str
    company_name: str
    close_date: date
    leads_sold: int
    lead_sale_price: Money
    setter_commission_percent: float
    sales_rep_commission_percent: float
    financials: DealFinancials
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
