from __future__ import annotations

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import ConfigDict, Field, model_validator

from src.shared.base import BaseSchema

OrderSort = Literal["priority", "created"]


class FulfillmentProgress(BaseSchema):
    leads_purchased: int
    leads_fulfilled: int
    completion_percentage: int
    progress_width: float
    days_remaining: Optional[int] = None
    is_overdue: bool
    priority_score: float


class OrderSummary(BaseSchema):
    id: str
    order_number: str
    client_id: str
    client_name: str
    status: str
    start_date: Optional[date] = None
    target_delivery_date: Optional[date] = None
    leads_per_day: Optional[float] = None
    created_at: Optional[datetime] = None
    progress: FulfillmentProgress


class ClientFulfillment(BaseSchema):
    id: str
    client_name: Optional[str] = None
    email: str
    client_status: Optional[str] = None
    onboarding_date: Optional[date] = None
    target_delivery_date: Optional[date] = None
    leads_per_day: Optional[float] = None
    progress: FulfillmentProgress


class OrderListFilters(BaseSchema):
    client_id: Optional[str] = None
    status: Optional[str] = None
    sort_by: OrderSort = "priority"


class ClientScheduleRequest(BaseSchema):
    model_config = ConfigDict(extra="forbid")

    leads_purchased: int = Field(ge=0)
    onboarding_date: date
    target_delivery_date: date

    @model_validator(mode="after")
    def _target_after_onboarding(self) -> "ClientScheduleRequest":
        if self.target_delivery_date < self.onboarding_date:
            raise ValueError("target_delivery_date must not be before onboarding_date")
        return self
