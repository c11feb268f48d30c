from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel

from src.analytics.fulfillment import FulfillmentRecord


class OrderClientRecord(BaseModel):
    id: str
    client_name: Optional[str] = None
    email: Optional[str] = None


class OrderRecord(BaseModel):
    id: str
    client_id: str
    order_number: str
    leads_purchased: int = 0
    leads_delivered: int = 0
    start_date: Optional[date] = None
    target_delivery_date: Optional[date] = None
    status: str = "active"
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    clients: Optional[OrderClientRecord] = None

    @property
    def fulfillment(self) -> FulfillmentRecord:
        return FulfillmentRecord(
            leads_purchased=self.leads_purchased,
            leads_fulfilled=self.leads_delivered,
            target_date=self.target_delivery_date,
        )


class ClientProfileRecord(BaseModel):
    id: str
    email: str
    client_name: Optional[str] = None
    client_status: Optional[str] = None
    leads_purchased: Optional[int] = None
    leads_fulfilled: Optional[int] = None
    leads_per_day: Optional[float] = None
    onboarding_date: Optional[date] = None
    target_delivery_date: Optional[date] = None

    @property
    def fulfillment(self) -> FulfillmentRecord:
        return FulfillmentRecord(
            leads_purchased=self.leads_purchased or 0,
            leads_fulfilled=self.leads_fulfilled or 0,
            target_date=self.target_delivery_date,
        )
