from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from src.analytics.fulfillment import (
    FulfillmentRecord,
    calculate_leads_per_day,
    get_priority_score,
    rank_by_priority,
)
from src.analytics.performance import get_completion_percentage, get_progress_width
from src.core.config import get_settings
from src.core.errors import NotFoundError
from src.models.fulfillment import ClientProfileRecord, OrderRecord
from src.repositories.fulfillment_repository import FulfillmentRepository
from src.schemas.fulfillment import (
    ClientFulfillment,
    ClientScheduleRequest,
    FulfillmentProgress,
    OrderListFilters,
    OrderSummary,
)
from src.shared.time import get_days_remaining

logger = logging.getLogger(__name__)


def _missing_target_reason(request: ClientScheduleRequest) -> str:
    if request.leads_purchased <= 0:
        return "no leads purchased"
    if request.onboarding_date >= request.target_delivery_date:
        return "target date is not after onboarding"
    return "schedule has no work days"


class FulfillmentService:
    def __init__(self, repository: FulfillmentRepository) -> None:
        self.repository = repository
        self.settings = get_settings()

    def list_orders(self, filters: OrderListFilters, today: Optional[date] = None) -> List[OrderSummary]:
        as_of = today or date.today()
        orders = self.repository.list_orders(filters.client_id, filters.status)
        if filters.sort_by == "priority":
            orders = rank_by_priority(
                orders,
                lambda order: order.fulfillment,
                as_of,
                no_deadline_days=self.settings.no_deadline_days,
            )
        return [self._to_order_summary(order, as_of) for order in orders]

    def list_client_queue(self, today: Optional[date] = None) -> List[ClientFulfillment]:
        as_of = today or date.today()
        profiles = rank_by_priority(
            self.repository.list_client_profiles(),
            lambda profile: profile.fulfillment,
            as_of,
            no_deadline_days=self.settings.no_deadline_days,
        )
        return [self._to_client_fulfillment(profile, as_of) for profile in profiles]

    def schedule_client(
        self, client_id: str, request: ClientScheduleRequest, today: Optional[date] = None
    ) -> ClientFulfillment:
        leads_per_day = calculate_leads_per_day(
            request.leads_purchased, request.onboarding_date, request.target_delivery_date
        )
        profile = self.repository.update_client_profile(
            client_id,
            {
                "leads_purchased": request.leads_purchased,
                "onboarding_date": request.onboarding_date.isoformat(),
                "target_delivery_date": request.target_delivery_date.isoformat(),
                "leads_per_day": leads_per_day,
            },
        )
        if not profile:
            raise NotFoundError("Client not found")
        if leads_per_day is None:
            logger.warning(
                "No daily lead target for client %s: %s", client_id, _missing_target_reason(request)
            )
        else:
            logger.info("Scheduled client %s at %s leads per day", client_id, leads_per_day)
        return self._to_client_fulfillment(profile, today or date.today())

    def _progress(self, record: FulfillmentRecord, today: date) -> FulfillmentProgress:
        completion = get_completion_percentage(record.leads_fulfilled, record.leads_purchased)
        days_remaining = (
            get_days_remaining(record.target_date, today) if record.target_date else None
        )
        return FulfillmentProgress(
            leads_purchased=record.leads_purchased,
            leads_fulfilled=record.leads_fulfilled,
            completion_percentage=completion,
            progress_width=get_progress_width(completion),
            days_remaining=days_remaining,
            is_overdue=days_remaining is not None and days_remaining < 0 and completion < 100,
            priority_score=get_priority_score(
                record.leads_fulfilled,
                record.leads_purchased,
                record.target_date,
                today,
                no_deadline_days=self.settings.no_deadline_days,
            ),
        )

    def _to_order_summary(self, order: OrderRecord, today: date) -> OrderSummary:
        leads_per_day = None
        if order.start_date and order.target_delivery_date:
            leads_per_day = calculate_leads_per_day(
                order.leads_purchased, order.start_date, order.target_delivery_date
            )
        return OrderSummary(
            id=order.id,
            order_number=order.order_number,
            client_id=order.client_id,
            client_name=(order.clients.client_name if order.clients else None) or "Unknown",
            status=order.status,
            start_date=order.start_date,
            target_delivery_date=order.target_delivery_date,
            leads_per_day=leads_per_day,
            created_at=order.created_at,
            progress=self._progress(order.fulfillment, today),
        )

    def _to_client_fulfillment(self, profile: ClientProfileRecord, today: date) -> ClientFulfillment:
        return ClientFulfillment(
            id=profile.id,
            client_name=profile.client_name,
            email=profile.email,
            client_status=profile.client_status,
            onboarding_date=profile.onboarding_date,
            target_delivery_date=profile.target_delivery_date,
            leads_per_day=profile.leads_per_day,
            progress=self._progress(profile.fulfillment, today),
        )
