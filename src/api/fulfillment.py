from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_fulfillment_service
from src.schemas.fulfillment import (
    ClientFulfillment,
    ClientScheduleRequest,
    OrderListFilters,
    OrderSort,
    OrderSummary,
)
from src.services.fulfillment_service import FulfillmentService
from src.shared.response import ResponseEnvelope, build_meta

router = APIRouter(prefix="/fulfillment", tags=["fulfillment"])


def get_order_list_filters(
    client_id: str | None = Query(default=None),
    status: str | None = Query(default=None),
    sort_by: OrderSort = Query(default="priority"),
) -> OrderListFilters:
    return OrderListFilters(client_id=client_id, status=status, sort_by=sort_by)


@router.get("/orders")
def list_orders(
    filters: OrderListFilters = Depends(get_order_list_filters),
    service: FulfillmentService = Depends(get_fulfillment_service),
) -> ResponseEnvelope[List[OrderSummary]]:
    data = service.list_orders(filters)
    meta = build_meta(source="orders", time_window="now", currency=None)
    return ResponseEnvelope(data=data, pagination=None, meta=meta)


@router.get("/clients")
def client_queue(
    service: FulfillmentService = Depends(get_fulfillment_service),
) -> ResponseEnvelope[List[ClientFulfillment]]:
    data = service.list_client_queue()
    meta = build_meta(source="profiles", time_window="now", currency=None)
    return ResponseEnvelope(data=data, pagination=None, meta=meta)


@router.put("/clients/{client_id}/schedule")
def schedule_client(
    client_id: str,
    request: ClientScheduleRequest,
    service: FulfillmentService = Depends(get_fulfillment_service),
) -> ResponseEnvelope[ClientFulfillment]:
    data = service.schedule_client(client_id, request)
    meta = build_meta(source="profiles", time_window="now", currency=None)
    return ResponseEnvelope(data=data, pagination=None, meta=meta)
