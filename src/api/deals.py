from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from src.analytics.deal_financials import DealFinancials
from src.api.dependencies import get_deals_service, get_period_filters
from src.schemas.deals import Deal, DealCreateRequest, DealPreviewRequest, DealUpdateRequest
from src.schemas.pnl import PeriodFilters
from src.services.deals_service import DealsService
from src.shared.response import ResponseEnvelope, build_meta
from src.shared.time import resolve_period_window

router = APIRouter(prefix="/deals", tags=["deals"])


@router.get("")
def list_deals(
    filters: PeriodFilters = Depends(get_period_filters),
    service: DealsService = Depends(get_deals_service),
) -> ResponseEnvelope[List[Deal]]:
    start_date, end_date = resolve_period_window(
        filters.period, None, filters.start_date, filters.end_date
    )
    data = service.list_deals(start_date, end_date)
    meta = build_meta(
        source="deals",
        time_window=filters.period,
        period_start=start_date,
        period_end=end_date,
    )
    return ResponseEnvelope(data=data, pagination=None, meta=meta)


@router.post("/preview")
def preview_deal(
    request: DealPreviewRequest,
    service: DealsService = Depends(get_deals_service),
) -> ResponseEnvelope[DealFinancials]:
    data = service.preview(request)
    return ResponseEnvelope(data=data, meta=build_meta(source="calculation", time_window="now"))


@router.post("", status_code=201)
def create_deal(
    request: DealCreateRequest,
    service: DealsService = Depends(get_deals_service),
) -> ResponseEnvelope[Deal]:
    data = service.create_deal(request)
    return ResponseEnvelope(data=data, meta=build_meta(source="deals", time_window="now"))


@router.patch("/{deal_id}")
def update_deal(
    deal_id: str,
    request: DealUpdateRequest,
    service: DealsService = Depends(get_deals_service),
) -> ResponseEnvelope[Deal]:
    data = service.update_deal(deal_id, request)
    return ResponseEnvelope(data=data, meta=build_meta(source="deals", time_window="now"))
