from __future__ import annotations

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_business_costs_service, get_period_filters, get_pnl_service
from src.models.deals import CostType
from src.schemas.business_costs import (
    BusinessCost,
    BusinessCostCreateRequest,
    BusinessCostFilters,
    BusinessCostUpdateRequest,
)
from src.schemas.pnl import PeriodFilters, PnlReportResponse
from src.services.business_costs_service import BusinessCostsService
from src.services.pnl_service import PnlService
from src.shared.response import ResponseEnvelope, build_meta

router = APIRouter(prefix="/pnl", tags=["pnl"])


def get_business_cost_filters(
    category: str | None = Query(default=None),
    cost_type: CostType | None = Query(default=None),
    is_active: bool | None = Query(default=None),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
) -> BusinessCostFilters:
    return BusinessCostFilters(
        category=category,
        cost_type=cost_type,
        is_active=is_active,
        start_date=start_date,
        end_date=end_date,
    )


@router.get("/report")
def pnl_report(
    filters: PeriodFilters = Depends(get_period_filters),
    service: PnlService = Depends(get_pnl_service),
) -> ResponseEnvelope[PnlReportResponse]:
    data = service.get_report(filters)
    meta = build_meta(
        source="deals,business_costs",
        time_window=filters.period,
        period_start=data.summary.period_start,
        period_end=data.summary.period_end,
    )
    return ResponseEnvelope(data=data, pagination=None, meta=meta)


@router.get("/costs")
def list_business_costs(
    filters: BusinessCostFilters = Depends(get_business_cost_filters),
    service: BusinessCostsService = Depends(get_business_costs_service),
) -> ResponseEnvelope[List[BusinessCost]]:
    data = service.list_costs(filters)
    meta = build_meta(
        source="business_costs",
        time_window="custom",
        period_start=filters.start_date,
        period_end=filters.end_date,
    )
    return ResponseEnvelope(data=data, pagination=None, meta=meta)


@router.post("/costs", status_code=201)
def create_business_cost(
    request: BusinessCostCreateRequest,
    service: BusinessCostsService = Depends(get_business_costs_service),
) -> ResponseEnvelope[BusinessCost]:
    data = service.create_cost(request)
    return ResponseEnvelope(data=data, meta=build_meta(source="business_costs", time_window="now"))


@router.patch("/costs/{cost_id}")
def update_business_cost(
    cost_id: str,
    request: BusinessCostUpdateRequest,
    service: BusinessCostsService = Depends(get_business_costs_service),
) -> ResponseEnvelope[BusinessCost]:
    data = service.update_cost(cost_id, request)
    return ResponseEnvelope(data=data, meta=build_meta(source="business_costs", time_window="now"))
