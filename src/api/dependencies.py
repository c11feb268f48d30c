from __future__ import annotations

from datetime import date
from functools import lru_cache

from fastapi import Query

from src.repositories.deals_repository import DealsRepository
from src.repositories.fulfillment_repository import FulfillmentRepository
from src.repositories.reporting_repository import ReportingRepository
from src.schemas.pnl import PeriodFilters, ReportingPeriod
from src.services.business_costs_service import BusinessCostsService
from src.services.deals_service import DealsService
from src.services.fulfillment_service import FulfillmentService
from src.services.pnl_service import PnlService
from src.services.reporting_service import ReportingService


@lru_cache
def get_reporting_repository() -> ReportingRepository:
    return ReportingRepository()


def get_reporting_service() -> ReportingService:
    return ReportingService(repository=get_reporting_repository())


@lru_cache
def get_deals_repository() -> DealsRepository:
    return DealsRepository()


def get_deals_service() -> DealsService:
    return DealsService(repository=get_deals_repository())


def get_pnl_service() -> PnlService:
    return PnlService(repository=get_deals_repository())


def get_business_costs_service() -> BusinessCostsService:
    return BusinessCostsService(repository=get_deals_repository())


@lru_cache
def get_fulfillment_repository() -> FulfillmentRepository:
    return FulfillmentRepository()


def get_fulfillment_service() -> FulfillmentService:
    return FulfillmentService(repository=get_fulfillment_repository())


def get_period_filters(
    period: ReportingPeriod = Query(default="monthly"),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
) -> PeriodFilters:
    return PeriodFilters(period=period, start_date=start_date, end_date=end_date)
