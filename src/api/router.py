from __future__ import annotations

from fastapi import APIRouter

from src.api.deals import router as deals_router
from src.api.fulfillment import router as fulfillment_router
from src.api.health import router as health_router
from src.api.pnl import router as pnl_router
from src.api.reporting import router as reporting_router


api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(reporting_router)
api_router.include_router(deals_router)
api_router.include_router(pnl_router)
api_router.include_router(fulfillment_router)
