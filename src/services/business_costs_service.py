from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from src.core.errors import BadRequestError, NotFoundError
from src.models.deals import BusinessCostRecord
from src.repositories.deals_repository import DealsRepository
from src.schemas.business_costs import (
    BusinessCost,
    BusinessCostCreateRequest,
    BusinessCostFilters,
    BusinessCostUpdateRequest,
)

logger = logging.getLogger(__name__)

# Columns that may be cleared by sending null.
NULLABLE_FIELDS = frozenset({"description", "frequency", "end_date"})
DATE_FIELDS = ("effective_date", "end_date")


class BusinessCostsService:
    def __init__(self, repository: DealsRepository) -> None:
        self.repository = repository

    def list_costs(self, filters: BusinessCostFilters) -> List[BusinessCost]:
        records = self.repository.list_business_costs(
            category=filters.category,
            cost_type=filters.cost_type,
            is_active=filters.is_active,
            start_date=filters.start_date,
            end_date=filters.end_date,
        )
        return [self._to_cost(record) for record in records]

    def create_cost(self, request: BusinessCostCreateRequest, created_by: Optional[str] = None) -> BusinessCost:
        payload: Dict[str, Any] = {
            "name": request.name.strip(),
            "description": request.description or None,
            "amount": request.amount,
            "cost_type": request.cost_type,
            "frequency": request.frequency if request.cost_type == "recurring" else None,
            "category": request.category.strip(),
            "effective_date": request.effective_date.isoformat(),
            "end_date": request.end_date.isoformat() if request.end_date else None,
            "is_active": request.is_active,
            "created_by": created_by,
        }
        record = self.repository.create_business_cost(payload)
        logger.info("Created business cost %s (%s)", record.id, record.name)
        return self._to_cost(record)

    def update_cost(self, cost_id: str, request: BusinessCostUpdateRequest) -> BusinessCost:
        changes = {
            field: value
            for field, value in request.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_FIELDS
        }
        if not changes:
            raise BadRequestError("No fields to update")
        for field in ("name", "category"):
            if field in changes:
                changes[field] = changes[field].strip()

        existing = self.repository.get_business_cost(cost_id)
        if not existing:
            raise NotFoundError("Business cost not found")
        merged = existing.model_copy(update=changes)
        if merged.cost_type == "recurring" and merged.frequency is None:
            raise BadRequestError("Frequency is required for recurring costs")
        if merged.cost_type == "one_time" and merged.frequency is not None:
            changes["frequency"] = None
        if merged.end_date and merged.end_date < merged.effective_date:
            raise BadRequestError("end_date must not be before effective_date")

        payload = dict(changes)
        for field in DATE_FIELDS:
            if payload.get(field) is not None:
                payload[field] = payload[field].isoformat()
        record = self.repository.update_business_cost(cost_id, payload)
        if not record:
            raise NotFoundError("Business cost not found")
        logger.info("Updated business cost %s", cost_id)
        return self._to_cost(record)

    @staticmethod
    def _to_cost(record: BusinessCostRecord) -> BusinessCost:
        return BusinessCost(**record.model_dump())
