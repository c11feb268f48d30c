from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import ConfigDict, Field, model_validator

from src.models.deals import CostFrequency, CostType
from src.shared.base import BaseSchema, Money


class BusinessCost(BaseSchema):
    id: str
    name: str
    description: Optional[str] = None
    amount: Money
    cost_type: CostType
    frequency: Optional[CostFrequency] = None
    category: str
    effective_date: date
    end_date: Optional[date] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BusinessCostFilters(BaseSchema):
    category: Optional[str] = None
    cost_type: Optional[CostType] = None
    is_active: Optional[bool] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class BusinessCostCreateRequest(BaseSchema):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    amount: Money = Field(gt=0)
    cost_type: CostType
    frequency: Optional[CostFrequency] = None
    category: str = Field(min_length=1, max_length=100)
    effective_date: date
    end_date: Optional[date] = None
    is_active: bool = True

    @model_validator(mode="after")
    def _check_schedule(self) -> "BusinessCostCreateRequest":
        if self.cost_type == "recurring" and self.frequency is None:
            raise ValueError("frequency is required for recurring costs")
        if self.end_date and self.end_date < self.effective_date:
            raise ValueError("end_date must not be before effective_date")
        return self


class BusinessCostUpdateRequest(BaseSchema):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    amount: Optional[Money] = Field(default=None, gt=0)
    cost_type: Optional[CostType] = None
    frequency: Optional[CostFrequency] = None
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)
    effective_date: Optional[date] = None
    end_date: Optional[date] = None
    is_active: Optional[bool] = None
