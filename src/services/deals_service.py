from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from src.analytics.deal_financials import DealFinancials, DealInputs, compute_from_inputs
from src.core.config import get_settings
from src.core.errors import BadRequestError, NotFoundError
from src.models.deals import DealRecord
from src.repositories.deals_repository import DealsRepository
from src.schemas.deals import Deal, DealCreateRequest, DealPreviewRequest, DealUpdateRequest
from src.shared.rounding import to_decimal

logger = logging.getLogger(__name__)

FINANCIAL_INPUT_FIELDS = frozenset(
    {
        "revenue_inc_vat",
        "leads_sold",
        "lead_sale_price",
        "setter_commission_percent",
        "sales_rep_commission_percent",
    }
)
# Columns that may be cleared by sending null.
NULLABLE_FIELDS = frozenset({"notes"})
RECALCULATION_TOLERANCE = Decimal("0.005")


class DealsService:
    def __init__(self, repository: DealsRepository) -> None:
        self.repository = repository
        self.settings = get_settings()

    def list_deals(self, start_date: date, end_date: date) -> List[Deal]:
        return [self._to_deal(record) for record in self.repository.list_deals(start_date, end_date)]

    def preview(self, request: DealPreviewRequest) -> DealFinancials:
        inputs = DealInputs(
            revenue_inc_vat=request.revenue_inc_vat,
            leads_sold=request.leads_sold,
            # Sale price does not feed the formulas; any positive value will do.
            lead_sale_price=1,
            setter_commission_percent=request.setter_commission_percent,
            sales_rep_commission_percent=request.sales_rep_commission_percent,
        )
        return self._compute(inputs).rounded()

    def create_deal(self, request: DealCreateRequest, created_by: Optional[str] = None) -> Deal:
        inputs = DealInputs(
            revenue_inc_vat=request.revenue_inc_vat,
            leads_sold=request.leads_sold,
            lead_sale_price=request.lead_sale_price,
            setter_commission_percent=request.setter_commission_percent,
            sales_rep_commission_percent=request.sales_rep_commission_percent,
        )
        payload: Dict[str, Any] = {
            "company_name": request.company_name.strip(),
            "close_date": request.close_date.isoformat(),
            "notes": request.notes or None,
            "created_by": created_by,
        }
        payload.update(self._financial_columns(inputs))
        record = self.repository.create_deal(payload)
        logger.info("Created deal %s for %s", record.id, record.company_name)
        return self._to_deal(record)

    def update_deal(self, deal_id: str, request: DealUpdateRequest) -> Deal:
        changes = {
            field: value
            for field, value in request.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_FIELDS
        }
        if not changes:
            raise BadRequestError("No fields to update")

        payload: Dict[str, Any] = {
            field: value for field, value in changes.items() if field not in FINANCIAL_INPUT_FIELDS
        }
        if "close_date" in payload:
            payload["close_date"] = payload["close_date"].isoformat()

        financial_changes = {
            field: value for field, value in changes.items() if field in FINANCIAL_INPUT_FIELDS
        }
        if financial_changes:
            existing = self.repository.get_deal(deal_id)
            if not existing:
                raise NotFoundError("Deal not found")
            # Derived columns must agree with each other, so all of them are rebuilt.
            merged = existing.inputs.model_copy(update=financial_changes)
            payload.update(self._financial_columns(merged))

        record = self.repository.update_deal(deal_id, payload)
        if not record:
            raise NotFoundError("Deal not found")
        logger.info(
            "Updated deal %s (%s)", deal_id, "recalculated" if financial_changes else "details only"
        )
        return self._to_deal(record)

    def plan_recalculation(self, record: DealRecord) -> Dict[str, Any]:
        expected = self._financial_columns(record.inputs)
        return {
            column: value
            for column, value in expected.items()
            if abs(to_decimal(getattr(record, column)) - to_decimal(value)) >= RECALCULATION_TOLERANCE
        }

    def _compute(self, inputs: DealInputs) -> DealFinancials:
        return compute_from_inputs(
            inputs,
            vat_rate=self.settings.vat_rate,
            operating_expense_rate=self.settings.operating_expense_rate,
            lead_unit_cost=self.settings.lead_fulfillment_unit_cost,
        )

    def _financial_columns(self, inputs: DealInputs) -> Dict[str, Any]:
        financials = self._compute(inputs)
        return {
            "revenue_inc_vat": inputs.revenue_inc_vat,
            "leads_sold": inputs.leads_sold,
            "lead_sale_price": inputs.lead_sale_price,
            "setter_commission_percent": inputs.setter_commission_percent,
            "sales_rep_commission_percent": inputs.sales_rep_commission_percent,
            "revenue_net": financials.revenue_net,
            "operating_expense": financials.operating_expense,
            "setter_cost": financials.setter_cost,
            "sales_rep_cost": financials.sales_rep_cost,
            "lead_fulfillment_cost": financials.lead_fulfillment_cost,
        }

    @staticmethod
    def _to_deal(record: DealRecord) -> Deal:
        # Stored figures win over a recomputation so settings changes never rewrite history.
        total_costs = (
            record.operating_expense
            + record.setter_cost
            + record.sales_rep_cost
            + record.lead_fulfillment_cost
        )
        gross_profit = record.revenue_net - total_costs
        financials = DealFinancials(
            revenue_inc_vat=record.revenue_inc_vat,
            revenue_net=record.revenue_net,
            vat_deducted=record.revenue_inc_vat - record.revenue_net,
            operating_expense=record.operating_expense,
            setter_cost=record.setter_cost,
            sales_rep_cost=record.sales_rep_cost,
            lead_fulfillment_cost=record.lead_fulfillment_cost,
            total_costs=total_costs,
            gross_profit=gross_profit,
            profit_margin=gross_profit / record.revenue_net * 100 if record.revenue_net > 0 else Decimal("0"),
        )
        return Deal(
            id=record.id,
            company_name=record.company_name,
            close_date=record.close_date,
            leads_sold=record.leads_sold,
            lead_sale_price=record.lead_sale_price,
            setter_commission_percent=record.setter_commission_percent,
            sales_rep_commission_percent=record.sales_rep_commission_percent,
            financials=financials.rounded(),
            notes=record.notes,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
