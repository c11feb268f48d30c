from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from src.core.errors import UpstreamError
from src.core.supabase import SupabaseClient
from src.models.deals import BusinessCostRecord, DealRecord

MAX_QUERY_ROWS = 5000


class DealsRepository:
    def __init__(self) -> None:
        self.client = SupabaseClient()

    def list_deals(self, start_date: date, end_date: date) -> List[DealRecord]:
        rows, _ = self.client.select(
            table="deals",
            select="*",
            filters=[
                ("close_date", f"gte.{start_date.isoformat()}"),
                ("close_date", f"lte.{end_date.isoformat()}"),
            ],
            limit=MAX_QUERY_ROWS,
            order="close_date.desc",
        )
        return [DealRecord.model_validate(row) for row in rows]

    def get_deal(self, deal_id: str) -> Optional[DealRecord]:
        row = self.client.select_one("deals", "*", [("id", f"eq.{deal_id}")])
        return DealRecord.model_validate(row) if row else None

    def create_deal(self, payload: Dict[str, Any]) -> DealRecord:
        rows = self.client.insert("deals", payload)
        if not rows:
            raise UpstreamError("Supabase returned no row for the created deal")
        return DealRecord.model_validate(rows[0])

    def update_deal(self, deal_id: str, payload: Dict[str, Any]) -> Optional[DealRecord]:
        rows = self.client.update("deals", payload, [("id", f"eq.{deal_id}")])
        return DealRecord.model_validate(rows[0]) if rows else None

    def list_active_recurring_costs(self) -> List[BusinessCostRecord]:
        rows, _ = self.client.select(
            table="business_costs",
            select="*",
            filters=[("cost_type", "eq.recurring"), ("is_active", "eq.true")],
            limit=MAX_QUERY_ROWS,
        )
        return [BusinessCostRecord.model_validate(row) for row in rows]

    def list_one_time_costs(self, start_date: date, end_date: date) -> List[BusinessCostRecord]:
        rows, _ = self.client.select(
            table="business_costs",
            select="*",
            filters=[
                ("cost_type", "eq.one_time"),
                ("effective_date", f"gte.{start_date.isoformat()}"),
                ("effective_date", f"lte.{end_date.isoformat()}"),
            ],
            limit=MAX_QUERY_ROWS,
        )
        return [BusinessCostRecord.model_validate(row) for row in rows]

    def list_business_costs(
        self,
        category: Optional[str],
        cost_type: Optional[str],
        is_active: Optional[bool],
        start_date: Optional[date],
        end_date: Optional[date],
    ) -> List[BusinessCostRecord]:
        filters: List[Tuple[str, str]] = []
        if category:
            filters.append(("category", f"eq.{category}"))
        if cost_type:
            filters.append(("cost_type", f"eq.{cost_type}"))
        if is_active is not None:
            filters.append(("is_active", f"eq.{str(is_active).lower()}"))
        if start_date:
            filters.append(("effective_date", f"gte.{start_date.isoformat()}"))
        if end_date:
            filters.append(("effective_date", f"lte.{end_date.isoformat()}"))
        rows, _ = self.client.select(
            table="business_costs",
            select="*",
            filters=filters,
            limit=MAX_QUERY_ROWS,
            order="effective_date.desc",
        )
        return [BusinessCostRecord.model_validate(row) for row in rows]

    def get_business_cost(self, cost_id: str) -> Optional[BusinessCostRecord]:
        row = self.client.select_one("business_costs", "*", [("id", f"eq.{cost_id}")])
        return BusinessCostRecord.model_validate(row) if row else None

    def create_business_cost(self, payload: Dict[str, Any]) -> BusinessCostRecord:
        rows = self.client.insert("business_costs", payload)
        if not rows:
            raise UpstreamError("Supabase returned no row for the created business cost")
        return BusinessCostRecord.model_validate(rows[0])

    def update_business_cost(
        self, cost_id: str, payload: Dict[str, Any]
    ) -> Optional[BusinessCostRecord]:
        rows = self.client.update("business_costs", payload, [("id", f"eq.{cost_id}")])
        return BusinessCostRecord.model_validate(rows[0]) if rows else None
