from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from src.core.supabase import SupabaseClient
from src.models.fulfillment import ClientProfileRecord, OrderRecord

MAX_QUERY_ROWS = 5000

PROFILE_COLUMNS = (
    "id,email,client_name,client_status,leads_purchased,leads_fulfilled,"
    "leads_per_day,onboarding_date,target_delivery_date"
)


class FulfillmentRepository:
    def __init__(self) -> None:
        self.client = SupabaseClient()

    def list_orders(self, client_id: Optional[str], status: Optional[str]) -> List[OrderRecord]:
        filters: List[Tuple[str, str]] = []
        if client_id:
            filters.append(("client_id", f"eq.{client_id}"))
        if status:
            filters.append(("status", f"eq.{status}"))
        rows, _ = self.client.select(
            table="orders",
            select="*,clients:client_id(id,client_name,email)",
            filters=filters,
            limit=MAX_QUERY_ROWS,
            order="created_at.desc",
        )
        return [OrderRecord.model_validate(row) for row in rows]

    def list_client_profiles(self) -> List[ClientProfileRecord]:
        rows, _ = self.client.select(
            table="profiles",
            select=PROFILE_COLUMNS,
            filters=[("client_name", "not.is.null")],
            limit=MAX_QUERY_ROWS,
        )
        return [ClientProfileRecord.model_validate(row) for row in rows]

    def update_client_profile(
        self, client_id: str, payload: Dict[str, Any]
    ) -> Optional[ClientProfileRecord]:
        rows = self.client.update("profiles", payload, [("id", f"eq.{client_id}")])
        return ClientProfileRecord.model_validate(rows[0]) if rows else None
