from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel

from src.analytics.performance import RepTargets


class SalesRepRecord(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    is_active: bool = True
    daily_calls_target: float = 0
    daily_hours_target: float = 0
    daily_bookings_target: float = 0
    daily_pipeline_target: float = 0
    weekly_bookings_target: Optional[float] = None
    weekly_pipeline_target: Optional[float] = None

    @property
    def targets(self) -> RepTargets:
        return RepTargets(
            daily_calls=self.daily_calls_target,
            daily_hours=self.daily_hours_target,
            daily_bookings=self.daily_bookings_target,
            daily_pipeline=self.daily_pipeline_target,
        )


class DailyReportRecord(BaseModel):
    id: str
    rep_id: str
    report_date: date
    time_on_dialer_minutes: int = 0
    calls_made: int = 0
    bookings_made: int = 0
    pipeline_value: float = 0
    ai_extracted_time_minutes: Optional[int] = None
    ai_extracted_calls: Optional[int] = None
    ai_confidence_score: Optional[float] = None
    screenshot_url: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[str] = None
    submitted_at: Optional[datetime] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    review_notes: Optional[str] = None
    # Values as submitted, kept from the first edit onwards.
    original_calls_made: Optional[int] = None
    original_time_minutes: Optional[int] = None
    original_bookings: Optional[int] = None
    original_pipeline: Optional[float] = None
    # PostgREST embeds the joined rep under the table name.
    sales_reps: Optional[SalesRepRecord] = None
