from __future__ import annotations

from datetime import date
from typing import Callable, Iterable, List, Optional, TypeVar

from src.analytics.constants import COMPLETION_WEIGHT, NO_DEADLINE_DAYS
from src.shared.base import ValueSchema
from src.shared.rounding import round_half_up
from src.shared.time import calculate_work_days, get_days_remaining, to_instant

T = TypeVar("T")


class FulfillmentRecord(ValueSchema):
    # leads_fulfilled may exceed leads_purchased; callers guard if they care.
    leads_purchased: int
    leads_fulfilled: int
    target_date: Optional[date] = None


def get_priority_score(
    fulfilled: float,
    purchased: float,
    target_date: Optional[date],
    today: Optional[date] = None,
    *,
    no_deadline_days: int = NO_DEADLINE_DAYS,
) -> float:
    # Lower is more urgent; overdue orders have negative days remaining.
    completion_rate = fulfilled / purchased if purchased > 0 else 0
    days_remaining = get_days_remaining(target_date, today) if target_date else no_deadline_days
    return (1 - completion_rate) * COMPLETION_WEIGHT + days_remaining


def calculate_leads_per_day(
    purchased: float, onboarding_date: date, target_date: date
) -> Optional[float]:
    if purchased <= 0:
        return None
    if to_instant(onboarding_date) >= to_instant(target_date):
        return None
    work_days = calculate_work_days(onboarding_date, target_date)
    if work_days == 0:
        return None
    return round_half_up(purchased / work_days, 2)


def rank_by_priority(
    items: Iterable[T],
    record_of: Callable[[T], FulfillmentRecord],
    today: Optional[date] = None,
    *,
    no_deadline_days: int = NO_DEADLINE_DAYS,
) -> List[T]:
    reference = today or date.today()

    def score(item: T) -> float:
        record = record_of(item)
        return get_priority_score(
            record.leads_fulfilled,
            record.leads_purchased,
            record.target_date,
            reference,
            no_deadline_days=no_deadline_days,
        )

    return sorted(items, key=score)
