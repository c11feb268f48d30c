from __future__ import annotations

import argparse
import os
import sys
from datetime import date

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.abspath(os.path.join(SCRIPT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from src.core.config import get_settings  # noqa: E402
from src.core.logging import configure_logging  # noqa: E402
from src.repositories.deals_repository import DealsRepository  # noqa: E402
from src.services.deals_service import DealsService  # noqa: E402


def parse_date(value: str) -> date:
    return date.fromisoformat(value)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Rebuild stored deal cost columns from the configured VAT, expense and lead rates."
    )
    parser.add_argument("--start", type=parse_date, default=date(2000, 1, 1), help="First close date (YYYY-MM-DD)")
    parser.add_argument("--end", type=parse_date, default=date.today(), help="Last close date (YYYY-MM-DD)")
    parser.add_argument(
        "--apply",
        action="store_true",
        help="Write the recalculated columns. Without this flag, script runs in dry-run mode.",
    )
    args = parser.parse_args()
    if args.end < args.start:
        raise SystemExit("--end must not be before --start")

    configure_logging(get_settings().log_level)
    repository = DealsRepository()
    service = DealsService(repository=repository)

    deals = repository.list_deals(args.start, args.end)
    print(f"Deals closed {args.start.isoformat()} to {args.end.isoformat()}: {len(deals)}")

    stale = []
    for deal in deals:
        changes = service.plan_recalculation(deal)
        if changes:
            stale.append((deal, changes))

    if not stale:
        print("All stored figures match the current rates. Nothing to do.")
        return

    for deal, changes in stale:
        summary = ", ".join(
            f"{column} {getattr(deal, column):.2f} -> {value:.2f}" for column, value in changes.items()
        )
        print(f"- {deal.company_name} ({deal.id}): {summary}")

    if not args.apply:
        print(f"\nDry run only. {len(stale)} deal(s) would change. Re-run with --apply to write them.")
        return

    for deal, changes in stale:
        repository.update_deal(deal.id, changes)
    print(f"Updated deals: {len(stale)}")


if __name__ == "__main__":
    main()
