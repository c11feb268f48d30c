from __future__ import annotations

# UK VAT; revenue is recorded gross and stored net of this rate.
VAT_RATE = 0.20
# Share of net revenue reserved for operating overhead on every deal.
OPERATING_EXPENSE_RATE = 0.20
# Flat cost of sourcing and delivering one lead, in the deal currency.
LEAD_FULFILLMENT_UNIT_COST = 20.0
# Days-remaining stand-in for orders without a target date; sorts them last.
NO_DEADLINE_DAYS = 999
# Completion deficit weight in the priority score; dominates days remaining.
COMPLETION_WEIGHT = 1000

AHEAD_THRESHOLD = 100
ON_TRACK_THRESHOLD = 80
BEHIND_THRESHOLD = 50
