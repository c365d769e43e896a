from datetime import datetime
from typing import Optional, Sequence

from .models import Recommendation, Spread
from .utils.clock import local_hour

BASELINE_SPREAD_ID = "daily-3"
DEEP_SPREAD_ID = "nine-grid"
EVENING_SPREAD_ID = "five-heart"

MORNING_HOURS = range(6, 12)
EVENING_HOURS = frozenset(list(range(18, 24)) + [0, 1])


def _pick(spreads: Sequence[Spread], spread_id: str, fallback: Optional[Spread]) -> Optional[Spread]:
    for s in spreads:
        if s.id == spread_id:
            return s
    return fallback


def recommend(spreads: Sequence[Spread], history: Sequence[object],
              now: Optional[datetime] = None) -> Recommendation:
    """Suggest a spread from the time of day and how many sessions exist.

    Rules apply in order and a later match overrides an earlier one; an id
    missing from ``spreads`` keeps the previous pick.
    """
    hour = local_hour(now)

    recommended = _pick(spreads, BASELINE_SPREAD_ID, None)
    message = "Tip of the day: choose the spread that feels closest to you."

    if len(history) > 2:
        recommended = _pick(spreads, DEEP_SPREAD_ID, recommended)
        message = "You are ready for depth: try the nine-card analysis."

    if hour in MORNING_HOURS:
        recommended = _pick(spreads, BASELINE_SPREAD_ID, recommended)
        message = "Morning focus: a short spread to tune your day."

    if hour in EVENING_HOURS:
        recommended = _pick(spreads, EVENING_SPREAD_ID, recommended)
        message = "Evening softness: a spread about feelings and balance."

    return Recommendation(
        recommended_id=recommended.id if recommended else None,
        message=message,
    )
