"""
Streak calculation
A day counts toward the streak only when every habit met its target that day
"""
from datetime import date, timedelta
from typing import Dict, Optional, Sequence, Tuple

from hotstreak.core.constants import STREAK_MAX_DAYS
from hotstreak.models.habit import Completion, Habit
from hotstreak.utils.timezone import get_local_today_date
from .aggregator import is_done


def _index_counts(completions: Sequence[Completion]) -> Dict[Tuple[str, date], int]:
    counts = {}
    for completion in completions:
        # First record wins when the cache holds duplicates for a habit/day
        counts.setdefault((completion.habit_id, completion.completion_date), completion.count)
    return counts


def is_day_completed(habits: Sequence[Habit], completions: Sequence[Completion], on_date: date) -> bool:
    """
    Check whether every habit met its target on a date

    A day with no habits never counts as completed.
    """
    return _all_done(habits, _index_counts(completions), on_date)


def _all_done(habits: Sequence[Habit], counts: Dict[Tuple[str, date], int], on_date: date) -> bool:
    if not habits:
        return False
    return all(
        is_done(counts.get((habit.id, on_date), 0), habit.target_count)
        for habit in habits
    )


def calculate_streak(habits: Sequence[Habit], completions: Sequence[Completion],
                     today: Optional[date] = None) -> int:
    """
    Count consecutive fully-completed days ending today

    Walks backward from today and stops at the first day where any habit
    fell short of its current target. The walk is capped at STREAK_MAX_DAYS,
    so a streak of exactly that length is indistinguishable from a longer one.

    Args:
        habits: All of the user's habits
        completions: Completions covering the days to inspect
        today: Local calendar date to start from (defaults to today in APP_TIMEZONE)

    Returns:
        Streak length between 0 and STREAK_MAX_DAYS
    """
    if not habits:
        return 0

    if today is None:
        today = get_local_today_date()
    counts = _index_counts(completions)

    streak = 0
    for offset in range(STREAK_MAX_DAYS):
        if not _all_done(habits, counts, today - timedelta(days=offset)):
            break
        streak += 1
    return streak
