"""
Habits Service - Read models built from a loaded HabitState
"""
from datetime import date
from typing import Optional

from hotstreak.models.habit import DailySummary, HabitsOverview, StreakResponse
from hotstreak.utils.timezone import get_local_today_date
from .aggregator import habit_progress
from .state import HabitState
from .streaks import calculate_streak


def get_habits_overview(state: HabitState, today: Optional[date] = None) -> HabitsOverview:
    """
    Get all habits with today's progress and the current streak

    Args:
        state: Loaded habits and completions
        today: Local calendar date (defaults to today in APP_TIMEZONE)

    Returns:
        HabitsOverview with one progress entry per habit, in state order
    """
    if today is None:
        today = get_local_today_date()

    return HabitsOverview(
        date=today,
        streak=calculate_streak(state.habits, state.completions, today),
        habits=[habit_progress(h, today, state.completions) for h in state.habits]
    )


def get_streak(state: HabitState, today: Optional[date] = None) -> StreakResponse:
    """Get the current streak"""
    if today is None:
        today = get_local_today_date()
    return StreakResponse(date=today, streak=calculate_streak(state.habits, state.completions, today))


def get_daily_summary(state: HabitState, today: Optional[date] = None) -> DailySummary:
    """
    Get today's summary of habit completion including totals and completion rate

    Args:
        state: Loaded habits and completions
        today: Local calendar date (defaults to today in APP_TIMEZONE)

    Returns:
        DailySummary with done/remaining counts, completion rate and habit names
    """
    if today is None:
        today = get_local_today_date()

    done_habits = []
    remaining_habits = []
    for habit in state.habits:
        if habit_progress(habit, today, state.completions).done:
            done_habits.append(habit.name)
        else:
            remaining_habits.append(habit.name)

    total_habits = len(state.habits)
    completion_rate = (len(done_habits) / total_habits * 100) if total_habits > 0 else 0.0

    return DailySummary(
        date=today,
        total_habits=total_habits,
        done=len(done_habits),
        remaining=len(remaining_habits),
        completion_rate=round(completion_rate, 2),
        done_habits=done_habits,
        remaining_habits=remaining_habits
    )
