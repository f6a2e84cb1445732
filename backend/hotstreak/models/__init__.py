"""
Pydantic models for the application
"""
from hotstreak.models.habit import (
    Habit,
    Completion,
    AddHabitRequest,
    HabitProgress,
    HabitsOverview,
    CompletionResponse,
    StreakResponse,
    DailySummary
)

__all__ = [
    "Habit",
    "Completion",
    "AddHabitRequest",
    "HabitProgress",
    "HabitsOverview",
    "CompletionResponse",
    "StreakResponse",
    "DailySummary"
]
