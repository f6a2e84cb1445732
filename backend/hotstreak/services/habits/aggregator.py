"""
Completion aggregation - per-day counts and the "done" rule
"""
from datetime import date
from typing import Iterable, Optional

from hotstreak.models.habit import Completion, Habit, HabitProgress


def find_completion(habit_id: str, on_date: date, completions: Iterable[Completion]) -> Optional[Completion]:
    """
    Find the completion for a habit on a date

    Returns:
        The first matching record, or None if there is none
    """
    for completion in completions:
        if completion.habit_id == habit_id and completion.completion_date == on_date:
            return completion
    return None


def completion_count_for(habit_id: str, on_date: date, completions: Iterable[Completion]) -> int:
    """
    Count how many times a habit was completed on a date

    Args:
        habit_id: The habit ID
        on_date: Calendar date to look up
        completions: Completions already loaded by the caller

    Returns:
        The count of the first matching record, or 0 if there is none
    """
    completion = find_completion(habit_id, on_date, completions)
    return completion.count if completion else 0


def is_done(count: int, target_count: int) -> bool:
    """A habit is done for the day once its count reaches the target"""
    return count >= target_count


def habit_progress(habit: Habit, on_date: date, completions: Iterable[Completion]) -> HabitProgress:
    count = completion_count_for(habit.id, on_date, completions)
    return HabitProgress(
        habit=habit,
        count=count,
        target_count=habit.target_count,
        done=is_done(count, habit.target_count)
    )
