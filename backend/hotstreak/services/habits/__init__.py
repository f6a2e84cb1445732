"""
Habits module - Core habit tracking functionality
"""
from . import aggregator
from . import mutator
from . import repository
from . import service
from . import state
from . import streaks

# Export commonly used names for convenience
from .aggregator import completion_count_for, find_completion, habit_progress, is_done
from .mutator import HabitMutator
from .repository import SupabaseRecordStore
from .service import get_daily_summary, get_habits_overview, get_streak
from .state import HabitState
from .streaks import calculate_streak, is_day_completed

__all__ = [
    # Modules
    'aggregator',
    'mutator',
    'repository',
    'service',
    'state',
    'streaks',

    # Aggregation and streaks
    'completion_count_for',
    'find_completion',
    'habit_progress',
    'is_done',
    'calculate_streak',
    'is_day_completed',

    # State and mutations
    'HabitState',
    'HabitMutator',
    'SupabaseRecordStore',

    # Read models
    'get_habits_overview',
    'get_streak',
    'get_daily_summary'
]
