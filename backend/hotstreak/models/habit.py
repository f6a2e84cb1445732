"""
Pydantic models for habits and completions
"""
from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List


class Habit(BaseModel):
    """A habit row from the habits table"""
    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: str
    name: str
    icon: str
    target_count: int
    created_at: datetime
    updated_at: Optional[datetime] = None


class Completion(BaseModel):
    """A per-day completion row from the habit_completions table"""
    model_config = ConfigDict(extra="ignore")

    id: str
    habit_id: str
    user_id: str
    completion_date: date
    count: int = 0
    target_count: Optional[int] = Field(
        None, description="Habit target when the first completion of the day was recorded"
    )


class AddHabitRequest(BaseModel):
    """Request model for adding a new habit"""
    name: str = Field(..., max_length=200, description="Habit name")
    icon: str = Field(..., max_length=32, description="Display glyph, usually an emoji")
    target_count: int = Field(1, description="Completions needed per day")


class HabitProgress(BaseModel):
    """A habit together with today's progress"""
    habit: Habit
    count: int
    target_count: int
    done: bool


class HabitsOverview(BaseModel):
    """Response model for the habit list"""
    date: date
    streak: int
    habits: List[HabitProgress]


class CompletionResponse(BaseModel):
    """Response model for a completion increment"""
    completion: Completion
    progress: HabitProgress


class StreakResponse(BaseModel):
    """Response model for the current streak"""
    date: date
    streak: int


class DailySummary(BaseModel):
    """Response model for today's summary"""
    date: date
    total_habits: int
    done: int
    remaining: int
    completion_rate: float
    done_habits: List[str]
    remaining_habits: List[str]
