"""
Habit state - the cached habits and completions a presentation layer works on
"""
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from hotstreak.models.habit import Completion, Habit
from .aggregator import find_completion


class HabitState(BaseModel):
    """Habits and completions currently known to the caller"""
    habits: List[Habit] = Field(default_factory=list)
    completions: List[Completion] = Field(default_factory=list)

    def find_habit(self, habit_id: str) -> Optional[Habit]:
        return next((h for h in self.habits if h.id == habit_id), None)

    def find_completion(self, habit_id: str, on_date: date) -> Optional[Completion]:
        return find_completion(habit_id, on_date, self.completions)

    def put_completion(self, completion: Completion) -> None:
        """Replace the cached completion with the same id, or append it"""
        for index, cached in enumerate(self.completions):
            if cached.id == completion.id:
                self.completions[index] = completion
                return
        self.completions.append(completion)

    def remove_habit(self, habit_id: str) -> None:
        """Drop a habit and its cached completions"""
        self.habits = [h for h in self.habits if h.id != habit_id]
        self.completions = [c for c in self.completions if c.habit_id != habit_id]
