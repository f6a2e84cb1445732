"""
Habit Mutator - Applies habit and completion changes through the record store
and reconciles the caller's HabitState with what the store returns
"""
from datetime import date, timedelta
from typing import Optional, Dict, Any
import logging

from hotstreak.core.constants import (
    COMPLETIONS_TABLE,
    HABITS_TABLE,
    INCREMENT_MAX_ATTEMPTS,
    STREAK_MAX_DAYS
)
from hotstreak.core.exceptions import (
    AuthRequiredError,
    DuplicateRecordError,
    HabitNotFoundError,
    StoreConflictError
)
from hotstreak.models.habit import Completion, Habit
from hotstreak.utils.timezone import get_local_today_date
from .state import HabitState

logger = logging.getLogger(__name__)


class HabitMutator:
    """
    Translates user intents into store operations

    The state is only changed after the store confirms an operation, and
    always with the record the store sent back.
    """

    def __init__(self, store, state: Optional[HabitState] = None):
        self.store = store
        self.state = state if state is not None else HabitState()

    def _require_user(self) -> Dict[str, Any]:
        user = self.store.current_user()
        if not user:
            raise AuthRequiredError("Sign in required")
        return user

    def load(self, today: Optional[date] = None) -> HabitState:
        """
        Replace the state with the user's habits and recent completions

        Completions are loaded for the window the streak calculation can see,
        ordered by id so paged reads stay stable.

        Raises:
            AuthRequiredError: If there is no signed-in user
            StoreFailureError: If either query fails
        """
        user = self._require_user()
        if today is None:
            today = get_local_today_date()
        window_start = today - timedelta(days=STREAK_MAX_DAYS - 1)

        habit_rows = self.store.query(
            HABITS_TABLE,
            [("user_id", "eq", user["id"])],
            order_by="created_at"
        )
        completion_rows = self.store.query(
            COMPLETIONS_TABLE,
            [
                ("user_id", "eq", user["id"]),
                ("completion_date", "gte", window_start.isoformat()),
                ("completion_date", "lte", today.isoformat())
            ],
            order_by="id"
        )

        self.state.habits = [Habit.model_validate(row) for row in habit_rows]
        self.state.completions = [Completion.model_validate(row) for row in completion_rows]
        return self.state

    def add_habit(self, name: str, icon: str, target_count: int) -> Optional[Habit]:
        """
        Create a habit for the signed-in user

        Returns:
            The stored habit, or None if the input was rejected (no store call)

        Raises:
            AuthRequiredError: If there is no signed-in user
            StoreFailureError: If the insert fails
        """
        if not name or not name.strip() or not icon or target_count < 1:
            logger.info("Rejected habit with missing name/icon or non-positive target")
            return None

        user = self._require_user()
        row = self.store.insert(HABITS_TABLE, {
            "user_id": user["id"],
            "name": name,
            "icon": icon,
            "target_count": target_count
        })
        habit = Habit.model_validate(row)
        self.state.habits.append(habit)
        logger.info(f"Added habit {habit.id} ({habit.name})")
        return habit

    def delete_habit(self, habit_id: str) -> None:
        """
        Delete a habit; the state is only updated once the store confirms

        Raises:
            AuthRequiredError: If there is no signed-in user
            HabitNotFoundError: If no habit with that id is visible to the user
            StoreFailureError: If the delete fails
        """
        self._require_user()
        if not self.store.delete(HABITS_TABLE, habit_id):
            raise HabitNotFoundError(f"Habit {habit_id} not found")
        self.state.remove_habit(habit_id)
        logger.info(f"Deleted habit {habit_id}")

    def increment_completion(self, habit_id: str, today: Optional[date] = None) -> Completion:
        """
        Add one completion to a habit for today

        Creates today's completion with count 1 if none exists, otherwise
        bumps the existing count through a conditional update.

        Returns:
            The completion as stored after the increment

        Raises:
            AuthRequiredError: If there is no signed-in user
            HabitNotFoundError: If the habit is not in the state
            StoreConflictError: If concurrent writers keep winning the update
            StoreFailureError: If a store call fails
        """
        if today is None:
            today = get_local_today_date()
        user = self._require_user()

        habit = self.state.find_habit(habit_id)
        if habit is None:
            raise HabitNotFoundError(f"Habit {habit_id} not found")

        existing = self.state.find_completion(habit_id, today)
        if existing is None:
            try:
                row = self.store.insert(COMPLETIONS_TABLE, {
                    "habit_id": habit_id,
                    "user_id": user["id"],
                    "completion_date": today.isoformat(),
                    "count": 1,
                    "target_count": habit.target_count
                })
            except DuplicateRecordError:
                # Another session created today's row first
                logger.warning(f"Completion for habit {habit_id} on {today} already exists, re-reading")
                existing = self._fetch_completion(habit_id, today)
                if existing is None:
                    raise StoreConflictError(f"Completion for habit {habit_id} on {today} could not be read back")
            else:
                completion = Completion.model_validate(row)
                self.state.completions.append(completion)
                return completion

        return self._compare_and_increment(existing)

    def _compare_and_increment(self, current: Completion) -> Completion:
        for attempt in range(1, INCREMENT_MAX_ATTEMPTS + 1):
            row = self.store.update(
                COMPLETIONS_TABLE,
                current.id,
                {"count": current.count + 1},
                match={"count": current.count}
            )
            if row is not None:
                completion = Completion.model_validate(row)
                self.state.put_completion(completion)
                return completion

            logger.warning(
                f"Completion {current.id} changed since count {current.count} "
                f"(attempt {attempt}/{INCREMENT_MAX_ATTEMPTS})"
            )
            rows = self.store.query(COMPLETIONS_TABLE, [("id", "eq", current.id)])
            if not rows:
                raise StoreConflictError(f"Completion {current.id} no longer exists")
            current = Completion.model_validate(rows[0])

        raise StoreConflictError(
            f"Completion {current.id} kept changing, gave up after {INCREMENT_MAX_ATTEMPTS} attempts"
        )

    def _fetch_completion(self, habit_id: str, on_date: date) -> Optional[Completion]:
        rows = self.store.query(COMPLETIONS_TABLE, [
            ("habit_id", "eq", habit_id),
            ("completion_date", "eq", on_date.isoformat())
        ])
        return Completion.model_validate(rows[0]) if rows else None
