from datetime import timedelta

import pytest

from hotstreak.core.exceptions import (
    AuthRequiredError,
    HabitNotFoundError,
    StoreConflictError,
    StoreFailureError
)
from hotstreak.services.habits.aggregator import completion_count_for
from hotstreak.services.habits.mutator import HabitMutator
from hotstreak.services.habits.repository import SupabaseRecordStore
from hotstreak.services.habits.service import get_streak
from hotstreak.services.habits.state import HabitState
from tests.factories import USER, FakeRecordStore, FakeSupabaseClient, make_completion, make_habit


@pytest.fixture
def mutator(store):
    return HabitMutator(store, HabitState(habits=[make_habit("h1", target_count=3)]))


class TestAddHabit:
    @pytest.mark.parametrize("name, icon, target", [
        ("", "🔥", 3),
        ("   ", "🔥", 3),
        ("Run", "", 3),
        ("Run", "🔥", 0),
        ("Run", "🔥", -2),
    ])
    def test_invalid_input_is_rejected_without_store_call(self, store, name, icon, target):
        mutator = HabitMutator(store)

        assert mutator.add_habit(name, icon, target) is None
        assert store.calls == []
        assert mutator.state.habits == []

    def test_appends_store_record(self, store):
        mutator = HabitMutator(store)

        habit = mutator.add_habit("Run", "🔥", 2)

        assert habit.id == store.tables["habits"][0]["id"]
        assert habit.user_id == USER["id"]
        assert habit.target_count == 2
        assert mutator.state.habits == [habit]

    def test_requires_signed_in_user(self):
        store = FakeRecordStore(user=None)
        mutator = HabitMutator(store)

        with pytest.raises(AuthRequiredError):
            mutator.add_habit("Run", "🔥", 2)
        assert store.store_calls() == []

    def test_store_failure_leaves_state_unchanged(self, store):
        store.failing.add("habits")
        mutator = HabitMutator(store)

        with pytest.raises(StoreFailureError):
            mutator.add_habit("Run", "🔥", 2)
        assert mutator.state.habits == []


class TestDeleteHabit:
    def test_removes_habit_and_its_completions(self, store, today):
        state = HabitState(
            habits=[make_habit("h1"), make_habit("h2")],
            completions=[make_completion("h1", today), make_completion("h2", today)]
        )
        store.seed("habits", {"id": "h1"})
        mutator = HabitMutator(store, state)

        mutator.delete_habit("h1")

        assert [h.id for h in state.habits] == ["h2"]
        assert [c.habit_id for c in state.completions] == ["h2"]
        assert store.tables["habits"] == []

    def test_failure_keeps_habit_cached(self, store):
        store.failing.add("habits")
        mutator = HabitMutator(store, HabitState(habits=[make_habit("h1")]))

        with pytest.raises(StoreFailureError):
            mutator.delete_habit("h1")
        assert [h.id for h in mutator.state.habits] == ["h1"]

    def test_unknown_habit_is_not_found(self, store):
        mutator = HabitMutator(store, HabitState(habits=[make_habit("h1")]))

        with pytest.raises(HabitNotFoundError):
            mutator.delete_habit("someone-elses")
        assert [h.id for h in mutator.state.habits] == ["h1"]


class TestIncrementCompletion:
    def test_first_increment_creates_completion(self, mutator, store, today):
        completion = mutator.increment_completion("h1", today)

        assert completion.count == 1
        assert completion.completion_date == today
        row = store.tables["habit_completions"][0]
        assert row["target_count"] == 3
        assert row["completion_date"] == today.isoformat()
        assert mutator.state.completions == [completion]

    def test_increments_are_monotonic(self, mutator, today):
        for expected in range(1, 5):
            before = completion_count_for("h1", today, mutator.state.completions)
            mutator.increment_completion("h1", today)
            after = completion_count_for("h1", today, mutator.state.completions)
            assert after == before + 1 == expected
        assert len(mutator.state.completions) == 1

    def test_update_uses_store_echo(self, mutator, store, today):
        first = mutator.increment_completion("h1", today)
        store.tables["habit_completions"][0]["note"] = "server side"

        second = mutator.increment_completion("h1", today)

        assert second.id == first.id
        assert second.count == 2
        assert mutator.state.completions == [second]

    def test_stale_cache_compounds_instead_of_overwriting(self, mutator, store, today):
        mutator.increment_completion("h1", today)
        # Another session incremented twice since this state was loaded
        store.tables["habit_completions"][0]["count"] = 3

        completion = mutator.increment_completion("h1", today)

        assert completion.count == 4
        assert store.tables["habit_completions"][0]["count"] == 4

    def test_row_created_elsewhere_is_read_back(self, mutator, store, today):
        store.seed("habit_completions", {
            "id": "other", "habit_id": "h1", "user_id": USER["id"],
            "completion_date": today.isoformat(), "count": 2, "target_count": 3
        })

        completion = mutator.increment_completion("h1", today)

        assert completion.id == "other"
        assert completion.count == 3
        assert mutator.state.completions == [completion]

    def test_gives_up_when_row_keeps_changing(self, mutator, store, today):
        mutator.increment_completion("h1", today)
        store.update = lambda *args, **kwargs: None

        with pytest.raises(StoreConflictError):
            mutator.increment_completion("h1", today)
        assert mutator.state.completions[0].count == 1

    def test_unknown_habit(self, mutator, store, today):
        with pytest.raises(HabitNotFoundError):
            mutator.increment_completion("nope", today)
        assert store.store_calls() == []

    def test_requires_signed_in_user(self, today):
        store = FakeRecordStore(user=None)
        mutator = HabitMutator(store, HabitState(habits=[make_habit("h1")]))

        with pytest.raises(AuthRequiredError):
            mutator.increment_completion("h1", today)
        assert store.store_calls() == []

    def test_store_failure_leaves_state_unchanged(self, mutator, store, today):
        store.failing.add("habit_completions")

        with pytest.raises(StoreFailureError):
            mutator.increment_completion("h1", today)
        assert mutator.state.completions == []


class TestLoad:
    def test_loads_own_habits_in_creation_order(self, store, today):
        store.seed("habits", {"id": "b", "user_id": USER["id"], "name": "B", "icon": "🅱",
                              "target_count": 1, "created_at": "2026-02-02T00:00:00+00:00"})
        store.seed("habits", {"id": "a", "user_id": USER["id"], "name": "A", "icon": "🅰",
                              "target_count": 1, "created_at": "2026-02-01T00:00:00+00:00"})
        store.seed("habits", {"id": "x", "user_id": "someone-else", "name": "X", "icon": "❌",
                              "target_count": 1, "created_at": "2026-01-01T00:00:00+00:00"})

        state = HabitMutator(store).load(today)

        assert [h.id for h in state.habits] == ["a", "b"]

    def test_loads_completions_inside_streak_window(self, store, today):
        for days in (0, 364, 365):
            on_date = today - timedelta(days=days)
            store.seed("habit_completions", {
                "id": f"c{days}", "habit_id": "h1", "user_id": USER["id"],
                "completion_date": on_date.isoformat(), "count": 1, "target_count": 1
            })

        state = HabitMutator(store).load(today)

        assert [c.id for c in state.completions] == ["c0", "c364"]

    def test_failure_keeps_previous_state(self, store, today):
        state = HabitState(habits=[make_habit("h1")])
        store.failing.add("habit_completions")

        with pytest.raises(StoreFailureError):
            HabitMutator(store, state).load(today)
        assert [h.id for h in state.habits] == ["h1"]

    def test_requires_signed_in_user(self, today):
        with pytest.raises(AuthRequiredError):
            HabitMutator(FakeRecordStore(user=None)).load(today)

    def test_streak_sees_every_row_past_the_response_cap(self, today):
        client = FakeSupabaseClient(max_rows=1000)
        for number in range(10):
            habit_id = f"h{number}"
            client.tables["habits"].append({
                "id": habit_id, "user_id": USER["id"], "name": f"Habit {number}", "icon": "🔥",
                "target_count": 1, "created_at": f"2026-01-01T00:00:{number:02d}+00:00"
            })
            for days in range(200):
                on_date = (today - timedelta(days=days)).isoformat()
                client.tables["habit_completions"].append({
                    "id": f"{habit_id}-{on_date}", "habit_id": habit_id, "user_id": USER["id"],
                    "completion_date": on_date, "count": 1, "target_count": 1
                })

        state = HabitMutator(SupabaseRecordStore(client, "jwt")).load(today)

        assert len(state.completions) == 2000
        assert get_streak(state, today).streak == 200
