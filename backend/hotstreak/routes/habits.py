"""
Habit Routes - Endpoints for habits, completions and streaks
"""
from fastapi import APIRouter, Depends, HTTPException, status
from hotstreak.core.dependencies import get_record_store
from hotstreak.core.exceptions import (
    AuthRequiredError,
    HabitNotFoundError,
    InvalidHabitDataError,
    StoreConflictError,
    StoreFailureError,
    StoreTimeoutError
)
from hotstreak.models.habit import (
    AddHabitRequest,
    CompletionResponse,
    DailySummary,
    Habit,
    HabitsOverview,
    StreakResponse
)
from hotstreak.services import habit_service
from hotstreak.utils.timezone import get_local_today_date

router = APIRouter(prefix="/habits", tags=["habits"])


def get_mutator(store=Depends(get_record_store)) -> habit_service.HabitMutator:
    """Mutator over a fresh state for the current request"""
    return habit_service.HabitMutator(store)


def _store_error(e: StoreFailureError) -> HTTPException:
    if isinstance(e, StoreTimeoutError):
        return HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail=str(e))
    if isinstance(e, StoreConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.get("", response_model=HabitsOverview)
def list_habits(mutator=Depends(get_mutator)):
    """Get all habits with today's progress and the current streak"""
    today = get_local_today_date()
    try:
        state = mutator.load(today)
        return habit_service.get_habits_overview(state, today)
    except AuthRequiredError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except StoreFailureError as e:
        raise _store_error(e)


@router.post("", response_model=Habit, status_code=201)
def add_habit(request: AddHabitRequest, mutator=Depends(get_mutator)):
    """Add a new habit"""
    try:
        habit = mutator.add_habit(request.name, request.icon, request.target_count)
        if habit is None:
            raise InvalidHabitDataError("Habit needs a name, an icon and a target count of at least 1")
        return habit
    except InvalidHabitDataError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AuthRequiredError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except StoreFailureError as e:
        raise _store_error(e)


@router.get("/streak", response_model=StreakResponse)
def get_streak(mutator=Depends(get_mutator)):
    """Get the number of consecutive days every habit was completed"""
    today = get_local_today_date()
    try:
        state = mutator.load(today)
        return habit_service.get_streak(state, today)
    except AuthRequiredError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except StoreFailureError as e:
        raise _store_error(e)


@router.get("/summary/today", response_model=DailySummary)
def get_daily_summary(mutator=Depends(get_mutator)):
    """Get today's summary of habit completion"""
    today = get_local_today_date()
    try:
        state = mutator.load(today)
        return habit_service.get_daily_summary(state, today)
    except AuthRequiredError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except StoreFailureError as e:
        raise _store_error(e)


@router.delete("/{habit_id}")
def delete_habit(habit_id: str, mutator=Depends(get_mutator)):
    """Delete a habit"""
    try:
        mutator.delete_habit(habit_id)
        return {"status": "success", "habit_id": habit_id}
    except HabitNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AuthRequiredError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except StoreFailureError as e:
        raise _store_error(e)


@router.post("/{habit_id}/complete", response_model=CompletionResponse)
def complete_habit(habit_id: str, mutator=Depends(get_mutator)):
    """Record one more completion of a habit for today"""
    today = get_local_today_date()
    try:
        state = mutator.load(today)
        completion = mutator.increment_completion(habit_id, today)
        return CompletionResponse(
            completion=completion,
            progress=habit_service.habit_progress(state.find_habit(habit_id), today, state.completions)
        )
    except HabitNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AuthRequiredError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except StoreFailureError as e:
        raise _store_error(e)
