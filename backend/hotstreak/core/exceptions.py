"""
Custom Exceptions - Application-specific error types
"""


class HotStreakException(Exception):
    """Base exception for all hot streak errors"""
    pass


class AuthRequiredError(HotStreakException):
    """Raised when no authenticated user is available for an operation"""
    pass


class HabitNotFoundError(HotStreakException):
    """Raised when a habit cannot be found"""
    pass


class InvalidHabitDataError(HotStreakException):
    """Raised when habit data validation fails"""
    pass


class StoreFailureError(HotStreakException):
    """Raised when the record store rejects a query or mutation"""
    pass


class StoreTimeoutError(StoreFailureError):
    """Raised when the record store does not answer in time"""
    pass


class StoreConflictError(StoreFailureError):
    """Raised when a conditional update keeps losing to concurrent writers"""
    pass


class DuplicateRecordError(StoreFailureError):
    """Raised when an insert collides with an existing unique row"""
    pass
