"""
Business logic services
"""
from . import habits

# Shorter alias used by the routes
habit_service = habits

__all__ = [
    'habits',
    'habit_service'
]
