"""
Application constants
"""

# Supabase tables
HABITS_TABLE = "habits"
COMPLETIONS_TABLE = "habit_completions"

# Streak walk never looks further back than this many days
STREAK_MAX_DAYS = 365

# Compare-and-set attempts for a single completion increment
INCREMENT_MAX_ATTEMPTS = 3
