"""Application constants."""

# Workout name limits
MAX_WORKOUT_NAME_LENGTH = 100
MAX_EXERCISE_NAME_LENGTH = 100

# Exercise positions start at 0, set numbers at 1
FIRST_EXERCISE_ORDER = 0
FIRST_SET_NUMBER = 1

# Listing
DEFAULT_PAGE_SIZE = 50

# Front-end page to return to after a mutation
DASHBOARD_PATH = "/dashboard"
