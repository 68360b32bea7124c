"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TICK_SECONDS = 1.0
DEFAULT_HISTORY_LIMIT = 30
DEFAULT_BREAK_TYPES = ("Salah", "Meeting", "Lunch", "Breakfast", "Break")
DEFAULT_LOCATION_PLACEHOLDER = "Location not available"
