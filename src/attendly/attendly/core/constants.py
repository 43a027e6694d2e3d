"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

BACKUP_VERSION = 1
DEFAULT_MIN_ATTENDANCE_PERCENTAGE = 75
DEFAULT_SUBJECT_CREDITS = 1

# Timetable import: a single block lasts 50 minutes, two merged blocks 100.
DEFAULT_CLASS_MINUTES = 50
MERGED_CLASS_MINUTES = 100
MERGE_GAP_MIN_MINUTES = 45
MERGE_GAP_MAX_MINUTES = 65

WEEKLY_SUMMARY_DAYS = 7

# Longest explicit calendar range, in days.
MAX_CALENDAR_DAYS = 731
