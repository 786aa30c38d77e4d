"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

ATTENDANCE_CATEGORY_NAME = "Attendance"

MIN_SCORE = 1
MAX_SCORE = 5

DEFAULT_SCHOOL_NAME = "SMKN 3 SOPPENG"
DEFAULT_SCHOOL_LOGO_URL = ""
DEFAULT_SCHOOL_LATITUDE = -4.329808
DEFAULT_SCHOOL_LONGITUDE = 120.028856
DEFAULT_CHECK_IN_RADIUS_METERS = 50
DEFAULT_LATE_TIME = time(7, 0)
DEFAULT_CHECK_OUT_TIME = time(15, 30)

MIN_CHECK_IN_RADIUS_METERS = 10
MAX_CHECK_IN_RADIUS_METERS = 1000

EARTH_RADIUS_METERS = 6371e3

MIN_PASSWORD_LENGTH = 6
MIN_NAME_LENGTH = 3

# Storage keys, one JSON blob per collection.
USERS_KEY = "app_users"
STUDENTS_KEY = "app_students"
CATEGORIES_KEY = "app_categories"
RATINGS_KEY = "app_ratings"
ATTENDANCE_KEY = "app_attendance"
POSITIONS_KEY = "app_positions"
POINT_RECORDS_KEY = "app_point_records"
SETTINGS_KEY = "app_settings"

DEMO_TEACHER_NAME = "Guru Contoh"
DEMO_TEACHER_EMAIL = "guru@sekolah.id"
DEMO_TEACHER_PASSWORD = "password"

# Late check-in tiers: (max minutes late, score). Anything later scores LATE_FLOOR_SCORE.
LATE_SCORE_TIERS = ((10, 4), (30, 3))
LATE_FLOOR_SCORE = 1
ON_TIME_SCORE = 5
EXCUSED_SCORE = 5
FORFEITED_SCORE = 0

MAX_REASON_LENGTH = 500
