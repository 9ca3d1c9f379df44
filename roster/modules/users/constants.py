"""
User Constants

Defaults, validation bounds and user-facing messages shared across layers.
"""

DEFAULT_AGE = 0

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 50
MIN_AGE = 0
MAX_AGE = 120

EMAIL_PATTERN = r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$"

API_VERSION = "/api/v1"
USERS_BASE_PATH = API_VERSION + "/users"

# Response timestamps (createdAt, error envelope)
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Validation messages
USER_REQUIRED_MESSAGE = "User cannot be null"
ID_REQUIRED_MESSAGE = "ID cannot be null or empty"
ID_TAKEN_MESSAGE = "ID is already in use"
NAME_REQUIRED_MESSAGE = "Name is required"
NAME_LENGTH_MESSAGE = f"Name must be between {MIN_NAME_LENGTH} and {MAX_NAME_LENGTH} characters"
EMAIL_REQUIRED_MESSAGE = "Email is required"
EMAIL_FORMAT_MESSAGE = "Email must have a valid format"
EMAIL_TAKEN_MESSAGE = "Email is already registered"
AGE_RANGE_MESSAGE = f"Age must be between {MIN_AGE} and {MAX_AGE}"

USER_DELETE_FAILED_MESSAGE = "Internal error while deleting user"
