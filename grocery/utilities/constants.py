from typing import Final

DATE_FORMAT: Final[str] = "%d-%m-%Y"
MIN_SERVINGS: Final[int] = 1
MAX_SERVINGS: Final[int] = 100
DEFAULT_SERVINGS: Final[int] = 2

# Error kinds surfaced to callers
NOT_FOUND: Final[str] = "not_found"
INVALID_ARGUMENT: Final[str] = "invalid_argument"
CONFLICT: Final[str] = "conflict"
