"""
Structured error codes for generation failures.
Raise ConfigError with one of these keys; map to user-facing messages in the CLI.
"""

from __future__ import annotations

# Known error keys
INVALID_COUNT = "invalid_count"
INVALID_BRANCHING_FACTOR = "invalid_branching_factor"
INVALID_MIN_DISTANCE = "invalid_min_distance"
INVALID_DIMENSIONS = "invalid_dimensions"
INVALID_DENSITY = "invalid_density"
INVALID_CELL_SIZE = "invalid_cell_size"
INVALID_PROBABILITY = "invalid_probability"

# User-facing messages (short, actionable)
USER_MESSAGES: dict[str, str] = {
    INVALID_COUNT: "Point count must be zero or positive.",
    INVALID_BRANCHING_FACTOR: "Branching factor must be zero or positive.",
    INVALID_MIN_DISTANCE: "Minimum distance must be positive (or negative to derive it from the count).",
    INVALID_DIMENSIONS: "Map width and height must be positive whole tiles.",
    INVALID_DENSITY: "Density must be positive.",
    INVALID_CELL_SIZE: "Placement cell size must be positive.",
    INVALID_PROBABILITY: "Chances must lie between 0 and 1.",
}


class ConfigError(ValueError):
    """Caller passed a configuration that would produce wrong geometry."""

    def __init__(self, key: str, detail: str = "") -> None:
        self.key = key
        message = user_message(key)
        super().__init__(f"{message} ({detail})" if detail else message)


def user_message(error_key: str | None, fallback: str = "Something went wrong.") -> str:
    """Return a user-facing message for the given error key."""
    if not error_key:
        return fallback
    return USER_MESSAGES.get(error_key, fallback)
