"""
Input validation functions for EZTeach.

All validation functions follow the pattern:
1. Accept raw caller input (string, int, etc.)
2. Normalize/clean the input
3. Validate against business rules
4. Return cleaned value or raise InvalidArgumentError
"""

import re

from ezteach.core.errors import InvalidArgumentError

GAME_ID_MAX_LENGTH = 100
DISPLAY_NAME_MAX_LENGTH = 100


# ============================================================================
# Identifier Validation
# ============================================================================


def validate_game_id(game_id: str | None) -> str:
    """
    Validate a game identifier.

    Args:
        game_id: Raw game id (e.g., "math_quiz")

    Returns:
        Trimmed game id

    Raises:
        InvalidArgumentError: If game id is empty or malformed
    """
    if game_id is None or not isinstance(game_id, str):
        raise InvalidArgumentError("gameId is required")

    cleaned = game_id.strip()

    if cleaned == "":
        raise InvalidArgumentError("gameId cannot be empty")

    if len(cleaned) > GAME_ID_MAX_LENGTH:
        raise InvalidArgumentError(f"gameId cannot exceed {GAME_ID_MAX_LENGTH} characters")

    # No whitespace or path separators inside an identifier
    if re.search(r"[\s/]", cleaned):
        raise InvalidArgumentError("gameId must not contain whitespace or '/'")

    return cleaned


def validate_optional_id(value: str | None, name: str) -> str | None:
    """Trim an optional id; blank strings are rejected rather than ignored."""
    if value is None:
        return None

    cleaned = value.strip()
    if cleaned == "":
        raise InvalidArgumentError(f"{name} cannot be empty")

    return cleaned


# ============================================================================
# Score Validation
# ============================================================================


def validate_score(score: int | None) -> int:
    """
    Validate a submitted score.

    Args:
        score: Raw score

    Returns:
        Score as a non-negative integer

    Raises:
        InvalidArgumentError: If score is missing, not an integer, or negative
    """
    # bool is an int subclass; True is not a score
    if score is None or isinstance(score, bool) or not isinstance(score, int):
        raise InvalidArgumentError("score must be an integer")

    if score < 0:
        raise InvalidArgumentError("score must be non-negative")

    return score


def validate_elapsed_seconds(elapsed: float | int | None) -> float | None:
    """Validate optional play time in seconds."""
    if elapsed is None:
        return None

    if isinstance(elapsed, bool) or not isinstance(elapsed, int | float):
        raise InvalidArgumentError("elapsedSeconds must be a number")

    if elapsed != elapsed or elapsed < 0:  # NaN or negative
        raise InvalidArgumentError("elapsedSeconds must be non-negative")

    return float(elapsed)


def validate_display_name(name: str | None) -> str | None:
    """Normalize an optional display name snapshot (blank = absent)."""
    if name is None:
        return None

    if not isinstance(name, str):
        raise InvalidArgumentError("displayName must be a string")

    cleaned = re.sub(r"\s+", " ", name.strip())
    if cleaned == "":
        return None

    return cleaned[:DISPLAY_NAME_MAX_LENGTH]


# ============================================================================
# Leaderboard Query Validation
# ============================================================================


def validate_limit(limit: int | None, *, default: int, maximum: int) -> int:
    """
    Validate a leaderboard row limit.

    Args:
        limit: Requested rows (None = default)
        default: Limit used when none is given
        maximum: Largest accepted limit

    Returns:
        Limit between 1 and maximum

    Raises:
        InvalidArgumentError: If limit is out of range
    """
    if limit is None:
        return default

    if isinstance(limit, bool) or not isinstance(limit, int):
        raise InvalidArgumentError("limit must be an integer")

    if limit < 1 or limit > maximum:
        raise InvalidArgumentError(f"limit must be between 1 and {maximum}")

    return limit
