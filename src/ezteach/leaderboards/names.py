"""
Display helpers for leaderboard snapshots.
"""

from __future__ import annotations

_GRADE_LABELS = {
    0: "Pre-K",
    1: "Kindergarten",
    2: "1st Grade",
    3: "2nd Grade",
    4: "3rd Grade",
    5: "4th Grade",
    6: "5th Grade",
    7: "6th Grade",
    8: "7th Grade",
    9: "8th Grade",
    10: "9th Grade",
    11: "10th Grade",
    12: "11th Grade",
    13: "12th Grade",
}


def format_leaderboard_name(first: str | None, last: str | None) -> str | None:
    """Public leaderboard name: first name plus last initial.

    Examples:
        >>> format_leaderboard_name("Mateo", "Vargas")
        'Mateo V.'
        >>> format_leaderboard_name("", "Vargas")
        'V.'
        >>> format_leaderboard_name(" ", None) is None
        True
    """
    given = (first or "").strip()
    family = (last or "").strip()
    if not given and not family:
        return None
    if not family:
        return given
    if not given:
        return f"{family[0]}."
    return f"{given} {family[0]}."


def grade_label(grade_level: int | None) -> str | None:
    """Label for a grade level (0 = Pre-K, 1 = K, 2..13 = 1st..12th)."""
    if grade_level is None:
        return None
    return _GRADE_LABELS.get(grade_level, f"Grade {grade_level}")
