"""
strength.py - Quick 0-100 strength score for the meter under the password.

The score is a simple, deterministic heuristic built from three parts:
    - length:   2 points per character, capped at 40
    - variety:  7.5 points per character class present (lower, upper,
                digit, anything else), so at most 30
    - entropy:  log2(alphabet size) * length / 4, capped at 30

This is NOT a real entropy estimator. It doesn't know about dictionary
words, keyboard walks or reused passwords (zxcvbn does that properly).
It only exists to give a consistent at-a-glance reading, and the numbers
must stay exactly as they are so scores match between versions.
"""

import math
from typing import NamedTuple


# Alphabet sizes credited for each class that shows up
LOWER_POOL = 26
UPPER_POOL = 26
DIGIT_POOL = 10
SPECIAL_POOL = 33

# Shown instead of a category when there is nothing to score
NO_PASSWORD = "No Password"

CATEGORIES = (
    (30, "Very Weak"),
    (50, "Weak"),
    (70, "Moderate"),
    (90, "Strong"),
)
TOP_CATEGORY = "Very Strong"


class StrengthResult(NamedTuple):
    score: int
    category: str
    empty: bool = False

    @property
    def display_label(self) -> str:
        """What the meter should say: the category, or NO_PASSWORD."""
        return NO_PASSWORD if self.empty else self.category


def categorize(score: int) -> str:
    for upper_bound, label in CATEGORIES:
        if score < upper_bound:
            return label
    return TOP_CATEGORY


def _round_half_up(value: float) -> int:
    # round() would do banker's rounding (22.5 -> 22)
    return int(math.floor(value + 0.5))


def score_password(password: str) -> StrengthResult:
    """
    Score a password.

    Args:
        password: Any string; characters are classified with the str
            predicates, so non-ASCII letters count as letters

    Returns:
        StrengthResult(score in [0, 100], category label, empty flag)
    """
    if not password:
        return StrengthResult(0, categorize(0), empty=True)

    has_lower = has_upper = has_digit = has_special = False
    for ch in password:
        if ch.islower():
            has_lower = True
        elif ch.isupper():
            has_upper = True
        elif ch.isdigit():
            has_digit = True
        else:
            has_special = True

    length = len(password)
    length_term = min(40, 2 * length)
    variety_term = 7.5 * (has_lower + has_upper + has_digit + has_special)

    alphabet_size = (
        LOWER_POOL * has_lower
        + UPPER_POOL * has_upper
        + DIGIT_POOL * has_digit
        + SPECIAL_POOL * has_special
    )
    entropy_term = min(30.0, math.log2(alphabet_size) * length / 4)

    score = min(100, _round_half_up(length_term + variety_term + entropy_term))
    return StrengthResult(score, categorize(score))


# --- Self-test ---
if __name__ == "__main__":
    samples = ["", "abc", "password", "Password1", "aB3!", "kX9#mP2$vL4@nQ", "aB3!" * 5]
    for sample in samples:
        result = score_password(sample)
        print(f"   {sample!r:<26} -> {result.score:>3}/100  ({result.display_label})")
