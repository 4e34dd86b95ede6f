"""
password_gen.py - Policy-driven secure password generator.

How this works:
1. The caller describes what they want with a CharsetPolicy (length,
   which character classes, enforce-minimum, avoid-similar)
2. normalize_policy() quietly fixes up policies that can't be honoured
   as written (no classes selected -> lowercase only, length too short
   for the required classes -> length raised) and tells the caller why
3. PasswordGenerator draws every character from a SecureRandomSource
   (never `random`, which is a predictable Mersenne Twister)
4. With enforce-minimum on, we seed one character from each enabled
   class, fill the rest from the combined alphabet, then Fisher-Yates
   shuffle the lot so the guaranteed characters aren't always up front

The "avoid similar" option removes I, l, 1, O and 0 from the letter and
digit classes. Those are the ones people misread when typing a password
off a screen. Special characters are not affected.
"""

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from core.config import DEFAULT_LENGTH, ERASE_SENTINEL
from core.random_source import SecureRandomSource
from core.secure_buffer import SecretBuffer


logger = logging.getLogger(__name__)


# Character sets
UPPERCASE = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
LOWERCASE = "abcdefghijklmnopqrstuvwxyz"
DIGITS = "0123456789"
SPECIAL = "!@#$%^&*()-_=+[]{};:,.<>?/"

# Characters that look alike in many fonts
SIMILAR = "Il1O0"


@dataclass(frozen=True)
class CharsetPolicy:
    """
    Rules for one generation call.

    A policy with every class switched off is allowed to exist; the
    generator treats it as lowercase-only (see normalize_policy).
    """

    length: int = DEFAULT_LENGTH
    use_upper: bool = True
    use_lower: bool = True
    use_digits: bool = True
    use_special: bool = True
    enforce_minimum: bool = True
    avoid_similar: bool = False

    def __post_init__(self):
        if self.length < 1:
            raise ValueError(f"Password length must be at least 1, got {self.length}.")

    @property
    def enabled_class_count(self) -> int:
        return sum((self.use_upper, self.use_lower, self.use_digits, self.use_special))


@dataclass
class GeneratedPassword:
    """A freshly generated secret plus the (normalized) policy that made it."""

    buffer: SecretBuffer
    policy: CharsetPolicy

    def reveal(self) -> str:
        return self.buffer.reveal()

    def wipe(self):
        self.buffer.wipe()

    def __len__(self) -> int:
        return len(self.buffer)


def _without_similar(chars: str) -> str:
    return "".join(c for c in chars if c not in SIMILAR)


def class_alphabets(policy: CharsetPolicy) -> List[Tuple[str, str]]:
    """
    Return (class name, characters) for each enabled class.

    Order is always upper, lower, digit, special. Callers should pass a
    normalized policy; an all-disabled policy yields an empty list here.
    """
    upper, lower, digits = UPPERCASE, LOWERCASE, DIGITS
    if policy.avoid_similar:
        upper = _without_similar(upper)
        lower = _without_similar(lower)
        digits = _without_similar(digits)

    classes = []
    if policy.use_upper:
        classes.append(("upper", upper))
    if policy.use_lower:
        classes.append(("lower", lower))
    if policy.use_digits:
        classes.append(("digit", digits))
    if policy.use_special:
        classes.append(("special", SPECIAL))
    return classes


def effective_alphabet(policy: CharsetPolicy) -> str:
    """Every character a normalized policy is allowed to produce."""
    return "".join(chars for _, chars in class_alphabets(policy))


def required_minimum(policy: CharsetPolicy) -> int:
    """How many characters enforce-minimum needs (0 when it's off)."""
    if not policy.enforce_minimum:
        return 0
    return policy.enabled_class_count


def normalize_policy(policy: CharsetPolicy) -> Tuple[CharsetPolicy, List[str]]:
    """
    Apply the documented auto-corrections to a policy.

    Neither correction is an error. The notes are meant to be shown to
    the user as warnings; each one is also logged at INFO.

    Returns:
        (effective policy, list of human-readable adjustment notes)
    """
    notes = []

    if policy.enabled_class_count == 0:
        policy = replace(policy, use_lower=True)
        notes.append("No character types selected; using lowercase letters.")

    minimum = required_minimum(policy)
    if policy.length < minimum:
        policy = replace(policy, length=minimum)
        notes.append(
            f"Password length increased to {minimum} to accommodate "
            f"minimum character requirements."
        )

    for note in notes:
        logger.info(note)
    return policy, notes


class PasswordGenerator:
    """
    Generates passwords from a CharsetPolicy.

    Args:
        rng: The random source to draw from. If omitted a new
            SecureRandomSource is created, which raises
            EntropySourceError when the OS has no secure randomness.
    """

    def __init__(self, rng: Optional[SecureRandomSource] = None):
        self.rng = rng if rng is not None else SecureRandomSource()

    def generate_secret(self, policy: CharsetPolicy) -> GeneratedPassword:
        """Generate into a wipeable buffer. See generate() for the rules."""
        policy, _ = normalize_policy(policy)
        classes = class_alphabets(policy)
        pool = effective_alphabet(policy)

        chars = []
        if policy.enforce_minimum:
            for _, class_chars in classes:
                chars.append(self.rng.choice(class_chars))

        while len(chars) < policy.length:
            chars.append(self.rng.choice(pool))

        self.rng.shuffle(chars)

        secret = GeneratedPassword(SecretBuffer("".join(chars)), policy)
        # Scrub the working list so the characters don't linger in it
        chars[:] = ERASE_SENTINEL * len(chars)
        return secret

    def generate(self, policy: CharsetPolicy) -> str:
        """
        Generate a password.

        Guarantees:
            - len(result) == the normalized policy length
            - every character comes from effective_alphabet(policy)
            - with enforce_minimum, every enabled class appears at least once

        Returns:
            The password as a str
        """
        secret = self.generate_secret(policy)
        try:
            return secret.reveal()
        finally:
            secret.wipe()


def generate_password(
    policy: Optional[CharsetPolicy] = None,
    rng: Optional[SecureRandomSource] = None,
) -> str:
    """Shortcut for PasswordGenerator(rng).generate(policy or CharsetPolicy())."""
    return PasswordGenerator(rng).generate(policy or CharsetPolicy())


def strip_special(password: str) -> str:
    """
    Keep only letters and digits.

    Uses str.isalnum so accented letters typed by hand survive too.
    """
    return "".join(ch for ch in password if ch.isalnum())


# --- Self-test ---
if __name__ == "__main__":
    print("=" * 50)
    print("Password Generator Self-Test")
    print("=" * 50)

    generator = PasswordGenerator()

    print("\n1. Default policy (20 chars, all types):")
    for _ in range(3):
        print(f"   {generator.generate(CharsetPolicy())}")

    print("\n2. Avoid similar characters:")
    pw = generator.generate(CharsetPolicy(length=24, avoid_similar=True))
    print(f"   {pw}")
    assert not any(c in SIMILAR for c in pw)

    print("\n3. Length 2 with four required classes gets raised:")
    pw = generator.generate(CharsetPolicy(length=2))
    print(f"   {pw} (length {len(pw)})")
    assert len(pw) == 4

    print("\n4. Nothing selected falls back to lowercase:")
    pw = generator.generate(CharsetPolicy(
        length=12, use_upper=False, use_lower=False, use_digits=False, use_special=False,
    ))
    print(f"   {pw}")
    assert pw.islower()

    print("\n5. Strip special characters:")
    print(f"   {strip_special('aB3!x_9?')}")

    print("\n" + "=" * 50)
    print("All checks passed!")
    print("=" * 50)
