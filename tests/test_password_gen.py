"""Tests for CharsetPolicy handling and PasswordGenerator."""

from __future__ import annotations

import itertools

import pytest

from core.password_gen import (
    DIGITS, LOWERCASE, SIMILAR, SPECIAL, UPPERCASE,
    CharsetPolicy, PasswordGenerator, class_alphabets, effective_alphabet,
    generate_password, normalize_policy, required_minimum, strip_special,
)


CLASS_SETS = {"upper": UPPERCASE, "lower": LOWERCASE, "digit": DIGITS, "special": SPECIAL}


def _classes_present(password):
    return {name for name, chars in CLASS_SETS.items() if any(c in chars for c in password)}


def _all_flag_combinations():
    for flags in itertools.product([True, False], repeat=4):
        if any(flags):
            yield flags


@pytest.fixture
def generator():
    return PasswordGenerator()


class TestPolicy:
    def test_defaults(self):
        policy = CharsetPolicy()
        assert policy.length == 20
        assert policy.enforce_minimum and not policy.avoid_similar
        assert policy.enabled_class_count == 4

    @pytest.mark.parametrize("length", [0, -5])
    def test_length_below_one_raises(self, length):
        with pytest.raises(ValueError, match="at least 1"):
            CharsetPolicy(length=length)

    def test_policy_is_immutable(self):
        with pytest.raises(AttributeError):
            CharsetPolicy().length = 5

    def test_no_classes_falls_back_to_lowercase(self):
        policy, notes = normalize_policy(CharsetPolicy(
            length=10, use_upper=False, use_lower=False, use_digits=False, use_special=False,
        ))
        assert policy.use_lower and policy.enabled_class_count == 1
        assert len(notes) == 1 and "lowercase" in notes[0]

    def test_short_length_is_raised_when_enforcing(self):
        policy, notes = normalize_policy(CharsetPolicy(length=2))
        assert policy.length == 4
        assert notes == [
            "Password length increased to 4 to accommodate minimum character requirements."
        ]

    def test_short_length_kept_without_enforcement(self):
        policy, notes = normalize_policy(CharsetPolicy(length=2, enforce_minimum=False))
        assert policy.length == 2
        assert notes == []

    def test_required_minimum(self):
        assert required_minimum(CharsetPolicy(use_special=False)) == 3
        assert required_minimum(CharsetPolicy(enforce_minimum=False)) == 0


class TestAlphabet:
    def test_class_order(self):
        names = [name for name, _ in class_alphabets(CharsetPolicy())]
        assert names == ["upper", "lower", "digit", "special"]

    def test_avoid_similar_filters_letters_and_digits_only(self):
        classes = dict(class_alphabets(CharsetPolicy(avoid_similar=True)))
        assert "I" not in classes["upper"] and "O" not in classes["upper"]
        assert "l" not in classes["lower"]
        assert classes["digit"] == "23456789"
        assert classes["special"] == SPECIAL

    def test_combined_alphabet_has_no_duplicates(self):
        alphabet = effective_alphabet(CharsetPolicy())
        assert len(alphabet) == len(set(alphabet))
        assert len(alphabet) == 26 + 26 + 10 + len(SPECIAL)


class TestGenerate:
    @pytest.mark.parametrize("flags", list(_all_flag_combinations()))
    @pytest.mark.parametrize("length", [1, 4, 12, 40])
    def test_length_and_alphabet(self, generator, flags, length):
        upper, lower, digits, special = flags
        policy = CharsetPolicy(
            length=length, use_upper=upper, use_lower=lower,
            use_digits=digits, use_special=special,
        )
        effective, _ = normalize_policy(policy)
        password = generator.generate(policy)

        assert len(password) == max(length, required_minimum(effective))
        alphabet = effective_alphabet(effective)
        assert all(c in alphabet for c in password)
        expected = {name for name, _ in class_alphabets(effective)}
        assert _classes_present(password) == expected

    def test_twelve_chars_every_class(self, generator):
        for _ in range(50):
            password = generator.generate(CharsetPolicy(length=12))
            assert len(password) == 12
            assert _classes_present(password) == {"upper", "lower", "digit", "special"}

    def test_four_chars_one_of_each(self, generator):
        for _ in range(50):
            password = generator.generate(CharsetPolicy(length=4))
            assert len(password) == 4
            for chars in CLASS_SETS.values():
                assert sum(c in chars for c in password) == 1

    def test_avoid_similar(self, generator):
        password = generator.generate(CharsetPolicy(length=64, avoid_similar=True))
        assert not any(c in SIMILAR for c in password)

    def test_without_enforcement_uses_only_selected_pool(self, generator):
        password = generator.generate(CharsetPolicy(
            length=30, use_upper=False, use_lower=False, use_special=False, enforce_minimum=False,
        ))
        assert password.isdigit() and len(password) == 30

    def test_required_characters_are_shuffled(self, zero_source):
        # Index 0 everywhere: seeds "Aa0!", and the shuffle then moves
        # every position, so the seeded order must not survive
        password = PasswordGenerator(zero_source).generate(CharsetPolicy(length=4))
        assert password == "a0!A"

    def test_draws_use_class_then_pool_bounds(self, zero_source):
        PasswordGenerator(zero_source).generate(CharsetPolicy(length=5, use_special=False))
        # three class draws, two fills from the 62-char pool, four shuffle swaps
        assert zero_source.bounds == [26, 26, 10, 62, 62, 5, 4, 3, 2]

    def test_generate_secret_can_be_wiped(self, generator):
        secret = generator.generate_secret(CharsetPolicy(length=10))
        assert len(secret.reveal()) == 10
        secret.wipe()
        assert secret.buffer.raw() == b"X" * 10
        with pytest.raises(ValueError):
            secret.reveal()

    def test_generate_password_shortcut(self):
        assert len(generate_password()) == 20


class TestStripSpecial:
    def test_keeps_alphanumerics(self):
        assert strip_special("aB3!x_9?") == "aB3x9"

    def test_all_special_becomes_empty(self):
        assert strip_special("!@#$") == ""

    def test_unicode_letters_survive(self):
        assert strip_special("café-1") == "café1"
