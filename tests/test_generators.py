"""Tests for the random and memorable generators."""

import itertools
import re

import pytest

from passgen.errors import ValidationError
from passgen.generators import (
    DIGITS,
    ENGLISH_WORDS,
    LOWERCASE,
    SPECIAL,
    SWEDISH_WORDS,
    UPPERCASE,
    add_extras_at_word_boundaries,
    choose_slots,
    generate_memorable,
    generate_password,
    insert_extras,
    shuffle,
)


# ── generate_password ──────────────────────────────────────────────────────


class TestGeneratePassword:
    def test_default_length(self):
        assert len(generate_password()) == 15

    @pytest.mark.parametrize("length", [8, 12, 20, 32])
    def test_exact_length(self, length):
        assert len(generate_password(length)) == length

    @pytest.mark.parametrize("length", [7, 33, 0])
    def test_out_of_range_raises(self, length):
        with pytest.raises(ValidationError, match="between 8 and 32"):
            generate_password(length)

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            generate_password(4)

    def test_every_class_combination(self):
        for upper, digits, symbols in itertools.product([True, False], repeat=3):
            allowed = LOWERCASE
            allowed += UPPERCASE if upper else ""
            allowed += DIGITS if digits else ""
            allowed += SPECIAL if symbols else ""
            for _ in range(10):
                pwd = generate_password(8, uppercase=upper, digits=digits, symbols=symbols)
                assert len(pwd) == 8
                assert set(pwd) <= set(allowed)
                if upper:
                    assert any(c in UPPERCASE for c in pwd)
                if digits:
                    assert any(c in DIGITS for c in pwd)
                if symbols:
                    assert any(c in SPECIAL for c in pwd)

    def test_all_optional_disabled_is_lowercase(self):
        pwd = generate_password(16, uppercase=False, digits=False, symbols=False)
        assert re.fullmatch(r"[a-z]{16}", pwd)

    def test_special_set(self):
        assert SPECIAL == "!@#-?_"

    def test_uniqueness(self):
        passwords = {generate_password(20) for _ in range(50)}
        assert len(passwords) == 50


def test_shuffle_keeps_elements():
    items = list(range(20))
    shuffled = shuffle(list(items))
    assert sorted(shuffled) == items


# ── Extras placement ───────────────────────────────────────────────────────


class TestExtrasPlacement:
    def test_choose_slots_distinct_and_sorted(self):
        for _ in range(50):
            slots = choose_slots(3, 2)
            assert len(slots) == 2
            assert len(set(slots)) == 2
            assert slots == sorted(slots)
            assert all(0 <= s <= 3 for s in slots)

    def test_choose_slots_too_many(self):
        with pytest.raises(ValidationError):
            choose_slots(1, 3)

    def test_insert_before_first_and_after_last(self):
        assert insert_extras(["aa", "bb", "cc"], ["1", "!"], [0, 3]) == "1aabbcc!"

    def test_insert_between_words(self):
        assert insert_extras(["aa", "bb", "cc"], ["1", "!"], [1, 2]) == "aa1bb!cc"

    def test_extras_follow_slot_order(self):
        assert insert_extras(["aa", "bb"], ["#", "7"], [0, 2]) == "#aabb7"

    def test_three_words_two_extras(self):
        words = ["red", "fox", "sky"]
        for _ in range(50):
            result = add_extras_at_word_boundaries(words, ["1", "!"])
            assert len(result) == len("redfoxsky") + 2
            assert result.replace("1", "").replace("!", "") == "redfoxsky"
            # The digit always comes before the symbol
            assert result.index("1") < result.index("!")
            # Extras never split a word and never share a boundary
            parts = re.split(r"[1!]", result)
            assert [p for p in parts if p] in (
                ["red", "foxsky"], ["redfox", "sky"], ["redfoxsky"],
                ["red", "fox", "sky"],
            )

    def test_no_extras(self):
        assert add_extras_at_word_boundaries(["a", "b"], []) == "ab"


# ── generate_memorable ─────────────────────────────────────────────────────


def _strip_extras(pwd: str) -> str:
    return re.sub(r"[0-9!@#\-?_]", "", pwd)


class TestGenerateMemorable:
    def test_plain_words(self):
        pwd = generate_memorable(3, uppercase=False, digits=False, symbols=False)
        assert re.fullmatch(r"[a-z]+", pwd)

    def test_capitalised_words(self):
        pwd = generate_memorable(4, uppercase=True, digits=False, symbols=False)
        assert len(re.findall(r"[A-Z]", pwd)) == 4
        assert pwd[0].isupper()

    def test_one_digit_and_one_symbol(self):
        for _ in range(20):
            pwd = generate_memorable(3)
            assert sum(c in DIGITS for c in pwd) == 1
            assert sum(c in SPECIAL for c in pwd) == 1

    def test_single_word_extras(self):
        for _ in range(20):
            pwd = generate_memorable(1, uppercase=False)
            assert _strip_extras(pwd) in ENGLISH_WORDS
            assert len(pwd) == len(_strip_extras(pwd)) + 2

    def test_swedish_words(self):
        pwd = generate_memorable(2, "Swedish", uppercase=False, digits=False, symbols=False)
        assert not set(pwd) & set("åäö")

    def test_language_is_case_insensitive(self):
        generate_memorable(2, "swedish")

    def test_swedish_list_has_no_nordic_letters(self):
        assert not any(set(w) & set("åäöÅÄÖ") for w in SWEDISH_WORDS)

    @pytest.mark.parametrize("count", [0, 6])
    def test_word_count_range(self, count):
        with pytest.raises(ValidationError, match="between 1 and 5"):
            generate_memorable(count)

    def test_unknown_language(self):
        with pytest.raises(ValidationError, match="Unknown language"):
            generate_memorable(3, "Klingon")
