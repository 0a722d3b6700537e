"""Tests for phonetic spelling."""

import pytest

from passgen.errors import ValidationError
from passgen.phonetic import transliterate, transliterate_char


class TestNato:
    @pytest.mark.parametrize("char,word", [
        ("a", "Alpha"),
        ("z", "Zulu"),
        ("x", "X-ray"),
        ("0", "Zero"),
        ("9", "Nine"),
    ])
    def test_table(self, char, word):
        assert transliterate_char(char, "NATO") == word

    def test_capital_prefix(self):
        assert transliterate_char("Q", "NATO") == "Capital Quebec"

    def test_digits_never_prefixed(self):
        assert transliterate_char("7", "NATO") == "Seven"

    @pytest.mark.parametrize("char,word", [
        ("å", "Alpha with Ring"),
        ("ä", "Alpha with Umlaut"),
        ("ö", "Oscar with Umlaut"),
        ("Å", "Capital Alpha with Ring"),
    ])
    def test_nordic(self, char, word):
        assert transliterate_char(char, "NATO") == word

    @pytest.mark.parametrize("char,word", [
        ("!", "Exclamation Mark"),
        ("@", "At Sign"),
        ("#", "Hash"),
        ("-", "Hyphen"),
        ("?", "Question Mark"),
        ("_", "Underscore"),
        (" ", "Space"),
    ])
    def test_special_cases(self, char, word):
        assert transliterate_char(char, "NATO") == word

    def test_secondary_symbols(self):
        assert transliterate_char("~", "NATO") == "Tilde"

    def test_unknown_is_symbol(self):
        assert transliterate_char("☃", "NATO") == "Symbol"
        assert transliterate_char("É", "NATO") == "Symbol"


class TestSwedish:
    def test_letters(self):
        assert transliterate_char("a", "Swedish") == "Adam"
        assert transliterate_char("K", "Swedish") == "Stor Kalle"

    def test_digits(self):
        assert transliterate_char("8", "Swedish") == "Åtta"

    def test_nordic(self):
        assert transliterate_char("ö", "Swedish") == "Östen"
        assert transliterate_char("Ä", "Swedish") == "Stor Ärlig"

    def test_special_case_word_differs(self):
        assert transliterate_char("@", "Swedish") == "Snabel-a"

    def test_alphabet_is_case_insensitive(self):
        assert transliterate_char("b", "swedish") == "Bertil"


def test_unknown_alphabet():
    with pytest.raises(ValidationError):
        transliterate_char("a", "Greek")


def test_transliterate_password():
    assert transliterate("Ab3!", "NATO") == [
        ("A", "Capital Alpha"),
        ("b", "Bravo"),
        ("3", "Three"),
        ("!", "Exclamation Mark"),
    ]


def test_transliterate_empty():
    assert transliterate("", "Swedish") == []
