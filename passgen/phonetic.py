"""Phonetic spelling of passwords using the NATO or Swedish alphabet."""

from passgen.errors import ValidationError

ALPHABETS = ("NATO", "Swedish")

_CAPITAL_PREFIX = {"NATO": "Capital ", "Swedish": "Stor "}

# å, ä, ö looked up case-insensitively before anything else.
_NORDIC = {
    "å": {"NATO": "Alpha with Ring", "Swedish": "Åke"},
    "ä": {"NATO": "Alpha with Umlaut", "Swedish": "Ärlig"},
    "ö": {"NATO": "Oscar with Umlaut", "Swedish": "Östen"},
}

# Punctuation keyed by code point so look-alike characters never collide.
_SPECIAL_CASES = {
    0x0021: ("Exclamation Mark", "Utropstecken"),
    0x0022: ("Double Quote", "Citattecken"),
    0x0023: ("Hash", "Brädgård"),
    0x0024: ("Dollar Sign", "Dollartecken"),
    0x0025: ("Percent", "Procent"),
    0x0026: ("Ampersand", "Och-tecken"),
    0x0027: ("Apostrophe", "Apostrof"),
    0x0028: ("Left Parenthesis", "Vänsterparentes"),
    0x0029: ("Right Parenthesis", "Högerparentes"),
    0x002A: ("Asterisk", "Asterisk"),
    0x002B: ("Plus", "Plus"),
    0x002C: ("Comma", "Komma"),
    0x002D: ("Hyphen", "Bindestreck"),
    0x002E: ("Period", "Punkt"),
    0x002F: ("Slash", "Snedstreck"),
    0x003A: ("Colon", "Kolon"),
    0x003B: ("Semicolon", "Semikolon"),
    0x003D: ("Equals", "Likhetstecken"),
    0x003F: ("Question Mark", "Frågetecken"),
    0x0040: ("At Sign", "Snabel-a"),
    0x005C: ("Backslash", "Omvänt snedstreck"),
    0x005F: ("Underscore", "Understreck"),
    0x0020: ("Space", "Mellanslag"),
}

_NATO = {
    "a": "Alpha", "b": "Bravo", "c": "Charlie", "d": "Delta", "e": "Echo",
    "f": "Foxtrot", "g": "Golf", "h": "Hotel", "i": "India", "j": "Juliett",
    "k": "Kilo", "l": "Lima", "m": "Mike", "n": "November", "o": "Oscar",
    "p": "Papa", "q": "Quebec", "r": "Romeo", "s": "Sierra", "t": "Tango",
    "u": "Uniform", "v": "Victor", "w": "Whiskey", "x": "X-ray", "y": "Yankee",
    "z": "Zulu",
    "0": "Zero", "1": "One", "2": "Two", "3": "Three", "4": "Four",
    "5": "Five", "6": "Six", "7": "Seven", "8": "Eight", "9": "Nine",
}

_SWEDISH = {
    "a": "Adam", "b": "Bertil", "c": "Caesar", "d": "David", "e": "Erik",
    "f": "Filip", "g": "Gustav", "h": "Helge", "i": "Ivar", "j": "Johan",
    "k": "Kalle", "l": "Ludvig", "m": "Martin", "n": "Niklas", "o": "Olof",
    "p": "Petter", "q": "Qvintus", "r": "Rudolf", "s": "Sigurd", "t": "Tore",
    "u": "Urban", "v": "Viktor", "w": "Wilhelm", "x": "Xerxes", "y": "Yngve",
    "z": "Zäta",
    "0": "Nolla", "1": "Ett", "2": "Två", "3": "Tre", "4": "Fyra",
    "5": "Fem", "6": "Sex", "7": "Sju", "8": "Åtta", "9": "Nio",
}

_SYMBOLS = {
    "NATO": {
        "[": "Left Bracket", "]": "Right Bracket", "{": "Left Brace",
        "}": "Right Brace", "<": "Less Than", ">": "Greater Than",
        "~": "Tilde", "^": "Caret", "|": "Pipe", "`": "Backtick",
        "€": "Euro Sign", "£": "Pound Sign", "§": "Section Sign",
    },
    "Swedish": {
        "[": "Vänster hakparentes", "]": "Höger hakparentes",
        "{": "Vänster klammerparentes", "}": "Höger klammerparentes",
        "<": "Mindre än", ">": "Större än", "~": "Tilde", "^": "Cirkumflex",
        "|": "Lodstreck", "`": "Grav accent", "€": "Eurotecken",
        "£": "Pundtecken", "§": "Paragraftecken",
    },
}

_LETTERS = {"NATO": _NATO, "Swedish": _SWEDISH}


def _resolve_alphabet(alphabet: str) -> str:
    for name in ALPHABETS:
        if name.lower() == alphabet.lower():
            return name
    raise ValidationError(
        f"Unknown alphabet {alphabet!r}, expected one of {', '.join(ALPHABETS)}"
    )


def transliterate_char(char: str, alphabet: str = "NATO") -> str:
    """Return the phonetic word for a single character.

    Uppercase letters get a "Capital " (NATO) or "Stor " (Swedish) prefix.
    Characters without an entry come back as "Symbol".
    """
    alphabet = _resolve_alphabet(alphabet)
    lower = char.lower()

    if lower in _NORDIC:
        word = _NORDIC[lower][alphabet]
    elif len(char) == 1 and ord(char) in _SPECIAL_CASES:
        nato, swedish = _SPECIAL_CASES[ord(char)]
        return nato if alphabet == "NATO" else swedish
    elif lower in _LETTERS[alphabet]:
        word = _LETTERS[alphabet][lower]
    elif char in _SYMBOLS[alphabet]:
        return _SYMBOLS[alphabet][char]
    else:
        return "Symbol"

    if char.isalpha() and char.isupper():
        return _CAPITAL_PREFIX[alphabet] + word
    return word


def transliterate(password: str, alphabet: str = "NATO") -> list[tuple[str, str]]:
    """Spell out *password* as an ordered list of ``(char, word)`` pairs."""
    return [(char, transliterate_char(char, alphabet)) for char in password]
