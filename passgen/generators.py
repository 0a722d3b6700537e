"""Random and memorable password generators.

Both generators draw from :mod:`secrets` so every pick is cryptographically
random.
"""

import secrets
import string

from passgen import config
from passgen.errors import ValidationError

LOWERCASE = string.ascii_lowercase
UPPERCASE = string.ascii_uppercase
DIGITS = string.digits
SPECIAL = "!@#-?_"

_sysrand = secrets.SystemRandom()


# ── Word lists ─────────────────────────────────────────────────────────────

ENGLISH_WORDS = (
    "apple", "arrow", "autumn", "badge", "banana", "basket", "beach", "berry",
    "blanket", "bottle", "bread", "breeze", "bridge", "bucket", "butter", "cabin",
    "camera", "candle", "canyon", "carpet", "castle", "cherry", "circle", "cloud",
    "clover", "coffee", "copper", "cotton", "crayon", "dinner", "dragon", "eagle",
    "engine", "falcon", "feather", "forest", "fossil", "garden", "ginger", "glider",
    "guitar", "hammer", "harbor", "helmet", "honey", "island", "jacket", "jungle",
    "kettle", "ladder", "lantern", "lemon", "letter", "lizard", "magnet", "maple",
    "marble", "meadow", "mirror", "monkey", "morning", "mountain", "needle", "orange",
    "oyster", "paddle", "pencil", "pepper", "pillow", "planet", "pocket", "puzzle",
    "rabbit", "river", "rocket", "saddle", "salmon", "shadow", "silver", "spider",
    "spring", "summer", "sunset", "switch", "table", "thunder", "ticket", "timber",
    "tomato", "tunnel", "turtle", "valley", "velvet", "violin", "wagon", "walnut",
    "window", "winter", "wizard", "yellow",
)

# Swedish words, deliberately free of å, ä and ö.
SWEDISH_WORDS = (
    "apelsin", "banan", "berg", "bil", "blomma", "bok", "bord", "bro",
    "brev", "dag", "dimma", "dans", "eld", "fisk", "flagga", "fest",
    "gata", "glas", "gran", "gris", "hage", "himmel", "hund", "hus",
    "hatt", "is", "jord", "kaffe", "kanin", "katt", "klocka", "kniv",
    "kung", "lampa", "land", "ljus", "lek", "mat", "moln", "morot",
    "mus", "natt", "nyckel", "ost", "penna", "regn", "ros", "sand",
    "sko", "skog", "sol", "sommar", "sten", "stol", "strand", "stad",
    "tak", "tand", "tid", "tomte", "torg", "tunga", "vatten", "vinter",
    "vind", "vals", "vagn", "varg", "ved", "ugn", "kudde", "lejon",
    "mango", "papper", "planet", "post", "resa", "rum", "sagan", "silver",
    "socker", "spegel", "stig", "storm", "svamp", "tavla", "tiger", "tall",
    "vulkan", "dator", "fiol", "gurka", "hammare", "hjul", "korv", "krona",
    "kula", "lind", "melon", "ring",
)

WORD_LISTS = {
    "English": ENGLISH_WORDS,
    "Swedish": SWEDISH_WORDS,
}


# ── Helpers ────────────────────────────────────────────────────────────────


def shuffle(items: list) -> list:
    """Fisher-Yates shuffle *items* in place with cryptographic randomness."""
    for i in range(len(items) - 1, 0, -1):
        j = secrets.randbelow(i + 1)
        items[i], items[j] = items[j], items[i]
    return items


def _resolve_language(language: str) -> str:
    for name in WORD_LISTS:
        if name.lower() == language.lower():
            return name
    raise ValidationError(
        f"Unknown language {language!r}, expected one of {', '.join(WORD_LISTS)}"
    )


# ── Random generator ───────────────────────────────────────────────────────


def generate_password(
    length: int = 15,
    *,
    uppercase: bool = True,
    digits: bool = True,
    symbols: bool = True,
) -> str:
    """Generate a random password of exactly *length* characters.

    Lowercase letters are always part of the pool. One character from every
    enabled optional class (uppercase, digits, symbols, in that order) is drawn
    first so each class is guaranteed to appear, the rest is filled from the
    union of all enabled classes, and the whole sequence is shuffled.
    """
    if not config.MIN_LENGTH <= length <= config.MAX_LENGTH:
        raise ValidationError(
            f"Password length must be between {config.MIN_LENGTH} and {config.MAX_LENGTH}"
        )

    alphabet = LOWERCASE
    chars = []

    if uppercase:
        alphabet += UPPERCASE
        chars.append(UPPERCASE[secrets.randbelow(len(UPPERCASE))])
    if digits:
        alphabet += DIGITS
        chars.append(DIGITS[secrets.randbelow(len(DIGITS))])
    if symbols:
        alphabet += SPECIAL
        chars.append(SPECIAL[secrets.randbelow(len(SPECIAL))])

    while len(chars) < length:
        chars.append(alphabet[secrets.randbelow(len(alphabet))])

    return "".join(shuffle(chars))


# ── Memorable generator ────────────────────────────────────────────────────


def choose_slots(word_count: int, extras_count: int) -> list[int]:
    """Pick *extras_count* distinct boundary slots out of ``word_count + 1``.

    Slot ``i`` sits in front of word ``i``; slot ``word_count`` is the end.
    """
    if extras_count > word_count + 1:
        raise ValidationError("More extras than word boundaries")
    return sorted(_sysrand.sample(range(word_count + 1), extras_count))


def insert_extras(words: list[str], extras: list[str], slots: list[int]) -> str:
    """Concatenate *words*, emitting extras at the given boundary slots.

    Extras are consumed in order, so the first extra lands at the lowest slot.
    """
    pending = iter(extras)
    chosen = set(slots)
    parts = []
    for slot in range(len(words) + 1):
        if slot in chosen:
            parts.append(next(pending))
        if slot < len(words):
            parts.append(words[slot])
    return "".join(parts)


def add_extras_at_word_boundaries(words: list[str], extras: list[str]) -> str:
    """Insert *extras* at randomly chosen distinct boundaries between *words*."""
    return insert_extras(words, extras, choose_slots(len(words), len(extras)))


def generate_memorable(
    word_count: int = 3,
    language: str = "English",
    *,
    uppercase: bool = True,
    digits: bool = True,
    symbols: bool = True,
) -> str:
    """Generate a password made of common words.

    Words are drawn with replacement from the chosen language's list. With
    *uppercase* each word is capitalised. A random digit and/or symbol are
    inserted at distinct word boundaries; words are joined without separators.
    """
    if not config.MIN_WORDS <= word_count <= config.MAX_WORDS:
        raise ValidationError(
            f"Word count must be between {config.MIN_WORDS} and {config.MAX_WORDS}"
        )
    word_list = WORD_LISTS[_resolve_language(language)]

    words = [word_list[secrets.randbelow(len(word_list))] for _ in range(word_count)]
    if uppercase:
        words = [w[:1].upper() + w[1:] for w in words]

    extras = []
    if digits:
        extras.append(str(secrets.randbelow(10)))
    if symbols:
        extras.append(SPECIAL[secrets.randbelow(len(SPECIAL))])
    shuffle(extras)

    return add_extras_at_word_boundaries(words, extras)
