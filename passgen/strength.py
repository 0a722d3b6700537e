"""Entropy-based strength estimation."""

import math
import re

# Pool sizes per character class. The symbol pool matches the generator's
# six-character special set regardless of which symbols actually appear.
_POOLS = {
    "lowercase": 26,
    "uppercase": 26,
    "digits": 10,
    "symbols": 6,
}

_LABELS = [
    (40, "Weak"),
    (60, "Moderate"),
    (80, "Strong"),
]

MAX_DISPLAY_BITS = 128


def char_classes(password: str) -> dict[str, bool]:
    return {
        "lowercase": bool(re.search(r"[a-z]", password)),
        "uppercase": bool(re.search(r"[A-Z]", password)),
        "digits":    bool(re.search(r"[0-9]", password)),
        "symbols":   bool(re.search(r"[^a-zA-Z0-9]", password)),
    }


def pool_size(password: str) -> int:
    """Return the character-pool size implied by *password*'s content."""
    classes = char_classes(password)
    return sum(_POOLS[name] for name, present in classes.items() if present) or 26


def entropy(password: str) -> float:
    """Return ``log2(pool size) * length`` in bits; 0.0 for an empty string."""
    if not password:
        return 0.0
    return math.log2(pool_size(password)) * len(password)


def strength_label(bits: float) -> str:
    for threshold, label in _LABELS:
        if bits < threshold:
            return label
    return "Very Strong"


def strength_percentage(bits: float) -> float:
    """Progress-bar fill for *bits*, capped at 100."""
    return min(100.0, bits / MAX_DISPLAY_BITS * 100)


def score_strength(password: str) -> dict:
    """Analyse password strength and return a report.

    Returns a dict with keys:
        length       -- int
        pool_size    -- int
        entropy      -- float (bits, rounded to one decimal)
        char_classes -- dict[str, bool]  (lowercase, uppercase, digits, symbols)
        label        -- str  (Weak, Moderate, Strong, Very Strong)
        percentage   -- float 0-100
    """
    bits = entropy(password)
    return {
        "length": len(password),
        "pool_size": pool_size(password) if password else 0,
        "entropy": round(bits, 1),
        "char_classes": char_classes(password),
        "label": strength_label(bits),
        "percentage": strength_percentage(bits),
    }
