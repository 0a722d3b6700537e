"""passgen -- password generation and sharing utilities.

Random and memorable password generation, entropy-based strength scoring,
breach checking, ephemeral share links, phonetic spelling and named presets.
"""

from passgen.breach import check_breach
from passgen.generators import generate_memorable, generate_password
from passgen.phonetic import transliterate
from passgen.presets import PasswordPreset, PresetStore
from passgen.session import PasswordSession
from passgen.share import ShareClient, ShareLink
from passgen.strength import entropy, score_strength

__all__ = [
    "PasswordPreset",
    "PasswordSession",
    "PresetStore",
    "ShareClient",
    "ShareLink",
    "check_breach",
    "entropy",
    "generate_memorable",
    "generate_password",
    "score_strength",
    "transliterate",
]
