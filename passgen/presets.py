"""Named password presets with JSON persistence.

The store keeps the whole collection in memory and rewrites the file after
every mutation. A ``.bak`` copy of the previous file is taken before each
overwrite.
"""

import json
import logging
import os
import shutil
import threading
from dataclasses import dataclass
from pathlib import Path

from passgen import config

logger = logging.getLogger(__name__)

FALLBACK_DEFAULT = "Strong Password"

# (name, length, is_default_selection)
_BUILT_INS = [
    ("Medium Password", 10, False),
    ("Strong Password", 15, True),
    ("Very Strong Password", 20, False),
    ("NIST Compliant", 12, False),
    ("SOC2 Compliant", 14, False),
    ("Financial Grade", 16, False),
]


@dataclass
class PasswordPreset:
    """A saved set of generation parameters.

    Attributes:
        name: Unique, case-sensitive preset name
        length: Password length (8-32)
        include_uppercase / include_numbers / include_special: Optional classes
        include_lowercase: Always True
        is_built_in: Factory preset, cannot be renamed, edited or removed
        enabled: Shown in the preset list
        is_default_selection: Selected when the preset list is loaded
    """

    name: str
    length: int
    include_uppercase: bool = True
    include_numbers: bool = True
    include_special: bool = True
    include_lowercase: bool = True
    is_built_in: bool = False
    enabled: bool = True
    is_default_selection: bool = False

    def to_dict(self) -> dict:
        """Convert to the flat record stored in the presets file."""
        return {
            "Name": self.name,
            "Length": self.length,
            "IncludeUppercase": self.include_uppercase,
            "IncludeLowercase": self.include_lowercase,
            "IncludeNumbers": self.include_numbers,
            "IncludeSpecial": self.include_special,
            "IsDefault": self.is_built_in,
            "Enabled": self.enabled,
            "IsSelectedByDefault": self.is_default_selection,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PasswordPreset":
        return cls(
            name=str(data["Name"]),
            length=int(data["Length"]),
            include_uppercase=bool(data.get("IncludeUppercase", False)),
            include_numbers=bool(data.get("IncludeNumbers", False)),
            include_special=bool(data.get("IncludeSpecial", False)),
            include_lowercase=True,
            is_built_in=bool(data.get("IsDefault", False)),
            enabled=bool(data.get("Enabled", False)),
            is_default_selection=bool(data.get("IsSelectedByDefault", False)),
        )


def built_in_presets() -> list[PasswordPreset]:
    return [
        PasswordPreset(name=name, length=length, is_built_in=True, is_default_selection=default)
        for name, length, default in _BUILT_INS
    ]


def _result(success: bool, message: str) -> dict:
    return {"success": success, "message": message}


class PresetStore:
    """CRUD over the preset collection.

    Every mutator returns ``{"success": bool, "message": str}`` and persists
    immediately on success. At least one preset is always enabled and at most
    one carries the default-selection flag.
    """

    def __init__(self, path: Path | str = config.PRESETS_FILE):
        self.path = Path(path)
        self.presets: list[PasswordPreset] = []
        self._lock = threading.RLock()

    # ── Persistence ────────────────────────────────────────────────────

    def load(self) -> list[PasswordPreset]:
        """Read the presets file, falling back to the built-ins in memory."""
        with self._lock:
            if not self.path.exists():
                logger.info("No presets file at %s, using built-in presets", self.path)
                self.presets = built_in_presets()
                return self.presets
            try:
                with open(self.path, encoding="utf-8") as f:
                    records = json.load(f)
                if not isinstance(records, list):
                    raise ValueError("presets file must contain a JSON array")
                if not records:
                    raise ValueError("presets file holds no presets")
                self.presets = [PasswordPreset.from_dict(r) for r in records]
            except (OSError, ValueError, KeyError, TypeError) as exc:
                logger.error("Could not load presets from %s: %s", self.path, exc)
                self.presets = built_in_presets()
            return self.presets

    def save(self) -> bool:
        """Write the collection to disk, keeping a ``.bak`` of the old file."""
        with self._lock:
            tmp = self.path.with_name(self.path.name + ".tmp")
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with open(tmp, "w", encoding="utf-8") as f:
                    json.dump([p.to_dict() for p in self.presets], f, indent=2)
                if self.path.exists():
                    shutil.copy2(self.path, self.path.with_name(self.path.name + ".bak"))
                os.replace(tmp, self.path)
            except OSError as exc:
                logger.error("Could not save presets to %s: %s", self.path, exc)
                if tmp.exists():
                    tmp.unlink()
                return False
            logger.debug("Saved %d presets to %s", len(self.presets), self.path)
            return True

    # ── Queries ────────────────────────────────────────────────────────

    def get(self, name: str) -> PasswordPreset | None:
        for preset in self.presets:
            if preset.name == name:
                return preset
        return None

    def enabled_presets(self) -> list[PasswordPreset]:
        return [p for p in self.presets if p.enabled]

    def default_selection(self) -> PasswordPreset | None:
        """Return the preset a freshly loaded list should select.

        If nothing is enabled, the first preset is force-enabled first.
        """
        with self._lock:
            if not self.presets:
                return None
            enabled = self.enabled_presets()
            if not enabled:
                logger.warning("No presets enabled, enabling %r", self.presets[0].name)
                self.presets[0].enabled = True
                enabled = [self.presets[0]]
            for preset in enabled:
                if preset.is_default_selection:
                    return preset
            return enabled[0]

    # ── Mutators ───────────────────────────────────────────────────────

    def _validate(self, name: str, length: int) -> str | None:
        if not name or not name.strip():
            return "Preset name must not be empty"
        if not config.MIN_LENGTH <= length <= config.MAX_LENGTH:
            return f"Length must be between {config.MIN_LENGTH} and {config.MAX_LENGTH}"
        return None

    def _claim_default(self, owner: PasswordPreset) -> None:
        for preset in self.presets:
            if preset is not owner:
                preset.is_default_selection = False

    def _persisted(self, message: str) -> dict:
        if not self.save():
            return _result(True, f"{message} (not saved to disk)")
        return _result(True, message)

    def add(
        self,
        name: str,
        length: int,
        uppercase: bool = True,
        numbers: bool = True,
        special: bool = True,
        is_default_selection: bool = False,
    ) -> dict:
        with self._lock:
            error = self._validate(name, length)
            if error:
                return _result(False, error)
            if self.get(name) is not None:
                return _result(False, f"A preset named {name!r} already exists")

            preset = PasswordPreset(
                name=name,
                length=length,
                include_uppercase=uppercase,
                include_numbers=numbers,
                include_special=special,
                is_default_selection=is_default_selection,
            )
            if is_default_selection:
                self._claim_default(preset)
            self.presets.append(preset)
            logger.info("Added preset %r", name)
            return self._persisted(f"Added preset {name!r}")

    def remove(self, name: str) -> dict:
        with self._lock:
            preset = self.get(name)
            if preset is None:
                return _result(False, f"No preset named {name!r}")
            if preset.is_built_in:
                return _result(False, f"Built-in preset {name!r} cannot be removed")

            self.presets.remove(preset)
            if preset.is_default_selection:
                fallback = self.get(FALLBACK_DEFAULT)
                if fallback is not None and fallback.is_built_in:
                    fallback.is_default_selection = True
            if self.presets and not self.enabled_presets():
                self.presets[0].enabled = True
            logger.info("Removed preset %r", name)
            return self._persisted(f"Removed preset {name!r}")

    def edit(
        self,
        original_name: str,
        new_name: str,
        length: int,
        uppercase: bool = True,
        numbers: bool = True,
        special: bool = True,
        is_default_selection: bool = False,
    ) -> dict:
        with self._lock:
            preset = self.get(original_name)
            if preset is None:
                return _result(False, f"No preset named {original_name!r}")
            if preset.is_built_in:
                return _result(False, f"Built-in preset {original_name!r} cannot be edited")
            error = self._validate(new_name, length)
            if error:
                return _result(False, error)
            other = self.get(new_name)
            if other is not None and other is not preset:
                return _result(False, f"A preset named {new_name!r} already exists")

            preset.name = new_name
            preset.length = length
            preset.include_uppercase = uppercase
            preset.include_numbers = numbers
            preset.include_special = special
            preset.is_default_selection = is_default_selection
            if is_default_selection:
                self._claim_default(preset)
            logger.info("Edited preset %r", new_name)
            return self._persisted(f"Updated preset {new_name!r}")

    def set_enabled(self, name: str, enabled: bool) -> dict:
        with self._lock:
            preset = self.get(name)
            if preset is None:
                return _result(False, f"No preset named {name!r}")
            if not enabled and preset.enabled and len(self.enabled_presets()) == 1:
                return _result(False, "At least one preset must stay enabled")
            preset.enabled = enabled
            return self._persisted(f"{'Enabled' if enabled else 'Disabled'} preset {name!r}")

    def set_default_selection(self, name: str) -> dict:
        with self._lock:
            preset = self.get(name)
            if preset is None:
                return _result(False, f"No preset named {name!r}")
            preset.is_default_selection = True
            self._claim_default(preset)
            return self._persisted(f"{name!r} is now selected by default")
