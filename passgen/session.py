"""Application state shared by the front ends.

:class:`PasswordSession` owns the current password, the preset store, the
remote clients and the two cooldowns, and exposes the operations a UI calls.
None of its methods raise for bad input or remote failures; they return
result dicts with a ``status`` key instead.
"""

import logging

from passgen import breach, config
from passgen.cooldown import Cooldown
from passgen.errors import ValidationError
from passgen.generators import generate_memorable, generate_password
from passgen.phonetic import transliterate
from passgen.presets import PresetStore
from passgen.share import ShareClient, ShareHistory
from passgen.strength import score_strength

logger = logging.getLogger(__name__)


class PasswordSession:
    def __init__(
        self,
        store: PresetStore | None = None,
        share_client: ShareClient | None = None,
        cooldown_seconds: int = config.COOLDOWN_SECONDS,
    ):
        if store is None:
            store = PresetStore()
            store.load()
        self.store = store
        self.history = share_client.history if share_client else ShareHistory()
        self.share_client = share_client or ShareClient(history=self.history)
        self.breach_cooldown = Cooldown("breach check", cooldown_seconds)
        self.share_cooldown = Cooldown("share", cooldown_seconds)
        self.password = ""
        self.params: dict = {}
        self.last_breach: dict | None = None

    # ── Password lifecycle ─────────────────────────────────────────────

    def set_password(self, password: str, params: dict | None = None) -> None:
        """Replace the current password, e.g. after the user edited it."""
        if password == self.password:
            return
        self._replace_password(password, params)

    def _replace_password(self, password: str, params: dict | None) -> None:
        self.password = password
        self.params = params or {}
        self.last_breach = None
        self.breach_cooldown.on_password_changed()
        self.share_cooldown.on_password_changed()

    def _generated(self, generate, params: dict) -> dict:
        try:
            password = generate(**params)
        except ValidationError as exc:
            return {"success": False, "status": "invalid", "password": "", "error": str(exc)}
        self._replace_password(password, params)
        return {"success": True, "status": "ok", "password": password}

    def generate_random(
        self, length: int, uppercase: bool = True, digits: bool = True, symbols: bool = True
    ) -> dict:
        return self._generated(
            generate_password,
            {"length": length, "uppercase": uppercase, "digits": digits, "symbols": symbols},
        )

    def generate_memorable(
        self,
        word_count: int,
        language: str = "English",
        uppercase: bool = True,
        digits: bool = True,
        symbols: bool = True,
    ) -> dict:
        return self._generated(
            generate_memorable,
            {
                "word_count": word_count,
                "language": language,
                "uppercase": uppercase,
                "digits": digits,
                "symbols": symbols,
            },
        )

    def generate_from_preset(self, name: str) -> dict:
        preset = self.store.get(name)
        if preset is None:
            return {"success": False, "status": "invalid", "password": "",
                    "error": f"No preset named {name!r}"}
        return self.generate_random(
            preset.length,
            uppercase=preset.include_uppercase,
            digits=preset.include_numbers,
            symbols=preset.include_special,
        )

    def score(self, password: str | None = None) -> dict:
        return score_strength(self.password if password is None else password)

    def transliterate(self, alphabet: str = "NATO") -> list[tuple[str, str]]:
        return transliterate(self.password, alphabet)

    # ── Gated remote actions ───────────────────────────────────────────

    def tick(self) -> None:
        """Advance both cooldowns by one second."""
        self.breach_cooldown.tick()
        self.share_cooldown.tick()

    def action_state(self) -> dict[str, str]:
        return {
            "breach": self.breach_cooldown.state,
            "share": self.share_cooldown.state,
        }

    @staticmethod
    def _gate(cooldown: Cooldown) -> dict | None:
        if cooldown.enabled:
            return None
        logger.info("%s blocked (%s)", cooldown.name, cooldown.state)
        return {"success": False, "status": cooldown.state,
                "error": f"{cooldown.name} is not available right now"}

    def check_breach(self) -> dict:
        if not self.password:
            return {"success": False, "status": "invalid", "error": "No password to check"}
        blocked = self._gate(self.breach_cooldown)
        if blocked:
            return blocked

        result = breach.check_breach(self.password)
        self.breach_cooldown.complete()
        if result["status"] == "ok":
            self.last_breach = result
        return {"success": result["status"] == "ok", **result}

    def share(self, **options) -> dict:
        """Share the current password; see :meth:`ShareClient.push` for options."""
        if not self.password:
            return {"success": False, "status": "invalid", "url": "", "log": "No password to share"}
        if self.last_breach and self.last_breach["found"]:
            logger.info("Share blocked: password was found in a breach")
            return {"success": False, "status": "blocked", "url": "",
                    "log": "This password was found in a data breach and will not be shared"}
        blocked = self._gate(self.share_cooldown)
        if blocked:
            return {**blocked, "url": "", "log": blocked["error"]}

        result = self.share_client.push(self.password, **options)
        self.share_cooldown.complete()
        return result

    def expire_link(self, token: str) -> dict:
        return self.share_client.expire(token)

    # ── Presets ────────────────────────────────────────────────────────

    def list_presets(self) -> dict:
        """Return enabled presets in order and the one to select by default."""
        default = self.store.default_selection()
        return {
            "presets": self.store.enabled_presets(),
            "default": default.name if default else None,
        }
