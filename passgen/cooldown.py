"""Cooldown state machine gating the breach check and share actions.

Each gated action owns one :class:`Cooldown`. The host drives it with
:meth:`Cooldown.tick` once per second and calls
:meth:`Cooldown.on_password_changed` whenever the password value changes.
"""

import logging

from passgen import config

logger = logging.getLogger(__name__)

READY = "ready"
COOLING_DOWN = "cooldown"
ALREADY_USED = "already_used"


class Cooldown:
    """Idle -> Cooldown -> Idle, plus a per-password "already used" flag.

    The flag is cleared only by a password change, never by the timer, so an
    action stays disabled after its cooldown until the password changes.
    """

    def __init__(self, name: str, window: int = config.COOLDOWN_SECONDS):
        self.name = name
        self.window = window
        self.remaining = window
        self.running = False
        self.consumed = False

    @property
    def enabled(self) -> bool:
        return not self.running and not self.consumed

    @property
    def state(self) -> str:
        if self.running:
            return COOLING_DOWN
        if self.consumed:
            return ALREADY_USED
        return READY

    def complete(self) -> None:
        """Record that the action ran, successfully or not, and start cooling down."""
        self.consumed = True
        self.remaining = self.window
        self.running = True
        logger.debug("%s: cooldown started (%ss)", self.name, self.window)

    def tick(self) -> None:
        if not self.running:
            return
        self.remaining -= 1
        if self.remaining <= 0:
            self.running = False
            self.remaining = self.window
            logger.debug("%s: cooldown finished", self.name)

    def on_password_changed(self) -> None:
        self.consumed = False
