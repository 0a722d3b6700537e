"""Breach checking against Have I Been Pwned (k-anonymity)."""

import hashlib
import logging

import requests

from passgen import config, probe
from passgen.errors import (
    PassgenError,
    RequestTimeoutError,
    ServiceUnavailableError,
    TransportError,
)

logger = logging.getLogger(__name__)


def hash_parts(password: str) -> tuple[str, str]:
    """Return the 5-character prefix and 35-character suffix of the SHA-1 hash."""
    # Lone surrogates (e.g. from a pasted, half-decoded string) still hash.
    sha1 = hashlib.sha1(password.encode("utf-8", "surrogatepass")).hexdigest().upper()
    return sha1[:5], sha1[5:]


def lookup_breach_count(password: str, timeout: float = config.REQUEST_TIMEOUT) -> int:
    """Return the number of times *password* appears in known data breaches.

    Only the first 5 characters of the SHA-1 hash are sent over the network
    (k-anonymity).  The full hash never leaves the client.

    Raises :class:`TransportError` on network or HTTP failures.
    """
    prefix, suffix = hash_parts(password)

    try:
        resp = requests.get(f"{config.HIBP_URL}/range/{prefix}", timeout=timeout)
        resp.raise_for_status()
    except requests.Timeout as exc:
        raise RequestTimeoutError(f"{config.HIBP_NAME} timed out after {timeout}s") from exc
    except requests.HTTPError as exc:
        raise TransportError(str(exc), status_code=getattr(exc.response, "status_code", None)) from exc
    except requests.RequestException as exc:
        raise TransportError(str(exc)) from exc

    for line in resp.text.splitlines():
        hash_suffix, _, count = line.strip().partition(":")
        if hash_suffix == suffix:
            try:
                return int(count)
            except ValueError as exc:
                raise TransportError(f"Malformed range response line: {line!r}") from exc
    return 0


def check_breach(password: str) -> dict:
    """Check *password* against the breach database without raising.

    Returns a dict with keys:
        found  -- bool
        count  -- int (0 when not found or on error)
        status -- "ok", "unavailable" or "error"
        error  -- str, only present when status is not "ok"
    """
    try:
        probe.require_available(config.HIBP_NAME)
        count = lookup_breach_count(password)
    except ServiceUnavailableError as exc:
        return {"found": False, "count": 0, "status": "unavailable", "error": str(exc)}
    except PassgenError as exc:
        logger.error("Breach check failed: %s", exc)
        return {"found": False, "count": 0, "status": "error", "error": str(exc)}

    logger.info("Breach check finished: %s", "found" if count else "not found")
    return {"found": count > 0, "count": count, "status": "ok"}
