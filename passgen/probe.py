"""Lightweight reachability checks for the remote services."""

import logging

import requests

from passgen import config
from passgen.errors import ServiceUnavailableError

logger = logging.getLogger(__name__)


def hibp_available(timeout: float = config.PROBE_TIMEOUT) -> bool:
    """Return True when the Pwned Passwords range API answers 200."""
    try:
        resp = requests.get(f"{config.HIBP_URL}/range/00000", timeout=timeout)
    except requests.RequestException as exc:
        logger.warning("%s probe failed: %s", config.HIBP_NAME, exc)
        return False
    if resp.status_code != 200:
        logger.warning("%s probe returned HTTP %s", config.HIBP_NAME, resp.status_code)
        return False
    return True


def share_available(timeout: float = config.PROBE_TIMEOUT) -> bool:
    """Return True when the share service answers at all without a server error.

    Some deployments reject HEAD on the root page, so any status below 500
    counts as reachable.
    """
    try:
        resp = requests.head(f"{config.SHARE_URL}/", timeout=timeout, allow_redirects=True)
    except requests.RequestException as exc:
        logger.warning("%s probe failed: %s", config.SHARE_NAME, exc)
        return False
    if resp.status_code >= 500:
        logger.warning("%s probe returned HTTP %s", config.SHARE_NAME, resp.status_code)
        return False
    return True


def require_available(service: str) -> None:
    """Raise :class:`ServiceUnavailableError` unless *service* is reachable."""
    if service == config.HIBP_NAME:
        available = hibp_available()
    elif service == config.SHARE_NAME:
        available = share_available()
    else:
        raise ValueError(f"No probe for {service!r}")
    if not available:
        raise ServiceUnavailableError(service)
