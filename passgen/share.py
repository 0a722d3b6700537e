"""Ephemeral password sharing through a Password Pusher compatible service.

Create and expire requests go through an ordered list of transports. The
create call falls back to the next transport when one fails, so a broken
``requests`` stack (proxy, TLS interception) can still share through ``curl``.
"""

import json
import logging
import math
import re
import subprocess
import threading
import webbrowser
from dataclasses import dataclass, field
from datetime import datetime

import requests

from passgen import config, probe
from passgen.errors import (
    PassgenError,
    RequestTimeoutError,
    ServiceUnavailableError,
    TransportError,
)

logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"/p/([A-Za-z0-9_-]+)")

# curl exit code for "operation timed out"
_CURL_TIMEOUT = 28


# ── Link history ───────────────────────────────────────────────────────────


def extract_token(url: str) -> str:
    """Return the token from a ``.../p/<token>`` URL, or "" if there is none."""
    match = TOKEN_PATTERN.search(url)
    if not match:
        logger.warning("Could not extract a token from %r", url)
        return ""
    return match.group(1)


@dataclass
class ShareLink:
    """A link created by a successful share.

    Attributes:
        url: Canonical retrieval URL containing the service token
        created_at: When the link was created
        is_expired: Set once the link has been expired manually
        is_qr: Whether the push was created as a QR code
    """

    url: str
    created_at: datetime = field(default_factory=datetime.now)
    is_expired: bool = False
    is_qr: bool = False

    @property
    def token(self) -> str:
        return extract_token(self.url)


class ShareHistory:
    """Session-scoped, insertion-ordered list of created links."""

    def __init__(self) -> None:
        self._links: list[ShareLink] = []
        self._lock = threading.Lock()

    def __iter__(self):
        with self._lock:
            return iter(list(self._links))

    def __len__(self) -> int:
        return len(self._links)

    def append(self, link: ShareLink) -> None:
        with self._lock:
            self._links.append(link)

    def find(self, token: str) -> ShareLink | None:
        with self._lock:
            for link in self._links:
                if link.token == token:
                    return link
        return None

    def mark_expired(self, token: str) -> bool:
        link = self.find(token)
        if link is None:
            return False
        link.is_expired = True
        return True

    def active(self) -> list[ShareLink]:
        return [link for link in self if not link.is_expired]


def open_link(link: ShareLink) -> bool:
    """Open *link* in the default web browser."""
    return webbrowser.open(link.url)


# ── Transports ─────────────────────────────────────────────────────────────


class RequestsTransport:
    """Native HTTP transport built on :mod:`requests`."""

    name = "requests"

    def send(
        self,
        method: str,
        url: str,
        data: dict | None = None,
        timeout: float = config.REQUEST_TIMEOUT,
    ) -> tuple[int, str]:
        try:
            resp = requests.request(method, url, data=data, timeout=timeout)
        except requests.Timeout as exc:
            raise RequestTimeoutError(f"{method} {url} timed out after {timeout}s") from exc
        except requests.RequestException as exc:
            raise TransportError(str(exc)) from exc
        return resp.status_code, resp.text


def _curl_quote(value: str) -> str:
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


class CurlTransport:
    """Transport that shells out to the ``curl`` command-line tool.

    The request is passed as a curl config on stdin so form fields never
    show up in the process list.
    """

    name = "curl"

    def __init__(self, executable: str = config.CURL_EXECUTABLE):
        self.executable = executable

    def build_config(
        self, method: str, url: str, data: dict | None, timeout: float
    ) -> str:
        lines = [
            f"url = {_curl_quote(url)}",
            f"request = {_curl_quote(method)}",
            "silent",
            "show-error",
            f"max-time = {max(1, math.ceil(timeout))}",
            'write-out = "\\n%{http_code}"',
        ]
        for key, value in (data or {}).items():
            lines.append(f"data-urlencode = {_curl_quote(f'{key}={value}')}")
        return "\n".join(lines) + "\n"

    def send(
        self,
        method: str,
        url: str,
        data: dict | None = None,
        timeout: float = config.REQUEST_TIMEOUT,
    ) -> tuple[int, str]:
        try:
            proc = subprocess.run(
                [self.executable, "--config", "-"],
                input=self.build_config(method, url, data, timeout),
                capture_output=True,
                text=True,
                timeout=timeout + 5,
            )
        except subprocess.TimeoutExpired as exc:
            raise RequestTimeoutError(f"curl {method} {url} timed out") from exc
        except OSError as exc:
            raise TransportError(f"Could not run {self.executable}: {exc}") from exc

        if proc.returncode == _CURL_TIMEOUT:
            raise RequestTimeoutError(f"curl {method} {url} timed out after {timeout}s")
        if proc.returncode != 0:
            raise TransportError(
                f"curl exited with {proc.returncode}: {proc.stderr.strip()}"
            )

        body, _, code = proc.stdout.rpartition("\n")
        try:
            return int(code), body
        except ValueError as exc:
            raise TransportError(f"Unexpected curl output: {code!r}") from exc


# ── Client ─────────────────────────────────────────────────────────────────


def _flag(value: bool) -> str:
    return "true" if value else "false"


class ShareClient:
    """Create and expire ephemeral links for passwords."""

    def __init__(
        self,
        history: ShareHistory | None = None,
        transports: list | None = None,
        timeout: float = config.REQUEST_TIMEOUT,
    ):
        self.history = history if history is not None else ShareHistory()
        self.transports = transports or [RequestsTransport(), CurlTransport()]
        self.timeout = timeout

    def _ordered_transports(self, prefer_curl: bool) -> list:
        if not prefer_curl:
            return list(self.transports)
        curl = [t for t in self.transports if t.name == CurlTransport.name]
        return curl + [t for t in self.transports if t.name != CurlTransport.name]

    def build_form(
        self,
        password: str,
        expire_days: int,
        expire_views: int,
        deletable_by_viewer: bool,
        retrieval_step: bool,
        passphrase: str | None,
        use_qr: bool,
    ) -> dict:
        form = {
            "password[payload]": password,
            "password[expire_after_days]": str(expire_days),
            "password[expire_after_views]": str(expire_views),
            "password[deletable_by_viewer]": _flag(deletable_by_viewer),
            "password[retrieval_step]": _flag(retrieval_step),
        }
        if passphrase:
            form["password[passphrase]"] = passphrase
        if use_qr:
            form["password[kind]"] = "qr"
        return form

    def push(
        self,
        password: str,
        expire_days: int = config.DEFAULT_EXPIRE_DAYS,
        expire_views: int = config.DEFAULT_EXPIRE_VIEWS,
        deletable_by_viewer: bool = config.DEFAULT_DELETABLE_BY_VIEWER,
        retrieval_step: bool = config.DEFAULT_RETRIEVAL_STEP,
        passphrase: str | None = None,
        use_qr: bool = False,
        prefer_curl: bool = False,
    ) -> dict:
        """Share *password* and record the resulting link.

        Returns a dict with keys: success, url, is_qr, status, log. Never raises.
        """
        log = []
        result = {"success": False, "url": "", "is_qr": use_qr, "status": "error"}

        try:
            probe.require_available(config.SHARE_NAME)
        except ServiceUnavailableError as exc:
            log.append(f"{exc}, nothing was sent")
            logger.warning("%s", exc)
            return {**result, "status": "unavailable", "log": "\n".join(log)}

        form = self.build_form(
            password, expire_days, expire_views, deletable_by_viewer,
            retrieval_step, passphrase, use_qr,
        )
        create_url = f"{config.SHARE_URL}/p.json"

        body = None
        for transport in self._ordered_transports(prefer_curl):
            try:
                status, text = transport.send("POST", create_url, form, self.timeout)
                if not 200 <= status < 300:
                    raise TransportError(f"HTTP {status}", status_code=status)
            except PassgenError as exc:
                log.append(f"{transport.name}: {exc}")
                logger.warning("Share via %s failed: %s", transport.name, exc)
                continue
            log.append(f"{transport.name}: HTTP {status}")
            body = text
            break

        if body is None:
            log.append("All transports failed")
            return {**result, "log": "\n".join(log)}

        try:
            token = json.loads(body).get("url_token")
        except (ValueError, AttributeError):
            token = None
        if not token:
            log.append("Response did not contain a url_token")
            logger.error("Share response did not contain a url_token")
            return {**result, "log": "\n".join(log)}

        url = f"{config.SHARE_URL}/p/{token}"
        self.history.append(ShareLink(url=url, is_qr=use_qr))
        log.append(f"Created {url}")
        logger.info("Created share link (%s)", "QR" if use_qr else "text")
        return {"success": True, "url": url, "is_qr": use_qr, "status": "ok", "log": "\n".join(log)}

    def expire(self, token: str) -> dict:
        """Expire the link for *token*; a 404 counts as already expired.

        Returns a dict with keys: success, status, log. Never raises.
        """
        if not token:
            return {"success": False, "status": "invalid", "log": "No token given"}

        try:
            probe.require_available(config.SHARE_NAME)
        except ServiceUnavailableError as exc:
            return {"success": False, "status": "unavailable", "log": str(exc)}

        transport = self.transports[0]
        try:
            status, _ = transport.send(
                "DELETE", f"{config.SHARE_URL}/p/{token}.json", None, self.timeout
            )
        except PassgenError as exc:
            logger.error("Expiring link failed: %s", exc)
            return {"success": False, "status": "error", "log": f"{transport.name}: {exc}"}

        if status == 404:
            log = "Link was already gone"
        elif 200 <= status < 300:
            log = f"Expired (HTTP {status})"
        else:
            logger.error("Expiring link returned HTTP %s", status)
            return {"success": False, "status": "error", "log": f"HTTP {status}"}

        self.history.mark_expired(token)
        logger.info("Expired share link")
        return {"success": True, "status": "ok", "log": log}
