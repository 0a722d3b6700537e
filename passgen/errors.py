"""Exception taxonomy shared by the passgen components."""


class PassgenError(Exception):
    """Base class for all passgen errors."""


class ValidationError(PassgenError, ValueError):
    """Bad parameters, rejected before any network or disk access."""


class ServiceUnavailableError(PassgenError):
    """The availability probe for a remote service failed."""

    def __init__(self, service: str):
        super().__init__(f"{service} unavailable")
        self.service = service


class TransportError(PassgenError):
    """A remote call failed after the probe passed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class RequestTimeoutError(TransportError):
    """A remote call did not answer within the configured timeout."""
