"""
services/exceptions.py – Structured custom exception hierarchy for the auditor.

All service-level errors derive from AuditError so callers can catch broadly
or specifically depending on context.  Only LoadError and ConfigError are
fatal; the rest are turned into issue records or absorbed by the inspector.
"""

from typing import Optional


class AuditError(Exception):
    """Base class for all auditor exceptions."""


class ConfigError(AuditError):
    """Raised when an environment or CLI setting has an unusable value."""


class LoadError(AuditError):
    """Raised when the catalog file is missing, unreadable or malformed."""


class UrlResolutionError(AuditError):
    """Raised when a download's base URL and file cannot be joined."""


class ProbeError(AuditError):
    """
    Raised when the availability probe does not get a 200 back.

    Attributes
    ----------
    url         : The resolved URL that was probed.
    status_code : HTTP status, or None when no response was obtained.
    status_text : Reason phrase or transport error description.
    """

    def __init__(self, url: str, status_code: Optional[int], status_text: str) -> None:
        self.url = url
        self.status_code = status_code
        self.status_text = status_text
        super().__init__(f"{url}: {status_code if status_code is not None else '-'} {status_text}")


class TransportError(ProbeError):
    """DNS, TLS, timeout or connection failure; no HTTP status was obtained."""

    def __init__(self, url: str, status_text: str) -> None:
        super().__init__(url, None, status_text)


class NonSuccessStatus(ProbeError):
    """The server answered with anything other than 200."""


class UpstreamQueryError(AuditError):
    """Raised when the latest-release lookup fails for any reason."""
