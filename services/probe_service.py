"""
services/probe_service.py – Availability probe for download URLs.

Sends a HEAD request with httpx.AsyncClient and classifies the outcome.  No
retries: a single failed attempt is reported as-is.
"""

import logging

import httpx

from services.exceptions import NonSuccessStatus, TransportError

log = logging.getLogger(__name__)

# ── Configuration ────────────────────────────────────────────────────────────
EXPECTED_STATUS: int = 200


def create_client(*, timeout: float, verify_tls: bool = True) -> httpx.AsyncClient:
    """
    Build the client used for probes.

    *verify_tls* only applies to this client.  Disabling it is unsafe and
    should be reserved for hosts with known-broken certificate chains.
    """
    if not verify_tls:
        log.warning("TLS certificate verification is DISABLED for availability probes.")
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout),
        follow_redirects=True,
        verify=verify_tls,
    )


async def probe(client: httpx.AsyncClient, url: str) -> int:
    """
    HEAD *url* and return the status code when it is 200.

    Raises
    ------
    NonSuccessStatus
        Any other status code.
    TransportError
        The request never produced a response (DNS, TLS, timeout, reset,
        malformed URL or host).
    """
    try:
        response = await client.head(url)
    except (httpx.RequestError, httpx.InvalidURL, ValueError) as exc:
        # ValueError: hosts httpx cannot encode, e.g. bad IDNA labels.
        raise TransportError(url, _describe(exc)) from exc

    if response.status_code != EXPECTED_STATUS:
        raise NonSuccessStatus(url, response.status_code, response.reason_phrase)
    return response.status_code


def _describe(exc: Exception) -> str:
    text = str(exc).strip()
    return text or type(exc).__name__
