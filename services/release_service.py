"""
services/release_service.py – Latest-release lookup on the GitHub REST API.

Requests are unauthenticated.  Every failure is raised as
UpstreamQueryError; the inspector treats that as "could not tell" and
moves on without reporting anything.
"""

import httpx

from services.exceptions import UpstreamQueryError
from services.url_service import ReleaseRef

# ── Configuration ────────────────────────────────────────────────────────────
LATEST_RELEASE_PATH: str = "/repos/{owner}/{repo}/releases/latest"
API_HEADERS = {"Accept": "application/vnd.github+json"}

# Latest tags containing this marker are pre-releases and never reported.
PRERELEASE_MARKER: str = "-rc"


def create_client(*, base_url: str, timeout: float) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=base_url,
        headers=API_HEADERS,
        timeout=httpx.Timeout(timeout),
        follow_redirects=True,
    )


async def fetch_latest_tag(client: httpx.AsyncClient, ref: ReleaseRef) -> str:
    """
    Return the ``tag_name`` of the latest release of ``ref.owner/ref.repo``.

    Raises
    ------
    UpstreamQueryError
        Network failure, non-2xx status, or a body without a string tag_name.
    """
    path = LATEST_RELEASE_PATH.format(owner=ref.owner, repo=ref.repo)
    try:
        response = await client.get(path)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise UpstreamQueryError(
            f"Latest release lookup for {ref.slug} returned HTTP {exc.response.status_code}."
        ) from exc
    except (httpx.RequestError, httpx.InvalidURL, ValueError) as exc:
        raise UpstreamQueryError(
            f"Network error looking up latest release for {ref.slug}: {exc}"
        ) from exc

    try:
        payload = response.json()
    except ValueError as exc:
        raise UpstreamQueryError(
            f"Latest release response for {ref.slug} is not JSON."
        ) from exc

    tag = payload.get("tag_name") if isinstance(payload, dict) else None
    if not isinstance(tag, str) or not tag:
        raise UpstreamQueryError(f"Latest release response for {ref.slug} has no tag_name.")
    return tag


def is_newer_release(current_tag: str, latest_tag: str) -> bool:
    """True when *latest_tag* differs from *current_tag* and is not a pre-release."""
    return latest_tag != current_tag and PRERELEASE_MARKER not in latest_tag
