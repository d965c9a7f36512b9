"""
services/url_service.py – Download URL helpers.
"""

from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import urlsplit

from services.exceptions import UrlResolutionError

# Path layout of a release asset: /owner/repo/releases/download/tag/...
MIN_RELEASE_SEGMENTS: int = 5


@dataclass(frozen=True)
class ReleaseRef:
    """Repository and tag parsed from a GitHub release-asset URL."""

    owner: str
    repo: str
    tag: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


def combine_url_and_file(url: Any, file: Any) -> str:
    """
    Join *url* and *file* with exactly one ``/`` between them.

    Raises
    ------
    UrlResolutionError
        When either part is not a string.
    """
    if not isinstance(url, str):
        raise UrlResolutionError(f"url must be a string, got {type(url).__name__}")
    if not isinstance(file, str):
        raise UrlResolutionError(f"file must be a string, got {type(file).__name__}")
    return f"{url.rstrip('/')}/{file.lstrip('/')}"


def looks_like_release_url(url: str) -> bool:
    return "github.com" in url and "/releases/" in url


def parse_release_url(url: str) -> Optional[ReleaseRef]:
    """
    Extract owner, repo and tag from a release-asset URL.

    Returns None when the URL cannot be parsed or has fewer than five
    non-empty path segments.
    """
    try:
        path = urlsplit(url).path
    except ValueError:
        return None

    parts = [segment for segment in path.split("/") if segment]
    if len(parts) < MIN_RELEASE_SEGMENTS:
        return None
    return ReleaseRef(owner=parts[0], repo=parts[1], tag=parts[4])
