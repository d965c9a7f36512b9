"""Shared fixtures: fake HTTP backends for probes and the GitHub API."""

from __future__ import annotations

import asyncio
from typing import Callable, Dict, List, Optional, Union

import httpx
import pytest

from models.catalog import Catalog
from services.inspection_service import EntryInspector

API_BASE = "https://api.github.test"

Outcome = Union[int, Exception, Callable[[httpx.Request], httpx.Response]]


class FakeHosts:
    """
    Routes requests by full URL.

    ``probes`` maps download URLs to a status code or an exception class
    instance; ``releases`` maps ``owner/repo`` to a tag, a status code, or a
    raw httpx.Response.  Unknown URLs answer 200 / 404 respectively.
    """

    def __init__(self) -> None:
        self.probes: Dict[str, Outcome] = {}
        self.releases: Dict[str, Union[str, int, httpx.Response]] = {}
        self.requests: List[httpx.Request] = []

    def probe_handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.probes.get(str(request.url), 200)
        if isinstance(outcome, Exception):
            raise outcome
        return httpx.Response(outcome, request=request)

    def api_handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        parts = request.url.path.strip("/").split("/")
        slug = f"{parts[1]}/{parts[2]}"
        outcome = self.releases.get(slug, 404)
        if isinstance(outcome, httpx.Response):
            return outcome
        if isinstance(outcome, int):
            return httpx.Response(outcome, json={"message": "nope"}, request=request)
        return httpx.Response(200, json={"tag_name": outcome}, request=request)

    def methods_for(self, host: str) -> List[str]:
        return [r.method for r in self.requests if r.url.host == host]


@pytest.fixture
def hosts() -> FakeHosts:
    return FakeHosts()


@pytest.fixture
def audit(hosts: FakeHosts) -> Callable[[Catalog], tuple]:
    """Run a full inspection of a catalog against the fake hosts."""

    def _run(catalog: Catalog, rules: Optional[tuple] = None) -> tuple:
        async def _go() -> tuple:
            async with httpx.AsyncClient(
                transport=httpx.MockTransport(hosts.probe_handler), follow_redirects=True
            ) as probe_client, httpx.AsyncClient(
                base_url=API_BASE, transport=httpx.MockTransport(hosts.api_handler)
            ) as api_client:
                kwargs = {} if rules is None else {"rules": rules}
                inspector = EntryInspector(probe_client, api_client, **kwargs)
                return await inspector.inspect_catalog(catalog)

        return asyncio.run(_go())

    return _run
