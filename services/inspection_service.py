"""
services/inspection_service.py – Per-entry availability and release-drift checks.

Processing order
----------------
Games in catalog order, each game's downloads in order, default engine last.
Entries are awaited one at a time so the issue list is reproducible.

Per entry
---------
  ignore_all_checks  → done
  availability probe (unless served from our own package storage)
  ignore_updates     → done
  release-drift check (unless an exemption rule matches)

Every failure except catalog loading is captured as an issue record or, for
latest-release lookups, dropped without a report.
"""

import logging
from typing import Iterable, List, Optional, Tuple

import httpx

from models.catalog import Catalog, DownloadEntry, Game
from models.issue import IssueRecord, NetworkErrorIssue, NewReleaseIssue
from services import exemptions, probe_service, release_service
from services.config import AuditSettings
from services.exceptions import ProbeError, UpstreamQueryError, UrlResolutionError
from services.url_service import combine_url_and_file, looks_like_release_url, parse_release_url

log = logging.getLogger(__name__)


class IssueCollector:
    """Append-only, ordered accumulator of issue records."""

    def __init__(self) -> None:
        self._issues: List[IssueRecord] = []

    def add(self, issue: IssueRecord) -> None:
        self._issues.append(issue)

    @property
    def issues(self) -> Tuple[IssueRecord, ...]:
        return tuple(self._issues)


class EntryInspector:
    """
    Runs both checks for download entries and records what it finds.

    The caller owns both HTTP clients and closes them.
    """

    def __init__(
        self,
        probe_client: httpx.AsyncClient,
        api_client: httpx.AsyncClient,
        *,
        collector: Optional[IssueCollector] = None,
        rules: Iterable[exemptions.ExemptionRule] = exemptions.RELEASE_CHECK_EXEMPTIONS,
    ) -> None:
        self._probe_client = probe_client
        self._api_client = api_client
        self._rules = tuple(rules)
        self.collector = collector if collector is not None else IssueCollector()

    # ── Traversal ────────────────────────────────────────────────────────────

    async def inspect_catalog(self, catalog: Catalog) -> Tuple[IssueRecord, ...]:
        for game in catalog.owners():
            await self.inspect_game(game)
        return self.collector.issues

    async def inspect_game(self, game: Game) -> None:
        for entry in game.download:
            await self.inspect_entry(entry, game)

    async def inspect_entry(self, entry: DownloadEntry, game: Game) -> None:
        if entry.ignore_all_checks:
            log.debug("Skipping all checks for %s (%s)", entry.name, game)
            return

        if not exemptions.is_trusted_host(entry.url_text):
            await self._check_availability(entry, game)

        if entry.ignore_updates:
            return

        await self._check_release(entry, game)

    # ── Availability ─────────────────────────────────────────────────────────

    async def _check_availability(self, entry: DownloadEntry, game: Game) -> None:
        log.info("Processing network check: %s (%s)", entry.name, game)
        try:
            full_url = combine_url_and_file(entry.url, entry.file)
        except UrlResolutionError as exc:
            self.collector.add(
                NetworkErrorIssue.for_entry(
                    entry,
                    game,
                    status=None,
                    status_text=f"Invalid URL: {exc}",
                    full_url=None,
                )
            )
            return

        try:
            await probe_service.probe(self._probe_client, full_url)
        except ProbeError as exc:
            log.info("Network check failed for %s: %s", entry.name, exc)
            self.collector.add(
                NetworkErrorIssue.for_entry(
                    entry,
                    game,
                    status=exc.status_code,
                    status_text=exc.status_text,
                    full_url=full_url,
                )
            )
            return

        log.info("Network check succeeded for %s", entry.name)

    # ── Release drift ────────────────────────────────────────────────────────

    async def _check_release(self, entry: DownloadEntry, game: Game) -> None:
        rule = exemptions.release_exemption(entry, self._rules)
        if rule is not None:
            log.debug("Release check exempt for %s: %s", entry.name, rule)
            return

        if not looks_like_release_url(entry.url_text):
            return

        ref = parse_release_url(entry.url_text)
        if ref is None:
            return

        log.info("Processing new release check: %s (%s)", entry.name, ref.slug)
        try:
            current_url = combine_url_and_file(entry.url, entry.file)
        except UrlResolutionError as exc:
            log.debug("Release check skipped for %s: %s", entry.name, exc)
            return

        try:
            latest_tag = await release_service.fetch_latest_tag(self._api_client, ref)
        except UpstreamQueryError as exc:
            log.debug("Release check skipped for %s: %s", entry.name, exc)
            return

        if release_service.is_newer_release(ref.tag, latest_tag):
            log.info("New release for %s: %s -> %s", entry.name, ref.tag, latest_tag)
            self.collector.add(
                NewReleaseIssue.for_entry(
                    entry,
                    game,
                    new_version=latest_tag,
                    current_release=ref.tag,
                    current_url=current_url,
                )
            )


async def run_audit(catalog: Catalog, settings: AuditSettings) -> Tuple[IssueRecord, ...]:
    """Inspect every entry of *catalog* with clients built from *settings*."""
    async with probe_service.create_client(
        timeout=settings.http_timeout, verify_tls=settings.verify_tls
    ) as probe_client, release_service.create_client(
        base_url=settings.github_api, timeout=settings.http_timeout
    ) as api_client:
        inspector = EntryInspector(probe_client, api_client)
        return await inspector.inspect_catalog(catalog)
