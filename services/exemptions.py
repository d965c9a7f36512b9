"""
services/exemptions.py – Tables deciding which entries skip which checks.

Add a row to RELEASE_CHECK_EXEMPTIONS to stop an entry from being compared
against its repository's latest release; the inspector never needs to change.
"""

import enum
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from models.catalog import DownloadEntry

# ── Configuration ────────────────────────────────────────────────────────────

# Our own package storage.  Always assumed available and never drift-checked.
TRUSTED_ARTIFACT_PREFIX: str = "https://github.com/luxtorpeda-dev/packages"


class Field(enum.Enum):
    URL = "url"
    NAME = "name"


class Match(enum.Enum):
    CONTAINS = "contains"
    EQUALS = "equals"


@dataclass(frozen=True)
class ExemptionRule:
    """
    One string predicate over a download entry.

    Name rules compare against the lower-cased entry name; URL rules compare
    against the raw URL.
    """

    field: Field
    match: Match
    value: str

    def matches(self, entry: DownloadEntry) -> bool:
        subject = entry.url_text if self.field is Field.URL else entry.lowered_name
        if self.match is Match.EQUALS:
            return subject == self.value
        return self.value in subject

    def __str__(self) -> str:
        return f"{self.field.value} {self.match.value} {self.value!r}"


def _url(value: str) -> ExemptionRule:
    return ExemptionRule(Field.URL, Match.CONTAINS, value)


def _name(value: str) -> ExemptionRule:
    return ExemptionRule(Field.NAME, Match.CONTAINS, value)


RELEASE_CHECK_EXEMPTIONS: Tuple[ExemptionRule, ...] = (
    _url(TRUSTED_ARTIFACT_PREFIX),
    _name("openjdk"),
    _url("quaddicted"),
    _name("soundfont"),
    _url("ioquake3.org"),
    _url("icculus.org"),
    _name("soundtrack"),
    _name("catalogue"),
    _url("slashbunny"),
    _url("unreal-archive-files"),
    _url("nwjs.io"),
    _url("playmorepromode.com"),
    _url("daikatana/tree"),
    _name("music"),
    _name("rvgl"),
    _url("ezquake"),
    ExemptionRule(Field.NAME, Match.EQUALS, "eawpats"),
)

# ── Public API ───────────────────────────────────────────────────────────────


def is_trusted_host(url: str) -> bool:
    return TRUSTED_ARTIFACT_PREFIX in url


def release_exemption(
    entry: DownloadEntry,
    rules: Iterable[ExemptionRule] = RELEASE_CHECK_EXEMPTIONS,
) -> Optional[ExemptionRule]:
    """Return the first rule exempting *entry* from the drift check, if any."""
    for rule in rules:
        if rule.matches(entry):
            return rule
    return None
