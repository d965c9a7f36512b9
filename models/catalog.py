"""
models/catalog.py – Immutable data model for the download catalog.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Tuple


@dataclass(frozen=True)
class DownloadEntry:
    """
    One downloadable asset belonging to a game or the default engine.

    Attributes
    ----------
    name              : Display name, matched case-insensitively against
                        the exemption keywords.
    url               : Base URL the file lives under (raw, like *file*).
    file              : Path fragment appended to *url*.  Kept raw so a
                        malformed value can be reported when resolving.
    ignore_all_checks : Skip every check for this entry.
    ignore_updates    : Skip only the release-drift check.
    """

    name: Optional[str] = None
    url: Any = ""
    file: Any = None
    ignore_all_checks: bool = False
    ignore_updates: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "DownloadEntry":
        return cls(
            name=data.get("name"),
            url=data.get("url") if data.get("url") is not None else "",
            file=data.get("file"),
            ignore_all_checks=bool(data.get("ignore_all_checks")),
            ignore_updates=bool(data.get("ignore_updates")),
        )

    @property
    def url_text(self) -> str:
        return self.url if isinstance(self.url, str) else ""

    @property
    def lowered_name(self) -> str:
        return self.name.lower() if isinstance(self.name, str) else ""


@dataclass(frozen=True)
class Game:
    """A game (or the default engine) and its download entries."""

    game_name: Optional[str] = None
    app_id: Any = None
    download: Tuple[DownloadEntry, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict) -> "Game":
        raw_downloads = data.get("download")
        downloads: Tuple[DownloadEntry, ...] = ()
        if isinstance(raw_downloads, list):
            downloads = tuple(
                DownloadEntry.from_dict(item) for item in raw_downloads if isinstance(item, dict)
            )
        return cls(
            game_name=data.get("game_name"),
            app_id=data.get("app_id"),
            download=downloads,
        )

    def __str__(self) -> str:
        return f"{self.game_name} ({self.app_id})"


@dataclass(frozen=True)
class Catalog:
    """Root document: every game plus the optional default engine."""

    games: Tuple[Game, ...] = field(default_factory=tuple)
    default_engine: Optional[Game] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Catalog":
        raw_games = data.get("games")
        games: Tuple[Game, ...] = ()
        if isinstance(raw_games, list):
            games = tuple(Game.from_dict(item) for item in raw_games if isinstance(item, dict))

        raw_engine = data.get("default_engine")
        engine = Game.from_dict(raw_engine) if isinstance(raw_engine, dict) else None
        return cls(games=games, default_engine=engine)

    def owners(self) -> Tuple[Game, ...]:
        """Games in catalog order, followed by the default engine if present."""
        if self.default_engine is None:
            return self.games
        return self.games + (self.default_engine,)
