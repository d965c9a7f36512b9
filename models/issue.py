"""
models/issue.py – Issue records produced by the entry inspector.

Two variants share a correlation header (download / game identity) and carry
a ``type`` discriminator that downstream matrix jobs switch on.
"""

from dataclasses import asdict, dataclass
from typing import Any, ClassVar, Dict, Optional

from models.catalog import DownloadEntry, Game


@dataclass(frozen=True)
class IssueRecord:
    """
    Base record.

    Attributes
    ----------
    download_name : Name of the offending download entry.
    game_name     : Owning game's name.
    game_app_id   : Owning game's app id.
    """

    type: ClassVar[str] = ""

    download_name: Optional[str]
    game_name: Optional[str]
    game_app_id: Any

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["type"] = self.type
        return data


@dataclass(frozen=True)
class NetworkErrorIssue(IssueRecord):
    """The download URL could not be resolved, reached, or returned non-200."""

    type: ClassVar[str] = "network_error"

    download_status: Optional[int]
    download_status_text: str
    full_url: Optional[str]

    @classmethod
    def for_entry(
        cls,
        entry: DownloadEntry,
        game: Game,
        *,
        status: Optional[int],
        status_text: str,
        full_url: Optional[str],
    ) -> "NetworkErrorIssue":
        return cls(
            download_name=entry.name,
            game_name=game.game_name,
            game_app_id=game.app_id,
            download_status=status,
            download_status_text=status_text,
            full_url=full_url,
        )


@dataclass(frozen=True)
class NewReleaseIssue(IssueRecord):
    """The entry is pinned to a release tag older than the latest release."""

    type: ClassVar[str] = "new_release"

    new_version: str
    current_release: str
    current_url: str

    @classmethod
    def for_entry(
        cls,
        entry: DownloadEntry,
        game: Game,
        *,
        new_version: str,
        current_release: str,
        current_url: str,
    ) -> "NewReleaseIssue":
        return cls(
            download_name=entry.name,
            game_name=game.game_name,
            game_app_id=game.app_id,
            new_version=new_version,
            current_release=current_release,
            current_url=current_url,
        )
