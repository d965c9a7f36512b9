"""
services/config.py – Runtime settings for an audit run.

Values come from the environment first; main.py overrides them with any CLI
flags that were given.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from services.exceptions import ConfigError

# ── Defaults ─────────────────────────────────────────────────────────────────
DEFAULT_CATALOG_PATH: Path = Path("metadata") / "packagessniper_v2.json"
DEFAULT_GITHUB_API: str = "https://api.github.com"
DEFAULT_HTTP_TIMEOUT: float = 30.0
DEFAULT_LOG_LEVEL: str = "INFO"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AuditSettings:
    """
    Settings for one run.

    Attributes
    ----------
    catalog_path : Catalog JSON file, relative to the working directory.
    github_api   : Base URL of the GitHub REST API.
    http_timeout : Per-request timeout in seconds.
    verify_tls   : Verify certificates on availability probes.  Turning this
                   off is unsafe; it never affects the GitHub API client.
    log_level    : Logging level name.
    output_file  : File receiving ``name=value`` outputs (GITHUB_OUTPUT).
                   None prints the output to stdout instead.
    """

    catalog_path: Path = DEFAULT_CATALOG_PATH
    github_api: str = DEFAULT_GITHUB_API
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    verify_tls: bool = True
    log_level: str = DEFAULT_LOG_LEVEL
    output_file: Optional[Path] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AuditSettings":
        env = os.environ if environ is None else environ

        timeout_raw = env.get("AUDIT_HTTP_TIMEOUT", "").strip()
        timeout = DEFAULT_HTTP_TIMEOUT
        if timeout_raw:
            timeout = _parse_timeout(timeout_raw, "AUDIT_HTTP_TIMEOUT")

        output_raw = env.get("GITHUB_OUTPUT", "").strip()

        return cls(
            catalog_path=Path(env.get("AUDIT_CATALOG_PATH") or DEFAULT_CATALOG_PATH),
            github_api=(env.get("AUDIT_GITHUB_API") or DEFAULT_GITHUB_API).rstrip("/"),
            http_timeout=timeout,
            verify_tls=env.get("AUDIT_INSECURE_TLS", "").strip().lower() not in _TRUTHY,
            log_level=(env.get("AUDIT_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
            output_file=Path(output_raw) if output_raw else None,
        )

    def override(self, **changes) -> "AuditSettings":
        """Return a copy with every non-None value in *changes* applied."""
        applied = {key: value for key, value in changes.items() if value is not None}
        if "github_api" in applied:
            applied["github_api"] = applied["github_api"].rstrip("/")
        if "http_timeout" in applied:
            applied["http_timeout"] = _parse_timeout(str(applied["http_timeout"]), "--timeout")
        if "log_level" in applied:
            applied["log_level"] = applied["log_level"].upper()
        return replace(self, **applied)


def _parse_timeout(raw: str, source: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{source} must be a number of seconds, got {raw!r}.") from exc
    if value <= 0:
        raise ConfigError(f"{source} must be positive, got {raw!r}.")
    return value
