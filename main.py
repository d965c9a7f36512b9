"""
main.py – download-audit entry point.

Loads the catalog, runs every check and publishes the ``matrix`` output for
the downstream job-matrix step.  Any fatal error is reported through the
host's failure channel and turned into a non-zero exit code.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from services import output_service
from services.catalog_service import load_catalog
from services.config import AuditSettings
from services.inspection_service import run_audit

log = logging.getLogger(__name__)

LOG_FORMAT: str = "%(levelname)s %(name)s: %(message)s"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Check catalog download URLs for dead links and newer GitHub releases."
    )
    p.add_argument("--catalog", type=Path, help="Catalog JSON (default: metadata/packagessniper_v2.json)")
    p.add_argument("--github-api", help="GitHub REST API base URL")
    p.add_argument("--timeout", type=float, help="Per-request timeout in seconds")
    p.add_argument(
        "--insecure",
        action="store_true",
        help="Do not verify TLS certificates when probing downloads (unsafe)",
    )
    p.add_argument("--log-level", help="Logging level (default: INFO)")
    p.add_argument("--output-file", type=Path, help="Append outputs here (default: $GITHUB_OUTPUT)")
    return p.parse_args(argv)


def configure_logging(level: str) -> None:
    logging.basicConfig(stream=sys.stdout, level=level, format=LOG_FORMAT, force=True)


def run(settings: AuditSettings) -> None:
    log.info("Starting.")
    catalog = load_catalog(settings.catalog_path)
    issues = asyncio.run(run_audit(catalog, settings))
    log.info("Issues found: %d", len(issues))
    output_service.set_output(
        output_service.MATRIX_OUTPUT_NAME,
        output_service.matrix_json(issues),
        settings.output_file,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        settings = AuditSettings.from_env().override(
            catalog_path=args.catalog,
            github_api=args.github_api,
            http_timeout=args.timeout,
            verify_tls=False if args.insecure else None,
            log_level=args.log_level,
            output_file=args.output_file,
        )
        configure_logging(settings.log_level)
        run(settings)
    except Exception as exc:  # noqa: BLE001
        # Single failure message for the host, whatever went wrong.
        return output_service.set_failed(str(exc) or type(exc).__name__)
    return 0


if __name__ == "__main__":
    sys.exit(main())
