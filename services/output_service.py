"""
services/output_service.py – Hands results back to the CI host.

Follows the GitHub Actions conventions: outputs are appended as
``name=value`` lines to the file named by GITHUB_OUTPUT, failures are
reported with an ``::error::`` workflow command.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from models.issue import IssueRecord
from services.exceptions import AuditError

MATRIX_OUTPUT_NAME: str = "matrix"
FAILURE_EXIT_CODE: int = 1


def build_matrix(issues: Iterable[IssueRecord]) -> Dict[str, Any]:
    """``{"include": [...]}`` in discovery order, or ``{}`` when nothing was found."""
    records = [issue.to_dict() for issue in issues]
    if not records:
        return {}
    return {"include": records}


def matrix_json(issues: Iterable[IssueRecord]) -> str:
    return json.dumps(build_matrix(issues), separators=(",", ":"))


def set_output(name: str, value: str, output_file: Optional[Path] = None) -> None:
    """
    Publish one output value.

    Raises
    ------
    AuditError
        When *output_file* is set but cannot be written.
    """
    line = f"{name}={value}"
    if output_file is None:
        print(line)
        return
    try:
        with open(output_file, "a", encoding="utf-8") as fh:
            fh.write(line + "\n")
    except OSError as exc:
        raise AuditError(f"Cannot write output '{name}' to '{output_file}': {exc}") from exc


def set_failed(message: str) -> int:
    """Report *message* as the run's failure and return the exit code to use."""
    print(f"::error::{_escape_command_data(message)}")
    return FAILURE_EXIT_CODE


def _escape_command_data(text: str) -> str:
    return text.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
