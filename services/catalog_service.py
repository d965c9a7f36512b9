"""
services/catalog_service.py – Reads the download catalog from disk.
"""

import json
from pathlib import Path

from models.catalog import Catalog
from services.exceptions import LoadError


def load_catalog(path: Path) -> Catalog:
    """
    Read and parse the catalog JSON at *path*.

    Returns
    -------
    Catalog
        Games and default engine; either may be empty/absent.

    Raises
    ------
    LoadError
        When the file is missing, unreadable, not JSON, or not a JSON object.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise LoadError(f"Catalog file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadError(f"Cannot read catalog file '{path}': {exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise LoadError(f"Catalog file '{path}' is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise LoadError(
            f"Catalog file '{path}' must contain a JSON object, got {type(data).__name__}."
        )

    return Catalog.from_dict(data)
