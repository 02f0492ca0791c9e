"""package.json reading and writing utilities.

The manifest is loaded into a plain dict (json keeps key order), one
dependency entry is changed in place, and the document is written back with
the same conventions npm uses: 2-space indentation and a trailing newline.
Every other field round-trips unchanged.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .errors import PreconditionError

DEFAULT_MANIFEST = "package.json"
DEPENDENCIES_FIELD = "dependencies"


def load_manifest(path: Path) -> dict[str, Any]:
    """Load and parse a package.json file.

    Raises:
        PreconditionError: If the file is missing or is not a JSON object.
    """
    try:
        doc = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise PreconditionError(f"No manifest found at {path}") from exc
    except json.JSONDecodeError as exc:
        raise PreconditionError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(doc, dict):
        raise PreconditionError(f"{path} does not contain a JSON object")
    return doc


def save_manifest(path: Path, doc: dict[str, Any]) -> None:
    """Write the manifest back to disk with 2-space indent and trailing newline."""
    path.write_text(
        json.dumps(doc, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
    )


def _dependencies(doc: dict[str, Any]) -> dict[str, Any]:
    deps = doc.get(DEPENDENCIES_FIELD, {})
    if not isinstance(deps, dict):
        raise PreconditionError(f'"{DEPENDENCIES_FIELD}" is not an object')
    return deps


def get_dependency_version(doc: dict[str, Any], package_name: str) -> str | None:
    """Return the version range recorded for a dependency, or None if absent."""
    return _dependencies(doc).get(package_name)


def set_dependency_version(
    doc: dict[str, Any], package_name: str, version: str
) -> None:
    """Set a dependency's version range in place.

    An existing entry keeps its position in the mapping.
    """
    if DEPENDENCIES_FIELD not in doc:
        doc[DEPENDENCIES_FIELD] = {}
    _dependencies(doc)[package_name] = version
