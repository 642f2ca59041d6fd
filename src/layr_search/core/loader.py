"""
Project loading.

Turns a project JSON document into ``ProjectFiles``. Accepts either the
``{"files": {...}}`` envelope the editor exports or a bare files object.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import make_load_error
from .ir import ProjectFiles

logger = logging.getLogger(__name__)


def parse_project(data: Any, source: Path | None = None) -> ProjectFiles:
    """Validate already-decoded JSON into the Project Model."""
    if not isinstance(data, dict):
        raise make_load_error("Project must be a JSON object", source)

    files = data.get("files", data)
    if not isinstance(files, dict):
        raise make_load_error("'files' must be a JSON object", source, ("files",))

    try:
        return ProjectFiles.model_validate(files)
    except ValidationError as e:
        first = e.errors()[0]
        location = tuple(first.get("loc", ()))
        raise make_load_error(
            f"Project does not validate: {first.get('msg', 'invalid value')}",
            source,
            location,
        ) from e


def load_project(path: Path) -> ProjectFiles:
    """Read and validate a project file."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise make_load_error(f"Cannot read project: {e}", path) from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise make_load_error(f"Invalid JSON: {e.msg} (line {e.lineno})", path) from e
    except RecursionError as e:
        raise make_load_error("Invalid JSON: nested too deeply", path) from e

    files = parse_project(data, source=path)
    logger.debug(
        "Loaded %s: %d components, %d formulas, %d packages",
        path,
        len(files.components),
        len(files.formulas),
        len(files.packages),
    )
    return files
