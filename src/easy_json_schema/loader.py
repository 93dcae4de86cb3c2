from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Union

from .errors import SchemaParseError

logger = logging.getLogger(__name__)

SCHEMA_SUFFIX = ".json"


def read_schema_file(path: Union[str, Path]) -> Any:
    """Read and parse a single schema file.

    OS errors (missing or unreadable file) propagate unchanged. Invalid JSON
    raises :class:`SchemaParseError` naming the file.
    """
    p = Path(path)
    logger.debug("Loading schema file: %s", p)
    with p.open("rb") as f:
        raw = f.read()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SchemaParseError.from_unicode_error(p, raw, e) from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise SchemaParseError.from_decode_error(p, e) from e


def schema_files(directory: Union[str, Path]) -> List[Path]:
    """Return the schema files directly inside ``directory``.

    Only regular files whose name ends in ``.json`` are returned, sorted by
    name. Subdirectories are not descended into.
    """
    d = Path(directory)
    if not d.exists():
        raise FileNotFoundError(f"Schema directory not found: {d}")
    if not d.is_dir():
        raise NotADirectoryError(f"Schema directory is not a directory: {d}")

    return sorted(
        (entry for entry in d.iterdir() if entry.name.endswith(SCHEMA_SUFFIX) and entry.is_file()),
        key=lambda entry: entry.name,
    )
