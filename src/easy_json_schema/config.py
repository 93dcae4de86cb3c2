from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

SOURCE_KEYS = ("data", "file", "files", "directory", "directories")


def _as_path(value: Any, key: str) -> Path:
    if isinstance(value, Path):
        return value
    if isinstance(value, str) and value:
        return Path(value)
    raise ConfigurationError(f"'{key}' must be a non-empty path, got {value!r}")


def _as_paths(value: Any, key: str) -> Tuple[Path, ...]:
    if value is None:
        return ()
    # A bare string would otherwise be iterated character by character
    if isinstance(value, (str, Path)):
        raise ConfigurationError(f"'{key}' must be a list of paths, got a single path {value!r}")
    try:
        items = list(value)
    except TypeError:
        raise ConfigurationError(f"'{key}' must be a list of paths, got {value!r}") from None
    return tuple(_as_path(item, key) for item in items)


@dataclass(frozen=True)
class SchemaSources:
    """Where a :class:`SchemaRegistry` loads its schemas from.

    Sources are processed in field order: ``data``, ``file``, ``files``,
    ``directory``, then ``directories``. Every field is optional.
    """

    data: Optional[Dict[str, Any]] = None
    file: Optional[Path] = None
    files: Tuple[Path, ...] = field(default_factory=tuple)
    directory: Optional[Path] = None
    directories: Tuple[Path, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Normalise so callers may pass plain strings and lists
        if self.file is not None:
            object.__setattr__(self, "file", _as_path(self.file, "file"))
        if self.directory is not None:
            object.__setattr__(self, "directory", _as_path(self.directory, "directory"))
        object.__setattr__(self, "files", _as_paths(self.files, "files"))
        object.__setattr__(self, "directories", _as_paths(self.directories, "directories"))

    def is_empty(self) -> bool:
        return (
            self.data is None
            and self.file is None
            and not self.files
            and self.directory is None
            and not self.directories
        )

    def iter_files(self) -> Iterable[Path]:
        """Explicitly configured files in processing order (``file`` then ``files``)."""
        if self.file is not None:
            yield self.file
        yield from self.files

    def iter_directories(self) -> Iterable[Path]:
        """Configured directories in processing order (``directory`` then ``directories``)."""
        if self.directory is not None:
            yield self.directory
        yield from self.directories

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "SchemaSources":
        """Build sources from a plain mapping, rejecting unknown keys."""
        unknown = sorted(set(raw) - set(SOURCE_KEYS))
        if unknown:
            raise ConfigurationError(
                f"Unknown schema source option(s): {', '.join(unknown)}. "
                f"Expected any of: {', '.join(SOURCE_KEYS)}"
            )
        return cls(
            data=raw.get("data"),
            file=raw.get("file"),
            files=raw.get("files") or (),
            directory=raw.get("directory"),
            directories=raw.get("directories") or (),
        )

    @classmethod
    def from_json(cls, path: Path) -> "SchemaSources":
        """Load sources from a JSON file. Relative paths resolve against the file's directory."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, Mapping):
            raise ConfigurationError(f"Config file {path} must contain a JSON object")

        base = path.parent
        resolved: Dict[str, Any] = dict(raw)
        for key in ("file", "directory"):
            if resolved.get(key) is not None:
                resolved[key] = base / _as_path(resolved[key], key)
        for key in ("files", "directories"):
            if resolved.get(key) is not None:
                resolved[key] = tuple(base / p for p in _as_paths(resolved[key], key))

        sources = cls.from_mapping(resolved)
        logger.debug("Loaded schema sources from %s", path)
        return sources
