from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


class SchemaRegistryError(Exception):
    """Base error for schema registry issues."""


class ConfigurationError(SchemaRegistryError):
    """Raised when the registry sources are configured incorrectly."""


# ---------------------------
# Ingestion errors
# ---------------------------

class _IngestionError(SchemaRegistryError):
    def __init__(self, message: str, source: Optional[PathLike] = None):
        self.source = Path(source) if source is not None else None
        if self.source is not None:
            message = f"Schema from {self.source} {message}"
        else:
            message = f"Schema {message}"
        super().__init__(message)


class InvalidSchemaDocument(_IngestionError):
    def __init__(self, source: Optional[PathLike] = None):
        super().__init__("is not a JSON object", source)


class MissingSchemaTitle(_IngestionError):
    def __init__(self, source: Optional[PathLike] = None):
        super().__init__("is missing title attribute", source)


class MissingSchemaId(_IngestionError):
    def __init__(self, source: Optional[PathLike] = None):
        super().__init__("is missing id attribute", source)


class InvalidSchemaId(_IngestionError):
    def __init__(self, schema_id: object, source: Optional[PathLike] = None):
        self.schema_id = schema_id
        super().__init__(f"has an id that is not a valid URI: {schema_id!r}", source)


class InvalidSchemaTitle(_IngestionError):
    def __init__(self, title: object, source: Optional[PathLike] = None):
        self.title = title
        super().__init__(f"has a title that is not a string: {title!r}", source)


class DuplicateSchemaTitle(_IngestionError):
    def __init__(self, title: str, existing_id: str, new_id: str, source: Optional[PathLike] = None):
        self.title = title
        self.existing_id = existing_id
        self.new_id = new_id
        super().__init__(
            f"reuses title '{title}' (already registered as {existing_id}, new id {new_id})",
            source,
        )


class SchemaParseError(SchemaRegistryError, json.JSONDecodeError):
    """Raised when a schema file does not contain valid JSON.

    Also a ``json.JSONDecodeError`` so callers catching the standard parse error keep working.
    """

    def __init__(self, msg: str, doc: str, pos: int, path: Optional[PathLike] = None):
        self.path = Path(path) if path is not None else None
        json.JSONDecodeError.__init__(self, msg, doc, pos)

    def __reduce__(self):
        return self.__class__, (self.msg, self.doc, self.pos, self.path)

    @classmethod
    def from_decode_error(cls, path: PathLike, error: json.JSONDecodeError) -> "SchemaParseError":
        return cls(f"Failed to parse JSON at {Path(path)}: {error.msg}", error.doc, error.pos, path)

    @classmethod
    def from_unicode_error(cls, path: PathLike, raw: bytes, error: UnicodeDecodeError) -> "SchemaParseError":
        # JSON text must be UTF-8; report the first bad byte as the error position
        doc = raw.decode("utf-8", errors="replace")
        return cls(f"Failed to parse JSON at {Path(path)}: invalid UTF-8 ({error.reason})", doc, error.start, path)


# ---------------------------
# Lookup errors
# ---------------------------

class UnknownSchemaTitle(SchemaRegistryError):
    def __init__(self, title: str):
        self.title = title
        super().__init__(f"Unknown schema title: {title}")


class UnknownSchemaId(SchemaRegistryError):
    def __init__(self, uri: str):
        self.uri = uri
        super().__init__(f"No schema registered under id: {uri}")


__all__ = [
    "SchemaRegistryError",
    "ConfigurationError",
    "InvalidSchemaDocument",
    "MissingSchemaTitle",
    "MissingSchemaId",
    "InvalidSchemaId",
    "InvalidSchemaTitle",
    "DuplicateSchemaTitle",
    "SchemaParseError",
    "UnknownSchemaTitle",
    "UnknownSchemaId",
]
