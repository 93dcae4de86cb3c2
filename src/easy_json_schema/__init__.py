"""Title-indexed JSON Schema registry.

This package provides:
- SchemaRegistry: loads schemas from data, files and directories and validates data by schema title.
- SchemaSources: the configuration naming where schemas come from.
- SchemaStore: the validator's URI-keyed schema store used for ``$ref`` resolution.
- SchemaViolation: one structured validation failure.
"""

from .config import SchemaSources
from .errors import (
    ConfigurationError,
    DuplicateSchemaTitle,
    InvalidSchemaDocument,
    InvalidSchemaId,
    InvalidSchemaTitle,
    MissingSchemaId,
    MissingSchemaTitle,
    SchemaParseError,
    SchemaRegistryError,
    UnknownSchemaId,
    UnknownSchemaTitle,
)
from .registry import SchemaRegistry
from .store import SchemaStore
from .violations import SchemaViolation, format_violations

__all__ = [
    "SchemaRegistry",
    "SchemaSources",
    "SchemaStore",
    "SchemaViolation",
    "format_violations",
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
