from __future__ import annotations

import json
import logging
from pathlib import Path
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import urlsplit

from .config import SchemaSources
from .errors import (
    ConfigurationError,
    DuplicateSchemaTitle,
    InvalidSchemaDocument,
    InvalidSchemaId,
    InvalidSchemaTitle,
    MissingSchemaId,
    MissingSchemaTitle,
    UnknownSchemaTitle,
)
from .loader import read_schema_file, schema_files
from .store import SchemaStore
from .violations import SchemaViolation, violations_from_errors

logger = logging.getLogger(__name__)


def _parse_schema_uri(schema_id: Any, source: Optional[Path]) -> str:
    if not isinstance(schema_id, str) or not schema_id.strip():
        raise InvalidSchemaId(schema_id, source)
    try:
        urlsplit(schema_id)
    except ValueError as e:
        raise InvalidSchemaId(schema_id, source) from e
    return schema_id


def _decode_instance(data: Any) -> Any:
    if isinstance(data, (bytes, bytearray)):
        try:
            data = bytes(data).decode("utf-8")
        except UnicodeDecodeError:
            # Not UTF-8 text: validate the raw value, which no string schema accepts
            return data
    if isinstance(data, str):
        try:
            return json.loads(data)
        except json.JSONDecodeError:
            # Not JSON text: validate it as a plain string value
            return data
    return data


@dataclass(frozen=True)
class _PendingSchema:
    title: str
    schema_id: str
    uri: str
    document: Mapping[str, Any]


class SchemaRegistry:
    """Title-indexed registry of JSON Schemas.

    Schemas are loaded once, at construction, from the configured sources in
    this order: ``data``, ``file``, ``files``, ``directory``, ``directories``.
    Each schema needs a ``title`` (the lookup key) and an ``id`` (the URI the
    validator knows it by). Any loading error aborts construction.

    Sources can be given as a :class:`SchemaSources` or as keyword arguments::

        registry = SchemaRegistry(directory="schemas/")
        errors = registry.validate_data("Person", {"name": "Alice"})

    A later schema reusing a title replaces the earlier index entry unless
    ``strict_titles`` is set, in which case :class:`DuplicateSchemaTitle` is raised.
    """

    def __init__(
        self,
        config: Optional[SchemaSources] = None,
        *,
        store: Optional[SchemaStore] = None,
        strict_titles: bool = False,
        **options: Any,
    ) -> None:
        if config is not None and options:
            raise ConfigurationError("Pass either a SchemaSources object or source options, not both")
        if config is None:
            config = SchemaSources.from_mapping(options)

        self.config = config
        self.strict_titles = strict_titles
        self._store = store if store is not None else SchemaStore()
        self._schema_titles_to_ids: Dict[str, str] = {}

        self._load_all()

    # ---------------------------
    # Ingestion
    # ---------------------------

    def _load_all(self) -> None:
        pending: List[_PendingSchema] = []

        if self.config.data is not None:
            self._stage(pending, self.config.data)

        for path in self.config.iter_files():
            self._load_file(pending, path)

        for directory in self.config.iter_directories():
            self._load_directory(pending, directory)

        # Nothing touches the store until every source has loaded, so a failed
        # construction leaves a shared store as it was
        for schema in pending:
            self._store.register(schema.document, schema.uri)
            self._schema_titles_to_ids[schema.title] = schema.schema_id
            logger.debug("Registered schema '%s' (id=%s)", schema.title, schema.schema_id)

    def _load_directory(self, pending: List[_PendingSchema], directory: Path) -> None:
        files = schema_files(directory)
        for path in files:
            self._load_file(pending, path)
        logger.info("Loaded %d schema file(s) from %s", len(files), directory)

    def _load_file(self, pending: List[_PendingSchema], path: Path) -> None:
        self._stage(pending, read_schema_file(path), source=path)

    def _stage(self, pending: List[_PendingSchema], document: Any, source: Optional[Path] = None) -> None:
        if not isinstance(document, Mapping):
            raise InvalidSchemaDocument(source)
        if document.get("title") is None:
            raise MissingSchemaTitle(source)
        if document.get("id") is None:
            raise MissingSchemaId(source)

        title = document["title"]
        if not isinstance(title, str):
            raise InvalidSchemaTitle(title, source)
        schema_id = document["id"]
        uri = _parse_schema_uri(schema_id, source)

        existing = next((s.schema_id for s in reversed(pending) if s.title == title), None)
        if existing is not None and existing != schema_id:
            if self.strict_titles:
                raise DuplicateSchemaTitle(title, existing, schema_id, source)
            logger.warning(
                "Duplicate schema title '%s' (%s replaces %s); the earlier schema is no longer reachable by title",
                title,
                schema_id,
                existing,
            )

        pending.append(_PendingSchema(title=title, schema_id=schema_id, uri=uri, document=document))

    # ---------------------------
    # Lookup and validation
    # ---------------------------

    @property
    def store(self) -> SchemaStore:
        return self._store

    def list_schema_titles(self) -> List[str]:
        return list(self._schema_titles_to_ids)

    def schema_id_for(self, schema_title: str) -> str:
        try:
            return self._schema_titles_to_ids[schema_title]
        except KeyError:
            raise UnknownSchemaTitle(schema_title) from None

    def __contains__(self, schema_title: object) -> bool:
        return schema_title in self._schema_titles_to_ids

    def __len__(self) -> int:
        return len(self._schema_titles_to_ids)

    def validate_data(self, schema_title: str, data: Any) -> List[SchemaViolation]:
        """Validate ``data`` against the schema titled ``schema_title``.

        Returns every violation found; an empty list means the data is valid.
        ``data`` may be a parsed value or JSON text. Only an unknown title
        raises (:class:`UnknownSchemaTitle`); invalid data never does.
        """
        schema_id = self.schema_id_for(schema_title)
        instance = _decode_instance(data)
        errors = self._store.iter_errors(schema_id, instance)
        return violations_from_errors(errors, schema_id)

    def is_valid(self, schema_title: str, data: Any) -> bool:
        return not self.validate_data(schema_title, data)
