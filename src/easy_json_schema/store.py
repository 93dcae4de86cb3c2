from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Mapping

from jsonschema import Draft4Validator
from jsonschema.exceptions import ValidationError
from jsonschema.protocols import Validator
from jsonschema.validators import validator_for
from referencing import Registry, Resource
from referencing.jsonschema import DRAFT4

from .errors import UnknownSchemaId

logger = logging.getLogger(__name__)


def _normalise_uri(uri: str) -> str:
    # "urn:a#" and "urn:a" name the same document
    return uri[:-1] if uri.endswith("#") else uri


class SchemaStore:
    """Schemas registered with the validator, keyed by their URI.

    Every schema in a store can ``$ref`` every other schema in the same store.
    A :class:`SchemaRegistry` creates its own store unless one is passed in, so
    two registries only see each other's schemas when they share a store on
    purpose. Registering a URI twice replaces the earlier document.

    Documents without a ``$schema`` keyword are treated as Draft 4, the draft
    that identifies schemas with ``id``.
    """

    def __init__(self) -> None:
        self._registry: Registry = Registry()
        self._documents: Dict[str, Mapping[str, Any]] = {}

    def register(self, document: Mapping[str, Any], uri: str) -> None:
        key = _normalise_uri(uri)
        if key in self._documents:
            logger.debug("Replacing schema registered under %s", key)
        resource = Resource.from_contents(document, default_specification=DRAFT4)
        self._registry = self._registry.with_resource(key, resource)
        self._documents[key] = document
        logger.debug("Registered schema (uri=%s)", key)

    def contains(self, uri: str) -> bool:
        return _normalise_uri(uri) in self._documents

    def __contains__(self, uri: object) -> bool:
        return isinstance(uri, str) and self.contains(uri)

    def __len__(self) -> int:
        return len(self._documents)

    def get(self, uri: str) -> Mapping[str, Any]:
        try:
            return self._documents[_normalise_uri(uri)]
        except KeyError:
            raise UnknownSchemaId(uri) from None

    def uris(self) -> List[str]:
        return list(self._documents)

    @property
    def registry(self) -> Registry:
        """The ``referencing`` registry handed to validators for ``$ref`` lookups."""
        return self._registry

    def make_validator(self, uri: str) -> Validator:
        schema = self.get(uri)
        cls = validator_for(schema, default=Draft4Validator)
        return cls(schema, registry=self._registry)

    def iter_errors(self, uri: str, instance: Any) -> Iterator[ValidationError]:
        """Yield every violation of the schema at ``uri``, not just the first."""
        return self.make_validator(uri).iter_errors(instance)
