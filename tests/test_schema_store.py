import pytest

from easy_json_schema.errors import UnknownSchemaId
from easy_json_schema.store import SchemaStore


def test_register_and_lookup():
    store = SchemaStore()
    doc = {"id": "urn:thing", "type": "string"}

    store.register(doc, "urn:thing")

    assert store.contains("urn:thing")
    assert "urn:thing" in store
    assert store.get("urn:thing") is doc
    assert store.uris() == ["urn:thing"]
    assert len(store) == 1


def test_empty_fragment_names_the_same_schema():
    store = SchemaStore()
    store.register({"id": "http://example.com/a.json#", "type": "string"}, "http://example.com/a.json#")

    assert store.contains("http://example.com/a.json")
    assert store.contains("http://example.com/a.json#")


def test_unknown_uri_raises():
    store = SchemaStore()

    assert "urn:nope" not in store
    with pytest.raises(UnknownSchemaId) as ei:
        store.get("urn:nope")
    assert ei.value.uri == "urn:nope"
    with pytest.raises(UnknownSchemaId):
        list(store.iter_errors("urn:nope", {}))


def test_iter_errors_yields_every_violation():
    store = SchemaStore()
    store.register(
        {"id": "urn:pair", "type": "array", "items": {"type": "integer"}},
        "urn:pair",
    )

    errors = list(store.iter_errors("urn:pair", ["a", 1, "b"]))

    assert sorted(list(e.absolute_path) for e in errors) == [[0], [2]]


def test_reregistering_replaces_the_document():
    store = SchemaStore()
    store.register({"id": "urn:x", "type": "string"}, "urn:x")
    store.register({"id": "urn:x", "type": "integer"}, "urn:x")

    assert len(store) == 1
    assert list(store.iter_errors("urn:x", 1)) == []
    assert list(store.iter_errors("urn:x", "one"))


def test_ref_resolves_through_store_registry():
    store = SchemaStore()
    store.register({"id": "urn:name", "type": "string", "minLength": 1}, "urn:name")
    store.register(
        {"id": "urn:user", "type": "object", "properties": {"name": {"$ref": "urn:name"}}},
        "urn:user",
    )

    errors = list(store.iter_errors("urn:user", {"name": ""}))

    assert [e.validator for e in errors] == ["minLength"]
    assert store.registry.contents("urn:name")["minLength"] == 1
