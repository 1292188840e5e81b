import pytest

from solrstore.storage.search_store import (
    FieldDescriptor,
    InvalidFieldDeclarationError,
    InvalidModelDeclarationError,
    SchemaDiff,
    SchemaHelper,
    SchemaReconciler,
)

from ._data import built_fields, current_fields, fields

TOKENIZER = {"tokenizer": {"class": "solr.StandardTokenizerFactory"}}


def to_commands(descriptors: list[FieldDescriptor]) -> list[dict]:
    return [descriptor.to_dict() for descriptor in descriptors]


def full_field(field: dict) -> dict:
    return {
        "multiValued": False,
        "indexed": True,
        "stored": True,
        **field,
    }


def test_flatten():
    descriptors = SchemaHelper.flatten(fields)
    assert to_commands(descriptors) == [
        full_field(field) for field in built_fields
    ]


def test_flatten_deterministic():
    assert SchemaHelper.flatten(fields) == SchemaHelper.flatten(fields)


@pytest.mark.parametrize("depth", [1, 2, 5, 10])
def test_flatten_depth(depth: int):
    names = [f"level{i}" for i in range(depth)]
    declaration: dict = {"leaf": "long"}
    for name in reversed(names[1:]):
        declaration = {name: declaration}
    descriptors = SchemaHelper.flatten({names[0]: {"type": declaration}})
    assert len(descriptors) == 1
    assert descriptors[0].name == ".".join(names + ["leaf"])
    assert descriptors[0].name.count(".") == depth
    assert descriptors[0].type == "plong"


def test_flatten_shorthands():
    descriptors = SchemaHelper.flatten(
        {
            "a": None,
            "b": True,
            "c": "text",
            "d": {},
            "e": {"type": None, "field": "other"},
            "f": {
                "type": {
                    "g": {"type": "date"},
                    "h": {"type": "string", "field": "x"},
                    "i": True,
                }
            },
        }
    )
    assert [(d.name, d.type) for d in descriptors] == [
        ("a", "string"),
        ("b", "string"),
        ("c", "text_general"),
        ("d", "string"),
        ("e", "string"),
        ("f.g", "pdate"),
        ("f.h", "string"),
        ("f.i", "string"),
    ]


def test_flatten_nested_type_field():
    # "type" is a property of the nested object, not a declaration
    descriptors = SchemaHelper.flatten(
        {"obj": {"type": {"type": "string", "size": "number"}}}
    )
    assert [(d.name, d.type) for d in descriptors] == [
        ("obj.type", "string"),
        ("obj.size", "pint"),
    ]


def test_get_aliases():
    assert SchemaHelper.get_aliases(
        {
            "status": {"type": "string", "field": "state"},
            "address": {
                "type": {
                    "city": {"type": "string", "field": "city_s"},
                    "geo": {"lat": {"type": "double", "field": "lat_d"}},
                    "zip": "string",
                }
            },
            "name": "text",
        }
    ) == {
        "status": "state",
        "address.city": "city_s",
        "address.geo.lat": "lat_d",
    }
    assert SchemaHelper.get_aliases(fields) == {}


def test_flatten_custom_types():
    field_types = {
        "text_en": {"class": "solr.TextField", "stored": False},
        "tags": {"class": "solr.StrField", "multiValued": True},
    }
    descriptors = SchemaHelper.flatten(
        {
            "title": {"type": "text_en"},
            "tags": {"type": "tags"},
            "raw": {"type": "solr_native"},
        },
        field_types,
    )
    assert to_commands(descriptors) == [
        full_field({"name": "title", "type": "text_en", "stored": False}),
        full_field({"name": "tags", "type": "tags", "multiValued": True}),
        full_field({"name": "raw", "type": "solr_native"}),
    ]


@pytest.mark.parametrize(
    "declaration",
    [
        {"tags": {"type": []}},
        {"tags": {"type": ["string", "number"]}},
        {"tags": {"type": 5}},
        {"tags": {"type": [{"a": "string"}]}},
        {"": "string"},
        {"a.b": "string"},
        {"obj": {"type": {"a.b": "string"}}},
        {"obj": {"type": "string", "field": 5}},
    ],
)
def test_flatten_invalid(declaration):
    with pytest.raises(InvalidFieldDeclarationError):
        SchemaHelper.flatten(declaration)


def test_flatten_invalid_is_model_error():
    with pytest.raises(InvalidModelDeclarationError):
        SchemaHelper.flatten([])


def test_flatten_cycle():
    nested: dict = {"leaf": "string"}
    nested["self"] = nested
    with pytest.raises(InvalidFieldDeclarationError) as e:
        SchemaHelper.flatten({"obj": {"type": nested}})
    assert "references itself" in e.value.message


def test_flatten_too_deep():
    declaration: dict = {"leaf": "string"}
    for i in range(40):
        declaration = {f"n{i}": declaration}
    with pytest.raises(InvalidFieldDeclarationError) as e:
        SchemaHelper.flatten({"root": {"type": declaration}})
    assert "nested deeper" in e.value.message


def test_reconcile_up_to_date():
    assert (
        SchemaReconciler.reconcile(fields, None, current_fields(), [])
        is None
    )


def test_reconcile_from_empty():
    diff = SchemaReconciler.reconcile(fields, None, [], [])
    assert to_commands(diff.add_fields) == [
        full_field(field) for field in built_fields
    ]
    assert diff.replace_fields == []
    assert diff.delete_fields == []
    assert diff.to_commands() == {
        "add-field": [full_field(field) for field in built_fields]
    }


def test_reconcile_buckets():
    current = [
        {"name": "id", "type": "string"},
        {"name": "_version_", "type": "plong"},
        {"name": "_root_", "type": "string"},
        {"name": "_text_", "type": "text_general", "multiValued": True},
        {"name": "_nest_path_", "type": "_nest_path_"},
        {"name": "same", "type": "string"},
        {"name": "changed", "type": "string"},
        {"name": "stale", "type": "pint"},
    ]
    diff = SchemaReconciler.reconcile(
        {
            "same": "string",
            "changed": {"type": ["string"]},
            "added": {"type": "boolean"},
        },
        None,
        current,
        [],
    )
    assert [d.name for d in diff.add_fields] == ["added"]
    assert [d.name for d in diff.replace_fields] == ["changed"]
    assert diff.replace_fields[0].multi_valued is True
    assert [d.name for d in diff.delete_fields] == ["stale"]
    assert diff.delete_fields[0].to_command() == {"name": "stale"}

    buckets = [diff.add_fields, diff.replace_fields, diff.delete_fields]
    names = [item.name for bucket in buckets for item in bucket]
    assert len(names) == len(set(names))


def test_reconcile_field_types():
    field_types = {
        "text_en": {
            "class": "solr.TextField",
            "analyzer": TOKENIZER,
        },
        "tag": {"class": "solr.StrField", "sortMissingLast": True},
        "flag": {"class": "solr.BoolField"},
        "label": {"class": "solr.StrField"},
    }
    current_types = [
        {
            "name": "text_en",
            "class": "solr.TextField",
            "analyzer": TOKENIZER,
        },
        {"name": "tag", "class": "solr.StrField"},
        {
            "name": "label",
            "class": "solr.StrField",
            "sortMissingLast": True,
        },
        {"name": "unused", "class": "solr.StrField"},
    ]
    diff = SchemaReconciler.reconcile(
        {"title": "text_en"},
        field_types,
        [{"name": "title", "type": "text_en"}],
        current_types,
    )
    assert [t.name for t in diff.add_field_types] == ["flag"]
    assert [t.name for t in diff.replace_field_types] == ["tag", "label"]
    assert diff.add_fields == []
    assert diff.to_commands() == {
        "add-field-type": [{"name": "flag", "class": "solr.BoolField"}],
        "replace-field-type": [
            {
                "name": "tag",
                "class": "solr.StrField",
                "sortMissingLast": True,
            },
            {"name": "label", "class": "solr.StrField"},
        ],
    }
    assert list(diff.to_commands()) == ["add-field-type", "replace-field-type"]


def test_reconcile_invalid_field_types():
    with pytest.raises(InvalidModelDeclarationError):
        SchemaReconciler.reconcile({"a": "t"}, {"t": "solr.StrField"}, [], [])
    with pytest.raises(InvalidModelDeclarationError):
        SchemaReconciler.reconcile({"a": "t"}, {"t": {"stored": True}}, [], [])


def test_reconcile_flatten_errors_propagate():
    with pytest.raises(InvalidFieldDeclarationError):
        SchemaReconciler.reconcile({"a": {"type": []}}, None, [], [])


def test_schema_diff_empty():
    diff = SchemaDiff()
    assert diff.is_empty()
    assert diff.to_commands() == {}
