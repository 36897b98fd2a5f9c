"""Tests for reading JSON Schema documents into schema nodes."""

import json

import pytest

from schema_zod.exceptions import SchemaParseError
from schema_zod.models.naming_policy import IDENTITY, get_naming_policy
from schema_zod.models.parsing import DocumentParser, SchemaParser, find_schema_files, load_root_schemas
from schema_zod.models.schema_node import (
    ArrayNode,
    EnumNode,
    MapNode,
    NullableNode,
    PrimitiveKind,
    PrimitiveNode,
    ReferenceNode,
    StringWithFormatNode,
    UnionNode,
    object_node,
)

STRING = PrimitiveNode(PrimitiveKind.STRING)
NUMBER = PrimitiveNode(PrimitiveKind.NUMBER)
INTEGER = PrimitiveNode(PrimitiveKind.INTEGER)


@pytest.fixture
def parser():
    return SchemaParser()


class TestParseDocument:
    """Root documents and their definitions."""

    def test_root_with_definitions(self, parser, my_other_struct_schema):
        root = parser.parse_document(my_other_struct_schema)

        assert root.name == "MyOtherStruct"
        properties = {prop.name: prop.schema for prop in root.body.properties}
        assert root.naming_policy == get_naming_policy("camelCase")
        assert properties["more"] == ArrayNode(ReferenceNode("MyStruct"))
        assert properties["more_more"] == MapNode(ReferenceNode("MyStruct"))
        assert properties["time"] == StringWithFormatNode("date-time")
        assert properties["x"] == NUMBER

        (definition,) = root.definitions
        assert definition.name == "MyStruct"
        assert definition.body == object_node({"a": (STRING, True), "b": (INTEGER, True)})
        # the root's policy is not inherited
        assert definition.naming_policy == IDENTITY

    def test_default_policy(self):
        parser = SchemaParser(default_policy=get_naming_policy("snake_case"))
        root = parser.parse_document({"title": "T", "type": "string"})
        assert root.naming_policy == get_naming_policy("snake_case")

    def test_defs_keyword(self, parser):
        root = parser.parse_document({
            "$defs": {"Id": {"type": "integer"}},
            "title": "Ref",
            "$ref": "#/$defs/Id",
        })
        assert root.body == ReferenceNode("Id")
        assert root.definitions[0].name == "Id"

    def test_untitled_document_has_no_body(self, parser):
        root = parser.parse_document({"definitions": {"A": {"type": "string"}}})
        assert root.name is None
        assert root.body is None
        assert root.as_definition() is None
        assert [d.name for d in root.definitions] == ["A"]

    def test_invalid_meta_schema(self, parser):
        with pytest.raises(SchemaParseError, match="Invalid JSON Schema"):
            parser.parse_document({"title": "Bad", "type": 12})

    def test_title_must_be_string(self):
        with pytest.raises(SchemaParseError, match="title"):
            SchemaParser(check_schema=False).parse_document({"title": 3, "type": "string"})

    def test_unknown_rename_policy(self, parser):
        with pytest.raises(SchemaParseError, match="x-rename-all"):
            parser.parse_document({"title": "T", "type": "string", "x-rename-all": "Title Case"})


class TestParseNode:
    """Individual keywords."""

    def test_nullable_type_list(self, parser):
        assert parser.parse_node({"type": ["string", "null"]}) == NullableNode(STRING)

    def test_type_list_union(self, parser):
        assert parser.parse_node({"type": ["string", "integer"]}) == UnionNode((STRING, INTEGER))

    def test_any_of_with_null(self, parser):
        node = parser.parse_node({"anyOf": [{"$ref": "#/definitions/A"}, {"type": "null"}]})
        assert node == NullableNode(ReferenceNode("A"))

    def test_one_of_union(self, parser):
        node = parser.parse_node({"oneOf": [{"type": "string"}, {"type": "number"}]})
        assert node == UnionNode((STRING, NUMBER))

    def test_single_all_of(self, parser):
        assert parser.parse_node({"allOf": [{"$ref": "#/definitions/A"}]}) == ReferenceNode("A")

    def test_enum_and_const(self, parser):
        assert parser.parse_node({"enum": ["a", 1, None]}) == EnumNode(("a", 1, None))
        assert parser.parse_node({"const": "fixed"}) == EnumNode(("fixed",))

    def test_openapi_nullable(self, parser):
        assert parser.parse_node({"type": "string", "nullable": True}) == NullableNode(STRING)

    def test_inferred_object(self, parser):
        node = parser.parse_node({"properties": {"a": {"type": "boolean"}}})
        assert node == object_node({"a": (PrimitiveNode(PrimitiveKind.BOOLEAN), False)})

    def test_tuple_items(self, parser):
        node = parser.parse_node({"type": "array", "items": [{"type": "string"}, {"type": "number"}]})
        assert node == ArrayNode(UnionNode((STRING, NUMBER)))

    @pytest.mark.parametrize(
        "schema,message",
        [
            ({"$ref": "http://example.com/other.json"}, "Unsupported reference"),
            ({"allOf": [{"type": "string"}, {"type": "number"}]}, "single-member 'allOf'"),
            ({"description": "nothing else"}, "Cannot determine the type"),
            ({"type": "array"}, "without 'items'"),
            ({"enum": [{"a": 1}]}, "scalar literals"),
            (True, "Boolean schemas"),
        ],
    )
    def test_unsupported(self, parser, schema, message):
        with pytest.raises(SchemaParseError, match=message):
            parser.parse_node(schema)

    def test_error_path(self, parser):
        with pytest.raises(SchemaParseError) as exc_info:
            parser.parse_node({"properties": {"a/b": {"type": "array"}}})
        assert exc_info.value.path == "/properties/a~1b"


class TestDocumentFiles:
    """Reading documents from disk."""

    def test_json_file(self, tmp_path, my_other_struct_schema):
        path = tmp_path / "schema.json"
        path.write_text(json.dumps(my_other_struct_schema), encoding="utf-8")
        assert DocumentParser(cache_enabled=False).load_documents(path) == [my_other_struct_schema]

    def test_yaml_list_of_documents(self, tmp_path):
        path = tmp_path / "schemas.yaml"
        path.write_text(
            "- title: A\n  type: string\n- title: B\n  type: number\n",
            encoding="utf-8",
        )
        roots = load_root_schemas([path], reader=DocumentParser(cache_enabled=False))
        assert [(r.name, r.body) for r in roots] == [("A", STRING), ("B", NUMBER)]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert DocumentParser(cache_enabled=False).load_documents(path) == []

    def test_non_mapping_document(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- just a string\n", encoding="utf-8")
        with pytest.raises(SchemaParseError, match="must be a mapping"):
            DocumentParser(cache_enabled=False).load_documents(path)

    def test_non_utf8_file(self, tmp_path):
        path = tmp_path / "latin1.yaml"
        path.write_bytes(b"title: Caf\xe9\ntype: string\n")
        with pytest.raises(SchemaParseError, match="Failed to read"):
            DocumentParser(cache_enabled=False).load_documents(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(SchemaParseError, match="not found"):
            DocumentParser().load_documents(tmp_path / "missing.json")

    def test_cache(self, tmp_path):
        path = tmp_path / "a.yaml"
        path.write_text("title: A\ntype: string\n", encoding="utf-8")
        reader = DocumentParser(cache_enabled=True)
        first = reader.load_documents(path)

        path.write_text("title: A\ntype: number\n", encoding="utf-8")
        assert reader.load_documents(path) is first

        reader.clear_cache()
        assert reader.load_documents(path) == [{"title": "A", "type": "number"}]

    def test_find_schema_files(self, tmp_path):
        (tmp_path / "nested").mkdir()
        for name in ("b.json", "a.yaml", "nested/c.yml", "notes.txt"):
            (tmp_path / name).write_text("{}", encoding="utf-8")

        found = find_schema_files([tmp_path, tmp_path / "a.yaml", tmp_path / "missing"])
        assert [p.relative_to(tmp_path).as_posix() for p in found] == ["a.yaml", "b.json", "nested/c.yml"]
