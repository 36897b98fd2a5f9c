"""
Shared pytest fixtures for the schema-zod test suite.
"""

import logging

import pytest

from schema_zod.config import GeneratorConfig
from schema_zod.models.schema_node import (
    ArrayNode,
    NullableNode,
    PrimitiveKind,
    PrimitiveNode,
    ReferenceNode,
    RootSchema,
    object_node,
)


NUMBER = PrimitiveNode(PrimitiveKind.NUMBER)
STRING = PrimitiveNode(PrimitiveKind.STRING)


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo logging configuration done by the CLI during a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Make sure SCHEMA_ZOD_* variables from the outer shell do not leak in."""
    import os

    for key in list(os.environ):
        if key.startswith("SCHEMA_ZOD_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def config():
    """Default generator configuration, independent of the environment."""
    return GeneratorConfig()


@pytest.fixture
def point_root():
    return RootSchema(
        name="Point",
        body=object_node({"x": (NUMBER, True), "y": (NUMBER, True)}),
    )


@pytest.fixture
def segment_root():
    return RootSchema(
        name="Segment",
        body=object_node({
            "start": (ReferenceNode("Point"), True),
            "end": (ReferenceNode("Point"), True),
        }),
    )


@pytest.fixture
def cyclic_roots():
    """Two schemas that refer to each other through optional fields."""
    return [
        RootSchema(name="A", body=object_node({"next": (ReferenceNode("B"), False)})),
        RootSchema(name="B", body=object_node({"next": (ReferenceNode("A"), False)})),
    ]


@pytest.fixture
def tree_root():
    """A self-referencing schema."""
    return RootSchema(
        name="TreeNode",
        body=object_node({
            "label": (STRING, True),
            "children": (ArrayNode(ReferenceNode("TreeNode")), True),
            "parent": (NullableNode(ReferenceNode("TreeNode")), False),
        }),
    )


@pytest.fixture
def my_struct_schema():
    return {
        "type": "object",
        "required": ["a", "b"],
        "properties": {
            "a": {"type": "string"},
            "b": {"type": "integer", "format": "uint32", "minimum": 0.0},
        },
    }


@pytest.fixture
def my_other_struct_schema(my_struct_schema):
    """A draft-07 document with a nested definition and a rename policy."""
    return {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "title": "MyOtherStruct",
        "x-rename-all": "camelCase",
        "type": "object",
        "required": ["more", "more_more", "other", "time", "x", "y"],
        "properties": {
            "x": {"type": "number", "format": "double"},
            "y": {"type": "number", "format": "double"},
            "other": {"$ref": "#/definitions/MyStruct"},
            "more": {"type": "array", "items": {"$ref": "#/definitions/MyStruct"}},
            "more_more": {"type": "object", "additionalProperties": {"$ref": "#/definitions/MyStruct"}},
            "time": {"type": "string", "format": "date-time"},
        },
        "definitions": {"MyStruct": my_struct_schema},
    }
