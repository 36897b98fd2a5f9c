# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Turns JSON Schema documents into schema nodes.

Documents are checked against their declared meta-schema first, then walked
keyword by keyword. Only the constructs that have a schema node counterpart
are accepted; anything else raises SchemaParseError with a JSON pointer to
the offending location.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import jsonschema
from jsonschema.exceptions import SchemaError

from ...exceptions import ConfigurationError, SchemaParseError
from ..naming_policy import IDENTITY, NamingPolicy, get_naming_policy
from ..schema_node import (
    ArrayNode,
    Definition,
    EnumNode,
    MapNode,
    NullableNode,
    ObjectNode,
    PrimitiveKind,
    PrimitiveNode,
    PropertySpec,
    ReferenceNode,
    RootSchema,
    SchemaNode,
    StringWithFormatNode,
    UnionNode,
)
from .document_parser import DocumentParser, document_parser

logger = logging.getLogger(__name__)

JsonPointer = str

DEFINITION_KEYWORDS = ("definitions", "$defs")
REFERENCE_PREFIXES = ("#/definitions/", "#/$defs/")
NAMING_POLICY_KEYWORD = "x-rename-all"

_NULL = PrimitiveNode(PrimitiveKind.NULL)


def _jp_escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def _jp_unescape(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def _join_path(base: JsonPointer, token: Any) -> JsonPointer:
    return f"{base}/{_jp_escape(str(token))}"


def _wrap_variants(variants: List[SchemaNode], nullable: bool) -> SchemaNode:
    """Collapse parsed variants into one node, lifting null into Nullable."""
    if not variants:
        return _NULL
    inner = variants[0] if len(variants) == 1 else UnionNode(tuple(variants))
    return NullableNode(inner) if nullable else inner


class SchemaParser:
    """Parser from JSON Schema documents to RootSchema values."""

    def __init__(self, default_policy: NamingPolicy = IDENTITY, check_schema: bool = True):
        self.default_policy = default_policy
        self.check_schema = check_schema

    def parse_documents(self, documents: Iterable[Dict[str, Any]]) -> List[RootSchema]:
        return [self.parse_document(document) for document in documents]

    def parse_document(self, document: Dict[str, Any]) -> RootSchema:
        """Parse one root document with its nested definitions."""
        if not isinstance(document, dict):
            raise SchemaParseError(f"Schema document must be a mapping, got {type(document).__name__}")

        if self.check_schema:
            self._check_meta_schema(document)

        name = document.get("title")
        if name is not None and not isinstance(name, str):
            raise SchemaParseError("Field 'title' must be a string", "/title")

        definitions = []
        for keyword in DEFINITION_KEYWORDS:
            table = document.get(keyword) or {}
            if not isinstance(table, dict):
                raise SchemaParseError(f"Field '{keyword}' must be a mapping", f"/{keyword}")
            for def_name, sub_schema in table.items():
                path = _join_path(f"/{keyword}", def_name)
                definitions.append(Definition(
                    def_name,
                    self.parse_node(sub_schema, path),
                    self._policy_for(sub_schema, path),
                ))

        if name is None:
            logger.debug("Document has no 'title'; only its definitions are used")

        root = RootSchema(
            body=self.parse_node(document, "") if name is not None else None,
            name=name,
            definitions=tuple(definitions),
            naming_policy=self._policy_for(document, ""),
        )
        logger.debug(f"Parsed root schema '{name}' with {len(definitions)} nested definitions")
        return root

    @staticmethod
    def _check_meta_schema(document: Dict[str, Any]) -> None:
        validator_cls = jsonschema.validators.validator_for(document, default=jsonschema.Draft7Validator)
        try:
            validator_cls.check_schema(document)
        except SchemaError as e:
            path = "/" + "/".join(_jp_escape(str(p)) for p in e.absolute_path) if e.absolute_path else ""
            raise SchemaParseError(f"Invalid JSON Schema: {e.message}", path) from e

    def _policy_for(self, schema: Any, path: JsonPointer) -> NamingPolicy:
        if not isinstance(schema, dict) or NAMING_POLICY_KEYWORD not in schema:
            return self.default_policy
        value = schema[NAMING_POLICY_KEYWORD]
        if not isinstance(value, str):
            raise SchemaParseError(
                f"Field '{NAMING_POLICY_KEYWORD}' must be a string", _join_path(path, NAMING_POLICY_KEYWORD)
            )
        try:
            return get_naming_policy(value)
        except ConfigurationError as e:
            raise SchemaParseError(str(e), _join_path(path, NAMING_POLICY_KEYWORD)) from e

    def parse_node(self, schema: Any, path: JsonPointer = "") -> SchemaNode:
        if isinstance(schema, bool):
            raise SchemaParseError("Boolean schemas are not supported", path)
        if not isinstance(schema, dict):
            raise SchemaParseError(f"Schema must be a mapping, got {type(schema).__name__}", path)

        node = self._parse_keywords(schema, path)

        # OpenAPI style
        if schema.get("nullable") is True and not isinstance(node, NullableNode):
            node = NullableNode(node)
        return node

    def _parse_keywords(self, schema: Dict[str, Any], path: JsonPointer) -> SchemaNode:
        if "$ref" in schema:
            return ReferenceNode(self._reference_name(schema["$ref"], _join_path(path, "$ref")))

        if "const" in schema:
            return EnumNode((self._literal(schema["const"], _join_path(path, "const")),))

        if "enum" in schema:
            values = schema["enum"]
            enum_path = _join_path(path, "enum")
            if not isinstance(values, list):
                raise SchemaParseError("Field 'enum' must be a list", enum_path)
            return EnumNode(tuple(
                self._literal(value, _join_path(enum_path, idx)) for idx, value in enumerate(values)
            ))

        for keyword in ("anyOf", "oneOf"):
            if keyword in schema:
                return self._parse_variants(schema[keyword], _join_path(path, keyword))

        if "allOf" in schema:
            members = schema["allOf"]
            all_of_path = _join_path(path, "allOf")
            if isinstance(members, list) and len(members) == 1:
                return self.parse_node(members[0], _join_path(all_of_path, 0))
            raise SchemaParseError("Only single-member 'allOf' is supported", all_of_path)

        schema_type = schema.get("type")
        if schema_type is None:
            if "properties" in schema or "additionalProperties" in schema:
                schema_type = "object"
            elif "items" in schema:
                schema_type = "array"
            else:
                raise SchemaParseError("Cannot determine the type of schema", path)

        if isinstance(schema_type, list):
            nullable = False
            variants = []
            for type_name in schema_type:
                if type_name == PrimitiveKind.NULL:
                    nullable = True
                    continue
                variants.append(self._parse_single_type(type_name, schema, path))
            return _wrap_variants(variants, nullable)

        return self._parse_single_type(schema_type, schema, path)

    def _parse_single_type(self, type_name: Any, schema: Dict[str, Any], path: JsonPointer) -> SchemaNode:
        if type_name == "object":
            return self._parse_object(schema, path)

        if type_name == "array":
            return self._parse_array(schema, path)

        if type_name == PrimitiveKind.STRING:
            string_format = schema.get("format")
            if string_format:
                return StringWithFormatNode(str(string_format))
            return PrimitiveNode(PrimitiveKind.STRING)

        if type_name in PrimitiveKind.get_all_kinds():
            return PrimitiveNode(type_name)

        raise SchemaParseError(f"Unsupported type '{type_name}'", _join_path(path, "type"))

    def _parse_variants(self, members: Any, path: JsonPointer) -> SchemaNode:
        if not isinstance(members, list) or not members:
            raise SchemaParseError("Expected a non-empty list of schemas", path)

        nullable = False
        variants = []
        for idx, member in enumerate(members):
            node = self.parse_node(member, _join_path(path, idx))
            if node == _NULL:
                nullable = True
                continue
            variants.append(node)
        return _wrap_variants(variants, nullable)

    def _parse_array(self, schema: Dict[str, Any], path: JsonPointer) -> ArrayNode:
        items = schema.get("items")
        items_path = _join_path(path, "items")
        if items is None:
            raise SchemaParseError("Array schema without 'items' is not supported", path)
        if isinstance(items, list):
            return ArrayNode(self._parse_variants(items, items_path))
        return ArrayNode(self.parse_node(items, items_path))

    def _parse_object(self, schema: Dict[str, Any], path: JsonPointer) -> SchemaNode:
        properties = schema.get("properties") or {}
        if not isinstance(properties, dict):
            raise SchemaParseError("Field 'properties' must be a mapping", _join_path(path, "properties"))

        additional = schema.get("additionalProperties")
        if not properties and isinstance(additional, dict):
            return MapNode(self.parse_node(additional, _join_path(path, "additionalProperties")))

        required = schema.get("required") or []
        if not isinstance(required, list) or not all(isinstance(r, str) for r in required):
            raise SchemaParseError("Field 'required' must be a list of strings", _join_path(path, "required"))

        missing = sorted(set(required) - set(properties))
        if missing:
            logger.debug(f"Ignoring required names without properties at '{path}': {missing}")

        properties_path = _join_path(path, "properties")
        return ObjectNode(tuple(
            PropertySpec(
                prop_name,
                self.parse_node(prop_schema, _join_path(properties_path, prop_name)),
                prop_name in required,
            )
            for prop_name, prop_schema in properties.items()
        ))

    @staticmethod
    def _reference_name(ref: Any, path: JsonPointer) -> str:
        if isinstance(ref, str):
            for prefix in REFERENCE_PREFIXES:
                if ref.startswith(prefix):
                    name = ref[len(prefix):]
                    if name and "/" not in name:
                        return _jp_unescape(name)
        raise SchemaParseError(
            f"Unsupported reference '{ref}'. Expected '#/definitions/<name>' or '#/$defs/<name>'", path
        )

    @staticmethod
    def _literal(value: Any, path: JsonPointer):
        if value is None or isinstance(value, (str, int, float, bool)):
            return value
        raise SchemaParseError(f"Only scalar literals are supported, got {type(value).__name__}", path)


def load_root_schemas(
    file_paths: Iterable[Union[str, Path]],
    parser: Optional[SchemaParser] = None,
    reader: Optional[DocumentParser] = None,
) -> List[RootSchema]:
    """Read and parse every schema document in ``file_paths``, in order."""
    parser = parser or SchemaParser()
    reader = reader or document_parser

    roots: List[RootSchema] = []
    for file_path in file_paths:
        try:
            roots.extend(parser.parse_documents(reader.load_documents(file_path)))
        except SchemaParseError as e:
            logger.error(f"Failed to load schemas from {file_path}: {e}")
            raise
    return roots
