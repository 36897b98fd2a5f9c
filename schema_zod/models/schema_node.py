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

"""Normalized in-memory representation of structural schemas."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple, Union

from .naming_policy import IDENTITY, NamingPolicy


Literal = Union[str, int, float, bool, None]


class PrimitiveKind:
    """Primitive schema kinds."""
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    NULL = "null"

    @classmethod
    def get_all_kinds(cls) -> List[str]:
        return [cls.STRING, cls.NUMBER, cls.INTEGER, cls.BOOLEAN, cls.NULL]


class StringFormat:
    PLAIN = "plain"
    DATE_TIME = "date-time"


@dataclass(frozen=True)
class PrimitiveNode:
    kind: str


@dataclass(frozen=True)
class StringWithFormatNode:
    format: str = StringFormat.PLAIN


@dataclass(frozen=True)
class PropertySpec:
    name: str
    schema: "SchemaNode"
    required: bool = False


@dataclass(frozen=True, eq=False)
class ObjectNode:
    """Object with named properties.

    Properties keep their declared order, but equality only looks at
    membership: two objects with the same properties (including required-ness)
    in a different order are structurally equal.
    """

    properties: Tuple[PropertySpec, ...] = ()

    def __eq__(self, other):
        if not isinstance(other, ObjectNode):
            return NotImplemented
        return frozenset(self.properties) == frozenset(other.properties)

    def __hash__(self):
        return hash(frozenset(self.properties))


@dataclass(frozen=True)
class ArrayNode:
    item: "SchemaNode"


@dataclass(frozen=True)
class MapNode:
    """String-keyed dictionary."""
    value: "SchemaNode"


@dataclass(frozen=True, eq=False)
class EnumNode:
    values: Tuple[Literal, ...]

    def _typed_values(self) -> Tuple[Tuple[str, Literal], ...]:
        # True == 1 == 1.0 in Python, but they are different literals
        return tuple((type(value).__name__, value) for value in self.values)

    def __eq__(self, other):
        if not isinstance(other, EnumNode):
            return NotImplemented
        return self._typed_values() == other._typed_values()

    def __hash__(self):
        return hash(self._typed_values())


@dataclass(frozen=True)
class UnionNode:
    variants: Tuple["SchemaNode", ...]


@dataclass(frozen=True)
class NullableNode:
    inner: "SchemaNode"


@dataclass(frozen=True)
class ReferenceNode:
    name: str


SchemaNode = Union[
    PrimitiveNode,
    StringWithFormatNode,
    ObjectNode,
    ArrayNode,
    MapNode,
    EnumNode,
    UnionNode,
    NullableNode,
    ReferenceNode,
]


@dataclass(frozen=True)
class Definition:
    """A schema body registered under a stable name."""

    name: str
    body: SchemaNode
    naming_policy: NamingPolicy = IDENTITY


@dataclass(frozen=True)
class RootSchema:
    """One top-level schema together with the definitions declared alongside it.

    Unnamed roots carry no body of their own; they only contribute their
    nested definitions.
    """

    body: Optional[SchemaNode]
    name: Optional[str] = None
    definitions: Tuple[Definition, ...] = ()
    naming_policy: NamingPolicy = IDENTITY

    def as_definition(self) -> Optional[Definition]:
        if not self.name or self.body is None:
            return None
        return Definition(self.name, self.body, self.naming_policy)


def child_nodes(node: SchemaNode) -> Iterator[SchemaNode]:
    """Yield the direct children of a schema node."""
    if isinstance(node, ObjectNode):
        for prop in node.properties:
            yield prop.schema
    elif isinstance(node, ArrayNode):
        yield node.item
    elif isinstance(node, MapNode):
        yield node.value
    elif isinstance(node, UnionNode):
        yield from node.variants
    elif isinstance(node, NullableNode):
        yield node.inner


def iter_references(node: SchemaNode) -> Iterator[str]:
    """Yield every referenced definition name inside ``node``, depth first."""
    if isinstance(node, ReferenceNode):
        yield node.name
        return
    for child in child_nodes(node):
        yield from iter_references(child)


def object_node(properties: Dict[str, Tuple[SchemaNode, bool]]) -> ObjectNode:
    """Build an ObjectNode from ``{name: (schema, required)}``."""
    return ObjectNode(tuple(
        PropertySpec(name, schema, required)
        for name, (schema, required) in properties.items()
    ))
