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

import logging
from typing import Dict, FrozenSet, Optional

from ..exceptions import FieldNameCollisionError, UnresolvedReferenceError
from ..models.expression import (
    ArrayExpr,
    BooleanExpr,
    CoercedDateExpr,
    Expression,
    FieldExpr,
    LazyReferenceExpr,
    LiteralUnionExpr,
    NullableExpr,
    NullExpr,
    NumberExpr,
    ObjectExpr,
    OptionalExpr,
    RecordExpr,
    ReferenceExpr,
    StringExpr,
    UnionExpr,
)
from ..models.naming_policy import IDENTITY, NamingPolicy
from ..models.schema_node import (
    ArrayNode,
    Definition,
    EnumNode,
    MapNode,
    NullableNode,
    ObjectNode,
    PrimitiveKind,
    PrimitiveNode,
    ReferenceNode,
    SchemaNode,
    StringFormat,
    StringWithFormatNode,
    UnionNode,
)
from .definitions_table import DefinitionsTable

logger = logging.getLogger(__name__)


_PRIMITIVES = {
    PrimitiveKind.STRING: StringExpr(),
    PrimitiveKind.NUMBER: NumberExpr(),
    PrimitiveKind.INTEGER: NumberExpr(integer=True),
    PrimitiveKind.BOOLEAN: BooleanExpr(),
    PrimitiveKind.NULL: NullExpr(),
}


class TypeMapper:
    """Maps schema nodes to validator-expression trees.

    References to cyclic definitions become lazy references; everything else
    is referenced directly. The mapper never follows a reference, so cyclic
    definitions are never expanded.
    """

    def __init__(self, definitions: DefinitionsTable, cyclic_names: FrozenSet[str]):
        self.definitions = definitions
        self.cyclic_names = cyclic_names

    def map_definition(self, definition: Definition) -> Expression:
        logger.debug(f"Mapping definition: {definition.name}")
        return self.map_node(definition.body, definition.naming_policy, definition.name)

    def map_node(
        self,
        node: SchemaNode,
        naming_policy: NamingPolicy = IDENTITY,
        definition_name: Optional[str] = None,
    ) -> Expression:
        if isinstance(node, PrimitiveNode):
            return _PRIMITIVES[node.kind]

        if isinstance(node, StringWithFormatNode):
            if node.format == StringFormat.DATE_TIME:
                return CoercedDateExpr()
            return StringExpr()

        if isinstance(node, ObjectNode):
            return self._map_object(node, naming_policy, definition_name)

        if isinstance(node, ArrayNode):
            return ArrayExpr(self.map_node(node.item, naming_policy, definition_name))

        if isinstance(node, MapNode):
            return RecordExpr(self.map_node(node.value, naming_policy, definition_name))

        if isinstance(node, EnumNode):
            return LiteralUnionExpr(tuple(node.values))

        if isinstance(node, UnionNode):
            return UnionExpr(tuple(
                self.map_node(variant, naming_policy, definition_name)
                for variant in node.variants
            ))

        if isinstance(node, NullableNode):
            return NullableExpr(self.map_node(node.inner, naming_policy, definition_name))

        if isinstance(node, ReferenceNode):
            return self._map_reference(node, definition_name)

        raise TypeError(f"Unsupported schema node: {node!r}")

    def _map_object(
        self,
        node: ObjectNode,
        naming_policy: NamingPolicy,
        definition_name: Optional[str],
    ) -> ObjectExpr:
        fields = []
        declared_by: Dict[str, str] = {}

        for prop in node.properties:
            field_name = naming_policy(prop.name)
            if field_name in declared_by:
                raise FieldNameCollisionError(
                    f"Properties '{declared_by[field_name]}' and '{prop.name}' of "
                    f"'{definition_name}' both map to '{field_name}' "
                    f"under naming policy '{naming_policy.name}'"
                )
            declared_by[field_name] = prop.name

            # nullable is part of the node, optional wraps it last
            value = self.map_node(prop.schema, naming_policy, definition_name)
            if not prop.required:
                value = OptionalExpr(value)
            fields.append(FieldExpr(field_name, value))

        return ObjectExpr(tuple(fields))

    def _map_reference(self, node: ReferenceNode, definition_name: Optional[str]) -> Expression:
        if node.name not in self.definitions:
            raise UnresolvedReferenceError(node.name, definition_name)
        if node.name in self.cyclic_names:
            return LazyReferenceExpr(node.name)
        return ReferenceExpr(node.name)
