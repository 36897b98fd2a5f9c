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
from typing import Dict, Iterable, Iterator, List, Optional

from ..exceptions import DefinitionsTableFrozenError, NameConflictError
from ..models.schema_node import Definition, RootSchema

logger = logging.getLogger(__name__)


class DefinitionsTable:
    """Name-keyed table of definitions with explicit conflict detection."""

    def __init__(self, definitions: Iterable[Definition] = ()):
        self._entries: Dict[str, Definition] = {}
        self._frozen = False
        for definition in definitions:
            self.insert(definition)

    def insert(self, definition: Definition) -> None:
        """Insert a definition.

        Re-inserting an equal definition is a no-op. A different body (or a
        different naming policy) under an existing name raises
        NameConflictError and leaves the table unchanged.
        """
        if self._frozen:
            raise DefinitionsTableFrozenError(
                f"Cannot insert '{definition.name}': definitions table is frozen"
            )

        existing = self._entries.get(definition.name)
        if existing is None:
            logger.debug(f"Adding definition: {definition.name}")
            self._entries[definition.name] = definition
            return

        if existing == definition:
            logger.debug(f"Skipping identical definition: {definition.name}")
            return

        raise NameConflictError(definition.name, existing, definition)

    def freeze(self) -> "DefinitionsTable":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str, default=None) -> Optional[Definition]:
        return self._entries.get(name, default)

    def names(self) -> List[str]:
        """Definition names in lexicographic order."""
        return sorted(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __getitem__(self, name: str) -> Definition:
        return self._entries[name]

    def __iter__(self) -> Iterator[Definition]:
        for name in self.names():
            yield self._entries[name]

    def __len__(self) -> int:
        return len(self._entries)


def merge_schemas(schemas: Iterable[RootSchema]) -> DefinitionsTable:
    """Merge root schemas into one frozen definitions table.

    Nested definitions of every root are flattened into the table, and each
    named root is inserted as a definition of its own. Unnamed roots only
    contribute their nested definitions.

    Raises:
        NameConflictError: if two definitions share a name with different content
    """
    table = DefinitionsTable()

    for schema in schemas:
        for definition in schema.definitions:
            table.insert(definition)

        root_definition = schema.as_definition()
        if root_definition is None:
            logger.debug("Root schema has no name; only its nested definitions are merged")
            continue
        table.insert(root_definition)

    logger.debug(f"Merged {len(table)} definitions")
    return table.freeze()
