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

"""Reference graph between named definitions.

Uses NetworkX for:
- strongly connected components (cycle membership)
- self-loop detection
"""

from __future__ import annotations

import logging
from typing import FrozenSet, List, Set

import networkx as nx

from ..models.schema_node import iter_references
from .definitions_table import DefinitionsTable

logger = logging.getLogger(__name__)


class DependencyGraph:
    """Directed graph with an edge ``A -> B`` iff A's body references B.

    The graph is derived from a definitions table and frozen after
    construction; rebuild it from the table instead of mutating it.
    """

    def __init__(self, graph: nx.DiGraph, cyclic_names: FrozenSet[str]):
        self._graph = graph
        self._cyclic_names = cyclic_names

    @classmethod
    def from_definitions(cls, definitions: DefinitionsTable) -> "DependencyGraph":
        graph = nx.DiGraph()
        for definition in definitions:
            graph.add_node(definition.name)
            for target in iter_references(definition.body):
                graph.add_edge(definition.name, target)

        cyclic_names = find_cyclic_names(graph)
        if cyclic_names:
            logger.debug(f"Cyclic definitions: {sorted(cyclic_names)}")

        return cls(nx.freeze(graph), cyclic_names)

    @property
    def cyclic_names(self) -> FrozenSet[str]:
        return self._cyclic_names

    def is_cyclic(self, name: str) -> bool:
        return name in self._cyclic_names

    def has_edge(self, source: str, target: str) -> bool:
        return self._graph.has_edge(source, target)

    def dependencies(self, name: str) -> List[str]:
        """Names referenced by ``name``, sorted."""
        if name not in self._graph:
            return []
        return sorted(self._graph.successors(name))


def find_cyclic_names(graph: nx.DiGraph) -> FrozenSet[str]:
    """Return every node that lies on at least one cycle, self-loops included."""
    cyclic: Set[str] = set()
    for component in nx.strongly_connected_components(graph):
        if len(component) > 1:
            cyclic.update(component)
    cyclic.update(source for source, _ in nx.selfloop_edges(graph))
    return frozenset(cyclic)
