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
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from ..config import GeneratorConfig, generator_config
from ..emitter.zod_emitter import ZodEmitter
from ..models.expression import Expression
from ..models.schema_node import RootSchema
from .definitions_table import DefinitionsTable, merge_schemas
from .dependency_graph import DependencyGraph
from .type_mapper import TypeMapper

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Everything one conversion run produced."""
    definitions: DefinitionsTable
    graph: DependencyGraph
    trees: Dict[str, Expression]
    code: str


def build_expression_trees(roots: Iterable[RootSchema]) -> ConversionResult:
    """Merge, analyse and map ``roots`` without rendering any text."""
    # 1. merge root schemas into one definitions table
    definitions = merge_schemas(roots)
    logger.debug(f"Definitions: {definitions.names()}")

    # 2. find definitions that take part in reference cycles
    graph = DependencyGraph.from_definitions(definitions)

    # 3. map every definition to its expression tree
    mapper = TypeMapper(definitions, graph.cyclic_names)
    trees = {definition.name: mapper.map_definition(definition) for definition in definitions}

    return ConversionResult(definitions=definitions, graph=graph, trees=trees, code="")


def run_conversion(
    roots: Iterable[RootSchema],
    config: Optional[GeneratorConfig] = None,
    emitter: Optional[ZodEmitter] = None,
) -> ConversionResult:
    """Run the full pipeline: merge, graph, map, emit.

    Any error aborts the run before text is produced.
    """
    config = config or generator_config
    result = build_expression_trees(roots)

    # 4. render the module
    emitter = emitter or ZodEmitter(config)
    result.code = emitter.emit(result.trees)

    logger.info(
        f"Converted {len(result.trees)} definitions "
        f"({len(result.graph.cyclic_names)} cyclic)"
    )
    return result


def convert(roots: Iterable[RootSchema], config: Optional[GeneratorConfig] = None) -> str:
    """Convert root schemas into one Zod module text."""
    return run_conversion(roots, config).code


def convert_definitions(roots: Iterable[RootSchema], config: Optional[GeneratorConfig] = None) -> Dict[str, str]:
    """Convert root schemas into per-definition declaration text, keyed by name."""
    result = build_expression_trees(roots)
    emitter = ZodEmitter(config or generator_config)
    return emitter.render_declarations(result.trees)
