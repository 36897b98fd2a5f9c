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

"""Conversion engine: merge, dependency analysis and type mapping."""

from .conversion_pipeline import ConversionResult, convert, convert_definitions, run_conversion
from .definitions_table import DefinitionsTable, merge_schemas
from .dependency_graph import DependencyGraph, find_cyclic_names
from .type_mapper import TypeMapper

__all__ = [
    'ConversionResult',
    'convert',
    'convert_definitions',
    'run_conversion',
    'DefinitionsTable',
    'merge_schemas',
    'DependencyGraph',
    'find_cyclic_names',
    'TypeMapper',
]
