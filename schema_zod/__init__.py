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

"""Generate Zod validators and inferred types from JSON Schema definitions."""

__version__ = "0.1.0"

from .builder import (
    DefinitionsTable,
    DependencyGraph,
    TypeMapper,
    convert,
    convert_definitions,
    merge_schemas,
    run_conversion,
)
from .config import GeneratorConfig
from .emitter import ZodEmitter
from .exceptions import (
    NameConflictError,
    SchemaParseError,
    SchemaZodError,
    UnresolvedReferenceError,
)
from .models.parsing import SchemaParser, load_root_schemas

__all__ = [
    '__version__',
    'DefinitionsTable',
    'DependencyGraph',
    'TypeMapper',
    'convert',
    'convert_definitions',
    'merge_schemas',
    'run_conversion',
    'GeneratorConfig',
    'ZodEmitter',
    'NameConflictError',
    'SchemaParseError',
    'SchemaZodError',
    'UnresolvedReferenceError',
    'SchemaParser',
    'load_root_schemas',
]
