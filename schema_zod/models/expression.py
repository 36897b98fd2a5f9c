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

"""Validator-expression tree.

Each class mirrors one composable Zod form. Trees are produced by the type
mapper and only read by the emitter; references point at definitions by name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from .schema_node import Literal


@dataclass(frozen=True)
class StringExpr:
    pass


@dataclass(frozen=True)
class NumberExpr:
    integer: bool = False


@dataclass(frozen=True)
class BooleanExpr:
    pass


@dataclass(frozen=True)
class NullExpr:
    pass


@dataclass(frozen=True)
class CoercedDateExpr:
    """Accepts date-like input and produces a date value."""
    pass


@dataclass(frozen=True)
class FieldExpr:
    name: str
    value: "Expression"


@dataclass(frozen=True)
class ObjectExpr:
    fields: Tuple[FieldExpr, ...] = ()


@dataclass(frozen=True)
class ArrayExpr:
    item: "Expression"


@dataclass(frozen=True)
class RecordExpr:
    """Record keyed by strings."""
    value: "Expression"


@dataclass(frozen=True)
class LiteralUnionExpr:
    values: Tuple[Literal, ...]


@dataclass(frozen=True)
class UnionExpr:
    variants: Tuple["Expression", ...]


@dataclass(frozen=True)
class OptionalExpr:
    inner: "Expression"


@dataclass(frozen=True)
class NullableExpr:
    inner: "Expression"


@dataclass(frozen=True)
class ReferenceExpr:
    name: str


@dataclass(frozen=True)
class LazyReferenceExpr:
    """Reference resolved on first use; breaks cyclic definitions."""
    name: str


Expression = Union[
    StringExpr,
    NumberExpr,
    BooleanExpr,
    NullExpr,
    CoercedDateExpr,
    ObjectExpr,
    ArrayExpr,
    RecordExpr,
    LiteralUnionExpr,
    UnionExpr,
    OptionalExpr,
    NullableExpr,
    ReferenceExpr,
    LazyReferenceExpr,
]
