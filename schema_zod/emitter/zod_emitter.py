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

"""Serializes validator-expression trees into a Zod TypeScript module."""

from __future__ import annotations

import json
import logging
import re
from typing import Dict, Iterator, List, Mapping, Optional

import networkx as nx

from ..config import GeneratorConfig, generator_config
from ..exceptions import InvalidIdentifierError
from ..file_io.template_renderer import TemplateRenderer
from ..models.expression import (
    ArrayExpr,
    BooleanExpr,
    CoercedDateExpr,
    Expression,
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

logger = logging.getLogger(__name__)

MODULE_TEMPLATE = "zod_module.ts.jinja2"

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

# ECMAScript reserved words (strict mode, module code) and the names
# TypeScript does not allow as a type alias
RESERVED_WORDS = frozenset("""
    await break case catch class const continue debugger default delete do else
    enum export extends false finally for function if implements import in
    instanceof interface let new null package private protected public return
    static super switch this throw true try typeof var void while with yield
    any bigint boolean never number object string symbol undefined unknown
""".split())

# a plain `__proto__:` key sets the prototype instead of defining a field
_COMPUTED_KEYS = frozenset(["__proto__"])


def is_identifier(name: str) -> bool:
    return bool(_IDENTIFIER_RE.match(name))


def render_key(name: str) -> str:
    """Render an object literal key for a field name."""
    if name in _COMPUTED_KEYS:
        return f"[{render_literal(name)}]"
    if is_identifier(name):
        return name
    return render_literal(name)


def render_banner(banner: Optional[str]) -> Optional[str]:
    """Turn every banner line into a line comment."""
    if not banner:
        return None
    lines = []
    for line in banner.splitlines():
        lines.append(line if line.lstrip().startswith("//") else f"// {line}".rstrip())
    return "\n".join(lines)


def render_literal(value) -> str:
    return json.dumps(value)


def iter_direct_references(expr: Expression) -> Iterator[str]:
    """Yield names referenced eagerly by ``expr``; lazy references are skipped."""
    if isinstance(expr, ReferenceExpr):
        yield expr.name
    elif isinstance(expr, ObjectExpr):
        for field in expr.fields:
            yield from iter_direct_references(field.value)
    elif isinstance(expr, ArrayExpr):
        yield from iter_direct_references(expr.item)
    elif isinstance(expr, RecordExpr):
        yield from iter_direct_references(expr.value)
    elif isinstance(expr, UnionExpr):
        for variant in expr.variants:
            yield from iter_direct_references(variant)
    elif isinstance(expr, (OptionalExpr, NullableExpr)):
        yield from iter_direct_references(expr.inner)


def declaration_order(trees: Mapping[str, Expression]) -> List[str]:
    """Order declarations so every eagerly referenced name is declared first.

    Ties are broken lexicographically, so the order does not depend on the
    order of ``trees``. Lazy references impose no ordering, which is what
    keeps the graph acyclic.
    """
    ordering = nx.DiGraph()
    ordering.add_nodes_from(trees)
    for name, tree in trees.items():
        for target in iter_direct_references(tree):
            if target in trees and target != name:
                ordering.add_edge(target, name)
    return list(nx.lexicographical_topological_sort(ordering))


class ZodEmitter:
    """Renders expression trees with Zod's textual syntax."""

    def __init__(self, config: Optional[GeneratorConfig] = None, renderer: Optional[TemplateRenderer] = None):
        self.config = config or generator_config
        self.renderer = renderer or TemplateRenderer()

    @property
    def z(self) -> str:
        return self.config.zod_identifier

    def render_expression(self, expr: Expression, depth: int = 0) -> str:
        z = self.z

        if isinstance(expr, StringExpr):
            return f"{z}.string()"
        if isinstance(expr, NumberExpr):
            return f"{z}.number().int()" if expr.integer else f"{z}.number()"
        if isinstance(expr, BooleanExpr):
            return f"{z}.boolean()"
        if isinstance(expr, NullExpr):
            return f"{z}.null()"
        if isinstance(expr, CoercedDateExpr):
            return f"{z}.coerce.date()"
        if isinstance(expr, ObjectExpr):
            return self._render_object(expr, depth)
        if isinstance(expr, ArrayExpr):
            return f"{z}.array({self.render_expression(expr.item, depth)})"
        if isinstance(expr, RecordExpr):
            return f"{z}.record({z}.string(), {self.render_expression(expr.value, depth)})"
        if isinstance(expr, LiteralUnionExpr):
            return self._render_literals(expr)
        if isinstance(expr, UnionExpr):
            if not expr.variants:
                return f"{z}.never()"
            if len(expr.variants) == 1:
                return self.render_expression(expr.variants[0], depth)
            variants = ", ".join(self.render_expression(v, depth) for v in expr.variants)
            return f"{z}.union([{variants}])"
        if isinstance(expr, OptionalExpr):
            return f"{self.render_expression(expr.inner, depth)}.optional()"
        if isinstance(expr, NullableExpr):
            return f"{self.render_expression(expr.inner, depth)}.nullable()"
        if isinstance(expr, LazyReferenceExpr):
            return f"{z}.lazy(() => {expr.name})"
        if isinstance(expr, ReferenceExpr):
            return expr.name

        raise TypeError(f"Unsupported expression: {expr!r}")

    def _render_object(self, expr: ObjectExpr, depth: int) -> str:
        if not expr.fields:
            return f"{self.z}.object({{}})"

        indent = " " * self.config.indent
        lines = []
        for field in sorted(expr.fields, key=lambda f: f.name):
            key = render_key(field.name)
            value = self.render_expression(field.value, depth + 1)
            lines.append(f"{indent * (depth + 1)}{key}: {value},")

        body = "\n".join(lines)
        return f"{self.z}.object({{\n{body}\n{indent * depth}}})"

    def _render_literals(self, expr: LiteralUnionExpr) -> str:
        z = self.z
        values = expr.values
        if not values:
            return f"{z}.never()"
        if len(values) == 1:
            return f"{z}.literal({render_literal(values[0])})"
        if all(isinstance(v, str) for v in values):
            return f"{z}.enum([{', '.join(render_literal(v) for v in values)}])"
        literals = ", ".join(f"{z}.literal({render_literal(v)})" for v in values)
        return f"{z}.union([{literals}])"

    def render_declaration(self, name: str, expr: Expression) -> str:
        """Render the exported validator and its inferred type for one definition."""
        self._check_identifier(name)
        return (
            f"export const {name} = {self.render_expression(expr)};\n"
            f"export type {name} = {self.z}.infer<typeof {name}>;\n"
        )

    def render_declarations(self, trees: Mapping[str, Expression]) -> Dict[str, str]:
        return {name: self.render_declaration(name, tree) for name, tree in trees.items()}

    def _template_context(self, trees: Mapping[str, Expression]) -> dict:
        declarations = []
        for name in declaration_order(trees):
            self._check_identifier(name)
            logger.debug(f"Emitting declaration: {name}")
            declarations.append({
                "name": name,
                "expression": self.render_expression(trees[name]),
            })

        return {
            "banner": render_banner(self.config.banner),
            "include_import": self.config.include_import,
            "zod_identifier": self.z,
            "zod_module": self.config.zod_module,
            "declarations": declarations,
        }

    def emit(self, trees: Mapping[str, Expression]) -> str:
        """Render every declaration into one module text.

        Either every definition renders or an exception propagates; there is
        no partial output.
        """
        context = self._template_context(trees)
        return self.renderer.render_template(MODULE_TEMPLATE, **context)

    def emit_to_file(self, trees: Mapping[str, Expression], output_path: str) -> None:
        context = self._template_context(trees)
        self.renderer.render_template_to_file(MODULE_TEMPLATE, output_path, **context)
        logger.info(f"Wrote {len(trees)} declarations to {output_path}")

    def _check_identifier(self, name: str) -> None:
        if not is_identifier(name):
            raise InvalidIdentifierError(
                f"Definition name '{name}' is not a valid TypeScript identifier"
            )
        if name in RESERVED_WORDS:
            raise InvalidIdentifierError(
                f"Definition name '{name}' is a reserved word"
            )
        if name == self.z:
            raise InvalidIdentifierError(
                f"Definition name '{name}' shadows the zod import"
            )
