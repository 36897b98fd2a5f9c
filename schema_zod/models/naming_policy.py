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

"""Field naming policies.

A naming policy is a pure function from a declared field name to the name
that appears in generated code. Policies are attached to a schema, never to
an individual field, and the registry uses serde's ``rename_all`` vocabulary
(``camelCase``, ``snake_case``, ``kebab-case`` ...).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List

from ..exceptions import ConfigurationError


_SEPARATOR_RE = re.compile(r"[_\-\s]+")
# lower/digit -> Upper ("moreMore") and acronym -> Word ("HTTPServer")
_CASE_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def split_words(name: str) -> List[str]:
    """Split a field name into words.

    Underscores, hyphens, whitespace and case boundaries are all separators,
    so ``more_more``, ``more-more`` and ``moreMore`` give ``['more', 'more']``.
    """
    words: List[str] = []
    for chunk in _SEPARATOR_RE.split(name):
        words.extend(word for word in _CASE_BOUNDARY_RE.split(chunk) if word)
    return words


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def to_camel_case(name: str) -> str:
    words = split_words(name)
    if not words:
        return name
    return words[0].lower() + "".join(_capitalize(w) for w in words[1:])


def to_pascal_case(name: str) -> str:
    words = split_words(name)
    if not words:
        return name
    return "".join(_capitalize(w) for w in words)


def to_snake_case(name: str) -> str:
    words = split_words(name)
    if not words:
        return name
    return "_".join(w.lower() for w in words)


def to_kebab_case(name: str) -> str:
    words = split_words(name)
    if not words:
        return name
    return "-".join(w.lower() for w in words)


@dataclass(frozen=True)
class NamingPolicy:
    """A named, pure field-renaming function.

    Equality and hashing use ``name`` only, so two policies built from the
    same registry entry compare equal.
    """

    name: str
    transform: Callable[[str], str] = field(compare=False, repr=False)

    def __call__(self, field_name: str) -> str:
        return self.transform(field_name)


IDENTITY = NamingPolicy("identity", lambda name: name)

_POLICIES: Dict[str, NamingPolicy] = {
    policy.name: policy
    for policy in (
        IDENTITY,
        NamingPolicy("lowercase", str.lower),
        NamingPolicy("UPPERCASE", str.upper),
        NamingPolicy("PascalCase", to_pascal_case),
        NamingPolicy("camelCase", to_camel_case),
        NamingPolicy("snake_case", to_snake_case),
        NamingPolicy("SCREAMING_SNAKE_CASE", lambda name: to_snake_case(name).upper()),
        NamingPolicy("kebab-case", to_kebab_case),
        NamingPolicy("SCREAMING-KEBAB-CASE", lambda name: to_kebab_case(name).upper()),
    )
}


def get_naming_policy(name: str) -> NamingPolicy:
    """Look up a naming policy by its ``rename_all`` name."""
    policy = _POLICIES.get(name)
    if policy is None:
        raise ConfigurationError(
            f"Unknown naming policy: '{name}'. Valid policies: {get_all_policy_names()}"
        )
    return policy


def get_all_policy_names() -> List[str]:
    return list(_POLICIES.keys())
