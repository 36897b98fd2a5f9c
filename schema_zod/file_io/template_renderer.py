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

"""Template rendering utilities for generated TypeScript modules."""

from __future__ import annotations

import json
import os

from jinja2 import Environment, FileSystemLoader, StrictUndefined


def _get_template_directories() -> list[str]:
    """Resolve template search paths for the bundled templates."""

    # Base dir is .../schema_zod/file_io
    base_dir = os.path.dirname(os.path.abspath(__file__))
    template_dir = os.path.abspath(os.path.join(base_dir, "../template"))

    if os.path.exists(template_dir):
        return [template_dir]
    return []


def tojson_filter(value):
    """Jinja2 filter rendering a value as a JSON (and therefore TypeScript) literal."""

    return json.dumps(value)


class TemplateRenderer:
    """Unified template rendering utility."""

    def __init__(self, template_dir: str | list[str] | None = None):
        if template_dir is None:
            template_dirs = _get_template_directories()
        elif isinstance(template_dir, str):
            template_dirs = [template_dir]
        else:
            template_dirs = list(template_dir)

        self.template_dirs = template_dirs
        self.env = Environment(
            loader=FileSystemLoader(self.template_dirs),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            newline_sequence="\n",
            autoescape=False,
            undefined=StrictUndefined,
        )
        self.env.filters["tojson"] = tojson_filter

    def render_template(self, template_name: str, **kwargs) -> str:
        template = self.env.get_template(template_name)
        return template.render(**kwargs)

    def render_template_to_file(self, template_name: str, output_path: str, **kwargs) -> None:
        content = self.render_template(template_name, **kwargs)
        write_text_file(output_path, content)


def write_text_file(output_path: str, content: str) -> None:
    output_dir = os.path.dirname(output_path)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
    if os.path.exists(output_path):
        os.remove(output_path)
    with open(output_path, "w", encoding="utf-8", newline="\n") as f:
        f.write(content)
