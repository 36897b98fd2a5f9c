#!/usr/bin/env python3
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

"""CLI entry point for generating Zod modules from JSON Schema documents."""

import argparse
import logging
import sys
from typing import List

from ..builder.conversion_pipeline import build_expression_trees
from ..config import GeneratorConfig
from ..emitter.zod_emitter import ZodEmitter
from ..exceptions import SchemaZodError
from ..models.naming_policy import get_all_policy_names
from ..models.parsing.document_parser import DocumentParser, find_schema_files
from ..models.parsing.schema_parser import SchemaParser, load_root_schemas

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='schema-zod',
        description='Generate Zod validators and inferred types from JSON Schema documents',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'paths',
        nargs='*',
        default=None,
        help='Schema files or directories to convert (default: current directory)',
    )
    parser.add_argument(
        '-o', '--output',
        default=None,
        help='Output TypeScript file (default: stdout)',
    )
    parser.add_argument(
        '--naming-policy',
        choices=get_all_policy_names(),
        default=None,
        help='Default field naming policy for schemas without x-rename-all',
    )
    parser.add_argument(
        '--config',
        default=None,
        help='YAML file with generator settings',
    )
    parser.add_argument(
        '--no-import',
        action='store_true',
        help='Do not emit the zod import statement',
    )
    parser.add_argument(
        '--banner',
        default=None,
        help='Comment line placed at the top of the generated module',
    )
    parser.add_argument(
        '--log-level',
        default=None,
        help='Logging level (default: from configuration)',
    )
    return parser


def load_config(args: argparse.Namespace) -> GeneratorConfig:
    config = GeneratorConfig.from_env()
    if args.config:
        config = GeneratorConfig.load(args.config, base=config)

    overrides = {}
    if args.naming_policy:
        overrides['naming_policy'] = args.naming_policy
    if args.no_import:
        overrides['include_import'] = False
    if args.banner is not None:
        overrides['banner'] = args.banner
    if args.log_level:
        overrides['log_level'] = args.log_level
    if not args.output:
        # keep stdout for the generated module
        overrides['print_level'] = 'DEBUG'

    return GeneratorConfig.from_dict(overrides, base=config)


def main(argv: List[str] | None = None) -> None:
    """Main entry point for the generator CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.paths:
        args.paths = ['.']

    try:
        config = load_config(args)
    except SchemaZodError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    config.set_logging()

    schema_files = find_schema_files(args.paths)
    if not schema_files:
        logger.error("No schema files found.")
        sys.exit(1)

    try:
        roots = load_root_schemas(
            schema_files,
            parser=SchemaParser(default_policy=config.get_naming_policy()),
            reader=DocumentParser(cache_enabled=config.cache_enabled),
        )
        result = build_expression_trees(roots)

        emitter = ZodEmitter(config)
        if args.output:
            emitter.emit_to_file(result.trees, args.output)
        else:
            sys.stdout.write(emitter.emit(result.trees))
    except SchemaZodError as e:
        logger.error(f"Generation failed: {e}")
        sys.exit(1)

    sys.exit(0)


if __name__ == '__main__':
    main()
