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

"""Command line entry point: derive shapes, validate instances, emit stubs."""

import argparse
import json
import sys
from typing import List

import yaml

from .config import builder_config
from .exceptions import ParseError, SchemaBuilderError
from .file_io.schema_loader import load_schema
from .file_io.stub_generator import generate_stub
from .models.jetter import derive
from .models.validation import validate_instance


def _derive(args: argparse.Namespace) -> int:
    shape = derive(load_schema(args.schema))
    if args.format == 'json':
        print(json.dumps(shape.to_dict(), indent=2))
    else:
        print(shape.describe())
    return 0


def _validate(args: argparse.Namespace) -> int:
    schema = load_schema(args.schema)
    instance = _read_instance(args.instance)
    issues = validate_instance(instance, schema, default_dialect=builder_config.default_dialect)
    for issue in issues:
        print(f"  ERROR: {issue}")
    if issues:
        print(f"{args.instance}: {len(issues)} issue(s)", file=sys.stderr)
        return 1
    print(f"{args.instance}: valid")
    return 0


def _read_instance(path: str):
    # instances may be any JSON value, not only objects
    with open(path, "r", encoding="utf-8") as f:
        try:
            if path.endswith((".yaml", ".yml")):
                return yaml.safe_load(f)
            return json.load(f)
        except (ValueError, yaml.YAMLError) as e:
            raise ParseError(f"Failed to parse instance {path}: {e}") from e


def _stub(args: argparse.Namespace) -> int:
    print(generate_stub(load_schema(args.schema), args.name, source=args.schema), end='')
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='jet_schema_builder',
        description='Inspect JSON Schema documents',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    derive_parser = subparsers.add_parser('derive', help='Print the shape a schema describes')
    derive_parser.add_argument('schema', help='Schema file path or http(s) URL')
    derive_parser.add_argument(
        '--format',
        choices=['text', 'json'],
        default='text',
        help='Output format (default: text)',
    )
    derive_parser.set_defaults(handler=_derive)

    validate_parser = subparsers.add_parser('validate', help='Validate an instance against a schema')
    validate_parser.add_argument('schema', help='Schema file path or http(s) URL')
    validate_parser.add_argument('instance', help='Instance file path (JSON or YAML)')
    validate_parser.set_defaults(handler=_validate)

    stub_parser = subparsers.add_parser('stub', help='Print TypedDict declarations for a schema')
    stub_parser.add_argument('schema', help='Schema file path or http(s) URL')
    stub_parser.add_argument('--name', default='Schema', help='Name of the top-level type')
    stub_parser.set_defaults(handler=_stub)

    return parser


def main(argv: List[str] | None = None) -> None:
    """Main entry point for the command line."""
    args = build_parser().parse_args(argv)
    builder_config.set_logging()

    try:
        code = args.handler(args)
    except (SchemaBuilderError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    sys.exit(code)


if __name__ == '__main__':
    main()
