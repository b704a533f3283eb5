"""
Command line entry point.

Usage:
    gqlverify compare expected.json actual.json
    gqlverify run suite.yaml --schema schema.graphql [--root-value root.json]

Exit codes:
    0 - equal / all cases passed
    1 - difference found / at least one case failed
    2 - malformed input or configuration error
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from graphql import GraphQLError

from gqlverify.backends import GraphQLCoreExecutor
from gqlverify.comparison import DiffReporter, canonicalize
from gqlverify.config import Settings, configure_logging, load_test_cases
from gqlverify.exceptions import ConfigurationError, DiffEngineError, MalformedInputError
from gqlverify.verification import CollectingSink, run_all


def compare_files(expected_path: Path, actual_path: Path, settings: Settings) -> int:
    """Canonicalize two JSON files and print their diff."""
    try:
        want = canonicalize(expected_path.read_bytes(), side="want", indent=settings.json_indent)
        got = canonicalize(actual_path.read_bytes(), side="got", indent=settings.json_indent)
    except MalformedInputError as e:
        print(str(e), file=sys.stderr)
        return 2

    if got == want:
        print("No differences")
        return 0

    try:
        print(DiffReporter(settings=settings).report(want, got))
    except DiffEngineError as e:
        print(str(e), file=sys.stderr)
        return 2
    return 1


def run_suite(
    suite_path: Path, schema_path: Path, root_value_path: Optional[Path], settings: Settings
) -> int:
    """Run a YAML suite against a graphql-core schema built from SDL."""
    root_value = None
    if root_value_path is not None:
        try:
            root_value = json.loads(root_value_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in root value {root_value_path}: {e}") from e

    executor = GraphQLCoreExecutor.from_sdl(
        schema_path.read_text(encoding="utf-8"), root_value=root_value
    )
    cases = load_test_cases(suite_path, executor)

    sink = CollectingSink(name=suite_path.stem)
    run_all(sink, cases, DiffReporter(settings=settings))

    print(sink.summary())
    return 1 if sink.failed else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gqlverify",
        description="Verify GraphQL execution results against expectations.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    compare = subparsers.add_parser("compare", help="Diff two JSON documents structurally")
    compare.add_argument("expected", type=Path, help="Expected JSON file")
    compare.add_argument("actual", type=Path, help="Actual JSON file")

    run = subparsers.add_parser("run", help="Run a YAML test case suite")
    run.add_argument("suite", type=Path, help="Suite YAML file")
    run.add_argument("--schema", type=Path, required=True, help="Schema SDL file")
    run.add_argument("--root-value", type=Path, default=None, help="Root value JSON file")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = Settings.from_environment()
        configure_logging(settings)

        if args.command == "compare":
            return compare_files(args.expected, args.actual, settings)
        return run_suite(args.suite, args.schema, args.root_value, settings)
    except (ConfigurationError, FileNotFoundError, GraphQLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
