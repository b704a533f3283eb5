"""
Configuration loader for gqlverify

Reads engine settings from environment variables and loads declarative
test-case suites from YAML, validated against a JSON schema.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import jsonschema
import yaml

from gqlverify.domain import Executor, QueryError, TestCase
from gqlverify.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).with_name("test_cases.schema.json")

DEFAULT_DIFF_COMMAND = "diff"
DEFAULT_JSON_INDENT = 2
DEFAULT_LOG_LEVEL = "INFO"

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """
    Engine settings.

    Attributes:
        diff_command: Name or path of the external line-diff utility
        diff_enabled: False forces the paired got/want rendering
        json_indent: Indentation width of canonical JSON
        log_level: Level applied to the gqlverify logger hierarchy
    """

    diff_command: str = DEFAULT_DIFF_COMMAND
    diff_enabled: bool = True
    json_indent: int = DEFAULT_JSON_INDENT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Load settings from environment variables.

        Variables:
            GQLVERIFY_DIFF_COMMAND: diff executable (default "diff")
            GQLVERIFY_DIFF_ENABLED: "true"/"false" (default "true")
            GQLVERIFY_JSON_INDENT: positive integer (default 2)
            GQLVERIFY_LOG_LEVEL: logging level name (default "INFO")

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            Settings instance

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ

        diff_command = env.get("GQLVERIFY_DIFF_COMMAND", DEFAULT_DIFF_COMMAND).strip()
        if not diff_command:
            raise ConfigurationError("GQLVERIFY_DIFF_COMMAND must not be empty")

        diff_enabled_raw = env.get("GQLVERIFY_DIFF_ENABLED", "true").strip().lower()
        if diff_enabled_raw not in ("true", "false"):
            raise ConfigurationError(
                f"GQLVERIFY_DIFF_ENABLED must be 'true' or 'false', got {diff_enabled_raw!r}"
            )

        indent_raw = env.get("GQLVERIFY_JSON_INDENT", str(DEFAULT_JSON_INDENT))
        try:
            json_indent = int(indent_raw)
        except ValueError as e:
            raise ConfigurationError(
                f"GQLVERIFY_JSON_INDENT must be an integer, got {indent_raw!r}"
            ) from e
        if json_indent < 1:
            raise ConfigurationError(f"GQLVERIFY_JSON_INDENT must be positive, got {json_indent}")

        log_level = env.get("GQLVERIFY_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
        if log_level not in _VALID_LOG_LEVELS:
            raise ConfigurationError(f"Unknown GQLVERIFY_LOG_LEVEL: {log_level!r}")

        return cls(
            diff_command=diff_command,
            diff_enabled=diff_enabled_raw == "true",
            json_indent=json_indent,
            log_level=log_level,
        )


def configure_logging(settings: Settings) -> None:
    """Apply the configured level to the gqlverify logger hierarchy."""
    logging.getLogger("gqlverify").setLevel(settings.log_level)


def load_suite_schema() -> Dict[str, Any]:
    """
    Load the JSON schema that suite files are validated against.

    Raises:
        ConfigurationError: If the bundled schema is missing or invalid JSON
    """
    try:
        with SCHEMA_PATH.open("r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Suite schema not found: {SCHEMA_PATH}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in suite schema: {e}") from e


def _expected_result_text(value: Any) -> str:
    """Suites may give the expected result as JSON text or as inline YAML data."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def load_test_cases(path: Union[str, Path], executor: Executor) -> List[TestCase]:
    """
    Load a YAML suite file into test cases bound to an executor.

    Args:
        path: Path to the suite YAML file
        executor: Execution collaborator every case runs against

    Returns:
        Test cases in file order

    Raises:
        FileNotFoundError: If the suite file does not exist
        ConfigurationError: If the YAML is invalid or fails schema validation
    """
    suite_path = Path(path)
    try:
        with suite_path.open("r", encoding="utf-8") as f:
            suite = yaml.safe_load(f)
    except FileNotFoundError:
        logger.error(f"Suite file not found: {suite_path}")
        raise
    except yaml.YAMLError as e:
        logger.error(f"Invalid YAML in suite file: {e}")
        raise ConfigurationError(f"Invalid YAML in {suite_path}: {e}") from e

    if suite is None:
        logger.warning(f"Empty suite file: {suite_path}")
        return []

    try:
        jsonschema.validate(instance=suite, schema=load_suite_schema())
    except jsonschema.ValidationError as e:
        logger.error(f"Suite file failed schema validation: {e.message}")
        raise ConfigurationError(f"Suite validation failed for {suite_path}: {e.message}") from e
    except jsonschema.SchemaError as e:
        raise ConfigurationError(f"Suite schema is invalid: {e.message}") from e

    cases = []
    for index, entry in enumerate(suite["cases"], 1):
        cases.append(
            TestCase(
                schema=executor,
                query=entry["query"],
                operation_name=entry.get("operation_name", ""),
                variables=entry.get("variables") or {},
                expected_result=_expected_result_text(entry.get("expected_result")),
                expected_errors=tuple(
                    QueryError.from_dict(error) for error in entry.get("expected_errors") or ()
                ),
                name=entry.get("name") or str(index),
            )
        )

    logger.info(f"Loaded {len(cases)} test cases from {suite_path}")
    return cases
