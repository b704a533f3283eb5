"""
Unit tests for configuration loading (gqlverify/config/settings.py)

Tests covering:
- Settings defaults and environment overrides
- Validation of environment values
- YAML suite loading with schema validation
"""

import logging

import pytest

from gqlverify.config.settings import (
    Settings,
    configure_logging,
    load_suite_schema,
    load_test_cases,
)
from gqlverify.domain import Location, QueryError
from gqlverify.exceptions import ConfigurationError
from tests.stubs import StubExecutor


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self):
        settings = Settings.from_environment({})
        assert settings == Settings()
        assert settings.diff_command == "diff"
        assert settings.diff_enabled is True
        assert settings.json_indent == 2
        assert settings.log_level == "INFO"

    def test_overrides(self):
        settings = Settings.from_environment(
            {
                "GQLVERIFY_DIFF_COMMAND": "gdiff",
                "GQLVERIFY_DIFF_ENABLED": "FALSE",
                "GQLVERIFY_JSON_INDENT": "4",
                "GQLVERIFY_LOG_LEVEL": "debug",
            }
        )
        assert settings == Settings(
            diff_command="gdiff", diff_enabled=False, json_indent=4, log_level="DEBUG"
        )

    def test_reads_os_environ_by_default(self, monkeypatch):
        monkeypatch.setenv("GQLVERIFY_JSON_INDENT", "3")
        assert Settings.from_environment().json_indent == 3

    @pytest.mark.parametrize(
        "env",
        [
            {"GQLVERIFY_DIFF_COMMAND": "  "},
            {"GQLVERIFY_DIFF_ENABLED": "yes"},
            {"GQLVERIFY_JSON_INDENT": "two"},
            {"GQLVERIFY_JSON_INDENT": "0"},
            {"GQLVERIFY_LOG_LEVEL": "LOUD"},
        ],
    )
    def test_invalid_values(self, env):
        with pytest.raises(ConfigurationError):
            Settings.from_environment(env)

    def test_configure_logging_sets_package_level(self):
        package_logger = logging.getLogger("gqlverify")
        previous = package_logger.level
        try:
            configure_logging(Settings(log_level="WARNING"))
            assert package_logger.level == logging.WARNING
        finally:
            package_logger.setLevel(previous)


class TestLoadTestCases:
    """Tests for YAML suite loading."""

    def test_bundled_schema_loads(self):
        schema = load_suite_schema()
        assert schema["required"] == ["cases"]

    def test_load_valid_suite(self, tmp_path):
        suite = tmp_path / "suite.yaml"
        suite.write_text(
            """
cases:
  - name: hero name
    query: "query Hero($episode: String) { hero(episode: $episode) { name } }"
    operation_name: Hero
    variables:
      episode: JEDI
    expected_result: '{"hero": {"name": "R2-D2"}}'
  - query: "{ broken }"
    expected_errors:
      - message: "boom"
        path: [broken]
        locations:
          - {line: 1, column: 3}
"""
        )
        executor = StubExecutor()

        cases = load_test_cases(suite, executor)

        assert len(cases) == 2
        first, second = cases
        assert first.name == "hero name"
        assert first.schema is executor
        assert first.operation_name == "Hero"
        assert first.variables == {"episode": "JEDI"}
        assert first.expected_result == '{"hero": {"name": "R2-D2"}}'
        assert first.expected_errors == ()
        assert second.name == "2"
        assert second.expected_result == ""
        assert second.expected_errors == (
            QueryError("boom", path=("broken",), locations=(Location(1, 3),)),
        )

    def test_inline_expected_result_is_dumped_to_json(self, tmp_path):
        suite = tmp_path / "suite.yaml"
        suite.write_text(
            """
cases:
  - query: "{ a }"
    expected_result:
      a: 1
  - query: "{ b }"
    expected_result: null
"""
        )
        cases = load_test_cases(suite, StubExecutor())
        assert cases[0].expected_result == '{"a": 1}'
        assert cases[1].expected_result == ""

    def test_empty_file_gives_no_cases(self, tmp_path):
        suite = tmp_path / "suite.yaml"
        suite.write_text("")
        assert load_test_cases(suite, StubExecutor()) == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_test_cases(tmp_path / "missing.yaml", StubExecutor())

    def test_invalid_yaml(self, tmp_path):
        suite = tmp_path / "suite.yaml"
        suite.write_text("cases: [unterminated")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_test_cases(suite, StubExecutor())

    def test_missing_query_fails_validation(self, tmp_path):
        suite = tmp_path / "suite.yaml"
        suite.write_text("cases:\n  - name: no query\n")
        with pytest.raises(ConfigurationError, match="validation failed"):
            load_test_cases(suite, StubExecutor())

    def test_unknown_case_field_fails_validation(self, tmp_path):
        suite = tmp_path / "suite.yaml"
        suite.write_text("cases:\n  - query: '{ a }'\n    expect: '{}'\n")
        with pytest.raises(ConfigurationError, match="validation failed"):
            load_test_cases(suite, StubExecutor())

    def test_error_without_message_fails_validation(self, tmp_path):
        suite = tmp_path / "suite.yaml"
        suite.write_text("cases:\n  - query: '{ a }'\n    expected_errors:\n      - path: [a]\n")
        with pytest.raises(ConfigurationError, match="validation failed"):
            load_test_cases(suite, StubExecutor())
