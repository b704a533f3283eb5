"""Configuration - environment settings and YAML suite loading."""

from .settings import Settings, configure_logging, load_test_cases

__all__ = ["Settings", "configure_logging", "load_test_cases"]
