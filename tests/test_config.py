"""Tests for BuilderConfig."""

import logging

from jet_schema_builder.config import DRAFT_2020_12, BuilderConfig


def test_defaults(monkeypatch):
    for name in ("REMOVE_TARGETS", "HTTP_TIMEOUT", "LOG_LEVEL", "PRINT_LEVEL", "DEFAULT_DIALECT"):
        monkeypatch.delenv(f"JET_SCHEMA_BUILDER_{name}", raising=False)
    config = BuilderConfig.from_env()
    assert config == BuilderConfig()
    assert config.remove_targets == ("properties",)
    assert config.default_dialect == DRAFT_2020_12
    assert config.print_level == "WARNING"


def test_from_env(monkeypatch):
    monkeypatch.setenv("JET_SCHEMA_BUILDER_REMOVE_TARGETS", "properties, required,")
    monkeypatch.setenv("JET_SCHEMA_BUILDER_HTTP_TIMEOUT", "2.5")
    monkeypatch.setenv("JET_SCHEMA_BUILDER_LOG_LEVEL", "DEBUG")
    config = BuilderConfig.from_env()
    assert config.remove_targets == ("properties", "required")
    assert config.http_timeout == 2.5
    assert config.log_level == "DEBUG"


def test_empty_remove_targets_fall_back(monkeypatch):
    monkeypatch.setenv("JET_SCHEMA_BUILDER_REMOVE_TARGETS", " , ")
    assert BuilderConfig.from_env().remove_targets == ("properties",)


def test_set_logging_splits_streams():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        logger = BuilderConfig(log_level="DEBUG", print_level="WARNING").set_logging()
        assert logger.name == "jet_schema_builder"
        assert root.level == logging.DEBUG
        stdout_handler, stderr_handler = root.handlers
        assert stdout_handler.level == logging.DEBUG
        assert stderr_handler.level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_warnings_go_to_stderr_by_default():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        BuilderConfig().set_logging()
        stdout_handler, stderr_handler = root.handlers
        record = logging.LogRecord("jet_schema_builder", logging.WARNING, __file__, 1, "careful", None, None)
        assert not stdout_handler.filter(record)
        assert stderr_handler.level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
