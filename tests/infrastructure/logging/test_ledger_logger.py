"""Tests for the ledger logging helpers."""

import logging
from unittest.mock import MagicMock

from daily_ledger.infrastructure.logging import logger as logger_module


def test_builder_writes_dated_file_under_project_logs(tmp_path, monkeypatch):
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "_today_stamp",
        staticmethod(lambda: "20250110"),
    )

    builder = logger_module.LoggerBuilder()
    built = (
        builder.name("ledger-test-builder")
        .subdir("recalc")
        .prefix("recalc_logs")
        .console(False)
        .level(logging.DEBUG)
        .build()
    )

    assert built.level == logging.DEBUG
    assert built.propagate is False
    file_handlers = [
        handler
        for handler in built.handlers
        if isinstance(handler, logging.FileHandler)
    ]
    assert len(file_handlers) == 1
    expected = tmp_path / "logs" / "recalc" / "20250110_recalc_logs.log"
    assert file_handlers[0].baseFilename == str(expected)
    assert all(
        isinstance(handler, logging.FileHandler) for handler in built.handlers
    )
    assert builder.build() is built


def test_builder_uses_injected_factories(tmp_path, monkeypatch):
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    fmt = logging.Formatter("%(message)s")
    file_handler = logging.NullHandler()
    console_handler = logging.NullHandler()

    built = (
        logger_module.LoggerBuilder()
        .name("ledger-test-factories")
        .formatter(lambda: fmt)
        .file_handler(lambda path, formatter: file_handler)
        .console_handler(lambda formatter: console_handler)
        .build()
    )

    assert built.handlers == [file_handler, console_handler]


def test_default_handlers_apply_formatter(tmp_path):
    fmt = logger_module.LoggerBuilder._default_formatter()

    file_handler = logger_module.LoggerBuilder._default_file_handler(
        tmp_path / "ledger.log",
        fmt,
    )
    console_handler = logger_module.LoggerBuilder._default_console_handler(fmt)

    assert file_handler.level == logging.INFO
    assert file_handler.formatter is fmt
    assert console_handler.formatter is fmt
    file_handler.close()


def test_logger_wrapper_delegates_and_is_singleton(monkeypatch):
    fake_logger = MagicMock()
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "build",
        lambda self: fake_logger,
    )
    monkeypatch.setattr(logger_module.Logger, "_instance", None)

    wrapper = logger_module.Logger("ledger")
    wrapper.info("recalculated")
    wrapper.warning("ambiguous")
    wrapper.error("upsert failed")
    wrapper.debug("state")
    wrapper.critical("halt")

    fake_logger.info.assert_called_with("recalculated")
    fake_logger.warning.assert_called_with("ambiguous")
    fake_logger.error.assert_called_with("upsert failed")
    fake_logger.debug.assert_called_with("state")
    fake_logger.critical.assert_called_with("halt")
    assert logger_module.Logger("other") is wrapper


def test_app_and_usage_loggers_are_separate_singletons(monkeypatch):
    built = []

    def _fake_build(self):
        built.append(self._subdir)
        return MagicMock()

    monkeypatch.setattr(logger_module.LoggerBuilder, "build", _fake_build)
    monkeypatch.setattr(logger_module.AppLogger, "_instance", None)
    monkeypatch.setattr(logger_module.UsageLogger, "_instance", None)

    app_logger = logger_module.get_app_logger()
    usage_logger = logger_module.get_usage_logger()

    assert logger_module.get_app_logger() is app_logger
    assert logger_module.get_usage_logger() is usage_logger
    assert app_logger is not usage_logger
    assert built == ["app", "usage"]
