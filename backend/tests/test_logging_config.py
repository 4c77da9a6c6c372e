"""
Tests for logging configuration
"""
import json
import logging
import os
import subprocess
import sys
from pathlib import Path

import pytest

from selfcore.core.logging_config import (PACKAGE_LOGGER, ContextualFormatter, LoggingConfig,
                                         SensitiveDataFilter)


@pytest.fixture
def configured():
    """selfcore handlers attached for one test"""
    LoggingConfig.reset()
    LoggingConfig.configure()
    yield
    LoggingConfig.reset()


def _record(msg, args=None, **extra):
    record = logging.LogRecord("selfcore.test", logging.INFO, __file__, 10, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.parametrize("message, leaked", [
    ("access_token=abc123 sent", "abc123"),
    ('{"token": "gh-secret"}', "gh-secret"),
    ("Authorization: token gh-secret", "gh-secret"),
    ("Authorization: Bearer gl-secret", "gl-secret"),
    ("password=hunter2", "hunter2"),
])
def test_sensitive_data_is_masked(message, leaked):
    record = _record(message)

    SensitiveDataFilter().filter(record)

    assert leaked not in record.getMessage()
    assert "***" in record.getMessage()


def test_sensitive_args_are_masked():
    record = _record("calling with %s", ("Bearer xyz",))

    SensitiveDataFilter().filter(record)

    assert record.getMessage() == "calling with Bearer ***"


def test_disabled_filter_keeps_message():
    record = _record("access_token=abc123")

    SensitiveDataFilter(enabled=False).filter(record)

    assert record.getMessage() == "access_token=abc123"


def test_json_formatter_with_context_and_extra():
    LoggingConfig.set_context(username="mihai", provider="github")
    try:
        output = ContextualFormatter().format(_record("GET done", status_code=200))
    finally:
        LoggingConfig.clear_context()

    data = json.loads(output)
    assert data["message"] == "GET done"
    assert data["level"] == "INFO"
    assert data["username"] == "mihai"
    assert data["provider"] == "github"
    assert data["status_code"] == 200


def test_module_level():
    LoggingConfig.set_module_level("selfcore.providers", "DEBUG")
    try:
        assert LoggingConfig.get_module_level("selfcore.providers") == "DEBUG"
    finally:
        LoggingConfig.set_module_level("selfcore.providers", "INFO")


def test_metrics_count_by_level(configured):
    logger = LoggingConfig.get_logger("selfcore.metrics_test")
    LoggingConfig.reset_metrics()

    logger.warning("first")
    logger.error("second")

    metrics = LoggingConfig.get_metrics()
    assert metrics["WARNING"] == 1
    assert metrics["ERROR"] == 1


def test_configure_leaves_root_logger_alone():
    root = logging.getLogger()
    handlers_before = list(root.handlers)
    level_before = root.level
    LoggingConfig.reset()

    LoggingConfig.configure()
    try:
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        assert root.handlers == handlers_before
        assert root.level == level_before
        assert package_logger.propagate is False
        assert any(isinstance(h, LoggingConfig._MetricsHandler) for h in package_logger.handlers)
    finally:
        LoggingConfig.reset()

    assert logging.getLogger(PACKAGE_LOGGER).propagate is True


def test_import_keeps_host_root_handlers():
    """A host application's logging survives importing and using the storage"""
    code = (
        "import logging\n"
        "host = logging.StreamHandler()\n"
        "host.set_name('host')\n"
        "root = logging.getLogger()\n"
        "root.addHandler(host)\n"
        "root.setLevel(logging.ERROR)\n"
        "import selfcore\n"
        "selfcore.InMemoryStorage()\n"
        "print([h.get_name() for h in root.handlers], root.level)\n"
    )
    env = dict(os.environ)
    env["PYTHONPATH"] = str(Path(__file__).parent.parent)

    result = subprocess.run(
        [sys.executable, "-c", code], env=env, capture_output=True, text=True, check=True
    )

    assert result.stdout.strip() == "['host'] 40"
