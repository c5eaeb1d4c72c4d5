"""Unit tests for structured JSON logging."""

import importlib
import json
import logging
import warnings

import src.services.logger as logger_module
from src.services.logger import CustomJsonFormatter


def test_formatter_adds_standard_fields():
    """Test run_id, level and logger fields are added to every record."""
    formatter = CustomJsonFormatter("%(message)s")
    record = logging.LogRecord(
        name="src.services.poller",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Test submitted",
        args=None,
        exc_info=None,
    )
    record.test_id = "abc123"

    output = json.loads(formatter.format(record))

    assert output["message"] == "Test submitted"
    assert output["run_id"] == logger_module.RUN_ID
    assert output["level"] == "INFO"
    assert output["logger"] == "src.services.poller"
    assert output["test_id"] == "abc123"
    assert "timestamp" in output


def test_logger_module_imports_without_deprecation_warnings():
    """Test the JSON formatter is imported from its current location."""
    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        importlib.reload(logger_module)
