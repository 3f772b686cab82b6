"""Tests for logging configuration."""

import json
import logging

import pytest

from viewcells.logging_config import get_logger, log_with_context, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_writes_json(tmp_path, restore_root_logger):
    setup_logging("DEBUG", log_dir=tmp_path)
    logger = get_logger("viewcells.test")

    log_with_context(logger, "info", "Cell rendered", cell_name="menu", event_type="test_event")
    for handler in logging.getLogger().handlers:
        handler.flush()

    line = (tmp_path / "viewcells.log").read_text(encoding="utf-8").strip().splitlines()[-1]
    record = json.loads(line)
    assert record["message"] == "Cell rendered"
    assert record["cell_name"] == "menu"
    assert record["event_type"] == "test_event"


def test_log_with_context_level(caplog):
    logger = get_logger("viewcells.test")

    with caplog.at_level(logging.WARNING):
        log_with_context(logger, "warning", "careful", event_type="warn_event")

    assert caplog.records[-1].event_type == "warn_event"
