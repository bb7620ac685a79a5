# tests/unit/test_logging.py
"""针对 `label_hub.logging_config.setup_logging` 的单元测试。"""

import logging
from collections.abc import Generator

import pytest
import structlog

from label_hub.logging_config import APP_LOGGER_NAME, setup_logging


@pytest.fixture(autouse=True)
def restore_logging() -> Generator[None, None, None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_logging(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging(log_level="DEBUG", log_format="json")

    assert logging.getLogger(APP_LOGGER_NAME).level == logging.DEBUG
    structlog.get_logger(f"{APP_LOGGER_NAME}.tests").info("hello", scope="teaRoomView")

    err = capsys.readouterr().err
    assert '"event": "hello"' in err
    assert '"scope": "teaRoomView"' in err


def test_console_logging_respects_level(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging(log_level="WARNING", log_format="console")

    logger = structlog.get_logger(f"{APP_LOGGER_NAME}.tests")
    logger.info("quiet")
    logger.warning("loud")

    err = capsys.readouterr().err
    assert "quiet" not in err
    assert "loud" in err
