import logging

import pytest

from vasetopia_core.logging_config import NAMESPACES, setup_logging


@pytest.fixture(autouse=True)
def _restore_loggers():
    yield
    for name in NAMESPACES:
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)


def test_setup_is_idempotent(tmp_path):
    setup_logging("debug")
    setup_logging(logging.INFO, str(tmp_path / "run.log"))
    for name in NAMESPACES:
        logger = logging.getLogger(name)
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 2


def test_log_file_receives_records(tmp_path):
    log_file = tmp_path / "run.log"
    setup_logging(logging.DEBUG, str(log_file))
    logging.getLogger("vasetopia_core.lathe").debug("sweeping %d points", 4)
    for handler in logging.getLogger("vasetopia_core").handlers:
        handler.flush()
    text = log_file.read_text(encoding="utf-8")
    assert "Logging initialized." in text
    assert "vasetopia_core.lathe - DEBUG - sweeping 4 points" in text


def test_unknown_level():
    with pytest.raises(ValueError):
        setup_logging("chatty")
