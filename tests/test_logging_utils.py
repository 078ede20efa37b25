import logging

from src.lesson_balance.lesson_balance.common.logging_utils import setup_logger


def test_string_level_and_file_handler(tmp_path):
    log_file = tmp_path / "logs" / "balance.log"

    logger = setup_logger("lesson_balance.test_file", level="debug", log_file=str(log_file))
    logger.debug("allocation run started")
    for handler in logger.handlers:
        handler.flush()

    assert logger.level == logging.DEBUG
    assert "allocation run started" in log_file.read_text(encoding="utf-8")


def test_repeated_setup_does_not_duplicate_handlers():
    first = setup_logger("lesson_balance.test_repeat")
    second = setup_logger("lesson_balance.test_repeat", level="WARNING")

    assert first is second
    assert len(second.handlers) == 1
