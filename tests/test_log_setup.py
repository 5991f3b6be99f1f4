import logging
from io import StringIO

from log_setup import (
    ROOT_LOGGER_NAME,
    enable_debug_logging,
    get_logger,
    reset_logging,
    set_global_log_level,
    setup_root_logger,
)


def test_get_logger_nests_under_root():
    assert get_logger("path_cost").name == "netfeas.path_cost"
    assert get_logger("netfeas.graph").name == "netfeas.graph"
    assert get_logger(ROOT_LOGGER_NAME).name == ROOT_LOGGER_NAME


def test_single_handler_after_repeated_setup():
    setup_root_logger()
    setup_root_logger()
    get_logger("anything")
    assert len(logging.getLogger(ROOT_LOGGER_NAME).handlers) == 1


def test_effective_levels_enable_and_restore():
    logger = get_logger("levels")
    assert logger.getEffectiveLevel() == logging.WARNING

    enable_debug_logging()
    assert logger.getEffectiveLevel() == logging.DEBUG

    set_global_log_level(logging.WARNING)
    assert logger.getEffectiveLevel() == logging.WARNING


def test_custom_handler_receives_records():
    reset_logging()
    capture = StringIO()
    setup_root_logger(
        level=logging.INFO,
        format_string="%(levelname)s:%(name)s:%(message)s",
        handler=logging.StreamHandler(capture),
    )

    get_logger("custom").info("hello")
    get_logger("custom").debug("hidden")

    assert "INFO:netfeas.custom:hello" in capture.getvalue()
    assert "hidden" not in capture.getvalue()


def test_set_global_level_updates_handlers():
    set_global_log_level(logging.ERROR)
    root = logging.getLogger(ROOT_LOGGER_NAME)
    assert root.level == logging.ERROR
    assert all(handler.level == logging.ERROR for handler in root.handlers)
