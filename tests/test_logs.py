from __future__ import annotations

import logging

import pytest

from indastreet.logs import get_logger, init_logging


@pytest.fixture(autouse=True)
def restore_package_logger():
    logger = logging.getLogger("indastreet")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate


def test_get_logger_namespaces_module_names():
    assert get_logger("cart").name == "indastreet.cart"
    assert get_logger("indastreet.cart").name == "indastreet.cart"
    assert get_logger().name == "indastreet"


def test_init_logging_writes_to_file_and_replaces_handlers(tmp_path):
    first = tmp_path / "first.log"
    second = tmp_path / "nested" / "second.log"

    init_logging(str(first), "DEBUG")
    init_logging(str(second), "INFO")
    get_logger("shell").info("redirect_after_initialization to=FOOD")

    root = logging.getLogger("indastreet")
    assert len(root.handlers) == 1
    for handler in root.handlers:
        handler.flush()
    assert "redirect_after_initialization" in second.read_text(encoding="utf-8")
    assert first.read_text(encoding="utf-8") == ""
