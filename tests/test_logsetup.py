import logging

from fractaledit.utils.logsetup import setup_logging


def test_setup_logging_is_idempotent():
    logger = setup_logging(logging.DEBUG)
    setup_logging(logging.INFO)
    marked = [h for h in logger.handlers if getattr(h, "_fractaledit", False)]
    assert len(marked) == 1
    assert logger.level == logging.INFO
    assert logger.name == "fractaledit"
