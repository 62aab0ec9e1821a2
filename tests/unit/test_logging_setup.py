import logging

import pytest

from todo_backend.logging_setup import setup_logging


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)


def test_setup_logging_installs_single_console_handler(restore_root_logger):
    setup_logging()
    setup_logging()  # повторный вызов не плодит дубли

    root = restore_root_logger
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], logging.StreamHandler)
    assert root.level == logging.INFO
    assert logging.getLogger("uvicorn.access").level == logging.WARNING
