import logging

import pytest


@pytest.fixture(autouse=True)
def _restore_logging():
    """CLI tests reconfigure the root logger; undo it after each test."""
    root = logging.getLogger()
    level = root.level
    handlers = list(root.handlers)
    yield
    logging.disable(logging.NOTSET)
    root.setLevel(level)
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
