from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def reset_termcomp_logger() -> Iterator[None]:
    """Undo configure_logging so caplog sees termcomp records in every test."""
    yield
    logger = logging.getLogger("termcomp")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
