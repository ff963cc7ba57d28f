import logging
import os
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def _isolate(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep shell config out of CLI runs and drop handlers bound to the runner's streams."""
    for key in list(os.environ):
        if key.startswith("POOL__"):
            monkeypatch.delenv(key)
    yield
    logging.getLogger().handlers.clear()
