from __future__ import annotations

from typing import Iterator

import pytest

from apiresource import Client, FillableGuard, Model
from apiresource.Support import Str, registry


@pytest.fixture(autouse=True)
def reset_state() -> Iterator[None]:
    """Forget process-wide caches and switches between tests."""
    registry.flush()
    yield
    registry.flush()
    Str.flush_cache()
    FillableGuard.reguard()
    Model.flush_macros()
    Client.reset()
