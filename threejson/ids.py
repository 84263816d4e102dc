"""Identifier factories injected into every constructor that allocates a uuid."""

from __future__ import annotations

import itertools
import uuid
from typing import Callable

IdFactory = Callable[[], str]


def new_uuid() -> str:
    """Return a fresh random uuid in canonical hyphenated form."""
    return str(uuid.uuid4())


class SequentialIds:
    """Deterministic id factory: ``prefix-0001``, ``prefix-0002``, ...

    Useful for reproducible output and tests.
    """

    def __init__(self, prefix: str = "id") -> None:
        self.prefix = prefix
        self._counter = itertools.count(1)

    def __call__(self) -> str:
        return f"{self.prefix}-{next(self._counter):04d}"
