"""In-memory pin that records every level it is driven to."""

from __future__ import annotations

import logging

from sockctl.core.errors import PinDriverError
from sockctl.core.model import Level

LOGGER = logging.getLogger(__name__)


class RecordingPin:
    """Dry-run backend. `fail_after` makes the n-th `set` call (1-based) fail."""

    def __init__(self, *, fail_after: int | None = None) -> None:
        self.levels: list[Level] = []
        self.fail_after = fail_after
        self.closed = False
        self._calls = 0

    def set(self, value: Level) -> None:
        self._calls += 1
        if self.fail_after is not None and self._calls >= self.fail_after:
            raise PinDriverError(f"simulated pin failure on write {self._calls}")
        self.levels.append(value)

    def close(self) -> None:
        LOGGER.debug("Recorded %d pin writes", len(self.levels))
        self.closed = True
