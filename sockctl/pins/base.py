"""Pin driver interface."""

from __future__ import annotations

from typing import Protocol

from sockctl.core.model import Level


class Pin(Protocol):
    def set(self, value: Level) -> None:
        """Drive the output to `value`, raising PinDriverError on failure."""

    def close(self) -> None:
        """Release the underlying GPIO resource."""
