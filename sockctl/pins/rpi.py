"""Raspberry Pi pin backed by RPi.GPIO (BCM numbering)."""

from __future__ import annotations

from typing import Any

from sockctl.core.errors import PinDriverError
from sockctl.core.model import Level


class RPiGPIOPin:
    def __init__(self, pin: int, *, gpio: Any | None = None) -> None:
        if gpio is None:
            try:
                import RPi.GPIO as gpio  # type: ignore
            except Exception as exc:  # pragma: no cover - import failure path
                raise PinDriverError(
                    "The 'rpi' backend requires 'RPi.GPIO'. Install the 'rpi' extra and retry."
                ) from exc
        self.pin = pin
        self._gpio = gpio
        self._levels = {Level.HIGH: gpio.HIGH, Level.LOW: gpio.LOW}
        try:
            gpio.setwarnings(False)
            gpio.setmode(gpio.BCM)
            gpio.setup(pin, gpio.OUT, initial=gpio.LOW)
        except (RuntimeError, ValueError) as exc:
            raise PinDriverError(f"Could not set up GPIO {pin} as output: {exc}") from exc

    def set(self, value: Level) -> None:
        try:
            self._gpio.output(self.pin, self._levels[value])
        except (RuntimeError, ValueError) as exc:
            raise PinDriverError(f"Writing GPIO {self.pin} failed: {exc}") from exc

    def close(self) -> None:
        try:
            self._gpio.cleanup(self.pin)
        except (RuntimeError, ValueError) as exc:
            raise PinDriverError(f"Releasing GPIO {self.pin} failed: {exc}") from exc
