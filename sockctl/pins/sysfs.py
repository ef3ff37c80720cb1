"""Pin driven through the legacy /sys/class/gpio interface."""

from __future__ import annotations

import os
import time
from pathlib import Path

from sockctl.core.errors import PinDriverError
from sockctl.core.model import Level

SYSFS_GPIO_ROOT = Path("/sys/class/gpio")
# udev fixes permissions on a freshly exported pin shortly after export
EXPORT_SETTLE_ATTEMPTS = 20
EXPORT_SETTLE_DELAY_S = 0.05


def _write_attribute(path: Path, text: str) -> None:
    path.write_text(text, encoding="ascii")


def _claim_output(gpio_dir: Path) -> int:
    _write_attribute(gpio_dir / "direction", "out")
    return os.open(gpio_dir / "value", os.O_WRONLY)


class SysfsPin:
    """Exports the pin if needed and keeps its value file open between writes.

    Writes go through a raw file descriptor so each level change is a single
    `pwrite` syscall.
    """

    def __init__(self, pin: int, *, root: Path = SYSFS_GPIO_ROOT) -> None:
        self.pin = pin
        gpio_dir = root / f"gpio{pin}"
        try:
            attempts = 1
            if not gpio_dir.exists():
                _write_attribute(root / "export", str(pin))
                attempts = EXPORT_SETTLE_ATTEMPTS
            self._fd = self._open_output(gpio_dir, attempts)
        except OSError as exc:
            raise PinDriverError(f"Could not open sysfs GPIO {pin}: {exc}") from exc

    @staticmethod
    def _open_output(gpio_dir: Path, attempts: int) -> int:
        for _ in range(attempts - 1):
            try:
                return _claim_output(gpio_dir)
            except PermissionError:
                time.sleep(EXPORT_SETTLE_DELAY_S)
        return _claim_output(gpio_dir)

    def set(self, value: Level) -> None:
        try:
            os.pwrite(self._fd, b"1" if value is Level.HIGH else b"0", 0)
        except OSError as exc:
            raise PinDriverError(f"Writing sysfs GPIO {self.pin} failed: {exc}") from exc

    def close(self) -> None:
        if self._fd >= 0:
            os.close(self._fd)
            self._fd = -1
