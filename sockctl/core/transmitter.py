"""Tri-state packing and timed pulse emission on a single output pin."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Iterable

from sockctl.core.encoding import Encoding, EncodingA
from sockctl.core.errors import ConfigError, InvalidCodeWordError, PinDriverError
from sockctl.core.model import Device, HighLow, Level, ProtocolValues, State
from sockctl.core.protocols import PROTOCOL_1
from sockctl.pins.base import Pin

DEFAULT_REPEAT_TRANSMIT = 10
LOGGER = logging.getLogger(__name__)

_SYMBOL_BITS = {"0": 0b00, "F": 0b01, "1": 0b11}


def pack_code_word(code_word: bytes | str) -> tuple[int, int]:
    """Pack a tri-state word into an integer, two bits per symbol, MSB first.

    Returns the packed code and its length in bits.
    """
    symbols = code_word.decode("latin-1") if isinstance(code_word, bytes) else code_word
    code = 0
    for symbol in symbols:
        bits = _SYMBOL_BITS.get(symbol)
        if bits is None:
            raise InvalidCodeWordError(f"invalid tri-state symbol {symbol!r} in {symbols!r}")
        code = (code << 2) | bits
    return code, len(symbols) * 2


def busy_wait(micros: int) -> None:
    """Spin on the monotonic clock for `micros` microseconds without yielding."""
    if micros <= 0:
        return
    deadline = micros * 1000
    start = time.perf_counter_ns()
    while time.perf_counter_ns() - start < deadline:
        pass


class SocketController:
    """Handle to a set of 433 MHz sockets reachable through one transmitter pin.

    The controller owns `pin` for its lifetime. `encoding` and `protocol` are
    fixed at construction; every `send` runs synchronously to completion or
    raises on the first failure.
    """

    def __init__(
        self,
        pin: Pin,
        *,
        encoding: Encoding | None = None,
        protocol: ProtocolValues = PROTOCOL_1,
        repeat_transmit: int = DEFAULT_REPEAT_TRANSMIT,
    ) -> None:
        if repeat_transmit < 1:
            raise ConfigError(f"repeat_transmit must be at least 1, got {repeat_transmit}")
        self.pin = pin
        self.encoding = encoding or EncodingA()
        self.protocol = protocol
        self.repeat_transmit = repeat_transmit
        self._lock = threading.Lock()

    def __enter__(self) -> SocketController:
        return self

    def __exit__(self, exc_type: type[BaseException] | None, *exc_info: object) -> None:
        if exc_type is None:
            self.close()
            return
        # Keep the error that aborted the block; a failed release is only logged.
        try:
            self.close()
        except PinDriverError as exc:
            LOGGER.warning("Releasing pin after failed send also failed: %s", exc)

    def send(self, group: str, device: Device, state: State) -> None:
        """Switch `device` of `group` (DIP pattern such as "10011") to `state`."""
        code_word = self.encoding.encode(group, device, state)
        self.send_code_word(code_word)

    def send_code_word(self, code_word: bytes | str) -> None:
        code, length = pack_code_word(code_word)
        protocol = self.protocol
        if protocol.inverted_signal:
            first, second = Level.LOW, Level.HIGH
        else:
            first, second = Level.HIGH, Level.LOW

        with self._lock:
            for _ in range(self.repeat_transmit):
                LOGGER.debug("Sending code: %#X length: %d", code, length)
                for pulses in _bit_pulses(code, length, protocol):
                    self._transmit(pulses, first, second)
                self._transmit(protocol.sync, first, second)

            # Disable transmit after sending (i.e. for inverted protocols)
            self._set(Level.LOW)

    def close(self) -> None:
        close = getattr(self.pin, "close", None)
        if close is None:
            return
        try:
            close()
        except PinDriverError:
            raise
        except Exception as exc:
            raise PinDriverError(f"Releasing pin failed: {exc}") from exc

    def _transmit(self, pulses: HighLow, first: Level, second: Level) -> None:
        self._set(first)
        busy_wait(self.protocol.pulse_length * pulses.high)
        self._set(second)
        busy_wait(self.protocol.pulse_length * pulses.low)

    def _set(self, value: Level) -> None:
        try:
            self.pin.set(value)
        except PinDriverError:
            raise
        except Exception as exc:
            raise PinDriverError(f"Setting pin to {value.name} failed: {exc}") from exc


def _bit_pulses(code: int, length: int, protocol: ProtocolValues) -> Iterable[HighLow]:
    for i in range(length - 1, -1, -1):
        yield protocol.one if code & (1 << i) else protocol.zero
