"""Core value types shared by encoder, transmitter, service, and CLI."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sockctl.core.errors import InvalidDeviceError, InvalidStateError


class Device(Enum):
    """A receiver position inside a group, as selected by its second DIP switch."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"

    @classmethod
    def parse(cls, text: str) -> Device:
        """Accept "0".."4", "a".."e", "A".."E" or the DIP pattern ("10000" .. "00001")."""
        device = _DEVICE_ALIASES.get(text)
        if device is None:
            raise InvalidDeviceError(text)
        return device

    @property
    def index(self) -> int:
        return _DEVICE_ORDER.index(self)

    @property
    def number(self) -> int:
        return self.index + 1

    @property
    def pattern(self) -> str:
        return "".join("1" if i == self.index else "0" for i in range(len(_DEVICE_ORDER)))

    def __int__(self) -> int:
        return self.number


_DEVICE_ORDER = (Device.A, Device.B, Device.C, Device.D, Device.E)
_DEVICE_ALIASES: dict[str, Device] = {}
for _device in _DEVICE_ORDER:
    for _alias in (str(_device.index), _device.value.lower(), _device.value, _device.pattern):
        _DEVICE_ALIASES[_alias] = _device


class State(Enum):
    ON = "on"
    OFF = "off"

    @classmethod
    def parse(cls, text: str) -> State:
        if text in ("on", "On", "1", "true"):
            return cls.ON
        if text in ("off", "Off", "0", "false"):
            return cls.OFF
        raise InvalidStateError(text)


class Level(Enum):
    """Nominal output level of the transmitter data pin."""

    LOW = 0
    HIGH = 1


@dataclass(frozen=True)
class HighLow:
    high: int
    low: int


@dataclass(frozen=True)
class ProtocolValues:
    """Timing of one protocol: base pulse length (us) and pulse counts per symbol."""

    name: str
    pulse_length: int
    sync: HighLow
    zero: HighLow
    one: HighLow
    inverted_signal: bool = False


@dataclass(frozen=True)
class SendResult:
    group: str
    device: Device
    state: State
    protocol: str
    code_word: str
    code: int
    length: int
    repeat_transmit: int
    backend: str
    recorded_levels: tuple[Level, ...] | None = None
