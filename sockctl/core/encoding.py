"""Address encodings that turn (group, device, state) into tri-state code words.

Layouts follow the rc-switch naming: encoding A is the classic five DIP switch
group plus five position device selector. B and C are reserved names whose
layouts are not known here.
"""

from __future__ import annotations

from typing import Protocol

from sockctl.core.errors import EncodingNotImplementedError, InvalidGroupError, UnknownEncodingError
from sockctl.core.model import Device, State

GROUP_LENGTH = 5

_STATE_SUFFIX = {State.ON: "10", State.OFF: "01"}


class Encoding(Protocol):
    name: str

    def encode(self, group: str, device: Device, state: State) -> bytes:
        """Return the tri-state code word as ASCII bytes over {'0', 'F', '1'}."""


def validate_group(group: str) -> str:
    if len(group) != GROUP_LENGTH or any(c not in "01" for c in group):
        raise InvalidGroupError(group)
    return group


class EncodingA:
    name = "A"

    def encode(self, group: str, device: Device, state: State) -> bytes:
        bits = validate_group(group) + device.pattern + _STATE_SUFFIX[state]
        # '0' -> 'F', '1' -> '0'; this layout never emits the '1' symbol.
        return bytes(ord("F") if c == "0" else ord("0") for c in bits)


class _ReservedEncoding:
    name = ""

    def encode(self, group: str, device: Device, state: State) -> bytes:
        raise EncodingNotImplementedError(f"encoding {self.name} is not implemented")


class EncodingB(_ReservedEncoding):
    name = "B"


class EncodingC(_ReservedEncoding):
    name = "C"


ENCODINGS: dict[str, Encoding] = {
    encoding.name: encoding for encoding in (EncodingA(), EncodingB(), EncodingC())
}


def get_encoding(name: str) -> Encoding:
    encoding = ENCODINGS.get(name.upper())
    if encoding is None:
        available = ", ".join(sorted(ENCODINGS))
        raise UnknownEncodingError(f"Unknown encoding '{name}'. Available: {available}")
    return encoding
