"""Protocol timing profiles: the built-in table and user-defined additions."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sockctl.core.errors import UnknownProtocolError
from sockctl.core.model import HighLow, ProtocolValues

LOGGER = logging.getLogger(__name__)


def _profile(
    name: str,
    pulse_length: int,
    sync: tuple[int, int],
    zero: tuple[int, int],
    one: tuple[int, int],
    inverted_signal: bool = False,
) -> ProtocolValues:
    return ProtocolValues(
        name=name,
        pulse_length=pulse_length,
        sync=HighLow(*sync),
        zero=HighLow(*zero),
        one=HighLow(*one),
        inverted_signal=inverted_signal,
    )


# Values match rc-switch; receivers only tolerate small deviations.
PROTOCOL_1 = _profile("1", 350, (1, 31), (1, 3), (3, 1))
PROTOCOL_2 = _profile("2", 650, (1, 10), (1, 2), (2, 1))
PROTOCOL_3 = _profile("3", 100, (30, 71), (4, 11), (9, 6))
PROTOCOL_4 = _profile("4", 380, (1, 6), (1, 3), (3, 1))
PROTOCOL_5 = _profile("5", 500, (6, 14), (1, 2), (2, 1))
PROTOCOL_HT6P20B = _profile("HT6P20B", 450, (23, 1), (1, 2), (2, 1), inverted_signal=True)
# HS2303-PT, e.g. AUKEY remotes
PROTOCOL_HS2303 = _profile("HS2303", 150, (2, 62), (1, 6), (6, 1))

BUILTIN_PROTOCOLS: dict[str, ProtocolValues] = {
    p.name: p
    for p in (
        PROTOCOL_1,
        PROTOCOL_2,
        PROTOCOL_3,
        PROTOCOL_4,
        PROTOCOL_5,
        PROTOCOL_HT6P20B,
        PROTOCOL_HS2303,
    )
}


@dataclass(frozen=True)
class ProtocolTable:
    protocols: dict[str, ProtocolValues]
    warnings: tuple[str, ...]

    def get(self, name: str) -> ProtocolValues:
        return get_protocol(name, self.protocols)


def protocol_from_mapping(name: str, doc: Mapping[str, Any]) -> ProtocolValues:
    """Build a profile from an already schema-validated config entry."""
    return _profile(
        name,
        int(doc["pulse_length"]),
        tuple(doc["sync"]),
        tuple(doc["zero"]),
        tuple(doc["one"]),
        inverted_signal=bool(doc.get("inverted", False)),
    )


def build_protocol_table(custom: Mapping[str, Mapping[str, Any]] | None = None) -> ProtocolTable:
    protocols = dict(BUILTIN_PROTOCOLS)
    warnings: list[str] = []
    for name, doc in (custom or {}).items():
        name = str(name)
        if name in protocols:
            warning = f"Configured protocol '{name}' overrides built-in protocol"
            LOGGER.warning(warning)
            warnings.append(warning)
        protocols[name] = protocol_from_mapping(name, doc)
    return ProtocolTable(protocols=protocols, warnings=tuple(warnings))


def get_protocol(name: str, protocols: Mapping[str, ProtocolValues] | None = None) -> ProtocolValues:
    table = BUILTIN_PROTOCOLS if protocols is None else protocols
    protocol = table.get(name)
    if protocol is None:
        # "ht6p20b" and friends
        for key, candidate in table.items():
            if key.lower() == name.lower():
                return candidate
        available = ", ".join(table)
        raise UnknownProtocolError(f"Unknown protocol '{name}'. Available: {available}")
    return protocol
