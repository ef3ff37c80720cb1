from __future__ import annotations

import pytest

from sockctl.core.errors import UnknownProtocolError
from sockctl.core.model import HighLow
from sockctl.core.protocols import BUILTIN_PROTOCOLS, build_protocol_table, get_protocol


@pytest.mark.parametrize(
    ("name", "pulse_length", "sync", "zero", "one", "inverted"),
    [
        ("1", 350, (1, 31), (1, 3), (3, 1), False),
        ("2", 650, (1, 10), (1, 2), (2, 1), False),
        ("3", 100, (30, 71), (4, 11), (9, 6), False),
        ("4", 380, (1, 6), (1, 3), (3, 1), False),
        ("5", 500, (6, 14), (1, 2), (2, 1), False),
        ("HT6P20B", 450, (23, 1), (1, 2), (2, 1), True),
        ("HS2303", 150, (2, 62), (1, 6), (6, 1), False),
    ],
)
def test_builtin_protocol_values(name, pulse_length, sync, zero, one, inverted) -> None:
    protocol = BUILTIN_PROTOCOLS[name]
    assert protocol.pulse_length == pulse_length
    assert protocol.sync == HighLow(*sync)
    assert protocol.zero == HighLow(*zero)
    assert protocol.one == HighLow(*one)
    assert protocol.inverted_signal is inverted


def test_exactly_seven_builtin_protocols() -> None:
    assert list(BUILTIN_PROTOCOLS) == ["1", "2", "3", "4", "5", "HT6P20B", "HS2303"]


def test_get_protocol_is_case_insensitive_for_names() -> None:
    assert get_protocol("ht6p20b").name == "HT6P20B"
    with pytest.raises(UnknownProtocolError, match="Available: 1, 2"):
        get_protocol("6")


def test_custom_protocol_added_and_override_warns() -> None:
    table = build_protocol_table(
        {
            "quigg": {"pulse_length": 700, "sync": [1, 81], "zero": [1, 2], "one": [2, 1]},
            "1": {"pulse_length": 300, "sync": [1, 31], "zero": [1, 3], "one": [3, 1], "inverted": False},
        }
    )
    assert table.get("quigg").pulse_length == 700
    assert table.get("quigg").sync == HighLow(1, 81)
    assert table.get("1").pulse_length == 300
    assert BUILTIN_PROTOCOLS["1"].pulse_length == 350
    assert any("overrides" in warning for warning in table.warnings)
