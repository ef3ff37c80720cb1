"""Stable public API for building tooling on top of sockctl.

This module is the supported integration surface for third-party callers.
Avoid importing from private/internal modules unless intentionally depending on
non-stable internals.
"""

from __future__ import annotations

from pathlib import Path

from sockctl.core.config import Settings
from sockctl.core.encoding import Encoding, EncodingA, EncodingB, EncodingC
from sockctl.core.errors import (
    ConfigError,
    EncodingNotImplementedError,
    InputError,
    InvalidCodeWordError,
    InvalidDeviceError,
    InvalidGroupError,
    InvalidStateError,
    PinDriverError,
    SockctlError,
    UnknownBackendError,
    UnknownEncodingError,
    UnknownProtocolError,
)
from sockctl.core.model import Device, HighLow, Level, ProtocolValues, SendResult, State
from sockctl.core.protocols import BUILTIN_PROTOCOLS
from sockctl.core.service import EncodedWord, PinFactory, SocketService
from sockctl.core.transmitter import SocketController, pack_code_word
from sockctl.pins.base import Pin
from sockctl.pins.memory import RecordingPin

__all__ = [
    "SockctlError",
    "InputError",
    "InvalidGroupError",
    "InvalidDeviceError",
    "InvalidStateError",
    "InvalidCodeWordError",
    "EncodingNotImplementedError",
    "UnknownEncodingError",
    "UnknownProtocolError",
    "UnknownBackendError",
    "ConfigError",
    "PinDriverError",
    "Device",
    "State",
    "Level",
    "HighLow",
    "ProtocolValues",
    "SendResult",
    "EncodedWord",
    "Settings",
    "Encoding",
    "EncodingA",
    "EncodingB",
    "EncodingC",
    "BUILTIN_PROTOCOLS",
    "Pin",
    "RecordingPin",
    "SocketController",
    "pack_code_word",
    "Client",
]


class Client:
    """Public client for switching sockets.

    A `Client` wraps configuration loading, protocol lookup, pin backend
    selection and transmission behind a stable API intended for scripts and
    services. Pass `backends` to plug in a custom pin driver.
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        config_path: Path | None = None,
        backends: dict[str, PinFactory] | None = None,
    ) -> None:
        self._service = SocketService(settings=settings, config_path=config_path, backends=backends)

    @property
    def settings(self) -> Settings:
        return self._service.settings

    @property
    def load_warnings(self) -> tuple[str, ...]:
        return self._service.load_warnings

    def list_protocols(self) -> list[ProtocolValues]:
        return self._service.list_protocols()

    def encode(
        self,
        group: str,
        device: Device | str,
        state: State | str,
        *,
        encoding: str | None = None,
    ) -> EncodedWord:
        return self._service.encode(group, device, state, encoding=encoding)

    def controller(
        self,
        *,
        backend: str | None = None,
        pin: int | None = None,
        protocol: str | None = None,
        encoding: str | None = None,
        repeat_transmit: int | None = None,
    ) -> SocketController:
        """Open a long-lived controller; the caller owns it and must close it."""
        return self._service.build_controller(
            backend=backend,
            pin=pin,
            protocol=protocol,
            encoding=encoding,
            repeat_transmit=repeat_transmit,
        )

    def send(
        self,
        group: str,
        device: Device | str,
        state: State | str,
        *,
        backend: str | None = None,
        pin: int | None = None,
        protocol: str | None = None,
        encoding: str | None = None,
        repeat_transmit: int | None = None,
    ) -> SendResult:
        return self._service.send(
            group,
            device,
            state,
            backend=backend,
            pin=pin,
            protocol=protocol,
            encoding=encoding,
            repeat_transmit=repeat_transmit,
        )
