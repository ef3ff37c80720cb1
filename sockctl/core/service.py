"""Service layer used by the CLI and the public API."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from sockctl.core.config import Settings, load_settings
from sockctl.core.encoding import get_encoding
from sockctl.core.errors import ConfigError, UnknownBackendError
from sockctl.core.model import Device, ProtocolValues, SendResult, State
from sockctl.core.protocols import build_protocol_table
from sockctl.core.transmitter import SocketController, pack_code_word
from sockctl.pins.base import Pin
from sockctl.pins.memory import RecordingPin
from sockctl.pins.rpi import RPiGPIOPin
from sockctl.pins.sysfs import SysfsPin

LOGGER = logging.getLogger(__name__)

PinFactory = Callable[[int], Pin]

BACKENDS: dict[str, PinFactory] = {
    "rpi": RPiGPIOPin,
    "sysfs": SysfsPin,
    "dry-run": lambda _pin: RecordingPin(),
}


@dataclass(frozen=True)
class EncodedWord:
    code_word: str
    code: int
    length: int


class SocketService:
    def __init__(
        self,
        *,
        settings: Settings | None = None,
        config_path: Path | None = None,
        backends: dict[str, PinFactory] | None = None,
    ) -> None:
        self.settings = settings or load_settings(config_path)
        self.protocol_table = build_protocol_table(self.settings.protocols)
        self.protocols = self.protocol_table.protocols
        self.load_warnings = self.protocol_table.warnings
        self.backends = backends or BACKENDS

    def list_protocols(self) -> list[ProtocolValues]:
        return list(self.protocols.values())

    def get_protocol(self, name: str | None = None) -> ProtocolValues:
        return self.protocol_table.get(name or self.settings.protocol)

    def encode(
        self,
        group: str,
        device: Device | str,
        state: State | str,
        *,
        encoding: str | None = None,
    ) -> EncodedWord:
        encoder = get_encoding(encoding or self.settings.encoding)
        code_word = encoder.encode(group, _as_device(device), _as_state(state))
        code, length = pack_code_word(code_word)
        return EncodedWord(code_word=code_word.decode("ascii"), code=code, length=length)

    def open_pin(self, backend: str | None = None, pin: int | None = None) -> Pin:
        backend = backend or self.settings.backend
        factory = self.backends.get(backend)
        if factory is None:
            available = ", ".join(sorted(self.backends))
            raise UnknownBackendError(f"Unknown backend '{backend}'. Available: {available}")
        return factory(self.settings.pin if pin is None else pin)

    def build_controller(
        self,
        *,
        backend: str | None = None,
        pin: int | None = None,
        protocol: str | None = None,
        encoding: str | None = None,
        repeat_transmit: int | None = None,
    ) -> SocketController:
        # Resolve everything that can fail on input before claiming the pin.
        encoder = get_encoding(encoding or self.settings.encoding)
        profile = self.get_protocol(protocol)
        repeat = self.settings.repeat_transmit if repeat_transmit is None else repeat_transmit
        if repeat < 1:
            raise ConfigError(f"repeat_transmit must be at least 1, got {repeat}")
        return SocketController(
            self.open_pin(backend, pin),
            encoding=encoder,
            protocol=profile,
            repeat_transmit=repeat,
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
        device = _as_device(device)
        state = _as_state(state)
        encoded = self.encode(group, device, state, encoding=encoding)
        backend = backend or self.settings.backend

        controller = self.build_controller(
            backend=backend,
            pin=pin,
            protocol=protocol,
            encoding=encoding,
            repeat_transmit=repeat_transmit,
        )
        with controller:
            LOGGER.info(
                "Switching %s/%s %s via protocol %s",
                group,
                device.value,
                state.value,
                controller.protocol.name,
            )
            controller.send_code_word(encoded.code_word)

        recorded = controller.pin.levels if isinstance(controller.pin, RecordingPin) else None
        return SendResult(
            group=group,
            device=device,
            state=state,
            protocol=controller.protocol.name,
            code_word=encoded.code_word,
            code=encoded.code,
            length=encoded.length,
            repeat_transmit=controller.repeat_transmit,
            backend=backend,
            recorded_levels=tuple(recorded) if recorded is not None else None,
        )


def _as_device(device: Device | str) -> Device:
    return device if isinstance(device, Device) else Device.parse(device)


def _as_state(state: State | str) -> State:
    return state if isinstance(state, State) else State.parse(state)
