"""Domain-specific errors for sockctl."""


class SockctlError(Exception):
    """Base error for sockctl."""


class InputError(SockctlError):
    """Base error for rejected user input. The offending string is kept on `value`."""

    kind = "input"
    hint = ""

    def __init__(self, value: str) -> None:
        super().__init__(f"invalid {self.kind}: {value!r}{self.hint}")
        self.value = value


class InvalidGroupError(InputError):
    """Raised when a group is not exactly five characters of '0'/'1'."""

    kind = "group identifier"


class InvalidDeviceError(InputError):
    """Raised when a device string matches none of the accepted aliases."""

    kind = "device identifier"


class InvalidStateError(InputError):
    """Raised when a state string matches none of the accepted aliases."""

    kind = "state"
    hint = ". Try on, off, 1, 0, true, false"


class InvalidCodeWordError(SockctlError):
    """Raised when a tri-state code word contains a symbol other than 0, F or 1."""


class EncodingNotImplementedError(SockctlError):
    """Raised when a reserved encoding without a known layout is invoked."""


class UnknownEncodingError(SockctlError):
    """Raised when an encoding name cannot be resolved."""


class UnknownProtocolError(SockctlError):
    """Raised when a protocol name cannot be resolved."""


class UnknownBackendError(SockctlError):
    """Raised when a pin backend name cannot be resolved."""


class ConfigError(SockctlError):
    """Raised when configuration is malformed or out of range."""


class PinDriverError(SockctlError):
    """Raised when the pin driver fails to change the output level."""
