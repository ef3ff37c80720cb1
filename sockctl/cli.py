"""Typer CLI entrypoint."""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from sockctl.core.errors import SockctlError
from sockctl.core.service import SocketService

app = typer.Typer(help="Control 433 MHz remote-controlled mains sockets")


def _build_service(config: Path | None) -> SocketService:
    service = SocketService(config_path=config)
    for warning in getattr(service, "load_warnings", ()):
        typer.echo(f"Warning: {warning}", err=True)
    return service


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command("send")
def send(
    group: str = typer.Option(..., "--group", "-g", help='Group as set on the DIP switches, e.g. "10011"'),
    device: str = typer.Option(..., "--device", "-d", help='Device: A-E, 0-4 or DIP pattern such as "10000"'),
    state: str = typer.Option(..., "--state", "--send", "-s", help="on, off, true, false, 1, 0"),
    pin: int | None = typer.Option(None, "--pin", "-p", help="GPIO number (BCM). Default from config or 17"),
    protocol: str | None = typer.Option(None, "--protocol", help="Protocol name, e.g. 1 or HT6P20B"),
    encoding: str | None = typer.Option(None, "--encoding", help="Address encoding: A, B or C"),
    repeat: int | None = typer.Option(None, "--repeat", "-r", help="Transmissions per command"),
    backend: str | None = typer.Option(None, "--backend", help="Pin backend: rpi, sysfs or dry-run"),
    config: Path | None = typer.Option(None, "--config", help="Path to config.yaml"),
) -> None:
    """Switch a socket on or off."""
    try:
        service = _build_service(config)
        result = service.send(
            group,
            device,
            state,
            backend=backend,
            pin=pin,
            protocol=protocol,
            encoding=encoding,
            repeat_transmit=repeat,
        )
        typer.echo(
            f"Sent {result.group}/{result.device.value} {result.state.value} "
            f"via protocol {result.protocol} code={result.code_word}"
        )
        if result.recorded_levels is not None:
            typer.echo(f"Recorded {len(result.recorded_levels)} pin writes")
    except SockctlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("encode")
def encode(
    group: str = typer.Option(..., "--group", "-g"),
    device: str = typer.Option(..., "--device", "-d"),
    state: str = typer.Option(..., "--state", "--send", "-s"),
    encoding: str | None = typer.Option(None, "--encoding", help="Address encoding: A, B or C"),
    config: Path | None = typer.Option(None, "--config", help="Path to config.yaml"),
) -> None:
    """Print the tri-state code word without transmitting."""
    try:
        service = _build_service(config)
        encoded = service.encode(group, device, state, encoding=encoding)
        typer.echo(f"{encoded.code_word} code={encoded.code:#x} bits={encoded.length}")
    except SockctlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("protocols")
def list_protocols(
    config: Path | None = typer.Option(None, "--config", help="Path to config.yaml"),
) -> None:
    """List available protocol timing profiles."""
    try:
        service = _build_service(config)
        for p in service.list_protocols():
            inverted = " inverted" if p.inverted_signal else ""
            typer.echo(
                f"{p.name}: pulse={p.pulse_length}us sync={p.sync.high},{p.sync.low} "
                f"zero={p.zero.high},{p.zero.low} one={p.one.high},{p.one.low}{inverted}"
            )
    except SockctlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


def run() -> None:
    app()


if __name__ == "__main__":
    run()
