"""Typer CLI entrypoint."""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from carnetpanel.core.config import PanelConfig
from carnetpanel.core.errors import CarNetPanelError
from carnetpanel.core.model import FIELD_KIND_PASSWORD, SettingsPanel, StatusPanel
from carnetpanel.core.service import PanelService

app = typer.Typer(help="Settings and status panels for a CarNet vehicle device")

_state: dict[str, PanelConfig] = {}


@app.callback()
def main(
    store: Path | None = typer.Option(None, "--store", help="JSON state store path"),
    namespace: str | None = typer.Option(None, "--namespace", help="State variable namespace"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level name"),
) -> None:
    config = PanelConfig.from_env().with_overrides(store_path=store, namespace=namespace)
    level = (log_level or config.log_level).upper()
    logging.basicConfig(level=getattr(logging, level, logging.WARNING), format="%(levelname)s %(name)s: %(message)s")
    _state["config"] = config


def _build_service() -> PanelService:
    service = PanelService(config=_state.get("config"))
    for warning in getattr(service, "load_warnings", ()):
        typer.echo(f"Warning: {warning}", err=True)
    return service


def _echo_settings(panel: SettingsPanel, *, reveal: bool) -> None:
    typer.echo(panel.header.title)
    if panel.disabled:
        typer.echo(panel.message)
        return
    for field in panel.fields:
        value = field.value
        if field.kind == FIELD_KIND_PASSWORD and value and not reveal:
            value = "*" * len(value)
        if field.options:
            selected = field.selected
            shown = f"{selected.label} ({selected.value})" if selected else "<none selected>"
            typer.echo(f"  {field.label}: {shown}")
        else:
            typer.echo(f"  {field.label}: {value}")


def _echo_status(panel: StatusPanel) -> None:
    typer.echo(panel.header.title)
    if panel.disabled:
        typer.echo(panel.message)
        return
    for label, value in panel.rows():
        typer.echo(f"  {label}: {value}")


@app.command("settings")
def show_settings(
    device_id: int,
    reveal: bool = typer.Option(False, "--show-password", help="Show the password in clear text"),
) -> None:
    """Show the editable settings of a device."""
    try:
        service = _build_service()
        _echo_settings(service.settings_panel(device_id), reveal=reveal)
    except CarNetPanelError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("status")
def show_status(device_id: int) -> None:
    """Show the read-only vehicle status of a device."""
    try:
        service = _build_service()
        _echo_status(service.status_panel(device_id))
    except CarNetPanelError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("set")
def set_field(
    device_id: int,
    field: str,
    value: str | None = typer.Argument(None),
) -> None:
    """Store a new value for a settings field.

    If VALUE is omitted, prints the current value and the available options for FIELD.
    """
    try:
        service = _build_service()
        if value is None:
            spec, current, options = service.field_values(device_id, field)
            typer.echo(f"{spec.label} ({spec.name}) on device #{device_id}: current={current!r}")
            if options:
                listing = ", ".join(f"{o.value}={o.label}" for o in options)
                typer.echo(f"Available values: {listing}")
            return
        result = service.update_field(device_id, field, value)
        if not result.applied:
            typer.echo(f"Error: {field} was not updated: {result.error}", err=True)
            raise typer.Exit(code=1)
        typer.echo(f"Stored {result.field}={result.value} on device #{device_id} ({result.write.key})")
    except CarNetPanelError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("devices")
def list_devices() -> None:
    """List devices known to the state store."""
    try:
        service = _build_service()
        devices = service.list_devices()
        if not devices:
            typer.echo("No devices registered")
            return
        for device in devices:
            state = " (disabled)" if device.disabled else ""
            typer.echo(f"#{device.device_id} {device.name}{state}")
    except CarNetPanelError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("add-device")
def add_device(
    device_id: int,
    name: str,
    disabled: bool = typer.Option(False, "--disabled", help="Register the device as disabled"),
) -> None:
    """Register a device in the state store."""
    try:
        service = _build_service()
        device = service.add_device(device_id, name, disabled=disabled)
        typer.echo(f"Registered #{device.device_id} {device.name}")
    except CarNetPanelError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("catalogs")
def list_catalogs() -> None:
    """List option catalogs used by select fields."""
    try:
        service = _build_service()
        for name, entries in service.option_catalogs().items():
            values = ", ".join(f"{e.value}={e.label}" for e in entries)
            typer.echo(f"{name}: {values}")
    except CarNetPanelError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


def run() -> None:
    app()


if __name__ == "__main__":
    run()
