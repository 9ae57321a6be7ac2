"""CLI principal (Typer).

Un solo comando: registra el dispositivo y escribe el perfil WireGuard en
stdout. Instrucciones, prompts, logs y errores van a stderr.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from adapters.enrollment_api import EnrollmentApiClient
from adapters.wireguard_config import export_wireguard_config
from cli.ui_components import build_registration_table, print_token_instructions
from core.config import AppSettings, load_settings
from core.domain.errors import EnrollmentError, InputError
from core.services.enrollment import EnrollmentHooks, EnrollmentOptions, EnrollmentWorkflow

app = typer.Typer(
    add_completion=False,
    help="Generate WireGuard profile for WARP Teams.",
)

_console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    handler = RichHandler(console=_console, show_path=False, rich_tracebacks=False)
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)
    # httpx loguea cada request en INFO.
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _read_line(what: str) -> str:
    try:
        line = sys.stdin.readline()
    except (OSError, ValueError) as exc:
        raise InputError(f"Failed to read {what} from stdin: {exc}") from exc
    if not line:
        raise InputError(f"Failed to read {what} from stdin: end of input")
    return line


def _read_private_key() -> str:
    _console.print("Please paste your wireguard private key and press enter:")
    return _read_line("private key")


def _read_token(settings: AppSettings) -> str:
    print_token_instructions(_console, settings)
    return _read_line("jwt token")


@app.command()
def enroll(
    prompt: bool = typer.Option(
        False,
        "--prompt",
        help="Read private key from stdin instead of generating a new one.",
    ),
    device_name: str | None = typer.Option(
        None,
        "--device-name",
        "-n",
        help="Device name to register with (default: wgcf-teams-device).",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Also write the profile to this file.",
        dir_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr."),
) -> None:
    """Register this device with Cloudflare Zero Trust and print a WireGuard profile."""

    configure_logging(verbose)
    options = EnrollmentOptions(prompt_private_key=prompt, device_name=device_name)

    try:
        settings = load_settings()
        workflow = EnrollmentWorkflow(
            client=EnrollmentApiClient(settings),
            hooks=EnrollmentHooks(
                read_token=lambda: _read_token(settings),
                read_private_key=_read_private_key,
            ),
            settings=settings,
        )
        outcome = asyncio.run(workflow.run(options))
    except EnrollmentError as exc:
        _console.print(f"[red]Error:[/red] {escape(exc.message)}")
        raise typer.Exit(code=1) from exc

    for warning in outcome.warnings:
        _console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")
    if verbose:
        _console.print(build_registration_table(outcome.result))

    typer.echo(outcome.config_text, nl=False)

    if output is not None:
        try:
            path = export_wireguard_config(config_text=outcome.config_text, output_path=output)
        except OSError as exc:
            _console.print(f"[red]Error:[/red] Failed to write profile to {escape(str(output))}: {escape(str(exc))}")
            raise typer.Exit(code=1) from exc
        _console.print(f"[green]Saved profile to:[/green] {path}")


def run() -> None:
    app()
