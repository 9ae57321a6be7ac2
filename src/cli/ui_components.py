"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Todo lo que se pinta aquí va a stderr: stdout queda reservado al perfil
  WireGuard para poder redirigirlo a un fichero.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import AppSettings
from core.domain.models import RegistrationResult


def print_token_instructions(console: Console, settings: AppSettings) -> None:
    """Explica dónde conseguir el JWT tras el login SSO en el navegador."""

    body = Text()
    body.append("Please open ")
    body.append("https://<YOUR_ORGANIZATION>.cloudflareaccess.com/warp", style="bold cyan")
    body.append(", log in to warp, paste the JWT token here and press enter.\n")
    body.append("For a detailed instruction on where to find the JWT token after login, see ")
    body.append(settings.instruction_url, style="underline")
    body.append(".")
    console.print(Panel(body, title="Cloudflare Access token", border_style="cyan"))


def build_registration_table(result: RegistrationResult) -> Table:
    """Resumen del registro (sin secretos)."""

    table = Table(title="Registered device", show_header=False)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    addresses = result.addresses
    peer = result.peer
    table.add_row("Device id", result.id or "-")
    table.add_row("Name", result.name or "-")
    table.add_row("Address v4", addresses.v4 or "-")
    table.add_row("Address v6", addresses.v6 or "-")
    table.add_row("Peer key", peer.public_key)
    table.add_row("Endpoint", peer.endpoint.preferred())
    table.add_row("Routes", ", ".join(peer.allowed_ips))
    return table
