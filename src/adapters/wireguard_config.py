"""Render del perfil WireGuard.

Por qué está en adapters:
- El formato `wg-quick` es un detalle de salida (plantilla Jinja2).
- El Core solo conoce la clave privada y el `RegistrationResult`.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from core.config import AppSettings
from core.domain.models import InterfaceAddresses, RegistrationResult


_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
_TEMPLATE_NAME = "wireguard.conf.j2"


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def _with_prefix(address: str, prefix: int) -> str:
    address = address.strip()
    return address if "/" in address else f"{address}/{prefix}"


def interface_addresses(addresses: InterfaceAddresses) -> list[str]:
    """Líneas `Address` en orden v4, v6 (host routes si no traen prefijo)."""

    out: list[str] = []
    if addresses.v4:
        out.append(_with_prefix(addresses.v4, 32))
    if addresses.v6:
        out.append(_with_prefix(addresses.v6, 128))
    return out


def render_wireguard_config(
    *,
    private_key: str,
    result: RegistrationResult,
    settings: AppSettings | None = None,
) -> str:
    """Renderiza el perfil. Determinista para una misma clave y resultado."""

    settings = settings or AppSettings()
    peer = result.peer
    template = _get_env().get_template(_TEMPLATE_NAME)
    return template.render(
        private_key=private_key,
        addresses=interface_addresses(result.addresses),
        dns=[s for s in settings.dns_servers if s.strip()],
        mtu=settings.mtu,
        peer=peer,
        endpoint=peer.endpoint.preferred(),
    )


def export_wireguard_config(*, config_text: str, output_path: Path) -> Path:
    """Escribe el perfil en disco (UTF-8) creando los directorios padre."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(config_text, encoding="utf-8")
    return output_path
