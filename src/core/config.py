"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/render) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.errors import ConfigError


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "wgcf-teams"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "wgcf-teams"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "wgcf-teams"
    return Path.home() / ".config" / "wgcf-teams"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="WGCF_TEAMS_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_endpoint: str = Field(
        default="https://zero-trust-client.cloudflareclient.com/v0i2308311933/reg",
        min_length=8,
        description="Endpoint de registro de dispositivos (Zero Trust).",
    )
    client_version: str = Field(
        default="i-6.23-2308311933.1",
        min_length=1,
        description="Valor de la cabecera CF-Client-Version.",
    )
    user_agent: str = Field(
        default="1.1.1.1/6.23",
        min_length=1,
        description="User-Agent del cliente oficial.",
    )
    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout total de la petición de registro (segundos).",
    )

    device_name: str = Field(
        default="wgcf-teams-device",
        min_length=1,
        description="Nombre con el que se registra el dispositivo.",
    )
    locale: str = Field(default="en_US", min_length=1)
    timezone: str = Field(default="UTC", min_length=1)
    device_type: str = Field(
        default="iOS",
        min_length=1,
        description="Tipo de cliente declarado en el registro.",
    )

    dns_servers: list[str] = Field(
        default_factory=lambda: [
            "1.1.1.1",
            "1.0.0.1",
            "2606:4700:4700::1111",
            "2606:4700:4700::1001",
        ],
        description="Servidores DNS para la sección [Interface]. Vacío = sin línea DNS.",
    )
    mtu: int = Field(
        default=1280,
        ge=576,
        le=9000,
        description="MTU del túnel.",
    )

    instruction_url: str = Field(
        default="https://github.com/poscat0x04/wgcf-teams/blob/master/guide.md",
        description="Guía para localizar el token JWT tras el login.",
    )


def load_settings() -> AppSettings:
    """Construye `AppSettings` traduciendo errores de validación a `ConfigError`."""

    try:
        return AppSettings()
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'settings'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigError(f"Invalid configuration (WGCF_TEAMS_* / .env): {details}") from exc
