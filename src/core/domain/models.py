"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- El registro es un intercambio JSON único: el modelo de request se serializa
  una vez y el de respuesta se valida una vez.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

import ipaddress
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.config import ConfigDict

from core.domain.errors import ServiceError
from core.domain.keys import decode_key

DEFAULT_ALLOWED_IPS: tuple[str, ...] = ("0.0.0.0/0", "::/0")


def _tos_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _check_token(value: str, what: str) -> str:
    # Todo lo que viene del servicio acaba como una línea del perfil wg-quick.
    if not value or any(ch.isspace() or not ch.isprintable() for ch in value):
        raise ValueError(f"{what} must be a single printable token without whitespace")
    return value


def _check_address(value: str | None, version: int) -> str | None:
    if not value:
        return None
    _check_token(value, "address")
    try:
        parsed = ipaddress.ip_interface(value)
    except ValueError as exc:
        raise ValueError(f"invalid IP address: {value!r}") from exc
    if parsed.version != version:
        raise ValueError(f"expected an IPv{version} address, got {value!r}")
    return value


class RegistrationRequest(BaseModel):
    """Cuerpo del POST de registro.

    Se construye una vez (clave pública + nombre) y el resto son metadatos
    fijos del cliente.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    key: str = Field(
        ...,
        min_length=1,
        description="Clave pública WireGuard (base64) derivada de la privada local.",
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Nombre del dispositivo tal y como aparecerá en el panel.",
    )
    install_id: str = Field(default="")
    fcm_token: str = Field(default="")
    tos: str = Field(
        default_factory=_tos_timestamp,
        description="Aceptación de términos (ISO-8601 UTC, milisegundos).",
    )
    locale: str = Field(default="en_US", min_length=1)
    timezone: str = Field(default="UTC", min_length=1)
    device_type: str = Field(default="iOS", min_length=1, alias="type")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class ApiMessage(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    code: int | None = None
    message: str = ""

    def __str__(self) -> str:
        if self.code is None:
            return self.message or "unknown error"
        return f"[{self.code}] {self.message}".rstrip()


class InterfaceAddresses(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    v4: str | None = Field(default=None, description="Dirección IPv4 asignada en el túnel.")
    v6: str | None = Field(default=None, description="Dirección IPv6 asignada en el túnel.")

    @field_validator("v4")
    @classmethod
    def _valid_v4(cls, value: str | None) -> str | None:
        return _check_address(value, 4)

    @field_validator("v6")
    @classmethod
    def _valid_v6(cls, value: str | None) -> str | None:
        return _check_address(value, 6)

    @model_validator(mode="after")
    def _at_least_one(self) -> "InterfaceAddresses":
        if not self.v4 and not self.v6:
            raise ValueError("interface has no assigned addresses")
        return self


class Interface(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    addresses: InterfaceAddresses


class PeerEndpoint(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    host: str | None = None
    v4: str | None = None
    v6: str | None = None

    @field_validator("host", "v4", "v6")
    @classmethod
    def _single_token(cls, value: str | None) -> str | None:
        return _check_token(value, "endpoint") if value else None

    @model_validator(mode="after")
    def _at_least_one(self) -> "PeerEndpoint":
        if not (self.host or self.v4 or self.v6):
            raise ValueError("peer endpoint is empty")
        return self

    def preferred(self) -> str:
        """Hostname si existe; si no, v4 y por último v6."""

        return self.host or self.v4 or self.v6 or ""


class Peer(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    public_key: str = Field(..., min_length=1)
    endpoint: PeerEndpoint
    allowed_ips: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ALLOWED_IPS),
        description="Rutas enrutadas por el túnel (AllowedIPs).",
    )

    @field_validator("public_key")
    @classmethod
    def _valid_key(cls, value: str) -> str:
        try:
            decode_key(_check_token(value, "public_key"))
        except ValueError as exc:
            raise ValueError(f"invalid peer public key: {exc}") from exc
        return value

    @field_validator("allowed_ips")
    @classmethod
    def _default_routes(cls, value: list[str]) -> list[str]:
        # El servicio puede enviar `allowed_ips: []`; lo tratamos como ausente.
        for route in value:
            _check_token(route, "route")
            try:
                ipaddress.ip_network(route, strict=False)
            except ValueError as exc:
                raise ValueError(f"invalid route: {route!r}") from exc
        return value or list(DEFAULT_ALLOWED_IPS)


class DeviceConfig(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    client_id: str | None = None
    interface: Interface
    peers: list[Peer] = Field(..., min_length=1)
    services: dict[str, Any] = Field(default_factory=dict)


class RegistrationResult(BaseModel):
    """Registro devuelto por el servicio. Inmutable una vez recibido."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    id: str | None = None
    name: str | None = None
    key: str | None = None
    device_type: str | None = Field(default=None, alias="type")
    config: DeviceConfig

    @property
    def peer(self) -> Peer:
        return self.config.peers[0]

    @property
    def addresses(self) -> InterfaceAddresses:
        return self.config.interface.addresses


ResultT = TypeVar("ResultT")


class ApiResponse(BaseModel, Generic[ResultT]):
    """Sobre común de la API (`success` / `errors` / `messages` / `result`)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    success: bool = False
    errors: list[ApiMessage] = Field(default_factory=list)
    messages: list[ApiMessage] = Field(default_factory=list)
    result: ResultT | None = None

    def get_result(self, *, status_code: int | None = None) -> ResultT:
        if self.success and self.result is not None:
            return self.result
        if self.success:
            raise ServiceError("Request failed: service returned no result", status_code=status_code)
        raise ServiceError("Request failed", errors=self.errors, status_code=status_code)
