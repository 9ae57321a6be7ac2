"""Cliente de la API de registro de Cloudflare Zero Trust.

Un único POST: cuerpo JSON con la clave pública y el nombre del dispositivo,
autenticado con el JWT de Cloudflare Access en `Cf-Access-Jwt-Assertion`.
"""

from __future__ import annotations

import asyncio
import logging

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.errors import InputError, ResponseFormatError, ServiceError, TransportError
from core.domain.models import ApiResponse, RegistrationRequest, RegistrationResult

logger = logging.getLogger(__name__)

TOKEN_HEADER = "Cf-Access-Jwt-Assertion"


class EnrollmentApiClient:
    """Registra dispositivos contra el endpoint configurado."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def register(self, request: RegistrationRequest, token: str) -> RegistrationResult:
        token = (token or "").strip()
        if not token:
            raise InputError("Failed to get jwt token: no token was provided")

        url = self._settings.api_endpoint
        logger.debug("POST %s (device=%s)", url, request.name)
        timeout = self._settings.http_timeout_seconds
        try:
            async with build_async_client(
                self._settings,
                extra_headers={TOKEN_HEADER: token},
                transport=self._transport,
            ) as client:
                # httpx solo limita cada fase; el plazo total lo impone wait_for.
                response = await asyncio.wait_for(
                    client.post(url, json=request.to_payload()),
                    timeout,
                )
        except asyncio.TimeoutError as exc:
            raise TransportError(
                f"Request to cloudflare API failed: no complete response within {timeout:g}s"
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"Request to cloudflare API failed: {exc}") from exc

        logger.debug("Response HTTP %s (%d bytes)", response.status_code, len(response.content))
        return self._parse(response)

    @staticmethod
    def _parse(response: httpx.Response) -> RegistrationResult:
        status = response.status_code
        try:
            payload = response.json()
        except ValueError as exc:
            if response.is_error:
                raise ServiceError(
                    "Request failed: service returned an error without details",
                    status_code=status,
                ) from exc
            raise ResponseFormatError(
                "Failed to parse the result returned by cloudflare: body is not JSON",
                status_code=status,
            ) from exc

        if not isinstance(payload, dict):
            raise ResponseFormatError(
                "Failed to parse the result returned by cloudflare: unexpected JSON type",
                status_code=status,
            )

        # Errores: solo validamos el sobre, el `result` suele venir vacío o ausente.
        if response.is_error or payload.get("success") is False:
            try:
                envelope = ApiResponse[dict].model_validate(payload)
            except ValidationError:
                raise ServiceError("Request failed", status_code=status) from None
            raise ServiceError("Request failed", errors=envelope.errors, status_code=status)

        try:
            parsed = ApiResponse[RegistrationResult].model_validate(payload)
        except ValidationError as exc:
            raise ResponseFormatError(
                f"Failed to parse the result returned by cloudflare: {exc.error_count()} invalid field(s)",
                status_code=status,
            ) from exc

        result = parsed.get_result(status_code=status)
        if parsed.messages:
            logger.info("Service messages: %s", "; ".join(str(m) for m in parsed.messages))
        logger.debug("Registered device id=%s", result.id)
        return result
