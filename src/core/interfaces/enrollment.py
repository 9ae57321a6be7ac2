"""Contrato del cliente de registro.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El flujo de registro depende de esta abstracción, no de httpx: los tests
  pueden inyectar un cliente falso sin tocar la red.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import RegistrationRequest, RegistrationResult


@runtime_checkable
class EnrollmentClient(Protocol):
    """Contrato mínimo para registrar un dispositivo.

    Reglas de diseño:
    - `register` es asíncrono porque hace I/O (HTTP).
    - Devuelve el resultado ya validado o lanza un `EnrollmentError`.
    """

    async def register(self, request: RegistrationRequest, token: str) -> RegistrationResult:
        """Envía `request` autenticado con `token` y devuelve el registro."""

        ...
