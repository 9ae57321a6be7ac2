"""Device enrollment workflow.

The whole tool is one linear flow: key, token, one registration request,
render. This module owns that sequence so the CLI only deals with prompts,
printing and exit codes. Operator input is injected through hooks, which
keeps stdin and the terminal out of the core and lets tests drive the flow
with plain callables and a fake client.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from pydantic import ValidationError

from adapters.wireguard_config import render_wireguard_config
from core.config import AppSettings
from core.domain.errors import InputError
from core.domain.keys import KeyPair
from core.domain.models import RegistrationRequest, RegistrationResult
from core.interfaces.enrollment import EnrollmentClient

logger = logging.getLogger(__name__)


@dataclass
class EnrollmentOptions:
    """Parameters that control a single enrollment."""

    prompt_private_key: bool = False
    device_name: str | None = None


@dataclass
class EnrollmentHooks:
    """Callbacks for the UI layer.

    `read_token` is mandatory. `read_private_key` is only called when the
    operator asked to reuse an existing key.
    """

    read_token: Callable[[], str]
    read_private_key: Callable[[], str] | None = None


@dataclass
class EnrollmentOutcome:
    """Output of a successful enrollment."""

    keys: KeyPair
    request: RegistrationRequest
    result: RegistrationResult
    config_text: str
    warnings: list[str] = field(default_factory=list)


def build_registration_request(
    *,
    keys: KeyPair,
    device_name: str,
    settings: AppSettings | None = None,
) -> RegistrationRequest:
    """Build the request body for `keys` with the configured client metadata."""

    settings = settings or AppSettings()
    try:
        return RegistrationRequest(
            key=keys.public_key,
            name=device_name,
            locale=settings.locale,
            timezone=settings.timezone,
            device_type=settings.device_type,
        )
    except ValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        raise InputError(
            f"Invalid registration request ({fields}): check the device name and client metadata"
        ) from exc


def acquire_keys(*, prompt: bool, hooks: EnrollmentHooks) -> KeyPair:
    if not prompt:
        logger.debug("Generating a new wireguard key pair")
        return KeyPair.generate()
    if hooks.read_private_key is None:
        raise InputError("Failed to read private key: no input source configured")
    return KeyPair.from_base64(hooks.read_private_key())


def acquire_token(hooks: EnrollmentHooks) -> str:
    token = (hooks.read_token() or "").strip()
    if not token:
        raise InputError("Failed to get jwt token: input was empty")
    return token


class EnrollmentWorkflow:
    """Runs key acquisition, registration and rendering in order."""

    def __init__(
        self,
        *,
        client: EnrollmentClient,
        hooks: EnrollmentHooks,
        settings: AppSettings | None = None,
    ) -> None:
        self._client = client
        self._hooks = hooks
        self._settings = settings or AppSettings()

    async def run(self, options: EnrollmentOptions) -> EnrollmentOutcome:
        keys = acquire_keys(prompt=options.prompt_private_key, hooks=self._hooks)
        token = acquire_token(self._hooks)

        device_name = options.device_name or self._settings.device_name
        request = build_registration_request(keys=keys, device_name=device_name, settings=self._settings)
        logger.info("Registering device %r", device_name)
        result = await self._client.register(request, token)

        warnings: list[str] = []
        if len(result.config.peers) > 1:
            warnings.append(
                f"Service returned {len(result.config.peers)} peers; only the first one is used."
            )

        config_text = render_wireguard_config(private_key=keys.private_key, result=result, settings=self._settings)
        return EnrollmentOutcome(
            keys=keys,
            request=request,
            result=result,
            config_text=config_text,
            warnings=warnings,
        )
