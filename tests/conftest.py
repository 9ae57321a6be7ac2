from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from core.config import AppSettings

# RFC 7748 section 6.1 (Alice).
PRIVATE_KEY_B64 = "dwdtCnMYpX08FsFyUbJmRd9ML4frwJkqsXf7pR25LCo="
PUBLIC_KEY_B64 = "hSDwCYkwp1R0i33ctD73Wg2/Og0mOBr066SpjqqbTmo="

PEER_PUBLIC_KEY = "bmXOC+F1FxEMF9dyiK2H5/1SUtzH0JuVo51h2wPfgyo="


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None)


@pytest.fixture
def registration_payload() -> dict[str, Any]:
    return {
        "success": True,
        "errors": [],
        "messages": [],
        "result": {
            "id": "t.5c3f0a1e-6f1b-4c9e-9a57-6c2b0e1d8f21",
            "type": "i",
            "name": "wgcf-teams-device",
            "key": PUBLIC_KEY_B64,
            "account": {"id": "acc-1", "account_type": "team"},
            "config": {
                "client_id": "AbCd",
                "peers": [
                    {
                        "public_key": PEER_PUBLIC_KEY,
                        "endpoint": {
                            "v4": "162.159.193.5:0",
                            "v6": "[2606:4700:100::a29f:c105]:0",
                            "host": "engage.cloudflareclient.com:2408",
                        },
                    }
                ],
                "interface": {
                    "addresses": {
                        "v4": "172.16.0.2",
                        "v6": "2606:4700:110:8a36:df92:102a:9602:fa18",
                    }
                },
                "services": {"http_proxy": "172.16.0.1:2480"},
            },
        },
    }


@pytest.fixture
def error_payload() -> dict[str, Any]:
    return {
        "success": False,
        "errors": [{"code": 1002, "message": "Invalid token"}],
        "messages": [],
        "result": None,
    }


class RecordingHandler:
    """MockTransport handler that answers with a canned response and keeps requests."""

    def __init__(self, status_code: int = 200, payload: Any = None, content: bytes | None = None) -> None:
        self.status_code = status_code
        self.payload = payload
        self.content = content
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last_json(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def make_handler() -> Callable[..., RecordingHandler]:
    return RecordingHandler
