from __future__ import annotations

from adapters.wireguard_config import export_wireguard_config, render_wireguard_config
from conftest import PEER_PUBLIC_KEY, PRIVATE_KEY_B64
from core.domain.models import RegistrationResult

EXPECTED = """\
[Interface]
PrivateKey = dwdtCnMYpX08FsFyUbJmRd9ML4frwJkqsXf7pR25LCo=
Address = 172.16.0.2/32
Address = 2606:4700:110:8a36:df92:102a:9602:fa18/128
DNS = 1.1.1.1, 1.0.0.1, 2606:4700:4700::1111, 2606:4700:4700::1001
MTU = 1280

[Peer]
PublicKey = bmXOC+F1FxEMF9dyiK2H5/1SUtzH0JuVo51h2wPfgyo=
AllowedIPs = 0.0.0.0/0
AllowedIPs = ::/0
Endpoint = engage.cloudflareclient.com:2408
"""


def _result(payload) -> RegistrationResult:
    return RegistrationResult.model_validate(payload["result"])


def test_render_full_profile(settings, registration_payload) -> None:
    text = render_wireguard_config(
        private_key=PRIVATE_KEY_B64, result=_result(registration_payload), settings=settings
    )
    assert text == EXPECTED


def test_render_is_deterministic(settings, registration_payload) -> None:
    result = _result(registration_payload)
    first = render_wireguard_config(private_key=PRIVATE_KEY_B64, result=result, settings=settings)
    second = render_wireguard_config(private_key=PRIVATE_KEY_B64, result=result, settings=settings)
    assert first == second


def test_endpoint_falls_back_to_v4(settings, registration_payload) -> None:
    del registration_payload["result"]["config"]["peers"][0]["endpoint"]["host"]
    text = render_wireguard_config(
        private_key=PRIVATE_KEY_B64, result=_result(registration_payload), settings=settings
    )
    assert "Endpoint = 162.159.193.5:0" in text


def test_single_address_family_and_existing_prefix(settings, registration_payload) -> None:
    registration_payload["result"]["config"]["interface"]["addresses"] = {"v4": "172.16.0.2/24"}
    text = render_wireguard_config(
        private_key=PRIVATE_KEY_B64, result=_result(registration_payload), settings=settings
    )
    assert "Address = 172.16.0.2/24\n" in text
    assert text.count("Address = ") == 1


def test_custom_routes_dns_and_mtu(settings, registration_payload) -> None:
    registration_payload["result"]["config"]["peers"][0]["allowed_ips"] = ["10.0.0.0/8", "192.168.0.0/16"]
    custom = settings.model_copy(update={"dns_servers": [], "mtu": 1420})
    text = render_wireguard_config(
        private_key=PRIVATE_KEY_B64, result=_result(registration_payload), settings=custom
    )
    assert "DNS" not in text
    assert "MTU = 1420" in text
    assert "AllowedIPs = 10.0.0.0/8\nAllowedIPs = 192.168.0.0/16\n" in text
    assert f"PublicKey = {PEER_PUBLIC_KEY}" in text


def test_export_creates_parent_dirs(tmp_path) -> None:
    target = tmp_path / "profiles" / "wg0.conf"
    path = export_wireguard_config(config_text=EXPECTED, output_path=target)
    assert path == target
    assert target.read_text(encoding="utf-8") == EXPECTED
