"""WireGuard key pair (X25519).

Keys are kept in memory only. The text form is the one `wg genkey` prints:
standard base64 of the 32 raw bytes.
"""

from __future__ import annotations

import base64
import binascii

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import x25519

from core.domain.errors import InvalidKeyError

KEY_SIZE = 32


def _b64(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def decode_key(text: str) -> bytes:
    """Decodifica una clave base64 de 32 bytes; `ValueError` si no lo es."""

    try:
        raw = base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(str(exc)) from exc
    if len(raw) != KEY_SIZE:
        raise ValueError(f"expected {KEY_SIZE} bytes, got {len(raw)}")
    return raw


class KeyPair:
    """A private key and the public key derived from it."""

    def __init__(self, private_key: x25519.X25519PrivateKey) -> None:
        self._private = private_key

    @classmethod
    def generate(cls) -> "KeyPair":
        return cls(x25519.X25519PrivateKey.generate())

    @classmethod
    def from_base64(cls, text: str) -> "KeyPair":
        """Parse a base64 private key as pasted by the operator."""

        value = (text or "").strip()
        if not value:
            raise InvalidKeyError("Failed to parse wireguard private key: input is empty")
        try:
            raw = decode_key(value)
        except ValueError as exc:
            raise InvalidKeyError(f"Failed to parse wireguard private key: {exc}") from exc
        return cls(x25519.X25519PrivateKey.from_private_bytes(raw))

    @property
    def private_key(self) -> str:
        raw = self._private.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )
        return _b64(raw)

    @property
    def public_key(self) -> str:
        raw = self._private.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )
        return _b64(raw)

    def __repr__(self) -> str:
        # Never expose the private half.
        return f"KeyPair(public_key={self.public_key!r})"
