"""
Solana keypair files

A keypair file is a JSON array of 64 integers: the 32-byte Ed25519 seed
followed by the 32-byte public key. Addresses are the base58 encoding of
the public key.
"""

import json
import os
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import base58
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from fleet.constants import KEYPAIR_FILE_PERMISSIONS
from fleet.exceptions import KeypairError


@dataclass(frozen=True)
class Keypair:
    """In-memory Ed25519 keypair in Solana's byte layout."""

    secret: bytes
    public: bytes

    @property
    def address(self) -> str:
        return base58.b58encode(self.public).decode("ascii")

    def to_json(self) -> str:
        return json.dumps(list(self.secret + self.public))

    @classmethod
    def generate(cls) -> "Keypair":
        private_key = Ed25519PrivateKey.generate()
        secret = private_key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )
        public = private_key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )
        return cls(secret=secret, public=public)


def read_address(path: Path) -> str:
    """
    Read the base58 address of a keypair file.

    Raises:
        KeypairError: File missing or not a 64-byte keypair
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text())
    except FileNotFoundError:
        raise KeypairError(f"Keypair not found: {path}", context="Run: fleet build")
    except (OSError, ValueError) as e:
        raise KeypairError(f"Could not read keypair {path}: {e}")

    if (
        not isinstance(raw, list)
        or len(raw) != 64
        or not all(isinstance(b, int) and 0 <= b <= 255 for b in raw)
    ):
        raise KeypairError(f"Malformed keypair file {path}: expected 64 bytes")

    return base58.b58encode(bytes(raw[32:])).decode("ascii")


@contextmanager
def staging_keypair() -> Iterator[tuple[Keypair, Path]]:
    """
    Generate a single-use keypair and write it to a private temp file.

    The file is removed when the block exits, whether or not it raised.
    """
    keypair = Keypair.generate()
    handle = tempfile.NamedTemporaryFile(
        mode="w", prefix="fleet-buffer-", suffix=".json", delete=False
    )
    path = Path(handle.name)
    try:
        with handle:
            os.chmod(path, KEYPAIR_FILE_PERMISSIONS)
            handle.write(keypair.to_json())
        yield keypair, path
    finally:
        path.unlink(missing_ok=True)
