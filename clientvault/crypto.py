"""
Cryptographic operations for ClientVault.

NOTE:
The codec key is derived from an application-embedded secret. This keeps
stored records unreadable to casual inspection of the data file; it does not
protect them from anyone who holds the application code.
"""

import os
import json
import base64
import binascii
import struct
import logging
from typing import Any, Optional
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.exceptions import InvalidTag
from argon2 import PasswordHasher, Type
from argon2.exceptions import VerificationError, InvalidHashError
from argon2.low_level import hash_secret_raw

from . import config

logger = logging.getLogger(__name__)


class DecodeError(Exception):
    """Raised when a stored value cannot be decoded back into data."""


class Codec:
    """Turns JSON-compatible values into encrypted text and back."""

    HEADER = struct.Struct('<4sB')

    def __init__(self, secret: Optional[str] = None):
        """
        Initialize the codec.
        Args:
            secret: Embedded application secret. Defaults to config.get_secret_key().
        """
        if secret is None:
            secret = config.get_secret_key()
        if not secret:
            raise ValueError("Codec secret must not be empty")
        self._aesgcm = AESGCM(self._derive_key(secret))

    @staticmethod
    def _derive_key(secret: str) -> bytes:
        """Derive the AES-256 key from the secret using Argon2id."""
        return hash_secret_raw(
            secret=secret.encode('utf-8'),
            salt=config.CODEC_KEY_SALT,
            time_cost=config.ARGON2_TIME_COST,
            memory_cost=config.ARGON2_MEMORY_COST,
            parallelism=config.ARGON2_PARALLELISM,
            hash_len=config.KEY_SIZE,
            type=Type.ID
        )

    def encode(self, value: Any) -> str:
        """
        Encrypt a value using AES-256-GCM.

        Args:
            value: Any JSON-serializable value

        Returns:
            URL-safe base64 text of magic, version, nonce and ciphertext
        """
        plaintext = json.dumps(value).encode('utf-8')
        nonce = os.urandom(config.NONCE_SIZE)
        ciphertext = self._aesgcm.encrypt(nonce, plaintext, None)
        frame = self.HEADER.pack(config.CODEC_MAGIC, config.CODEC_VERSION) + nonce + ciphertext
        return base64.urlsafe_b64encode(frame).decode('ascii')

    def decode(self, text: str) -> Any:
        """
        Decrypt text produced by encode().

        Args:
            text: Encoded value

        Returns:
            The original value

        Raises:
            DecodeError: If the text is malformed, was encrypted under another
                key, or does not hold valid JSON
        """
        try:
            frame = base64.urlsafe_b64decode(text.encode('ascii'))
        except (binascii.Error, ValueError, AttributeError) as e:
            raise DecodeError(f"Not an encoded value: {e}") from e

        minimum = self.HEADER.size + config.NONCE_SIZE + config.TAG_SIZE
        if len(frame) < minimum:
            raise DecodeError(f"Encoded value too short ({len(frame)} bytes)")

        magic, version = self.HEADER.unpack_from(frame)
        if magic != config.CODEC_MAGIC:
            raise DecodeError(f"Magic bytes mismatch. Expected {config.CODEC_MAGIC}, got {magic}")
        if version != config.CODEC_VERSION:
            raise DecodeError(f"Version mismatch. Expected {config.CODEC_VERSION}, got {version}")

        offset = self.HEADER.size
        nonce = frame[offset:offset + config.NONCE_SIZE]
        ciphertext = frame[offset + config.NONCE_SIZE:]
        try:
            plaintext = self._aesgcm.decrypt(nonce, ciphertext, None)
        except InvalidTag as e:
            raise DecodeError("Authentication failed: wrong key or tampered data") from e

        try:
            return json.loads(plaintext.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DecodeError(f"Decrypted data is not valid JSON: {e}") from e


_password_hasher = PasswordHasher(
    time_cost=config.ARGON2_TIME_COST,
    memory_cost=config.ARGON2_MEMORY_COST,
    parallelism=config.ARGON2_PARALLELISM,
    hash_len=config.KEY_SIZE,
    type=Type.ID
)


def hash_password(password: str) -> str:
    """One-way Argon2id digest of a plaintext password."""
    return _password_hasher.hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    """Check a plaintext password against a stored digest."""
    try:
        return _password_hasher.verify(password_hash, password)
    except VerificationError:
        return False
    except InvalidHashError:
        logger.warning("Stored password hash is not a valid Argon2 hash")
        return False
