"""Vault auth signatures.

Every signed request carries an ``X-Vault-Auth-Signature`` header of the form
``nonce.timestamp.digest``. Each segment is lowercased RFC 4648 base32, and the
digest is SHA-256 over the request body, nonce, timestamp and shared secret.
"""

import base64
import binascii
import os
import struct
import time
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple, Union

from cryptography.hazmat.primitives import constant_time, hashes

from .types import EntropyError, SignatureError

SIGNATURE_HEADER = "X-Vault-Auth-Signature"
NONCE_SIZE = 32

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLISECOND = timedelta(milliseconds=1)

SecretKey = Union[str, bytes]


def _secret_bytes(secret_key: SecretKey) -> bytes:
    if isinstance(secret_key, str):
        secret_key = secret_key.encode()
    if not secret_key:
        raise ValueError("secret key must not be empty")
    return secret_key


def _b32(data: bytes) -> str:
    return base64.b32encode(data).decode().lower()


def encode_timestamp(timestamp: datetime) -> bytes:
    """Encode a timestamp as 8-byte big-endian milliseconds since the epoch.

    Naive datetimes are treated as UTC.
    """
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    millis = (timestamp - _EPOCH) // _MILLISECOND
    if millis < 0:
        raise ValueError("timestamp must not be before the Unix epoch")
    return struct.pack(">Q", millis)


def decode_timestamp(timestamp_bytes: bytes) -> datetime:
    """Inverse of encode_timestamp."""
    (millis,) = struct.unpack(">Q", timestamp_bytes)
    return _EPOCH + timedelta(milliseconds=millis)


def compute_digest(
    secret_key: SecretKey,
    nonce: bytes,
    timestamp_bytes: bytes,
    payload: bytes = b"",
) -> bytes:
    """SHA-256 of payload || nonce || timestamp || secret, in that order."""
    digest = hashes.Hash(hashes.SHA256())
    digest.update(payload)
    digest.update(nonce)
    digest.update(timestamp_bytes)
    digest.update(_secret_bytes(secret_key))
    return digest.finalize()


def generate_nonce() -> bytes:
    """Draw a fresh nonce from the OS CSPRNG.

    Raises:
        EntropyError: If no secure randomness source is available.
    """
    try:
        return os.urandom(NONCE_SIZE)
    except (OSError, NotImplementedError) as e:
        raise EntropyError(f"Secure random source unavailable: {e}") from e


def generate_signature(
    secret_key: SecretKey,
    timestamp: Optional[datetime] = None,
    payload: bytes = b"",
) -> str:
    """Sign a request payload with the vault auth secret key.

    Args:
        secret_key: Shared vault auth secret (never sent over the wire)
        timestamp: Signing time (default: now); truncated to milliseconds
        payload: Raw request body bytes (empty when there is no body)

    Returns:
        Signature token ``nonce.timestamp.digest``

    Raises:
        EntropyError: If the nonce cannot be generated.
        ValueError: If secret_key is empty or timestamp predates the epoch.
    """
    secret = _secret_bytes(secret_key)
    if timestamp is None:
        timestamp = datetime.now(timezone.utc)
    timestamp_bytes = encode_timestamp(timestamp)

    nonce = generate_nonce()
    digest = compute_digest(secret, nonce, timestamp_bytes, payload)

    return ".".join((_b32(nonce), _b32(timestamp_bytes), _b32(digest)))


def parse_signature(signature: str) -> Tuple[bytes, datetime, bytes]:
    """Split a signature token into (nonce, timestamp, digest).

    Raises:
        SignatureError: If the token is malformed.
    """
    parts = signature.split(".")
    if len(parts) != 3:
        raise SignatureError("Signature must have three dot-separated segments")

    try:
        nonce, timestamp_bytes, digest = (base64.b32decode(p.upper()) for p in parts)
    except (binascii.Error, ValueError):
        raise SignatureError("Invalid signature encoding")

    if len(nonce) != NONCE_SIZE:
        raise SignatureError("Invalid nonce length")
    if len(timestamp_bytes) != 8:
        raise SignatureError("Invalid timestamp length")
    if len(digest) != 32:
        raise SignatureError("Invalid digest length")

    try:
        signed_at = decode_timestamp(timestamp_bytes)
    except (OverflowError, ValueError):
        raise SignatureError("Invalid timestamp")

    return nonce, signed_at, digest


def verify_signature(
    secret_key: SecretKey,
    signature: str,
    payload: bytes = b"",
    max_age_seconds: Optional[int] = 300,
    max_clock_skew_seconds: int = 60,
) -> bool:
    """Verify a signature token against a request body.

    This is the check a vault performs on an incoming request.

    Args:
        secret_key: Shared vault auth secret
        signature: Value of the X-Vault-Auth-Signature header
        payload: Raw request body bytes
        max_age_seconds: Maximum signature age (None disables the check)
        max_clock_skew_seconds: Allowed clock skew for future timestamps

    Returns:
        True if the signature is valid

    Raises:
        SignatureError: If the signature is malformed, stale or forged.
        ValueError: If secret_key is empty.
    """
    secret = _secret_bytes(secret_key)
    nonce, signed_at, digest = parse_signature(signature)

    if max_age_seconds is not None:
        age = time.time() - signed_at.timestamp()
        if age > max_age_seconds:
            raise SignatureError(
                f"Signature expired (age: {int(age)}s, max: {max_age_seconds}s)"
            )
        if -age > max_clock_skew_seconds:
            raise SignatureError("Signature created in the future")

    expected = compute_digest(secret, nonce, encode_timestamp(signed_at), payload)
    if not constant_time.bytes_eq(expected, digest):
        raise SignatureError("Signature verification failed")
    return True
