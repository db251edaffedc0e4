"""Fixed signature vectors.

The nonce source is pinned so the whole token is deterministic and can be
checked byte for byte against an independent SHA-256 computation.
"""

import base64
import hashlib
from datetime import datetime, timezone

import pytest

from signchain import generate_signature, verify_signature
import signchain.signing as signing_module

VECTORS = [
    {
        "secret": "s3cr3t",
        "timestamp": datetime(2024, 1, 1, tzinfo=timezone.utc),
        "millis": 1704067200000,
        "nonce": bytes(range(32)),
        "payload": b'{"name":"hot"}',
    },
    {
        "secret": b"\x00\xffbinary-secret",
        "timestamp": datetime(1970, 1, 1, 0, 0, 0, 1000, tzinfo=timezone.utc),
        "millis": 1,
        "nonce": b"\xaa" * 32,
        "payload": b"",
    },
]


@pytest.mark.parametrize("vector", VECTORS)
def test_signature_vector(monkeypatch, vector):
    monkeypatch.setattr(signing_module.os, "urandom", lambda n: vector["nonce"][:n])

    token = generate_signature(vector["secret"], vector["timestamp"], vector["payload"])

    secret = vector["secret"]
    if isinstance(secret, str):
        secret = secret.encode()
    timestamp_bytes = vector["millis"].to_bytes(8, "big")
    digest = hashlib.sha256(
        vector["payload"] + vector["nonce"] + timestamp_bytes + secret
    ).digest()

    expected = ".".join(
        base64.b32encode(part).decode().lower()
        for part in (vector["nonce"], timestamp_bytes, digest)
    )
    assert token == expected
    assert verify_signature(vector["secret"], token, vector["payload"], max_age_seconds=None)


def test_known_timestamp_encoding():
    timestamp = datetime(2024, 1, 1, tzinfo=timezone.utc)
    encoded = signing_module.encode_timestamp(timestamp)

    assert encoded == bytes.fromhex("0000018cc251f400")
    assert base64.b32encode(encoded).decode().lower() == "aaaaddgckh2aa==="
