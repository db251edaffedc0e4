"""signchain - Client SDK for Signchain custodial wallet vaults.

Sign requests are authenticated with a SHA-256 proof over the request body
keyed by a shared vault auth secret.
"""

from .client import SignchainClient
from .config import DEFAULT_BASE_URL, ClientConfig
from .models import APIResponse, ListWalletsResult, SignResult, VaultStatus, Wallet
from .signing import (
    SIGNATURE_HEADER,
    compute_digest,
    generate_signature,
    parse_signature,
    verify_signature,
)
from .types import (
    Chain,
    ConfigurationError,
    CreateWalletOptions,
    DecodeError,
    EntropyError,
    ListWalletsOptions,
    ServerError,
    SignatureError,
    SignchainError,
    SignOptions,
    TransportError,
    UpdateWalletOptions,
)

__version__ = "2.0.0"
__all__ = [
    # Main client
    "SignchainClient",
    "ClientConfig",
    "DEFAULT_BASE_URL",
    # Options
    "Chain",
    "SignOptions",
    "CreateWalletOptions",
    "ListWalletsOptions",
    "UpdateWalletOptions",
    # Models
    "APIResponse",
    "Wallet",
    "ListWalletsResult",
    "SignResult",
    "VaultStatus",
    # Errors
    "SignchainError",
    "TransportError",
    "ServerError",
    "DecodeError",
    "EntropyError",
    "ConfigurationError",
    "SignatureError",
    # Signing utilities
    "SIGNATURE_HEADER",
    "generate_signature",
    "compute_digest",
    "parse_signature",
    "verify_signature",
]
