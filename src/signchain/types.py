"""Type definitions for the Signchain SDK."""

import base64
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from eth_utils import to_checksum_address


class Chain(str, Enum):
    """Chains a vault can sign for."""

    LOCAL = "local"
    ETHEREUM = "ethereum"
    SEPOLIA = "sepolia"
    BSC = "bsc"
    BSC_TESTNET = "bsc-testnet"
    POLYGON = "polygon"
    AMOY = "amoy"
    AVALANCHE = "avalanche"
    FUJI = "fuji"


@dataclass(frozen=True)
class SignOptions:
    """A contract call for the vault to sign.

    ``uniq`` is an optional deduplication value and ``signer`` pins the vault
    key that should produce the signature.
    """

    chain: Chain
    contract: str
    sender: str
    abi: Dict[str, Any] = field(default_factory=dict)
    args: List[Any] = field(default_factory=list)
    uniq: Optional[bytes] = None
    signer: Optional[str] = None

    def to_json(self) -> dict:
        payload = {
            "chain": Chain(self.chain).value,
            "contract": to_checksum_address(self.contract),
            "sender": to_checksum_address(self.sender),
            "abi": self.abi,
            "args": list(self.args),
        }
        if self.uniq is not None:
            payload["uniq"] = base64.b64encode(self.uniq).decode()
        if self.signer is not None:
            payload["signer"] = to_checksum_address(self.signer)
        return payload


@dataclass(frozen=True)
class CreateWalletOptions:
    name: str

    def to_json(self) -> dict:
        return {"name": self.name}


@dataclass(frozen=True)
class UpdateWalletOptions:
    name: str

    def to_json(self) -> dict:
        return {"name": self.name}


@dataclass(frozen=True)
class ListWalletsOptions:
    """Pagination for list_wallets. Unset fields are left out of the query."""

    offset: Optional[int] = None
    count: Optional[int] = None

    def __post_init__(self):
        for name in ("offset", "count"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must not be negative")

    def to_query(self) -> Dict[str, int]:
        query = {}
        if self.offset is not None:
            query["offset"] = self.offset
        if self.count is not None:
            query["count"] = self.count
        return query


class SignchainError(Exception):
    """Base class for all Signchain SDK errors."""


class TransportError(SignchainError):
    """The request never produced an HTTP response (network error, timeout)."""


class ServerError(SignchainError):
    """The vault answered with an error envelope."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(message)


class DecodeError(SignchainError):
    """The vault answered with a body that is not a valid response envelope."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[bytes] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class EntropyError(SignchainError):
    """No secure random source was available to generate a signature nonce."""


class ConfigurationError(SignchainError, ValueError):
    """Invalid client configuration."""


class SignatureError(SignchainError):
    """Signature parsing or verification failed."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"SignatureError: {message}")
