"""Response models for the Signchain vault API.

Every response is wrapped in an ``APIResponse`` envelope; ``data`` is
validated against the model the calling endpoint expects.
"""

from datetime import datetime
from typing import Any, Generic, List, Optional, TypeVar

from eth_utils import to_checksum_address
from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """The ``{success, data, error}`` envelope."""

    model_config = ConfigDict(extra="ignore")

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None


class _Model(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


class Wallet(_Model):
    """A custodial wallet held in a vault."""

    id: str
    account: Optional[str] = None
    vault: Optional[str] = None
    name: Optional[str] = None
    address: Optional[str] = None
    created: Optional[datetime] = None
    updated: Optional[datetime] = None
    expires: Optional[datetime] = None  # set once the wallet is expired

    @field_validator("address")
    @classmethod
    def _checksum_address(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return to_checksum_address(value)

    @property
    def expired(self) -> bool:
        return self.expires is not None


class ListWalletsResult(_Model):
    count: int
    page: List[Wallet] = Field(default_factory=list)


class SignResult(_Model):
    """Result of a sign request: the submission hash and the signed call args."""

    submission_hash: str = Field(..., alias="submissionHash")
    args: List[Any] = Field(default_factory=list)


class VaultStatus(_Model):
    timestamp: Optional[datetime] = None
    online: bool = False
    vault_keys: int = Field(0, alias="vaultKeys")
    wallets: int = 0
    version: Optional[str] = None
