"""Signchain client - custodial wallet and signing vault SDK.

Requests are authenticated with a bearer API key. Sign requests additionally
carry an X-Vault-Auth-Signature proving possession of the vault auth secret
without sending it.
"""

import json as jsonlib
import logging
from typing import Any, Optional, Type, TypeVar
from urllib.parse import quote, urlencode

import httpx
from eth_utils import to_checksum_address
from pydantic import ValidationError

from .config import ClientConfig
from .models import APIResponse, ListWalletsResult, SignResult, VaultStatus, Wallet
from .signing import SIGNATURE_HEADER, generate_signature
from .types import (
    ConfigurationError,
    CreateWalletOptions,
    DecodeError,
    ListWalletsOptions,
    ServerError,
    SignOptions,
    TransportError,
    UpdateWalletOptions,
)

logger = logging.getLogger(__name__)

M = TypeVar("M")

_STATUS_MESSAGES = {
    400: "Bad request",
    401: "Not authenticated",
    403: "Insufficient permissions",
    404: "Not found",
    409: "Conflict",
    422: "Validation error",
    429: "Rate limit exceeded",
}


class SignchainClient:
    """Client for a Signchain vault.

    Usage:
        config = ClientConfig(
            api_key="...",
            vault_id="my-vault",
            auth_secret_key="...",  # required by vaults that verify signatures
        )
        async with SignchainClient(config) as client:
            wallet = await client.create_wallet(CreateWalletOptions(name="hot"))
            result = await client.sign(SignOptions(...))

    The client only holds immutable configuration and a pooled HTTP client,
    so one instance can serve any number of concurrent tasks.
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            config: Client configuration
            transport: Custom httpx transport (for testing or proxies)
        """
        self._config = config
        self._client = httpx.AsyncClient(
            transport=transport, timeout=config.timeout, follow_redirects=True
        )

    @classmethod
    def from_env(cls, **overrides) -> "SignchainClient":
        """Create a client from environment variables (see ClientConfig.from_env)."""
        return cls(ClientConfig.from_env(**overrides))

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def url(self) -> str:
        return self._config.base_url

    @property
    def api_key(self) -> str:
        return self._config.api_key

    @property
    def vault_id(self) -> str:
        return self._config.vault_id

    @property
    def auth_secret_key(self):
        return self._config.auth_secret_key

    # -------------------------------------------------------------------------
    # Signing
    # -------------------------------------------------------------------------

    async def sign(self, options: SignOptions) -> SignResult:
        """Ask the vault to sign a contract call.

        Args:
            options: Chain, contract, sender, ABI and arguments of the call

        Returns:
            SignResult with the submission hash and the signed arguments.
        """
        return await self._request(
            "POST",
            f"{self._vault_path()}/sign",
            json=options.to_json(),
            signed=True,
            response_model=SignResult,
        )

    # -------------------------------------------------------------------------
    # Wallets
    # -------------------------------------------------------------------------

    async def create_wallet(self, options: CreateWalletOptions) -> Wallet:
        """Create a new wallet in the vault."""
        return await self._request(
            "POST",
            f"{self._vault_path()}/wallets",
            json=options.to_json(),
            response_model=Wallet,
        )

    async def get_wallet(self, address: str) -> Wallet:
        """Fetch a wallet by address."""
        return await self._request(
            "GET", self._wallet_path(address), response_model=Wallet
        )

    async def list_wallets(
        self, options: Optional[ListWalletsOptions] = None
    ) -> ListWalletsResult:
        """List the vault's wallets.

        Args:
            options: Offset and count for pagination (optional)

        Returns:
            ListWalletsResult with the total count and the requested page.
        """
        path = f"{self._vault_path()}/wallets"
        query = options.to_query() if options else {}
        if query:
            path = f"{path}?{urlencode(query)}"
        return await self._request("GET", path, response_model=ListWalletsResult)

    async def update_wallet(self, address: str, options: UpdateWalletOptions) -> Wallet:
        """Rename a wallet."""
        return await self._request(
            "PUT",
            self._wallet_path(address),
            json=options.to_json(),
            response_model=Wallet,
        )

    async def expire_wallet(self, address: str) -> Wallet:
        """Expire a wallet. The vault stops signing with it."""
        return await self._request(
            "DELETE", self._wallet_path(address), response_model=Wallet
        )

    async def unexpire_wallet(self, address: str) -> Wallet:
        """Reactivate an expired wallet."""
        return await self._request(
            "POST", self._wallet_path(address), response_model=Wallet
        )

    # -------------------------------------------------------------------------
    # Vault
    # -------------------------------------------------------------------------

    async def vault_status(self) -> VaultStatus:
        """Get the vault's online state, key and wallet counts, and version."""
        return await self._request("GET", self._vault_path(), response_model=VaultStatus)

    # -------------------------------------------------------------------------
    # Internal
    # -------------------------------------------------------------------------

    def _vault_path(self) -> str:
        return f"/api/v1/vaults/{quote(self._config.vault_id, safe='')}"

    def _wallet_path(self, address: str) -> str:
        return f"{self._vault_path()}/wallets/{to_checksum_address(address)}"

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[Any] = None,
        signed: bool = False,
        response_model: Optional[Type[M]] = None,
    ) -> Optional[M]:
        """Make a request to the vault API and unwrap the response envelope.

        Args:
            method: HTTP method
            path: Path below the base URL, including any query string
            json: JSON-serializable body (optional)
            signed: Attach an X-Vault-Auth-Signature for the body
            response_model: Model the envelope's data is validated against

        Returns:
            The envelope's data, or None for non-JSON responses.

        Raises:
            TransportError: If no response was received.
            ServerError: If the vault returned an error envelope.
            DecodeError: If the response body is not a valid envelope.
        """
        url = f"{self._config.base_url}{path}"
        headers = {
            "Accept": "application/json",
            "Authorization": f"Bearer {self._config.api_key}",
        }
        body = None

        if json is not None:
            body = jsonlib.dumps(json, separators=(",", ":")).encode()
            headers["Content-Type"] = "application/json"

        if signed:
            secret_key = self._config.auth_secret_key
            if secret_key:
                headers[SIGNATURE_HEADER] = generate_signature(secret_key, payload=body or b"")
            elif self._config.require_signature:
                raise ConfigurationError(
                    f"{method} {path} requires a signature but no auth_secret_key is configured"
                )
            else:
                logger.warning(
                    "No auth_secret_key configured; sending %s %s without a signature",
                    method,
                    path,
                )

        logger.debug("%s %s (signed=%s)", method, path, signed)
        try:
            response = await self._client.request(method, url, content=body, headers=headers)
        except httpx.DecodingError as e:
            raise DecodeError(f"{method} {path}: undecodable response body: {e}") from e
        except httpx.RequestError as e:
            logger.debug("%s %s failed: %r", method, path, e)
            raise TransportError(f"{method} {path} failed: {e}") from e
        logger.debug("%s %s -> %d", method, path, response.status_code)

        if response.status_code >= 400:
            self._handle_error(response)
        if not response.is_success:
            raise ServerError(
                response.status_code,
                f"Unexpected response: {self._status_message(response.status_code)}",
            )

        if not self._is_json(response):
            return None

        envelope = self._parse_envelope(response, response_model)
        if not envelope.success:
            raise ServerError(
                response.status_code,
                envelope.error or self._status_message(response.status_code),
            )
        if response_model is not None and envelope.data is None:
            raise DecodeError(
                "Response envelope has no data",
                status_code=response.status_code,
                body=response.content,
            )
        return envelope.data

    @staticmethod
    def _is_json(response: httpx.Response) -> bool:
        content_type = response.headers.get("content-type", "")
        return content_type.split(";")[0].strip().lower() == "application/json"

    @staticmethod
    def _parse_envelope(
        response: httpx.Response, response_model: Optional[Type[M]] = None
    ) -> APIResponse:
        model = APIResponse[response_model] if response_model is not None else APIResponse[Any]
        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            raise DecodeError(
                f"Invalid response envelope (HTTP {response.status_code}): {e}",
                status_code=response.status_code,
                body=response.content,
            ) from e

    @staticmethod
    def _status_message(status_code: int) -> str:
        return _STATUS_MESSAGES.get(status_code, f"HTTP {status_code}")

    def _handle_error(self, response: httpx.Response) -> None:
        """Raise the error carried by a >= 400 response."""
        envelope = self._parse_envelope(response)
        raise ServerError(
            response.status_code,
            envelope.error or self._status_message(response.status_code),
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
