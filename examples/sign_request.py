"""Example: Ask the vault to sign a contract call.

The auth secret is read from VAULT_AUTH_SECRET_KEY, together with
SIGNCHAIN_API_KEY and SIGNCHAIN_VAULT_ID.
"""

import asyncio

from signchain import Chain, SignchainClient, SignOptions, SignchainError

MINT_ABI = {
    "type": "function",
    "name": "mint",
    "inputs": [
        {"name": "to", "type": "address"},
        {"name": "amount", "type": "uint256"},
    ],
}


async def main():
    async with SignchainClient.from_env(require_signature=True) as client:
        options = SignOptions(
            chain=Chain.SEPOLIA,
            contract="0x0000000000000000000000000000000000000001",
            sender="0x0000000000000000000000000000000000000002",
            abi=MINT_ABI,
            args=["0x0000000000000000000000000000000000000002", "1000"],
        )

        try:
            result = await client.sign(options)
        except SignchainError as e:
            print(f"✗ Sign failed: {e}")
            return

        print(f"✓ Submission hash: {result.submission_hash}")
        print(f"  Args: {result.args}")


if __name__ == "__main__":
    asyncio.run(main())
