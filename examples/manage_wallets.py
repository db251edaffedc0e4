"""Example: Create, rename and page through vault wallets."""

import asyncio

from signchain import (
    ClientConfig,
    CreateWalletOptions,
    ListWalletsOptions,
    SignchainClient,
    UpdateWalletOptions,
)


async def main():
    config = ClientConfig(
        api_key="YOUR_API_KEY_HERE",
        vault_id="YOUR_VAULT_ID_HERE",
    )

    async with SignchainClient(config) as client:
        status = await client.vault_status()
        print(f"Vault online: {status.online} ({status.wallets} wallets, v{status.version})")

        wallet = await client.create_wallet(CreateWalletOptions(name="hot wallet"))
        print(f"Created {wallet.name}: {wallet.address}")

        wallet = await client.update_wallet(wallet.address, UpdateWalletOptions(name="warm wallet"))
        print(f"Renamed to {wallet.name}")

        result = await client.list_wallets(ListWalletsOptions(offset=0, count=10))
        print(f"\n{result.count} wallets:")
        for w in result.page:
            print(f"  {w.address}  {w.name}{'  (expired)' if w.expired else ''}")


if __name__ == "__main__":
    asyncio.run(main())
