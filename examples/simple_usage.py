#!/usr/bin/env python3
"""
Simple example of using the Sui SDK.
"""
import logging
import os

from sui_sdk import Ed25519Signer, SuiClient, SuiSdkError


def main():
    """
    Demonstrate basic usage of the SuiClient.

    This example shows how to:
    1. Initialize the client
    2. List the SUI coins owned by an address
    3. Build, sign and execute a SUI transfer
    """
    logging.basicConfig(level=logging.INFO)

    # Read configuration from environment
    NETWORK = os.environ.get("SUI_NETWORK", "devnet")
    SEED_HEX = os.environ.get("SUI_PRIVATE_KEY_SEED")
    ADDRESS = os.environ.get("SUI_ADDRESS")
    RECIPIENT = os.environ.get("SUI_RECIPIENT")

    # Verify configuration
    if not ADDRESS:
        print("ERROR: SUI_ADDRESS environment variable is required")
        return

    with SuiClient(network=NETWORK) as client:
        try:
            coins = client.get_sui_coins_owned_by_address(ADDRESS)
        except SuiSdkError as e:
            print(f"Error listing coins: {str(e)}")
            return

        print(f"{ADDRESS} owns {len(coins)} SUI coins")
        for coin in coins:
            print(f"  {coin.reference.object_id}: {coin.balance}")

        if not (SEED_HEX and RECIPIENT and coins):
            print("Set SUI_PRIVATE_KEY_SEED and SUI_RECIPIENT to send a transfer")
            return

        signer = Ed25519Signer.from_seed(bytes.fromhex(SEED_HEX))
        try:
            tx = client.transfer_sui(
                signer=ADDRESS,
                recipient=RECIPIENT,
                sui_object_id=coins[0].reference.object_id,
                amount=1000,
                gas_budget=1000
            )
            response = client.execute_transaction(tx.sign_with(signer))
            print(f"Transfer submitted: {response.model_dump()}")
        except SuiSdkError as e:
            print(f"Error sending transfer: {str(e)}")


if __name__ == "__main__":
    main()
