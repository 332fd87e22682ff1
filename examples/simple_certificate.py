#!/usr/bin/env python3
"""
Simple example of certifying data with the Circular Enterprise APIs.
"""
import os
import logging
from circular_enterprise_apis import CEPAccount, Certificate

def main():
    """
    Demonstrate basic usage of CEPAccount.

    This example shows how to:
    1. Open an account and select a network
    2. Refresh the nonce
    3. Submit a certificate and wait for its outcome
    """
    logging.basicConfig(level=logging.INFO)

    # Read configuration from environment
    NETWORK = os.environ.get("CIRCULAR_NETWORK", "testnet")
    ADDRESS = os.environ.get("CIRCULAR_ADDRESS")
    PRIVATE_KEY = os.environ.get("CIRCULAR_PRIVATE_KEY")

    # Verify configuration
    if not ADDRESS:
        print("ERROR: CIRCULAR_ADDRESS environment variable is required")
        return

    if not PRIVATE_KEY:
        print("ERROR: CIRCULAR_PRIVATE_KEY environment variable is required")
        return

    account = CEPAccount()
    if not account.open(ADDRESS):
        print(f"Error opening account: {account.get_last_error()}")
        return

    if not account.set_network(NETWORK):
        print(f"Error selecting network: {account.get_last_error()}")
        return

    if not account.update_account():
        print(f"Error updating account: {account.get_last_error()}")
        return

    certificate = Certificate()
    certificate.set_data("Document checksum: e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855")

    account.submit_certificate(certificate.get_json_certificate(), PRIVATE_KEY)
    if account.get_last_error():
        print(f"Error submitting certificate: {account.get_last_error()}")
        return

    print(f"Certificate submitted: {account.latest_tx_id}")

    outcome = account.get_transaction_outcome(account.latest_tx_id, 60)
    if outcome is None:
        print(f"No outcome: {account.get_last_error()}")
        return

    print(f"Status: {outcome.get('Status')}")
    print(f"Block: {outcome.get('BlockID')}")

if __name__ == "__main__":
    main()
