"""
Shared configuration and fixtures for module integration tests.

WARNING: Tests marked as spending execute real transactions with real tokens!

Environment Variables:
    SOLANA_RPC_URL: RPC endpoint URL (required)
    WALLET_SECRET_KEY: Base58 encoded secret key (required if no keypair path)
    SOLANA_KEYPAIR_PATH: Path to keypair JSON file (alternative to secret key)
    LIVE_SPEND: Set to "1" to run tests that send transactions
    LIVE_RECIPIENT: Recipient address for transfer tests
"""

import os
import sys
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)


def get_env_or_fail(key: str) -> str:
    """Get required environment variable or raise error"""
    value = os.getenv(key)
    if not value:
        raise EnvironmentError(
            f"Missing required environment variable: {key}\n"
            f"Please set {key} in your .env file or environment."
        )
    return value


def skip_if_no_config():
    """Check if required config is available, return skip message if not"""
    try:
        get_env_or_fail("SOLANA_RPC_URL")
    except EnvironmentError as e:
        return str(e)
    if not (os.getenv("WALLET_SECRET_KEY") or os.getenv("SOLANA_KEYPAIR_PATH")):
        return "No wallet configured. Set WALLET_SECRET_KEY or SOLANA_KEYPAIR_PATH"
    return None


def spending_enabled() -> bool:
    return os.getenv("LIVE_SPEND", "").lower() in ("1", "true", "yes")


def create_client():
    """Create SolanaDexClient with live RPC and real wallet"""
    from solana_dex import SolanaDexClient

    return SolanaDexClient(
        rpc_url=get_env_or_fail("SOLANA_RPC_URL"),
        secret_key=os.getenv("WALLET_SECRET_KEY") or None,
        keypair_path=os.getenv("SOLANA_KEYPAIR_PATH") or None,
    )


# Pytest fixtures
@pytest.fixture(scope="module")
def client():
    """Create SolanaDexClient fixture for tests"""
    skip_msg = skip_if_no_config()
    if skip_msg:
        pytest.skip(skip_msg)
    client = create_client()
    yield client
    client.close()


@pytest.fixture
def spend():
    """Skip unless transactions are explicitly allowed"""
    if not spending_enabled():
        pytest.skip("Set LIVE_SPEND=1 to run tests that send transactions")
