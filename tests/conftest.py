"""
Shared pytest fixtures for Secure Web Token tests.
"""

import pytest

from secure_web_token import KeyManager, MappingCredentials, TokenCodec


@pytest.fixture
def manager() -> KeyManager:
    """A key manager with no credentials and no default sources."""
    return KeyManager()


@pytest.fixture
def credentials() -> MappingCredentials:
    """Credentials holding a signing key at the standard path."""
    return MappingCredentials({"secure_web_token": {"signing_key": "from-credentials"}})


@pytest.fixture
def codec(manager: KeyManager) -> TokenCodec:
    """A codec bound to a fresh key manager."""
    return TokenCodec(manager)


@pytest.fixture
def sample_payload() -> dict:
    """Sample payload for encode/decode tests."""
    return {"data": "stuff"}
