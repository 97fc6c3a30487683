"""Shared fixtures."""

import pytest


@pytest.fixture
def fast_kdf(monkeypatch: pytest.MonkeyPatch) -> None:
    """Seal new vaults with a tiny scrypt cost so tests don't spend seconds per unlock."""
    monkeypatch.setattr("roost.crypto.SCRYPT_N", 2**4)
