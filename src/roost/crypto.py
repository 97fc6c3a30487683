"""Vault sealing: scrypt key derivation and AES-256-GCM encryption."""

from __future__ import annotations

import os
from dataclasses import dataclass

from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

# scrypt defaults for newly sealed vaults; existing vaults carry their own parameters
SCRYPT_SALT_LENGTH = 16
SCRYPT_KEY_LENGTH = 32
SCRYPT_N = 1_048_576
SCRYPT_R = 8
SCRYPT_P = 1

AES_GCM_NONCE_LENGTH = 12


@dataclass(frozen=True)
class KdfParams:
    """scrypt parameters stored alongside the ciphertext."""

    salt: bytes
    n: int
    r: int
    p: int

    @staticmethod
    def generate() -> KdfParams:
        """Fresh random salt with the current default cost parameters."""
        return KdfParams(salt=os.urandom(SCRYPT_SALT_LENGTH), n=SCRYPT_N, r=SCRYPT_R, p=SCRYPT_P)


@dataclass(frozen=True)
class SealedData:
    """Everything needed to open a vault, given the master password."""

    kdf: KdfParams
    nonce: bytes
    ciphertext: bytes


def derive_key(password: str, kdf: KdfParams) -> bytes:
    """Derive a 32-byte AES key from the master password."""
    return Scrypt(salt=kdf.salt, length=SCRYPT_KEY_LENGTH, n=kdf.n, r=kdf.r, p=kdf.p).derive(password.encode())


def seal(plaintext: bytes, key: bytes, kdf: KdfParams) -> SealedData:
    """Encrypt plaintext with AES-256-GCM under a fresh nonce."""
    nonce = os.urandom(AES_GCM_NONCE_LENGTH)
    return SealedData(kdf=kdf, nonce=nonce, ciphertext=AESGCM(key).encrypt(nonce, plaintext, None))


def unseal(sealed: SealedData, key: bytes) -> bytes:
    """Decrypt sealed data.

    Raises:
        InvalidTag: Wrong key or tampered ciphertext.

    """
    return AESGCM(key).decrypt(sealed.nonce, sealed.ciphertext, None)
