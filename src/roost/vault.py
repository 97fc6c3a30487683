"""Encrypted credential store."""

import base64
import json
import logging
import os
from pathlib import Path

from cryptography.exceptions import InvalidTag
from pydantic import ValidationError

from roost.credential import Credential
from roost.crypto import KdfParams, SealedData, derive_key, seal, unseal

logger = logging.getLogger(__name__)

# Match ranks used by search(), lower is better
_RANK_EXACT = 0
_RANK_PREFIX = 1
_RANK_SUBSTRING = 2
_RANK_SUBSEQUENCE = 3


class VaultError(Exception):
    """Application-level error raised by Vault operations."""

    def __init__(self, code: str, message: str) -> None:
        """Initialize with a machine-readable code and a human-readable message.

        Args:
            code: Machine-readable error code (e.g. "wrong_password").
            message: Human-readable error description.

        """
        super().__init__(message)
        self.code = code


def _is_subsequence(needle: str, haystack: str) -> bool:
    """Check that every character of needle appears in haystack, in order."""
    it = iter(haystack)
    return all(ch in it for ch in needle)


def _match_rank(name: str, query: str) -> int | None:
    """Rank how well a lowercased name matches a lowercased query, or None for no match."""
    if name == query:
        return _RANK_EXACT
    if name.startswith(query):
        return _RANK_PREFIX
    if query in name:
        return _RANK_SUBSTRING
    if _is_subsequence(query, name):
        return _RANK_SUBSEQUENCE
    return None


class Vault:
    """Credentials held in an encrypted file, decrypted in memory while unlocked."""

    def __init__(self, vault_path: Path) -> None:
        """Initialize the vault.

        Args:
            vault_path: Path to the encrypted vault file.

        """
        self._vault_path = vault_path
        # Populated by unlock, wiped by lock. The key and KDF params are kept so
        # that add/delete can re-seal without asking for the password again.
        self._key: bytes | None = None
        self._kdf: KdfParams | None = None
        self._credentials: dict[str, Credential] | None = None

    @property
    def path(self) -> Path:
        """Location of the encrypted vault file."""
        return self._vault_path

    @property
    def exists(self) -> bool:
        """Check if the vault file exists."""
        return self._vault_path.exists()

    @property
    def is_unlocked(self) -> bool:
        """Check if the vault is currently unlocked."""
        return self._key is not None and self._credentials is not None

    def init(self, password: str) -> None:
        """Create a new, empty vault.

        Raises:
            VaultError: Already exists (code: ``already_initialized``) or empty password (code: ``empty_password``).

        """
        if self.exists:
            raise VaultError("already_initialized", "Vault already exists.")
        if not password:
            raise VaultError("empty_password", "Password cannot be empty.")
        self._vault_path.parent.mkdir(parents=True, exist_ok=True, mode=0o700)
        self._vault_path.parent.chmod(0o700)
        kdf = KdfParams.generate()
        self._write(seal(b"[]", derive_key(password, kdf), kdf))
        logger.info("Vault created at %s", self._vault_path)

    def unlock(self, password: str) -> None:
        """Derive the key, decrypt the vault, and hold credentials in memory.

        Raises:
            VaultError: Not initialized (code: ``not_initialized``), wrong password
                (code: ``wrong_password``), or undecodable contents (code: ``corrupted``).

        """
        if not self.exists:
            raise VaultError("not_initialized", "Vault is not initialized. Run 'roost init' first.")
        sealed = self._read()
        key = derive_key(password, sealed.kdf)
        try:
            plaintext = unseal(sealed, key)
        except InvalidTag:
            raise VaultError("wrong_password", "Wrong password.") from None
        try:
            credentials = [Credential.model_validate(item) for item in json.loads(plaintext)]
        except (json.JSONDecodeError, TypeError, ValidationError):
            raise VaultError("corrupted", "Decrypted vault is not valid, it may be corrupted.") from None
        self._key = key
        self._kdf = sealed.kdf
        self._credentials = {c.name.lower(): c for c in credentials}

    def lock(self) -> None:
        """Wipe key and credentials from memory."""
        self._key = None
        self._kdf = None
        self._credentials = None

    # --- Queries (requires unlocked state) ---

    def search(self, query: str) -> list[Credential]:
        """Find credentials whose name matches query, best matches first.

        Matching is case-insensitive and tolerates dropped characters, so ``ggl``
        finds ``google``. Exact names rank first, then prefixes, substrings, and
        subsequences; ties are ordered by name.

        Raises:
            VaultError: Vault is locked (code: ``locked``).

        """
        needle = query.lower()
        ranked: list[tuple[int, str, Credential]] = []
        for key, credential in self._require_unlocked().items():
            rank = _match_rank(key, needle)
            if rank is not None:
                ranked.append((rank, key, credential))
        ranked.sort(key=lambda item: (item[0], item[1]))
        logger.debug("Search %r matched %d credential(s)", query, len(ranked))
        return [credential for _, _, credential in ranked]

    def get(self, name: str) -> Credential | None:
        """Get a credential by exact name (case-insensitive), or None if not found.

        Raises:
            VaultError: Vault is locked (code: ``locked``).

        """
        return self._require_unlocked().get(name.lower())

    def list_credentials(self, filter_: str | None = None) -> list[Credential]:
        """List credentials sorted by name, optionally filtered by substring.

        Raises:
            VaultError: Vault is locked (code: ``locked``).

        """
        credentials = sorted(self._require_unlocked().values(), key=lambda c: c.name.lower())
        if filter_:
            credentials = [c for c in credentials if filter_.lower() in c.name.lower()]
        return credentials

    # --- Mutations (requires unlocked state) ---

    def add(self, name: str, username: str, secret: str) -> None:
        """Add or replace a credential and re-seal the vault.

        Raises:
            VaultError: Vault is locked (code: ``locked``), empty name (code: ``empty_name``),
                or empty secret (code: ``empty_secret``).

        """
        if not name:
            raise VaultError("empty_name", "Name cannot be empty.")
        if not secret:
            raise VaultError("empty_secret", "Secret cannot be empty.")
        credentials = self._require_unlocked()
        credentials[name.lower()] = Credential(name=name, username=username, secret=secret)
        self._persist()
        logger.info("Credential '%s' saved", name)

    def delete(self, name: str) -> bool:
        """Delete a credential by exact name and re-seal. Return True if it existed.

        Raises:
            VaultError: Vault is locked (code: ``locked``).

        """
        credentials = self._require_unlocked()
        if credentials.pop(name.lower(), None) is None:
            return False
        self._persist()
        logger.info("Credential '%s' deleted", name)
        return True

    # --- Private helpers ---

    def _require_unlocked(self) -> dict[str, Credential]:
        """Return the credentials dict or raise if locked.

        Raises:
            VaultError: Vault is locked (code: ``locked``).

        """
        if self._credentials is None or self._key is None:
            raise VaultError("locked", "Vault is locked. Unlock it first.")
        return self._credentials

    def _persist(self) -> None:
        """Re-seal and write credentials to disk."""
        if self._key is None or self._kdf is None or self._credentials is None:
            raise VaultError("locked", "Vault is locked. Unlock it first.")
        # The only place besides delivery where raw secrets are unwrapped.
        records = [
            {"name": c.name, "username": c.username, "secret": c.secret.get_secret_value()}
            for c in self._credentials.values()
        ]
        self._write(seal(json.dumps(records).encode(), self._key, self._kdf))

    def _read(self) -> SealedData:
        """Read the vault file and decode the sealed envelope.

        Raises:
            VaultError: Envelope is malformed (code: ``corrupted``).

        """
        try:
            envelope = json.loads(self._vault_path.read_text())
            kdf = envelope["kdf"]
            return SealedData(
                kdf=KdfParams(salt=base64.b64decode(kdf["salt"]), n=kdf["n"], r=kdf["r"], p=kdf["p"]),
                nonce=base64.b64decode(envelope["encryption"]["nonce"]),
                ciphertext=base64.b64decode(envelope["encryption"]["ciphertext"]),
            )
        except (json.JSONDecodeError, KeyError, TypeError, ValueError):
            raise VaultError("corrupted", "Vault file is malformed.") from None

    def _write(self, sealed: SealedData) -> None:
        """Write the sealed envelope atomically with owner-only permissions."""
        envelope = {
            "kdf": {
                "algorithm": "scrypt",
                "salt": base64.b64encode(sealed.kdf.salt).decode(),
                "n": sealed.kdf.n,
                "r": sealed.kdf.r,
                "p": sealed.kdf.p,
            },
            "encryption": {
                "algorithm": "aes-256-gcm",
                "nonce": base64.b64encode(sealed.nonce).decode(),
                "ciphertext": base64.b64encode(sealed.ciphertext).decode(),
            },
        }
        tmp_path = self._vault_path.with_suffix(".tmp")
        data = (json.dumps(envelope, indent=2) + "\n").encode()
        fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        try:
            os.write(fd, data)
        finally:
            os.close(fd)
        tmp_path.replace(self._vault_path)
