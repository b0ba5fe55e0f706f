"""
Secure Web Token Key Management.

Owns the signing key, the encryption key and the encryption options used by
the token codec. Each value is resolved lazily on first read, cached until it
is replaced or cleared, and can be sourced from a literal, a callable, a
credential provider, or fresh random material.
"""

import secrets
import string
import logging
import threading
from dataclasses import dataclass, asdict
from typing import Any, Callable, Dict, Optional, Union

from secure_web_token.config import (
    CREDENTIAL_PATH,
    ENCRYPTION_KEY_BYTES,
    SIGNING_KEY_LENGTH,
    credential_path_segments,
)
from secure_web_token.credentials import CredentialProvider


logger = logging.getLogger(__name__)

Key = Union[str, bytes]
KeySource = Union[Key, Callable[[], Optional[Key]], None]

# 26 + 26 + 10 + 10 symbols
CHARACTERS: str = string.ascii_lowercase + string.ascii_uppercase + string.digits + "!@#$%^&*()"


@dataclass(frozen=True)
class EncryptOptions:
    """
    JWE header options for token encryption.

    Attributes:
        enc: Content encryption algorithm
        alg: Key management mode ("dir" uses the key directly)
        zip: Compression ("DEF" for DEFLATE, empty for none)
    """
    enc: str = "A256GCM"
    alg: str = "dir"
    zip: str = "DEF"

    def to_header(self) -> Dict[str, str]:
        """JWE protected header fields; a blank ``zip`` is omitted."""
        return {k: v for k, v in asdict(self).items() if not is_blank(v)}


DEFAULT_OPTIONS = EncryptOptions()


def is_blank(value: Any) -> bool:
    """None, an empty string and an empty sequence are blank."""
    if value is None:
        return True
    if isinstance(value, (str, bytes, bytearray, list, tuple, dict, set, frozenset)):
        return len(value) == 0
    return False


def presence(value: Any) -> Any:
    """Return ``value`` unless it is blank, else None."""
    return None if is_blank(value) else value


def gen_signing_key(length: Optional[int] = None) -> str:
    """
    Generate a random signing key drawn from CHARACTERS.

    Args:
        length: Number of characters (default: SIGNING_KEY_LENGTH, 50).

    Returns:
        A string of exactly ``length`` characters.
    """
    if length is None:
        length = SIGNING_KEY_LENGTH
    return "".join(secrets.choice(CHARACTERS) for _ in range(length))


def gen_encryption_key() -> bytes:
    """Generate 32 cryptographically random bytes for AES-256."""
    return secrets.token_bytes(ENCRYPTION_KEY_BYTES)


class KeyManager:
    """
    Lazily resolved, overridable key material for token encoding.

    All cached slots are guarded by a single re-entrant lock, so concurrent
    first reads resolve and cache exactly one default value.

    Example:
        >>> manager = KeyManager(credentials=MappingCredentials({...}))
        >>> manager.default_signing_key_source = lambda: os.getenv("APP_SIGNING_KEY")
        >>> key = manager.get_signing_key()
        >>> manager.set_signing_key(None)  # rotate to a fresh random key
    """

    def __init__(
        self,
        credentials: Optional[CredentialProvider] = None,
        signing_key_source: KeySource = None,
        encryption_key_source: KeySource = None,
        credential_path: str = CREDENTIAL_PATH,
    ):
        """
        Initialize the key manager.

        Args:
            credentials: Optional provider consulted for a default signing key.
            signing_key_source: Literal key or zero-argument callable used as
                the default signing key.
            encryption_key_source: Literal key or zero-argument callable used
                as the default encryption key.
            credential_path: Dotted path passed to ``credentials.dig``.
        """
        self._lock = threading.RLock()
        self._credentials = credentials
        self._credential_path = credential_path_segments(credential_path)
        self._default_sig_key: KeySource = signing_key_source
        self._default_enc_key: KeySource = encryption_key_source
        self._signing_key: Optional[Key] = None
        self._encryption_key: Optional[Key] = None
        self._encrypt_options: Any = None

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def gen_signing_key(self, length: Optional[int] = None) -> str:
        return gen_signing_key(length)

    def gen_encryption_key(self) -> bytes:
        return gen_encryption_key()

    # -------------------------------------------------------------------------
    # Defaults
    # -------------------------------------------------------------------------

    def _from_source(self, source: KeySource) -> Optional[Key]:
        if is_blank(source):
            return None
        if callable(source):
            return presence(source())
        return source

    def default_signing_key(self) -> Key:
        """
        Resolve a default signing key.

        Order: configured source (a callable is invoked on every call), then
        the credential provider, then a freshly generated key. A configured
        callable that yields a blank value falls straight to generation.
        """
        with self._lock:
            source = self._default_sig_key
            credentials = self._credentials
        if not is_blank(source):
            key = self._from_source(source)
            return key if key is not None else self.gen_signing_key()
        if credentials is not None:
            found = presence(credentials.dig(*self._credential_path))
            if found is not None:
                return found
        return self.gen_signing_key()

    def default_encryption_key(self) -> Key:
        """Resolve a default encryption key from the configured source or generate one."""
        with self._lock:
            source = self._default_enc_key
        key = self._from_source(source)
        return key if key is not None else self.gen_encryption_key()

    def set_default_signing_key_source(self, value_or_callable: KeySource) -> None:
        with self._lock:
            self._default_sig_key = value_or_callable
        logger.debug("Default signing key source replaced")

    def set_default_encryption_key_source(self, value_or_callable: KeySource) -> None:
        with self._lock:
            self._default_enc_key = value_or_callable
        logger.debug("Default encryption key source replaced")

    @property
    def default_signing_key_source(self) -> KeySource:
        return self._default_sig_key

    @default_signing_key_source.setter
    def default_signing_key_source(self, value_or_callable: KeySource) -> None:
        self.set_default_signing_key_source(value_or_callable)

    @property
    def default_encryption_key_source(self) -> KeySource:
        return self._default_enc_key

    @default_encryption_key_source.setter
    def default_encryption_key_source(self, value_or_callable: KeySource) -> None:
        self.set_default_encryption_key_source(value_or_callable)

    # -------------------------------------------------------------------------
    # Cached keys
    # -------------------------------------------------------------------------

    def get_signing_key(self) -> Key:
        """Return the cached signing key, resolving the default on first read."""
        with self._lock:
            if self._signing_key is None:
                self._signing_key = self.default_signing_key()
                logger.debug("Signing key resolved from defaults")
            return self._signing_key

    def set_signing_key(self, key: Optional[Key]) -> None:
        """Store ``key`` verbatim, or a freshly generated key if it is blank."""
        with self._lock:
            self._signing_key = key if not is_blank(key) else self.gen_signing_key()

    def get_encryption_key(self) -> Key:
        """Return the cached encryption key, resolving the default on first read."""
        with self._lock:
            if self._encryption_key is None:
                self._encryption_key = self.default_encryption_key()
                logger.debug("Encryption key resolved from defaults")
            return self._encryption_key

    def set_encryption_key(self, key: Optional[Key]) -> None:
        """Store ``key`` verbatim, or a freshly generated key if it is blank."""
        with self._lock:
            self._encryption_key = key if not is_blank(key) else self.gen_encryption_key()

    def get_encrypt_options(self) -> Any:
        with self._lock:
            if self._encrypt_options is None:
                self._encrypt_options = DEFAULT_OPTIONS
            return self._encrypt_options

    def set_encrypt_options(self, options: Any) -> None:
        """Store ``options`` verbatim, or reset to DEFAULT_OPTIONS if None."""
        with self._lock:
            self._encrypt_options = options if options is not None else DEFAULT_OPTIONS
            logger.debug(f"Encrypt options set to {self._encrypt_options!r}")

    signing_key = property(get_signing_key, set_signing_key)
    encryption_key = property(get_encryption_key, set_encryption_key)
    encrypt_options = property(get_encrypt_options, set_encrypt_options)

    def clear(self) -> None:
        """Drop cached keys and options; the next read resolves defaults again."""
        with self._lock:
            self._signing_key = None
            self._encryption_key = None
            self._encrypt_options = None
        logger.debug("Cached key material cleared")


# Global key manager instance
_global_manager: Optional[KeyManager] = None
_global_lock = threading.Lock()


def get_key_manager() -> KeyManager:
    """Get or create the global key manager instance."""
    global _global_manager
    with _global_lock:
        if _global_manager is None:
            _global_manager = KeyManager()
        return _global_manager
