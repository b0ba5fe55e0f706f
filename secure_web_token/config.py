# secure_web_token/config.py
"""
Centralized configuration for Secure Web Token.

Fixed defaults shared by the key manager and codec. Callers override them
explicitly (for example ``KeyManager(credential_path=...)`` or
``gen_signing_key(length)``); nothing is read from the environment.

Usage:
    from secure_web_token.config import SIGNING_KEY_LENGTH
"""

from typing import Final, Tuple

# =============================================================================
# Key Generation
# =============================================================================

# Number of characters in a generated signing key
SIGNING_KEY_LENGTH: Final[int] = 50

# Size in bytes of an AES-256 content encryption key
ENCRYPTION_KEY_BYTES: Final[int] = 32

# =============================================================================
# Credential Lookup
# =============================================================================

# Where a credential provider is asked for the default signing key
CREDENTIAL_PATH: Final[str] = "secure_web_token.signing_key"


def credential_path_segments(path: str = CREDENTIAL_PATH) -> Tuple[str, ...]:
    """
    Split a dotted credential path into the segments passed to ``dig``.

    Args:
        path: Dotted path (e.g., "secure_web_token.signing_key")

    Returns:
        Tuple of non-empty path segments.
    """
    return tuple(segment for segment in path.split(".") if segment)
