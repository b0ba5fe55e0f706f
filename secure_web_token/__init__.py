"""
Secure Web Token - Signed, encrypted application tokens.

Payloads are signed with HMAC-SHA512 (JWS) and the signed token is encrypted
with AES-256-GCM using direct key agreement (JWE), producing one compact
string. Decoding decrypts, verifies and returns the original payload.
"""

__version__ = "0.1.0"

from .errors import (
    TokenError,
    DecryptionError,
    MalformedTokenError,
    PayloadTooLargeError,
    SignatureVerificationError,
)
from .keys import (
    CHARACTERS,
    DEFAULT_OPTIONS,
    EncryptOptions,
    KeyManager,
    gen_encryption_key,
    gen_signing_key,
    get_key_manager,
    is_blank,
    presence,
)
from .credentials import CredentialProvider, MappingCredentials, EnvironmentCredentials
from .codec import (
    TokenCodec,
    get_codec,
    encode,
    create,
    encrypt,
    inflate,
    decode,
    read,
    decrypt,
    deflate,
)

__all__ = [
    "__version__",
    # Errors
    "TokenError",
    "DecryptionError",
    "MalformedTokenError",
    "PayloadTooLargeError",
    "SignatureVerificationError",
    # Key management
    "CHARACTERS",
    "DEFAULT_OPTIONS",
    "EncryptOptions",
    "KeyManager",
    "gen_encryption_key",
    "gen_signing_key",
    "get_key_manager",
    "is_blank",
    "presence",
    # Credentials
    "CredentialProvider",
    "MappingCredentials",
    "EnvironmentCredentials",
    # Codec
    "TokenCodec",
    "get_codec",
    "encode",
    "create",
    "encrypt",
    "inflate",
    "decode",
    "read",
    "decrypt",
    "deflate",
]
