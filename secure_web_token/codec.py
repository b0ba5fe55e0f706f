"""
Secure Web Token Codec - Signs payloads (HS512 JWT, via PyJWT) and encrypts
the signed token (A256GCM JWE, direct key agreement, via jwcrypto) into a
single compact string.

Decoding reverses both layers and reports encryption and signature failures
as distinct errors.
"""

import logging
import threading
from typing import Any, Dict, Mapping, Optional

import jwt
from cryptography.exceptions import InvalidTag
from jwcrypto import jwe, jwk
from jwcrypto.common import JWException, base64url_decode, base64url_encode, json_encode

from secure_web_token.errors import (
    DecryptionError,
    MalformedTokenError,
    PayloadTooLargeError,
    SignatureVerificationError,
    TokenError,
)
from secure_web_token.keys import EncryptOptions, Key, KeyManager, get_key_manager, is_blank


logger = logging.getLogger(__name__)

SIGNING_ALGORITHM = "HS512"
JWE_SEGMENTS = 5


def _to_jwk(key: Key) -> jwk.JWK:
    """Wrap raw key material as a symmetric (oct) JWK."""
    if isinstance(key, str):
        key = key.encode("utf-8")
    return jwk.JWK(kty="oct", k=base64url_encode(bytes(key)))


def _options_header(options: Any) -> Dict[str, str]:
    if isinstance(options, EncryptOptions):
        return options.to_header()
    if isinstance(options, Mapping):
        return {str(k): v for k, v in options.items() if not is_blank(v)}
    raise TypeError(f"Unsupported encrypt options: {options!r}")


class TokenCodec:
    """
    Encodes and decodes secure web tokens.

    Keys and options not passed explicitly are taken from the KeyManager, each
    independently, so a caller may pin a signing key while the encryption key
    stays managed.

    Example:
        >>> codec = TokenCodec(KeyManager())
        >>> token = codec.encode({"data": "stuff"})
        >>> codec.decode(token)
        {'data': 'stuff'}
    """

    def __init__(self, keys: Optional[KeyManager] = None):
        """
        Initialize the codec.

        Args:
            keys: Key manager supplying default keys (default: the global one).
        """
        self.keys = keys if keys is not None else get_key_manager()

    def encode(
        self,
        payload: Any,
        signing_key: Optional[Key] = None,
        encryption_key: Optional[Key] = None,
        options: Any = None,
    ) -> str:
        """
        Sign ``payload`` and encrypt the signed token.

        Args:
            payload: Mapping of JSON-serializable claims.
            signing_key: HS512 key (default: keys.get_signing_key()).
            encryption_key: 32-byte AES key (default: keys.get_encryption_key()).
            options: JWE header options (default: keys.get_encrypt_options()).

        Returns:
            A 5-segment JWE compact serialization.

        Raises:
            PayloadTooLargeError: If the compressed payload would exceed the
                size decryption accepts.
        """
        if signing_key is None:
            signing_key = self.keys.get_signing_key()
        if encryption_key is None:
            encryption_key = self.keys.get_encryption_key()
        if options is None:
            options = self.keys.get_encrypt_options()

        signed = jwt.encode(payload, signing_key, algorithm=SIGNING_ALGORITHM)

        header = _options_header(options)
        token = jwe.JWE(signed.encode("utf-8"), protected=json_encode(header))
        token.add_recipient(_to_jwk(encryption_key))
        serialized = token.serialize(compact=True)

        # Decryption refuses compressed content above jwcrypto's limit
        if "zip" in header:
            compressed = len(base64url_decode(serialized.split(".")[3]))
            limit = jwe.default_max_compressed_size
            if compressed > limit:
                raise PayloadTooLargeError(
                    f"Compressed payload is {compressed} bytes, above the {limit} byte limit"
                )

        logger.debug(f"Encoded token with header {header}")
        return serialized

    def decode(
        self,
        token: str,
        signing_key: Optional[Key] = None,
        encryption_key: Optional[Key] = None,
    ) -> Any:
        """
        Decrypt ``token`` and verify the signed payload inside it.

        Returns:
            The original payload, with mapping keys as strings.

        Raises:
            MalformedTokenError: If the token is not 5 dot-separated segments.
            DecryptionError: If the token cannot be decrypted with the key.
            SignatureVerificationError: If the signature does not verify.
        """
        if signing_key is None:
            signing_key = self.keys.get_signing_key()
        if encryption_key is None:
            encryption_key = self.keys.get_encryption_key()

        if not isinstance(token, str) or len(token.split(".")) != JWE_SEGMENTS:
            raise MalformedTokenError()

        encrypted = jwe.JWE()
        try:
            encrypted.deserialize(token, key=_to_jwk(encryption_key))
        except (JWException, InvalidTag, ValueError, KeyError, TypeError) as e:
            raise DecryptionError() from e

        try:
            return jwt.decode(encrypted.payload, signing_key, algorithms=[SIGNING_ALGORITHM])
        except jwt.DecodeError as e:
            raise SignatureVerificationError() from e
        except jwt.InvalidTokenError as e:
            raise TokenError(f"Signed payload rejected: {e}") from e

    create = encrypt = inflate = encode
    read = decrypt = deflate = decode


# Global codec instance
_global_codec: Optional[TokenCodec] = None
_global_lock = threading.Lock()


def get_codec() -> TokenCodec:
    """Get or create the global codec, bound to the global key manager."""
    global _global_codec
    with _global_lock:
        if _global_codec is None:
            _global_codec = TokenCodec(get_key_manager())
        return _global_codec


def encode(
    payload: Any,
    signing_key: Optional[Key] = None,
    encryption_key: Optional[Key] = None,
    options: Any = None,
) -> str:
    """Encode with the global codec. See TokenCodec.encode."""
    return get_codec().encode(payload, signing_key, encryption_key, options)


def decode(
    token: str,
    signing_key: Optional[Key] = None,
    encryption_key: Optional[Key] = None,
) -> Any:
    """Decode with the global codec. See TokenCodec.decode."""
    return get_codec().decode(token, signing_key, encryption_key)


create = encrypt = inflate = encode
read = decrypt = deflate = decode
