"""
Error taxonomy for Secure Web Token.

Decryption and signature failures are deliberately separate types so callers
can tell an encryption-key problem from a signing-key problem.
"""

from typing import Optional


class TokenError(Exception):
    """Base exception for token encode/decode failures."""

    code = "TOKEN_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        if code:
            self.code = code
        super().__init__(message)


class DecryptionError(TokenError):
    """The token could not be decrypted and authenticated with the given key."""

    code = "DECRYPTION_FAILED"

    def __init__(self, message: str = "Token decryption failed"):
        super().__init__(message)


class MalformedTokenError(DecryptionError):
    """The token is not a 5-segment compact encrypted token."""

    code = "MALFORMED_TOKEN"

    def __init__(self, message: str = "Malformed token"):
        super().__init__(message)


class SignatureVerificationError(TokenError):
    """The decrypted artifact's signature does not match the signing key."""

    code = "SIGNATURE_INVALID"

    def __init__(self, message: str = "Signature verification failed"):
        super().__init__(message)


class PayloadTooLargeError(TokenError):
    """The encoded token would be too large to decrypt again."""

    code = "PAYLOAD_TOO_LARGE"

    def __init__(self, message: str = "Payload too large"):
        super().__init__(message)
