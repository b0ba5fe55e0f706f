"""
Credential providers consulted for a default signing key.

A credential provider is any object with a ``dig(*path)`` method returning the
value stored at ``path`` or ``None``. Two small implementations are provided:
one backed by a nested mapping and one backed by environment variables.
"""

import os
import logging
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class CredentialProvider(Protocol):
    """Anything that can look up a secret by a path of segments."""

    def dig(self, *path: str) -> Optional[Any]:
        """Return the value at ``path`` or None if absent."""
        ...


class MappingCredentials:
    """
    Credential provider backed by a nested mapping.

    Example:
        >>> creds = MappingCredentials({"secure_web_token": {"signing_key": "s3cret"}})
        >>> creds.dig("secure_web_token", "signing_key")
        's3cret'
    """

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        self._data = dict(data or {})

    def dig(self, *path: str) -> Optional[Any]:
        node: Any = self._data
        for segment in path:
            if not isinstance(node, Mapping) or segment not in node:
                return None
            node = node[segment]
        return node


class EnvironmentCredentials:
    """
    Credential provider backed by environment variables.

    The path is joined with underscores and upper-cased, so
    ``dig("secure_web_token", "signing_key")`` reads
    ``SECURE_WEB_TOKEN_SIGNING_KEY``.
    """

    def __init__(self, prefix: str = "", environ: Optional[Mapping[str, str]] = None):
        """
        Args:
            prefix: Optional prefix prepended to every variable name.
            environ: Mapping to read from (defaults to os.environ).
        """
        self._prefix = prefix
        self._environ = environ if environ is not None else os.environ

    def variable_name(self, *path: str) -> str:
        return (self._prefix + "_".join(path)).upper()

    def dig(self, *path: str) -> Optional[str]:
        name = self.variable_name(*path)
        value = self._environ.get(name)
        if value is None:
            logger.debug(f"Credential variable {name} is not set")
        return value
