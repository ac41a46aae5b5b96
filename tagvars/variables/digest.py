"""Digest facility backing the `hash` filter."""

import base64
import hashlib
from abc import ABC, abstractmethod

from tagvars.exceptions import ConfigurationError


class DigestProvider(ABC):
    """Abstract interface for an asynchronous string digest."""

    @property
    @abstractmethod
    def algorithm(self) -> str:
        """Name of the digest algorithm."""
        pass

    @abstractmethod
    async def digest(self, value: str) -> str:
        """Return the base64-encoded digest of the UTF-8 bytes of value."""
        pass


class HashlibDigestProvider(DigestProvider):
    """DigestProvider backed by hashlib."""

    def __init__(self, algorithm: str = "sha384") -> None:
        if algorithm not in hashlib.algorithms_available:
            raise ConfigurationError(f"Unsupported digest algorithm: {algorithm}")
        self._algorithm = algorithm

    @property
    def algorithm(self) -> str:
        return self._algorithm

    async def digest(self, value: str) -> str:
        raw = hashlib.new(self._algorithm, value.encode("utf-8")).digest()
        return base64.b64encode(raw).decode("ascii")
