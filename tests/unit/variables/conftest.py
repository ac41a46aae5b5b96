"""Fixtures for variable expansion tests."""

import pytest

from tagvars.exceptions import DigestUnavailableError
from tagvars.observability.diagnostics import Diagnostics
from tagvars.variables.digest import DigestProvider, HashlibDigestProvider
from tagvars.variables.filters import FilterRegistry
from tagvars.variables.service import VariableService


class UnavailableDigestProvider(DigestProvider):
    """Digest provider whose backend never becomes ready."""

    @property
    def algorithm(self) -> str:
        return "sha384"

    async def digest(self, value: str) -> str:
        raise DigestUnavailableError("Crypto library not found")


@pytest.fixture
def service() -> VariableService:
    return VariableService(digest=HashlibDigestProvider())


@pytest.fixture
def registry() -> FilterRegistry:
    return FilterRegistry(Diagnostics(), digest=HashlibDigestProvider())


@pytest.fixture
def unavailable_digest() -> DigestProvider:
    return UnavailableDigestProvider()
