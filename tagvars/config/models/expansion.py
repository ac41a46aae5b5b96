"""Expansion engine configuration models."""

from typing import Literal

from pydantic import BaseModel, Field

DigestAlgorithm = Literal["sha256", "sha384", "sha512"]


class ExpansionConfig(BaseModel):
    """Defaults applied when a caller does not override them."""

    max_iterations: int = Field(
        default=2,
        ge=0,
        description="Nested re-expansions allowed below a top-level placeholder",
    )
    encode: bool = Field(default=True, description="Percent-encode substituted values")


class DigestConfig(BaseModel):
    """Digest facility backing the hash filter."""

    enabled: bool = Field(default=True, description="Make the hash filter available")
    algorithm: DigestAlgorithm = Field(default="sha384", description="Digest algorithm")
