"""Parsed placeholder models.

A placeholder body `name(a,b)|trim|default:x` parses into a Placeholder
with a VariableReference and an ordered chain of FilterInvocations.
"""

from pydantic import BaseModel, ConfigDict, Field


class VariableReference(BaseModel):
    """Variable name plus the verbatim parenthesized suffix that followed it."""

    model_config = ConfigDict(frozen=True)

    name: str
    arg_list: str = Field(default="", description='Verbatim suffix such as "(a,b)"')


class FilterInvocation(BaseModel):
    """One `name:arg1:arg2` segment of a filter chain."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    args: tuple[str, ...] = Field(default=(), description="Literal, never expanded")


class Placeholder(BaseModel):
    """A `${...}` occurrence split into its reference and filter segments.

    Filter segments are kept as raw text so that a malformed segment only
    drops that filter, not the whole placeholder.
    """

    model_config = ConfigDict(frozen=True)

    match: str = Field(..., description="Full `${...}` text as it appeared")
    reference: VariableReference
    filters: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return self.reference.name

    @property
    def arg_list(self) -> str:
        return self.reference.arg_list
