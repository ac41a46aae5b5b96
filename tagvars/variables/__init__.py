"""Variable expansion: parsing, scope resolution, filters, encoding."""

from tagvars.variables.digest import DigestProvider, HashlibDigestProvider
from tagvars.variables.encoding import encode_component, encode_vars, stringify
from tagvars.variables.factory import create_variable_service
from tagvars.variables.filters import FilterRegistry, RegisteredFilter
from tagvars.variables.models import FilterInvocation, Placeholder, VariableReference
from tagvars.variables.parser import (
    parse_filter_segment,
    parse_placeholder,
    parse_variable_reference,
)
from tagvars.variables.scopes import resolve_raw
from tagvars.variables.service import VariableService

__all__ = [
    "DigestProvider",
    "HashlibDigestProvider",
    "FilterInvocation",
    "FilterRegistry",
    "Placeholder",
    "RegisteredFilter",
    "VariableReference",
    "VariableService",
    "create_variable_service",
    "encode_component",
    "encode_vars",
    "parse_filter_segment",
    "parse_placeholder",
    "parse_variable_reference",
    "resolve_raw",
    "stringify",
]
