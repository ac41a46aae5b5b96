"""Tagvars: analytics variable expansion.

Resolves `${name|filter:arg}` placeholders against event, trigger and
config scopes, runs the filter chain and URL-encodes the result.
"""

__version__ = "0.1.0"
