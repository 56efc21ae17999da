"""
Configuration errors raised while building schemas and message catalogs.

Validation failures are never exceptions; they are returned as data in
ValidationResult. These classes only cover defects in how the validator
was configured, and they surface at construction time.
"""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Base class for every configuration defect."""


class SchemaError(ConfigurationError):
    """A field rule config is malformed or names an unknown rule."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(f"{field}: {message}" if field else message)


class CatalogError(ConfigurationError):
    """A message catalog cannot resolve every built-in rule."""
