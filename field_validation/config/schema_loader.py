"""
SchemaLoader — reads validation schemas and message text from a JSON file.

Keeps schema definitions out of code so they can be edited without a
deploy. The document looks like:

    {
      "schemas": {
        "user": {
          "email": {"required": true, "email": true,
                    "messages": {"email": "Use your work address"}},
          "code":  {"pattern": "^[A-Z]{3}-\\\\d{4}$"}
        }
      },
      "messages": {
        "en": {"required": "{field} is mandatory"}
      }
    }

"messages" is optional and is layered over the built-in catalog per
language: existing languages override single rules, new languages must
define all of them. Patterns are regex strings, compiled on load.

Usage:
    from field_validation.config.schema_loader import SchemaLoader
    loader = SchemaLoader(Path("schemas.json"))
    validator = loader.build_validator("user", default_language="en")
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from field_validation.config.settings import settings
from field_validation.core.exceptions import ConfigurationError, SchemaError
from field_validation.core.messages import DEFAULT_CATALOG, MessageCatalog
from field_validation.core.rules import Schema, normalize_schema
from field_validation.core.validation_engine import Validator

logger = logging.getLogger(__name__)


class SchemaLoader:
    """
    Loads and parses a schema document.
    The parsed document is cached in memory after the first load.
    """

    def __init__(self, path: Optional[Path] = None, ignore_unknown_rules: Optional[bool] = None) -> None:
        self._path = path or settings.schema_path
        self._ignore_unknown = (
            settings.ignore_unknown_rules if ignore_unknown_rules is None else ignore_unknown_rules
        )
        self._schemas: dict[str, Schema] = {}
        self._catalog: MessageCatalog = DEFAULT_CATALOG
        self._loaded = False

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        if self._path is None:
            raise ConfigurationError("No schema file configured (set FV_SCHEMA_PATH)")

        path = Path(self._path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigurationError(f"Cannot read schema file {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Schema file {path} is not valid JSON: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigurationError(f"Schema file {path} must contain a JSON object")

        for name, schema in raw.get("schemas", {}).items():
            if not isinstance(schema, dict):
                raise SchemaError(f"schema '{name}' must be an object")
            self._schemas[name] = normalize_schema(schema, ignore_unknown=self._ignore_unknown)

        if raw.get("messages"):
            self._catalog = MessageCatalog.from_strings(raw["messages"], base=DEFAULT_CATALOG)

        self._loaded = True
        logger.info("Loaded %d schemas from %s", len(self._schemas), path)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_schema_names(self) -> list[str]:
        self._ensure_loaded()
        return list(self._schemas)

    def get_schema(self, name: str) -> Optional[Schema]:
        self._ensure_loaded()
        return self._schemas.get(name)

    def get_catalog(self) -> MessageCatalog:
        self._ensure_loaded()
        return self._catalog

    def build_validator(self, name: str, default_language: Optional[str] = None) -> Validator:
        schema = self.get_schema(name)
        if schema is None:
            raise SchemaError(f"unknown schema '{name}'")
        return Validator(schema, default_language=default_language, messages=self._catalog)
