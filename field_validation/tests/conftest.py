"""
pytest fixtures shared across all tests.

Everything here is pure Python: schemas, records and request stand-ins.
"""

from types import SimpleNamespace

import pytest

from field_validation.core.validation_engine import Validator


USER_SCHEMA: dict = {
    "email": {"required": True, "email": True},
    "password": {"required": True, "password": True, "min": 6},
    "name": {"required": True, "min": 3, "max": 50},
    "age": {"number": True},
    "website": {"url": True},
    "role": {"in": ["admin", "user", "guest"]},
    "terms": {"boolean": True, "equals": True},
}

VALID_USER: dict = {
    "email": "usuario@ejemplo.com",
    "password": "Password123",
    "name": "Juan Pérez",
    "age": "25",
    "website": "https://ejemplo.com",
    "role": "admin",
    "terms": True,
}


@pytest.fixture
def user_schema() -> dict:
    return USER_SCHEMA


@pytest.fixture
def valid_user() -> dict:
    return dict(VALID_USER)


@pytest.fixture
def make_validator():
    """Factory: make_validator(language) -> Validator over USER_SCHEMA."""
    def _make(language=None, **kwargs) -> Validator:
        return Validator(USER_SCHEMA, default_language=language, **kwargs)
    return _make


@pytest.fixture
def make_request():
    """Factory for request-like objects exposing body and an optional session."""
    def _make(body=None, lang=None):
        session = SimpleNamespace(lang=lang) if lang is not None else None
        return SimpleNamespace(body=body, session=session)
    return _make


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Keep FV_* environment overrides from leaking into language resolution."""
    from field_validation.config.settings import settings
    monkeypatch.setattr(settings, "default_language", None)
    monkeypatch.setattr(settings, "fallback_language", "es")
    monkeypatch.setattr(settings, "ignore_unknown_rules", False)
    monkeypatch.setattr(settings, "schema_path", None)
