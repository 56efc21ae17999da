"""
Tests for the Validator.
No I/O needed — tests are pure Python.
"""

import copy
import re

import pytest

from field_validation.core.exceptions import CatalogError, SchemaError
from field_validation.core.messages import DEFAULT_CATALOG
from field_validation.core.validation_engine import ValidationResult, Validator, validate

EMAIL_SCHEMA = {"email": {"required": True, "email": True}}


class TestScenarios:

    def test_valid_email_passes(self):
        result = validate(EMAIL_SCHEMA, {"email": "a@b.com"}, language="en")
        assert result.success
        assert result.errors == []

    def test_missing_required_field(self):
        result = validate(EMAIL_SCHEMA, {}, language="en")
        assert not result.success
        assert result.errors == ["email is required"]

    def test_invalid_email(self):
        result = validate(EMAIL_SCHEMA, {"email": "not-an-email"}, language="en")
        assert not result.success
        assert result.errors == ["email must be a valid email"]

    def test_in_lists_allowed_values_in_spanish(self):
        schema = {"role": {"in": ["admin", "user", "guest"]}}
        result = validate(schema, {"role": "superadmin"}, language="es")
        assert result.errors == ["El campo role debe ser uno de: admin, user, guest"]

    def test_boolean_passes_but_equals_fails(self):
        schema = {"terms": {"boolean": True, "equals": True}}
        result = validate(schema, {"terms": False}, language="en")
        assert result.errors == ["terms must equal true"]

    def test_defaults_to_spanish_without_language_or_session(self):
        result = Validator(EMAIL_SCHEMA).validate({})
        assert result.errors == ["El campo email es obligatorio"]


class TestRequiredGate:

    @pytest.mark.parametrize("record", [{}, {"email": None}, {"email": ""}])
    def test_required_and_empty_gives_only_required_message(self, record):
        schema = {"email": {"required": True, "email": True, "min": 10, "pattern": r"^x"}}
        result = validate(schema, record, language="en")
        assert result.errors == ["email is required"]

    def test_optional_empty_field_is_skipped(self):
        schema = {"age": {"number": True, "min": 2, "in": ["10", "20"]}}
        for record in ({}, {"age": None}, {"age": ""}):
            assert validate(schema, record).success

    @pytest.mark.parametrize("value", [False, 0])
    def test_false_and_zero_satisfy_required(self, value):
        result = validate({"flag": {"required": True}}, {"flag": value})
        assert result.success


class TestRuleEvaluation:

    def test_all_failing_rules_are_reported(self):
        schema = {"contact": {"min": 10, "email": True}}
        result = validate(schema, {"contact": "bad"}, language="en")
        assert result.errors == [
            "contact must be at least 10 characters",
            "contact must be a valid email",
        ]

    def test_rule_order_is_fixed(self):
        schema = {"code": {"pattern": r"^\d+$", "alpha": True, "max": 2}}
        result = validate(schema, {"code": "abc1"}, language="en")
        assert result.errors == [
            "code must be at most 2 characters",
            "code must contain only letters",
            "code does not match the required pattern",
        ]

    def test_errors_follow_schema_field_order(self):
        schema = {"b": {"required": True}, "a": {"required": True}}
        result = validate(schema, {}, language="en")
        assert result.errors == ["b is required", "a is required"]

    def test_max_zero_is_still_checked(self):
        result = validate({"x": {"max": 0}}, {"x": "a"}, language="en")
        assert result.errors == ["x must be at most 0 characters"]

    def test_empty_in_list_rejects_everything(self):
        result = validate({"x": {"in": []}}, {"x": "a"}, language="en")
        assert result.errors == ["x must be one of: "]

    def test_precompiled_pattern(self):
        schema = {"zip": {"pattern": re.compile(r"^\d{5}$")}}
        assert validate(schema, {"zip": "12345"}).success
        assert not validate(schema, {"zip": "1234"}).success

    def test_equals_none_renders_null(self):
        result = validate({"x": {"equals": None}}, {"x": "a"}, language="en")
        assert result.errors == ["x must equal null"]

    def test_huge_values_produce_messages_instead_of_errors(self):
        schema = {"n": {"number": True, "min": 1, "alpha": True, "pattern": r"\d"}}
        result = validate(schema, {"n": 10 ** 5000}, language="en")
        assert result.errors == [
            "n must be at least 1 characters",
            "n must contain only letters",
            "n does not match the required pattern",
        ]

    def test_password_rule(self):
        schema = {"password": {"password": True}}
        result = validate(schema, {"password": "abc"}, language="en")
        assert result.errors == ["Password must contain uppercase, lowercase and numbers"]

    def test_number_date_url_alpha_checks(self):
        schema = {
            "age": {"number": True},
            "born": {"date": True},
            "site": {"url": True},
            "nick": {"alphanumeric": True},
        }
        record = {"age": "x", "born": "soon", "site": "nope", "nick": "a-b"}
        result = validate(schema, record, language="en")
        assert result.errors == [
            "age must be numeric",
            "born must be a valid date",
            "site must be a valid URL",
            "nick must contain only letters and numbers",
        ]

    def test_extra_record_fields_are_ignored(self):
        assert validate(EMAIL_SCHEMA, {"email": "a@b.com", "other": object()}).success


class TestMessageOverrides:

    def test_literal_override(self):
        schema = {"email": {"required": True, "messages": {"required": "Falta el correo"}}}
        assert validate(schema, {}).errors == ["Falta el correo"]

    def test_template_override_receives_field_and_parameter(self):
        schema = {"name": {"min": 3, "messages": {"min": lambda f, n: f"{f}: {n}+ chars"}}}
        assert validate(schema, {"name": "ab"}).errors == ["name: 3+ chars"]

    def test_override_only_applies_to_its_rule(self):
        schema = {"name": {"min": 3, "alpha": True, "messages": {"alpha": "letters!"}}}
        result = validate(schema, {"name": "a1"}, language="en")
        assert result.errors == ["name must be at least 3 characters", "letters!"]


class TestLanguageSelection:

    def test_constructor_default_always_wins(self):
        validator = Validator(EMAIL_SCHEMA, default_language="fr")
        result = validator.validate({}, language="en", session={"lang": "pt"})
        assert result.errors == ["Le champ email est obligatoire"]

    def test_session_hint_used_without_default(self):
        result = Validator(EMAIL_SCHEMA).validate({}, session={"lang": "pt"})
        assert result.errors == ["O campo email é obrigatório"]

    def test_session_object_attribute(self, make_request):
        request = make_request(body={}, lang="en")
        result = Validator(EMAIL_SCHEMA).validate_request(request)
        assert result.errors == ["email is required"]

    def test_unknown_language_falls_back_to_spanish(self):
        result = Validator(EMAIL_SCHEMA, default_language="de").validate({})
        assert result.errors == ["El campo email es obligatorio"]

    def test_settings_default_language(self, monkeypatch):
        from field_validation.config.settings import settings
        monkeypatch.setattr(settings, "default_language", "en")
        assert Validator(EMAIL_SCHEMA).validate({}).errors == ["email is required"]


class TestCustomCatalog:

    def test_replacement_catalog_mapping(self):
        shouty = {
            "es": {rule: (lambda f, p=None, r=rule: f"{f.upper()} {r.upper()}")
                   for rule in DEFAULT_CATALOG.languages["es"]},
        }
        result = Validator(EMAIL_SCHEMA, messages=shouty).validate({})
        assert result.errors == ["EMAIL REQUIRED"]

    def test_replacement_catalog_must_contain_fallback(self):
        with pytest.raises(CatalogError):
            Validator(EMAIL_SCHEMA, messages={"en": DEFAULT_CATALOG.languages["en"]})


class TestSchemaHandling:

    def test_unknown_rule_rejected_by_default(self):
        with pytest.raises(SchemaError):
            Validator({"email": {"required": True, "emial": True}})

    def test_unknown_rule_tolerated_when_configured(self):
        validator = Validator({"email": {"emial": True}}, ignore_unknown_rules=True)
        assert validator.validate({"email": "anything"}).success


class TestResultAndPurity:

    def test_success_tracks_errors(self, make_validator, valid_user):
        validator = make_validator("en")
        for record in ({}, valid_user, {"email": "x"}):
            result = validator.validate(record)
            assert result.success == (len(result.errors) == 0)

    def test_valid_user_passes_in_every_language(self, make_validator, valid_user):
        for language in ("es", "en", "pt", "fr"):
            assert make_validator(language).validate(valid_user).success

    def test_invalid_user_collects_messages_per_field(self, make_validator):
        record = {
            "email": "correo-invalido",
            "password": "abc",
            "name": "AB",
            "age": "no-es-numero",
            "website": "no-es-url",
            "role": "superadmin",
            "terms": False,
        }
        result = make_validator("es").validate(record)
        assert result.errors == [
            "El campo email debe ser un email válido",
            "El campo password debe tener al menos 6 caracteres",
            "La contraseña debe tener mayúsculas, minúsculas y números",
            "El campo name debe tener al menos 3 caracteres",
            "El campo age debe ser numérico",
            "El campo website debe ser una URL válida",
            "El campo role debe ser uno de: admin, user, guest",
            "El campo terms debe ser igual a true",
        ]

    def test_repeated_calls_are_identical(self, make_validator):
        validator = make_validator("en")
        record = {"email": "bad", "name": "x" * 60, "terms": "maybe"}
        assert validator.validate(record) == validator.validate(record)

    def test_record_and_schema_are_not_mutated(self, user_schema):
        schema_copy = copy.deepcopy(user_schema)
        record = {"email": "bad", "role": "x"}
        record_copy = dict(record)
        Validator(user_schema).validate(record)
        assert record == record_copy
        assert user_schema == schema_copy

    def test_html_view(self):
        result = ValidationResult(errors=["a <b>", "c"])
        assert result.html == [
            '<p class="text-red-500 text-danger">a &lt;b&gt;</p>',
            '<p class="text-red-500 text-danger">c</p>',
        ]

    def test_to_dict(self):
        assert ValidationResult().to_dict() == {
            "success": True, "errors": [], "message": [], "html": [],
        }
        payload = ValidationResult(errors=["x"]).to_dict()
        assert payload["success"] is False
        assert payload["message"] == ["x"]
