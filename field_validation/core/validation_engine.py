"""
Validator — evaluates a record against a schema of field rules.

For each field, in schema order:
  - required and empty  -> the `required` message, nothing else for that field
  - empty (optional)    -> skipped, no message
  - present             -> every configured rule in RULE_ORDER is checked;
                           each failure adds one message (no short-circuit)

Messages come from the field's own override when it has one for the rule,
otherwise from the message catalog in the resolved language.

The Validator holds only read-only state (normalized schema, catalog), so a
single instance can serve any number of concurrent calls.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Union

from field_validation.config.settings import settings
from field_validation.core import predicates
from field_validation.core.messages import DEFAULT_CATALOG, MessageCatalog, MessageTemplate
from field_validation.core.predicates import MISSING
from field_validation.core.rules import FieldRules, normalize_schema

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors

    @property
    def message(self) -> list[str]:
        """Alias of errors, kept for clients reading the `message` key."""
        return list(self.errors)

    @property
    def html(self) -> list[str]:
        """
        Each error wrapped in a <p> tag, for direct insertion into a page.

        Message text is HTML-escaped, so markup inside a literal override
        shows up as text rather than being rendered.
        """
        css = html.escape(settings.html_error_class, quote=True)
        return [f'<p class="{css}">{html.escape(e)}</p>' for e in self.errors]

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "errors": list(self.errors),
            "message": self.message,
            "html": self.html,
        }


# Rule name -> predicate over (value, rules). `required` is not listed;
# it is the emptiness gate evaluated before these.
_CHECKS: dict[str, Callable[[Any, FieldRules], bool]] = {
    "min":          lambda v, r: predicates.is_length(v, min=r.min),
    "max":          lambda v, r: predicates.is_length(v, max=r.max),
    "email":        lambda v, r: predicates.is_email(v),
    "number":       lambda v, r: predicates.is_numeric(v),
    "alpha":        lambda v, r: predicates.is_alpha(v),
    "alphanumeric": lambda v, r: predicates.is_alphanumeric(v),
    "boolean":      lambda v, r: predicates.is_boolean(v),
    "date":         lambda v, r: predicates.is_iso8601(v),
    "url":          lambda v, r: predicates.is_url(v),
    "in":           lambda v, r: predicates.is_in(v, r.in_),
    "equals":       lambda v, r: predicates.equals(v, r.equals),
    "password":     lambda v, r: predicates.is_strong_password(v),
    "pattern":      lambda v, r: predicates.matches(v, r.pattern),
}


def _lookup(obj: Any, name: str) -> Any:
    """Read `name` from a mapping key or an attribute, whichever obj offers."""
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _as_catalog(messages: Union[MessageCatalog, Mapping, None]) -> MessageCatalog:
    if messages is None:
        return DEFAULT_CATALOG
    if isinstance(messages, MessageCatalog):
        return messages
    # A full replacement catalog: language -> rule -> template callable.
    return MessageCatalog(languages=messages)


class Validator:
    """
    Validates flat records against a schema.

    Args:
        schema: field name -> FieldRules or rule dict.
        default_language: when set, every call uses this language.
        messages: MessageCatalog or a replacement language -> rule -> template mapping.
            A replacement must define all 14 built-in rule templates in every
            language, including rules this schema never uses, and must contain
            the fallback language; otherwise CatalogError is raised here.
        ignore_unknown_rules: drop unknown rule keys instead of raising SchemaError.
    """

    def __init__(
        self,
        schema: Mapping[str, Any],
        default_language: Optional[str] = None,
        messages: Union[MessageCatalog, Mapping, None] = None,
        ignore_unknown_rules: Optional[bool] = None,
    ) -> None:
        if ignore_unknown_rules is None:
            ignore_unknown_rules = settings.ignore_unknown_rules
        self.schema = normalize_schema(schema, ignore_unknown=ignore_unknown_rules)
        self.default_language = default_language or settings.default_language
        self.messages = _as_catalog(messages)

    def resolve_language(self, language: Optional[str] = None, session: Any = None) -> str:
        if self.default_language:
            return self.default_language
        if language:
            return language
        hint = _lookup(session, settings.session_language_key)
        return hint or settings.fallback_language

    def validate(
        self,
        record: Optional[Mapping[str, Any]],
        language: Optional[str] = None,
        session: Any = None,
    ) -> ValidationResult:
        """
        Check `record` against the schema.

        Args:
            record: flat mapping of field name -> value. Not modified.
            language: requested language; ignored when the validator has a default.
            session: mapping or object carrying a language hint.

        Returns:
            ValidationResult with messages in field-then-rule order.
        """
        record = record or {}
        templates = self.messages.resolve(self.resolve_language(language, session))
        errors: list[str] = []

        for name, rules in self.schema.items():
            value = record.get(name, MISSING)

            if predicates.is_empty(value):
                if rules.required:
                    errors.append(self._message(templates, name, rules, "required"))
                continue

            for rule in rules.configured_rules():
                if not _CHECKS[rule](value, rules):
                    errors.append(self._message(templates, name, rules, rule))

        logger.debug("Validated %d fields, %d errors", len(self.schema), len(errors))
        return ValidationResult(errors=errors)

    def validate_request(self, request: Any) -> ValidationResult:
        """Validate the `body` of a request-like object, honoring its session language."""
        body = _lookup(request, "body") or {}
        return self.validate(body, session=_lookup(request, "session"))

    @staticmethod
    def _message(
        templates: Mapping[str, MessageTemplate],
        field_name: str,
        rules: FieldRules,
        rule: str,
    ) -> str:
        param = rules.parameter(rule)
        override = rules.messages.get(rule)
        if override is not None:
            return override.render(field_name, param)
        return templates[rule](field_name, param)


def validate(
    schema: Mapping[str, Any],
    record: Optional[Mapping[str, Any]],
    language: Optional[str] = None,
    messages: Union[MessageCatalog, Mapping, None] = None,
) -> ValidationResult:
    """One-shot form of Validator(schema, language, messages).validate(record)."""
    return Validator(schema, default_language=language, messages=messages).validate(record)
