"""
FieldRules — typed, immutable rule configuration for one field.

Schemas are usually written as plain dicts, e.g.:

    {"email": {"required": True, "email": True,
               "messages": {"email": "Use your work address"}}}

normalize_schema() converts them into FieldRules records, one attribute per
known rule. Rule keys are checked here so a typo surfaces when the schema is
built, not silently at validation time.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Union

from field_validation.core.exceptions import SchemaError

logger = logging.getLogger(__name__)

# Evaluation order for present values. `required` is handled before these.
RULE_ORDER: tuple[str, ...] = (
    "min", "max", "email", "number", "alpha", "alphanumeric", "boolean",
    "date", "url", "in", "equals", "password", "pattern",
)
RULE_NAMES: tuple[str, ...] = ("required",) + RULE_ORDER

# Rule name -> FieldRules attribute, where they differ.
_ATTRIBUTES = {"in": "in_"}
_PARAMETER_RULES = ("min", "max", "in", "equals")


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


# Distinguishes "no equals rule" from "must equal None".
UNSET: Any = _Unset()


class _NoParam:
    def __repr__(self) -> str:
        return "NO_PARAM"

    def __bool__(self) -> bool:
        return False


# Handed to message templates for rules that take no parameter, so that
# `equals: None` can still render its None.
NO_PARAM: Any = _NoParam()


# ---------------------------------------------------------------------------
# Per-field message overrides
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LiteralMessage:
    text: str

    def render(self, field_name: str, param: Any = NO_PARAM) -> str:
        return self.text


@dataclass(frozen=True)
class TemplateMessage:
    fn: Callable[[str, Any], str]

    def render(self, field_name: str, param: Any = NO_PARAM) -> str:
        return str(self.fn(field_name, param))


MessageOverride = Union[LiteralMessage, TemplateMessage]


def to_override(value: Any) -> MessageOverride:
    if isinstance(value, (LiteralMessage, TemplateMessage)):
        return value
    if isinstance(value, str):
        return LiteralMessage(value)
    if callable(value):
        return TemplateMessage(value)
    raise SchemaError(f"message override must be a string or callable, got {type(value).__name__}")


# ---------------------------------------------------------------------------
# Field rule record
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldRules:
    required: bool = False
    min: Optional[float] = None
    max: Optional[float] = None
    email: bool = False
    number: bool = False
    alpha: bool = False
    alphanumeric: bool = False
    boolean: bool = False
    date: bool = False
    url: bool = False
    in_: Optional[tuple] = None
    equals: Any = UNSET
    password: bool = False
    pattern: Optional[re.Pattern] = None
    messages: Mapping[str, MessageOverride] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for bound in ("min", "max"):
            value = getattr(self, bound)
            if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float))):
                raise SchemaError(f"'{bound}' must be a number, got {value!r}")
        if self.in_ is not None:
            if isinstance(self.in_, (str, bytes)) or not hasattr(self.in_, "__iter__"):
                raise SchemaError(f"'in' must be a sequence of allowed values, got {self.in_!r}")
            object.__setattr__(self, "in_", tuple(self.in_))
        if isinstance(self.pattern, str):
            try:
                object.__setattr__(self, "pattern", re.compile(self.pattern))
            except re.error as exc:
                raise SchemaError(f"invalid pattern {self.pattern!r}: {exc}") from exc
        elif self.pattern is not None and not isinstance(self.pattern, re.Pattern):
            raise SchemaError(f"'pattern' must be a regex, got {self.pattern!r}")

        unknown = [name for name in self.messages if name not in RULE_NAMES]
        if unknown:
            raise SchemaError(f"message overrides for unknown rules: {', '.join(unknown)}")
        overrides = {name: to_override(value) for name, value in self.messages.items()}
        object.__setattr__(self, "messages", MappingProxyType(overrides))

    @classmethod
    def from_dict(cls, config: Mapping[str, Any], ignore_unknown: bool = False) -> "FieldRules":
        kwargs: dict[str, Any] = {}
        for key, value in config.items():
            if key == "messages":
                kwargs["messages"] = value or {}
            elif key in RULE_NAMES:
                kwargs[_ATTRIBUTES.get(key, key)] = value
            elif ignore_unknown:
                logger.warning("Ignoring unknown rule %r", key)
            else:
                raise SchemaError(f"unknown rule '{key}'")
        return cls(**kwargs)

    def is_configured(self, rule: str) -> bool:
        value = getattr(self, _ATTRIBUTES.get(rule, rule))
        if rule == "equals":
            return value is not UNSET
        if rule in ("min", "max", "in", "pattern"):
            return value is not None
        return bool(value)

    def configured_rules(self) -> list[str]:
        """Rule names set on this field, in evaluation order (excluding required)."""
        return [rule for rule in RULE_ORDER if self.is_configured(rule)]

    def parameter(self, rule: str) -> Any:
        """Value handed to message templates as `param`."""
        if rule in _PARAMETER_RULES:
            value = getattr(self, _ATTRIBUTES.get(rule, rule))
            return list(value) if rule == "in" else value
        return NO_PARAM


Schema = Mapping[str, FieldRules]


def normalize_schema(
    schema: Mapping[str, Union[FieldRules, Mapping[str, Any]]],
    ignore_unknown: bool = False,
) -> Schema:
    """Convert a user schema into a read-only, order-preserving FieldRules mapping."""
    normalized: dict[str, FieldRules] = {}
    for name, config in schema.items():
        if isinstance(config, FieldRules):
            normalized[name] = config
            continue
        if not isinstance(config, Mapping):
            raise SchemaError("rule config must be a mapping", field=name)
        try:
            normalized[name] = FieldRules.from_dict(config, ignore_unknown=ignore_unknown)
        except SchemaError as exc:
            if exc.field is not None:
                raise
            raise SchemaError(str(exc), field=name) from exc
        except TypeError as exc:
            raise SchemaError(str(exc), field=name) from exc
    return MappingProxyType(normalized)
