"""
Message catalog — localized error text for every built-in rule.

A catalog maps language code -> rule name -> template, where a template is
any callable (field, param) -> str. Built-in templates are created from
format strings with {field} and {param} placeholders; sequences passed as
param are joined with ", " so the `in` message lists the allowed values.

Language resolution is total: a language missing from the catalog resolves
to the catalog's fallback language (es unless configured otherwise).
Completeness is checked once, when the catalog is built, so a lookup during
validation can never miss.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from field_validation.config.settings import settings
from field_validation.core.exceptions import CatalogError
from field_validation.core.predicates import to_text
from field_validation.core.rules import NO_PARAM, RULE_NAMES

logger = logging.getLogger(__name__)

MessageTemplate = Callable[[str, Any], str]


BUILTIN_MESSAGES: Mapping[str, Mapping[str, str]] = {
    "es": {
        "required":     "El campo {field} es obligatorio",
        "min":          "El campo {field} debe tener al menos {param} caracteres",
        "max":          "El campo {field} no puede tener más de {param} caracteres",
        "email":        "El campo {field} debe ser un email válido",
        "number":       "El campo {field} debe ser numérico",
        "alpha":        "El campo {field} solo puede contener letras",
        "alphanumeric": "El campo {field} solo puede contener letras y números",
        "boolean":      "El campo {field} debe ser verdadero o falso",
        "date":         "El campo {field} debe ser una fecha válida",
        "url":          "El campo {field} debe ser una URL válida",
        "in":           "El campo {field} debe ser uno de: {param}",
        "equals":       "El campo {field} debe ser igual a {param}",
        "password":     "La contraseña debe tener mayúsculas, minúsculas y números",
        "pattern":      "El campo {field} no cumple el patrón requerido",
    },
    "en": {
        "required":     "{field} is required",
        "min":          "{field} must be at least {param} characters",
        "max":          "{field} must be at most {param} characters",
        "email":        "{field} must be a valid email",
        "number":       "{field} must be numeric",
        "alpha":        "{field} must contain only letters",
        "alphanumeric": "{field} must contain only letters and numbers",
        "boolean":      "{field} must be true or false",
        "date":         "{field} must be a valid date",
        "url":          "{field} must be a valid URL",
        "in":           "{field} must be one of: {param}",
        "equals":       "{field} must equal {param}",
        "password":     "Password must contain uppercase, lowercase and numbers",
        "pattern":      "{field} does not match the required pattern",
    },
    "pt": {
        "required":     "O campo {field} é obrigatório",
        "min":          "O campo {field} deve ter pelo menos {param} caracteres",
        "max":          "O campo {field} não pode ter mais de {param} caracteres",
        "email":        "O campo {field} deve ser um email válido",
        "number":       "O campo {field} deve ser numérico",
        "alpha":        "O campo {field} só pode conter letras",
        "alphanumeric": "O campo {field} só pode conter letras e números",
        "boolean":      "O campo {field} deve ser verdadeiro ou falso",
        "date":         "O campo {field} deve ser uma data válida",
        "url":          "O campo {field} deve ser uma URL válida",
        "in":           "O campo {field} deve ser um de: {param}",
        "equals":       "O campo {field} deve ser igual a {param}",
        "password":     "A senha deve conter maiúsculas, minúsculas e números",
        "pattern":      "O campo {field} não corresponde ao padrão exigido",
    },
    "fr": {
        "required":     "Le champ {field} est obligatoire",
        "min":          "Le champ {field} doit contenir au moins {param} caractères",
        "max":          "Le champ {field} ne peut pas contenir plus de {param} caractères",
        "email":        "Le champ {field} doit être un email valide",
        "number":       "Le champ {field} doit être numérique",
        "alpha":        "Le champ {field} ne peut contenir que des lettres",
        "alphanumeric": "Le champ {field} ne peut contenir que des lettres et des chiffres",
        "boolean":      "Le champ {field} doit être vrai ou faux",
        "date":         "Le champ {field} doit être une date valide",
        "url":          "Le champ {field} doit être une URL valide",
        "in":           "Le champ {field} doit être l'un de: {param}",
        "equals":       "Le champ {field} doit être égal à {param}",
        "password":     "Le mot de passe doit contenir des majuscules, des minuscules et des chiffres",
        "pattern":      "Le champ {field} ne correspond pas au modèle requis",
    },
}


def format_param(param: Any) -> str:
    if param is NO_PARAM:
        return ""
    if param is None:
        return "null"
    if isinstance(param, (list, tuple)):
        return ", ".join(to_text(v) for v in param)
    return to_text(param)


def template(fmt: str) -> MessageTemplate:
    """Turn a format string into a (field, param) -> str template."""
    try:
        fmt.format(field="", param="")
    except (KeyError, IndexError, ValueError) as exc:
        raise CatalogError(f"Invalid message template {fmt!r}: {exc}") from exc

    def render(field_name: str, param: Any = NO_PARAM) -> str:
        return fmt.format(field=field_name, param=format_param(param))

    return render


@dataclass(frozen=True)
class MessageCatalog:
    """
    Immutable language -> rule -> template mapping.

    Build once and share; the mappings are wrapped read-only.
    """
    languages: Mapping[str, Mapping[str, MessageTemplate]]
    fallback_language: str = field(default_factory=lambda: settings.fallback_language)

    def __post_init__(self) -> None:
        if self.fallback_language not in self.languages:
            raise CatalogError(
                f"Fallback language '{self.fallback_language}' is not in the catalog"
            )
        frozen = {}
        for lang, templates in self.languages.items():
            missing = [rule for rule in RULE_NAMES if rule not in templates]
            if missing:
                raise CatalogError(
                    f"Language '{lang}' has no template for: {', '.join(missing)}"
                )
            not_callable = [rule for rule, fn in templates.items() if not callable(fn)]
            if not_callable:
                raise CatalogError(
                    f"Language '{lang}' has non-callable templates for: {', '.join(not_callable)}"
                )
            frozen[lang] = MappingProxyType(dict(templates))
        object.__setattr__(self, "languages", MappingProxyType(frozen))

    @classmethod
    def from_strings(
        cls,
        strings: Mapping[str, Mapping[str, str]],
        base: Optional["MessageCatalog"] = None,
        fallback_language: Optional[str] = None,
    ) -> "MessageCatalog":
        """
        Build a catalog from format strings, layered per language over `base`.

        Languages already in `base` only need the rules they change; new
        languages must define every rule.
        """
        merged: dict[str, dict[str, MessageTemplate]] = {}
        if base is not None:
            merged = {lang: dict(templates) for lang, templates in base.languages.items()}
        for lang, fmts in strings.items():
            unknown = [rule for rule in fmts if rule not in RULE_NAMES]
            if unknown:
                raise CatalogError(f"Language '{lang}' defines unknown rules: {', '.join(unknown)}")
            entry = merged.setdefault(lang, {})
            entry.update({rule: template(fmt) for rule, fmt in fmts.items()})

        if fallback_language is None:
            fallback_language = base.fallback_language if base else settings.fallback_language
        return cls(languages=merged, fallback_language=fallback_language)

    @property
    def language_codes(self) -> list[str]:
        return list(self.languages)

    def resolve(self, language: Optional[str]) -> Mapping[str, MessageTemplate]:
        """Templates for `language`, or the fallback language's when it is unknown."""
        templates = self.languages.get(language) if language else None
        if templates is None:
            logger.debug(
                "Language %r not in catalog, falling back to %r",
                language, self.fallback_language,
            )
            templates = self.languages[self.fallback_language]
        return templates

    def render(self, language: Optional[str], rule: str, field_name: str, param: Any = NO_PARAM) -> str:
        return self.resolve(language)[rule](field_name, param)


# Process-wide default. Pass it (or a replacement) to Validator explicitly.
DEFAULT_CATALOG = MessageCatalog.from_strings(BUILTIN_MESSAGES, fallback_language="es")
