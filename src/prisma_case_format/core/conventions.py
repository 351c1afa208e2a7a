import re

import inflection

from prisma_case_format.core.resolver import CaseChange, InflectionChange
from prisma_case_format.errors import ConfigurationError

_CASE_ALIASES = {
    "camel": "camel",
    "camel_case": "camel",
    "camelcase": "camel",
    "lower_camel": "camel",
    "pascal": "pascal",
    "pascal_case": "pascal",
    "pascalcase": "pascal",
    "upper_camel": "pascal",
    "snake": "snake",
    "snake_case": "snake",
    "snakecase": "snake",
}

_INFLECTION_ALIASES = {
    "identity": "leave",
    "keep": "leave",
    "leave": "leave",
    "none": "leave",
    "plural": "plural",
    "pluralize": "plural",
    "singular": "singular",
    "singularize": "singular",
}


def _words(identifier: str) -> list[str]:
    return [word for word in re.split(r"[^0-9a-z]+", inflection.underscore(identifier)) if word]


def pascal_case(identifier: str) -> str:
    words = _words(identifier)
    if not words:
        return identifier
    return inflection.camelize("_".join(words))


def camel_case(identifier: str) -> str:
    words = _words(identifier)
    if not words:
        return identifier
    return inflection.camelize("_".join(words), uppercase_first_letter=False)


def snake_case(identifier: str) -> str:
    words = _words(identifier)
    if not words:
        return identifier
    return "_".join(words)


def leave(identifier: str) -> str:
    return identifier


_CASE_CONVENTIONS: dict[str, CaseChange] = {
    "camel": camel_case,
    "pascal": pascal_case,
    "snake": snake_case,
}

_INFLECTION_CONVENTIONS: dict[str, InflectionChange] = {
    "leave": leave,
    "plural": inflection.pluralize,
    "singular": inflection.singularize,
}

SUPPORTED_CASES = sorted(_CASE_CONVENTIONS)
SUPPORTED_INFLECTIONS = sorted(_INFLECTION_CONVENTIONS)


def _normalize(name: str) -> str:
    return name.strip().lower().replace("-", "_")


def normalize_case_convention(name: str) -> str:
    resolved = _CASE_ALIASES.get(_normalize(name))
    if resolved is None:
        raise ConfigurationError(f"Unsupported case convention '{name}'. Supported: {SUPPORTED_CASES}")
    return resolved


def normalize_inflection_convention(name: str) -> str:
    resolved = _INFLECTION_ALIASES.get(_normalize(name))
    if resolved is None:
        raise ConfigurationError(f"Unsupported inflection '{name}'. Supported: {SUPPORTED_INFLECTIONS}")
    return resolved


def resolve_case_convention(name: str) -> CaseChange:
    return _CASE_CONVENTIONS[normalize_case_convention(name)]


def resolve_inflection_convention(name: str) -> InflectionChange:
    return _INFLECTION_CONVENTIONS[normalize_inflection_convention(name)]
