import logging
import re
from collections.abc import Callable

from prisma_case_format.errors import ConfigurationError
from prisma_case_format.models import RenamePlan

logger = logging.getLogger(__name__)

CaseChange = Callable[[str], str]
InflectionChange = Callable[[str], str]

_IDENTIFIER = re.compile(r"[A-Za-z_]\w*", re.ASCII)


def require_transform(transform: object, role: str) -> None:
    if transform is None or not callable(transform):
        raise ConfigurationError(f"A {role} transform is required, got {transform!r}")


def resolve(original: str, case_fn: CaseChange, inflection_fn: InflectionChange | None = None) -> RenamePlan:
    """Compute the new name for ``original``.

    The inflection (when given) runs before the case change. Candidates that are
    not valid identifiers are discarded and the name is kept as is.
    """
    require_transform(case_fn, "case")
    candidate = original
    if inflection_fn is not None:
        require_transform(inflection_fn, "inflection")
        candidate = inflection_fn(candidate)
    candidate = case_fn(candidate)

    if not isinstance(candidate, str) or not _IDENTIFIER.fullmatch(candidate):
        logger.warning("Keeping %s: computed name %r is not a valid identifier", original, candidate)
        return RenamePlan(original=original, new_name=original, changed=False)
    return RenamePlan(original=original, new_name=candidate, changed=candidate != original)


def resolve_table_name(original: str, case_fn: CaseChange, inflection_fn: InflectionChange) -> RenamePlan:
    require_transform(inflection_fn, "table inflection")
    return resolve(original, case_fn, inflection_fn)


def resolve_field_name(original: str, case_fn: CaseChange) -> RenamePlan:
    return resolve(original, case_fn)
