from prisma_case_format.core.conventions import (
    camel_case,
    pascal_case,
    resolve_case_convention,
    resolve_inflection_convention,
    snake_case,
)
from prisma_case_format.core.migrate import migrate_case_conventions, run_migration
from prisma_case_format.errors import (
    CaseFormatError,
    ConfigurationError,
    FormatterError,
    ParseErrorKind,
    SchemaParseError,
)
from prisma_case_format.models import MigrationResult, RenamePlan, RenameRecord

__all__ = [
    "CaseFormatError",
    "ConfigurationError",
    "FormatterError",
    "MigrationResult",
    "ParseErrorKind",
    "RenamePlan",
    "RenameRecord",
    "SchemaParseError",
    "camel_case",
    "migrate_case_conventions",
    "pascal_case",
    "resolve_case_convention",
    "resolve_inflection_convention",
    "run_migration",
    "snake_case",
]
