from prisma_case_format.core.ports.formatter import SchemaFormatter
from prisma_case_format.errors import ConfigurationError
from prisma_case_format.formatter.builtin import BuiltinFormatter, format_schema
from prisma_case_format.formatter.prisma_cli import NoopFormatter, PrismaCliFormatter, prisma_available

SUPPORTED_FORMATTERS = ["builtin", "none", "prisma"]


def get_formatter(name: str) -> SchemaFormatter:
    normalized = name.strip().lower()
    if normalized == "builtin":
        return BuiltinFormatter()
    if normalized == "prisma":
        return PrismaCliFormatter()
    if normalized == "none":
        return NoopFormatter()
    raise ConfigurationError(f"Unsupported formatter '{name}'. Supported: {SUPPORTED_FORMATTERS}")


__all__ = [
    "SUPPORTED_FORMATTERS",
    "BuiltinFormatter",
    "NoopFormatter",
    "PrismaCliFormatter",
    "SchemaFormatter",
    "format_schema",
    "get_formatter",
    "prisma_available",
]
