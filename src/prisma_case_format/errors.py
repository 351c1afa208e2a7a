from enum import Enum


class CaseFormatError(Exception):
    """Base class for every error raised by prisma-case-format."""


class ParseErrorKind(str, Enum):
    UNTERMINATED_BLOCK = "unterminated block"
    UNRECOGNIZED_CONSTRUCT = "unrecognized top-level construct"


class SchemaParseError(CaseFormatError):
    """The schema text is structurally broken (brace nesting)."""

    def __init__(self, kind: ParseErrorKind, message: str, line: int | None = None, column: int | None = None) -> None:
        self.kind = kind
        self.message = message
        self.line = line
        self.column = column
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.line is None:
            return f"{self.kind.value}: {self.message}"
        return f"{self.kind.value} at line {self.line}, column {self.column}: {self.message}"


class ConfigurationError(CaseFormatError, ValueError):
    """A naming convention is missing or unsupported."""


class FormatterError(CaseFormatError):
    """The schema formatter could not produce output."""
