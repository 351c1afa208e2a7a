import os
from pathlib import Path

from pydantic import BaseModel

_ENV_PREFIX = "PRISMA_CASE_FORMAT_"


class CaseFormatConfig(BaseModel):
    file: Path = Path("schema.prisma")
    table_case: str = "pascal"
    field_case: str = "camel"
    table_inflection: str = "leave"
    formatter: str = "builtin"


DEFAULTS = CaseFormatConfig()


def get_config() -> CaseFormatConfig:
    """Defaults for the command line, overridable through ``PRISMA_CASE_FORMAT_*`` variables."""
    overrides = {
        name: value
        for name in CaseFormatConfig.model_fields
        if (value := os.getenv(f"{_ENV_PREFIX}{name.upper()}"))
    }
    return CaseFormatConfig.model_validate(overrides)
