from __future__ import annotations

import asyncio
import logging
import shutil
import tempfile
from pathlib import Path

from prisma_case_format.errors import FormatterError

logger = logging.getLogger(__name__)

_DEFAULT_EXECUTABLE = "prisma"


def prisma_available(executable: str = _DEFAULT_EXECUTABLE) -> bool:
    return shutil.which(executable) is not None


class PrismaCliFormatter:
    """Format schemas with ``prisma format``.

    Implements the ``SchemaFormatter`` protocol. The schema is written to a
    temporary file because the CLI formats files in place.
    """

    def __init__(self, executable: str = _DEFAULT_EXECUTABLE) -> None:
        self._executable = executable

    async def format(self, schema: str) -> str:
        binary = shutil.which(self._executable)
        if binary is None:
            raise FormatterError(f"'{self._executable}' is not installed or not in PATH.")

        with tempfile.TemporaryDirectory() as temp_dir:
            schema_path = Path(temp_dir) / "schema.prisma"
            schema_path.write_text(schema, encoding="utf-8")
            logger.debug("Running %s format on %s", binary, schema_path)
            process = await asyncio.create_subprocess_exec(
                binary,
                "format",
                "--schema",
                str(schema_path),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            _, stderr = await process.communicate()
            if process.returncode != 0:
                message = stderr.decode("utf-8", errors="replace").strip()
                raise FormatterError(f"prisma format exited with code {process.returncode}: {message}")
            return schema_path.read_text(encoding="utf-8")


class NoopFormatter:
    """Leave the migrated schema exactly as the engine emitted it."""

    async def format(self, schema: str) -> str:
        return schema
