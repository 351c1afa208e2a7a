from typing import Protocol


class SchemaFormatter(Protocol):
    async def format(self, schema: str) -> str: ...
