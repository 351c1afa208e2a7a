"""Shared fixtures and helpers for tests."""

from pathlib import Path

import inflection
import pytest

from prisma_case_format.core.conventions import camel_case, leave, pascal_case

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared schemas
# ---------------------------------------------------------------------------

SETTINGS_SCHEMA = """datasource db {
  provider = "sqlite"
  url      = "file:database.db"
}

// generator
generator client {
  provider = "prisma-client-js"
}
"""

DEMO_SCHEMA = """datasource db {
  provider = "sqlite"
  url      = "file:database.db"
}

// generator
generator client {
  provider = "prisma-client-js"
}

model demos {
  article_id Int
}"""

MIGRATED_DEMO_SCHEMA = """datasource db {
  provider = "sqlite"
  url      = "file:database.db"
}

// generator
generator client {
  provider = "prisma-client-js"
}

model Demo {
  @@map("demos")
  articleId Int @map("article_id")
}"""


@pytest.fixture
def settings_schema() -> str:
    return SETTINGS_SCHEMA


@pytest.fixture
def demo_schema() -> str:
    return DEMO_SCHEMA


@pytest.fixture
def migrated_demo_schema() -> str:
    return MIGRATED_DEMO_SCHEMA


@pytest.fixture
def pascal_singular() -> dict[str, object]:
    """Keyword arguments for the most common configuration: Pascal singular tables, camel fields."""
    return {"table_case": pascal_case, "field_case": camel_case, "table_inflection": inflection.singularize}


@pytest.fixture
def identity() -> dict[str, object]:
    return {"table_case": leave, "field_case": leave, "table_inflection": leave}


@pytest.fixture(autouse=True)
def _clear_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("FILE", "TABLE_CASE", "FIELD_CASE", "TABLE_INFLECTION", "FORMATTER"):
        monkeypatch.delenv(f"PRISMA_CASE_FORMAT_{name}", raising=False)
