"""Fixtures for tests that run the real prisma CLI."""

import pytest

from prisma_case_format.formatter import prisma_available


@pytest.fixture(scope="session")
def require_prisma() -> None:
    """Skip the test when the prisma CLI is not on PATH."""
    if not prisma_available():
        pytest.skip("prisma CLI is not installed")
