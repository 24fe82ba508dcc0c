"""Shared pytest fixtures for sfzparse tests."""

from pathlib import Path

import pytest

from sfzparse.core.config import ParserConfig


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sfz_fixtures_dir(fixtures_dir: Path) -> Path:
    """Return path to .sfz fixtures directory."""
    return fixtures_dir / "sfz"


@pytest.fixture
def config() -> ParserConfig:
    """Parser config independent of the test environment."""
    return ParserConfig()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "SFZPARSE_ENCODING",
        "SFZPARSE_WARN_UNKNOWN_OPCODES",
        "SFZPARSE_NORMALIZE_SEPARATORS",
    ):
        monkeypatch.delenv(name, raising=False)
