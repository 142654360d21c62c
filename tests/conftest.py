"""Pytest configuration shared by all test suites"""

import logging
import sys
from pathlib import Path

import pytest

# Add project root to path for way_match imports when not installed
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from way_match.bm25 import Stemmer

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def stemmer():
    """
    One Snowball stemmer for the whole session.

    Mirrors the CLI: a single owned instance, closed at the end.
    """
    with Stemmer() as instance:
        yield instance


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture(autouse=True)
def restore_root_logging():
    """CLI tests reconfigure the root logger; put the original handlers back."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep WAY_MATCH_* / LOG_LEVEL from the developer's shell out of tests."""
    for name in ("WAY_MATCH_K1", "WAY_MATCH_B", "WAY_MATCH_THRESHOLD", "WAY_MATCH_MIN_FREQ", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
