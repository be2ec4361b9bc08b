import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'stratum'
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


from stratum.core.schemas.validation import _load_schema_cached


@pytest.fixture(autouse=True)
def _reset_schema_cache() -> None:
    """Ensure schema loads are fresh for each test."""
    _load_schema_cached.cache_clear()
    yield
    _load_schema_cached.cache_clear()


@pytest.fixture
def write_file():
    """Write ``content`` to ``path``, creating parent directories."""

    def _write(path: Path, content: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
