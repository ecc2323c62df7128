import pathlib
import sys

import pytest

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from taskform.config import Settings, get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_settings_cache():
    """Never leak a cached Settings instance between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        suggestion_limit=5,
        parent_candidate_limit=5,
        invalid_range_flash_ms=20,
        default_task_estimate_minutes=60,
        default_block_minutes=60,
        default_block_color="#fecaca",
    )
