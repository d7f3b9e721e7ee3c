import sys
from pathlib import Path

import pytest

# Ensure 'src' directory is on sys.path for tests
PROJECT_ROOT = Path(__file__).resolve().parent
SRC_DIR = PROJECT_ROOT / 'src'
if SRC_DIR.exists() and str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


@pytest.fixture
def section():
    from confstore import ConfigSection

    return ConfigSection("default", "A optional section description…")


@pytest.fixture
def sample_json(tmp_path: Path) -> Path:
    from tests.utils import SAMPLE_JSON

    path = tmp_path / "config.json"
    path.write_text(SAMPLE_JSON, encoding="utf-8")
    return path
