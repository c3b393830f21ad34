import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest

from benchbridge.config import EngineConfig


@pytest.fixture
def fast_options() -> EngineConfig:
    return EngineConfig(min_time=1e-4, max_time=0.0, min_samples=2, max_samples=3, warmup_rounds=0)
