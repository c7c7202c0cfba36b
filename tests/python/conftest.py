import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
src_root = ROOT / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

from murmuration.sim.core.config import Bounds, FlockParams  # noqa: E402


@pytest.fixture
def bounds() -> Bounds:
    return Bounds(800.0, 600.0)


@pytest.fixture
def params() -> FlockParams:
    return FlockParams()
