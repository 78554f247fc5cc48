import sys
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

# Ensure project root is on sys.path so `grid_routing` and `experiments` import.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

EXAMPLE_PATH = ROOT / "data" / "example.txt"


@pytest.fixture
def example_grid():
    from grid_routing import load_grid

    return load_grid(EXAMPLE_PATH)
