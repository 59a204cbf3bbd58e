import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ore_common.config import load_cfg


DATA_DIR = Path(__file__).parent / "data"

SCENARIO_CSV = "\n".join([
    "X,Y,Z,AUGT,CONF",
    "0,0,-100,10,Measured",
    "0,0,-500,25,Indicated",
    "0,0,-900,35,Inferred",
])


@pytest.fixture
def cfg(tmp_path):
    """Defaults only; the default dataset path points at a missing file."""
    c = load_cfg(None)
    c.default_dataset = tmp_path / "missing.csv"
    return c


@pytest.fixture
def scenario_csv():
    return SCENARIO_CSV


@pytest.fixture
def samples_path():
    return DATA_DIR / "samples.csv"
