import numpy as np
import pytest

KNOWN_MZ = [100.0, 101.0, 102.0]
KNOWN_INTENSITY = [1.0, 2.0, 3.0]
KNOWN_SPLASH = "splash10-0z00000000-f5bf6f6a4a1520a35d4f"

MSP_LIBRARY = """\
Name: Compound A
DB#: A-001
Num Peaks: 3
100.0 1.0
101.0 2.0
102.0 3.0

Name: Compound B
Num Peaks: 2
50:2; 150:1;
Name: Empty
Num Peaks: 0
"""


@pytest.fixture
def known_arrays():
    return np.array(KNOWN_MZ, dtype=np.float64), np.array(KNOWN_INTENSITY, dtype=np.float32)


@pytest.fixture
def msp_file(tmp_path):
    path = tmp_path / "library.msp"
    path.write_text(MSP_LIBRARY, encoding="utf-8")
    return path


@pytest.fixture
def jsonl_file(tmp_path):
    path = tmp_path / "library.jsonl"
    path.write_text(
        '{"id": "s1", "name": "Compound A", "peaks": [[100.0, 1.0], [101.0, 2.0], [102.0, 3.0]], "ms_level": 2}\n'
        "\n"
        '{"peaks": [[50.0, 0.0]]}\n',
        encoding="utf-8",
    )
    return path
