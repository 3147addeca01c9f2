import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest


@pytest.fixture
def toy():
    return pd.DataFrame({
        "name": ["A", "B", "C", "D"],
        "height": [172, None, 96, 202],
        "mass": [77, 75, None, 136],
        "gender": ["masculine", "masculine", "feminine", "masculine"],
        "films": [["f1", "f2"], ["f1"], [], ["f1", "f2", "f3"]],
        "vehicles": [["v1"], [], [], []],
        "starships": [[], [], [], ["s1"]],
    }, index=[10, 11, 12, 13])
