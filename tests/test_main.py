import pandas as pd
import pytest

import main


def test_compare_solvers_by_time_orders_configurations():
    df = pd.DataFrame({
        "config_name": ["graph", "graph", "steps"],
        "time_sec": [0.1, 0.3, 0.05],
    })
    summary = main.compare_solvers_by_time(df)
    assert list(summary.index) == ["steps", "graph"]
    assert summary["graph"] == pytest.approx(0.2)
