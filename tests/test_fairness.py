# FILE: tests/test_fairness.py
import pytest

from balance_core.constants import Criterion
from balance_core.fairness import (
    criterion_spreads,
    fairness_dashboard_df,
    objective_deviations,
    teams_grid_df,
    total_imbalance,
)
from tests.helpers import quick_player


def test_total_imbalance_zero_for_identical_teams():
    t1 = [quick_player("a"), quick_player("b")]
    t2 = [quick_player("c"), quick_player("d")]
    assert total_imbalance([t1, t2]) == pytest.approx(0.0)


def test_total_imbalance_counts_keeper():
    t1 = [quick_player("a", keeper=80), quick_player("b")]
    t2 = [quick_player("c", keeper=60), quick_player("d")]
    spreads = criterion_spreads([t1, t2])
    assert spreads[Criterion.KEEPER] == (80.0, 60.0)
    assert total_imbalance([t1, t2]) == pytest.approx(20.0)


def test_total_imbalance_sums_all_criteria():
    t1 = [quick_player("a", speed=70, stamina=40)]
    t2 = [quick_player("b", speed=50, stamina=50)]
    # speed 20 + stamina 10
    assert total_imbalance([t1, t2]) == pytest.approx(30.0)


def test_total_imbalance_no_teams():
    assert total_imbalance([]) == 0.0
    assert criterion_spreads([]) == {}


def test_objective_deviations_uses_score_sums():
    t1 = [quick_player("a", speed=80), quick_player("b", speed=80)]
    t2 = [quick_player("c", speed=20), quick_player("d", speed=80)]
    devs = objective_deviations([t1, t2], [Criterion.SPEED, Criterion.FORWARD])
    # sums 160 vs 100, mean 130
    assert devs[Criterion.SPEED] == pytest.approx(30.0)
    assert devs[Criterion.FORWARD] == pytest.approx(0.0)


def test_dashboard_and_grid_frames():
    t1 = [quick_player("Zed"), quick_player("Amy", keeper=70)]
    t2 = [quick_player("Bob")]
    dash = fairness_dashboard_df([t1, t2])
    assert list(dash["team"]) == ["Black", "Blue"]
    assert dash.loc[0, "Keeper avg"] == 70.0
    assert dash.loc[1, "Keeper max"] == 0
    grid = teams_grid_df([t1, t2])
    assert list(grid.columns) == ["Black", "Blue"]
    assert list(grid["Black"]) == ["Amy", "Zed"]
    assert list(grid["Blue"]) == ["Bob", ""]
