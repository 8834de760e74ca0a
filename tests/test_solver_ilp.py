# FILE: tests/test_solver_ilp.py
import pulp
import pytest

from balance_core.constants import DEFAULT_OBJECTIVE_CRITERIA, Criterion
from balance_core.fairness import objective_deviations
from balance_core.models import AppConfig, Player
from balance_core.solver_ilp import PulpSolver, build_balance_model
from balance_core.balancer import balance_teams
from tests.helpers import brute_force_two_teams, partition_key, quick_player, ten_players


def _constraint_text(model):
    return {name: str(con) for name, con in model.prob.constraints.items()}


def test_model_shape():
    players = ten_players()
    model = build_balance_model(players, number_of_teams=2, players_per_team=5)
    assert len(model.x) == 20
    assert set(model.max_diff) == set(DEFAULT_OBJECTIVE_CRITERIA)
    assert Criterion.KEEPER not in model.max_diff
    # 10 one-team + 2 size + 5 criteria * 2 teams * 2 sides
    assert len(model.prob.constraints) == 10 + 2 + 20
    assert "one_team_0" in model.prob.constraints
    assert "size_1" in model.prob.constraints
    assert "dev_under_speed_1" in model.prob.constraints


def test_model_rejects_bad_layout_arguments():
    with pytest.raises(ValueError):
        build_balance_model(ten_players(), number_of_teams=0, players_per_team=5)
    with pytest.raises(ValueError):
        build_balance_model(ten_players(), number_of_teams=2, players_per_team=0)
    with pytest.raises(ValueError):
        build_balance_model(ten_players(), number_of_teams=2, players_per_team=5, objective_criteria=[])


def test_keeper_ratings_do_not_reach_the_model():
    players = ten_players()
    shuffled = [
        Player(**{**p.model_dump(), "keeper": (i * 37) % 100})
        for i, p in enumerate(players)
    ]
    m1 = build_balance_model(players, 2, 5)
    m2 = build_balance_model(shuffled, 2, 5)
    assert _constraint_text(m1) == _constraint_text(m2)
    assert str(m1.prob.objective) == str(m2.prob.objective)


def test_keeper_toggle_adds_keeper_rows():
    model = build_balance_model(ten_players(), 2, 5, objective_criteria=list(Criterion))
    assert Criterion.KEEPER in model.max_diff
    assert "dev_over_keeper_0" in model.prob.constraints


def test_solution_is_complete_partition():
    players = ten_players()
    result = balance_teams(players, number_of_teams=2, players_per_team=5)
    assert result.ok
    assert result.status == "Optimal"
    assert len(result.teams) == 2
    assert all(len(team) == 5 for team in result.teams)
    names = [p.name for team in result.teams for p in team]
    assert sorted(names) == sorted(p.name for p in players)


def test_three_teams_partition():
    players = [quick_player(f"p{i}", speed=10 * i, stamina=100 - 5 * i) for i in range(9)]
    result = balance_teams(players, number_of_teams=3, players_per_team=3)
    assert result.ok
    assert sorted(len(t) for t in result.teams) == [3, 3, 3]
    assert len({p.name for t in result.teams for p in t}) == 9


def test_objective_matches_brute_force():
    players = ten_players()
    result = balance_teams(players, number_of_teams=2, players_per_team=5)
    assert result.ok

    best = brute_force_two_teams(players, DEFAULT_OBJECTIVE_CRITERIA)
    assert result.objective == pytest.approx(best, abs=1e-4)

    devs = objective_deviations(result.teams, DEFAULT_OBJECTIVE_CRITERIA)
    for c, dev in devs.items():
        assert result.max_diff[c.label] >= dev - 1e-6
    assert sum(devs.values()) == pytest.approx(best, abs=1e-4)


def test_keeper_perturbation_keeps_objective_and_partition():
    players = ten_players()
    perturbed = [
        Player(**{**p.model_dump(), "keeper": 99 if i % 2 else 0})
        for i, p in enumerate(players)
    ]
    r1 = balance_teams(players, 2, 5)
    r2 = balance_teams(perturbed, 2, 5)
    assert r1.objective == pytest.approx(r2.objective, abs=1e-6)
    assert partition_key(r1.teams) == partition_key(r2.teams)


def test_speed_split_scenario():
    speeds = [80, 80, 80, 80, 80, 20, 20, 20, 20, 20]
    players = [quick_player(f"s{i}", speed=s) for i, s in enumerate(speeds)]
    result = balance_teams(players, 2, 5)
    assert result.ok

    expected = brute_force_two_teams(players, [Criterion.SPEED])
    assert expected == pytest.approx(30.0)
    assert result.max_diff["Speed"] == pytest.approx(expected, abs=1e-4)
    assert result.objective == pytest.approx(expected, abs=1e-4)

    fast_counts = sorted(sum(1 for p in team if p.speed == 80) for team in result.teams)
    assert fast_counts == [2, 3]


def test_infeasible_when_players_do_not_fill_teams():
    players = ten_players() + [quick_player("Extra")]
    result = balance_teams(players, number_of_teams=2, players_per_team=5)
    assert not result.ok
    assert result.teams is None
    assert result.status != "Optimal"
    assert result.error


def test_solver_from_config():
    cfg = AppConfig(solver="highs", time_limit_seconds=5, gap_rel=0.01, solver_msg=True)
    solver = PulpSolver.from_config(cfg)
    assert solver.solver == "highs"
    assert solver.time_limit == 5
    assert solver.gap_rel == 0.01
    assert solver.msg is True


class _FixedBackend:
    """Stands in for CBC: alternates players between two teams and reports the given solution status."""

    def __init__(self, sol_status):
        self.sol_status = sol_status

    def actualSolve(self, lp, **kwargs):
        for var in lp.variables():
            if var.name.startswith("x_"):
                _, p, t = var.name.split("_")
                var.varValue = 1.0 if int(p) % 2 == int(t) else 0.0
            else:
                var.varValue = 0.0
        lp.assignStatus(pulp.LpStatusOptimal, self.sol_status)
        return pulp.LpStatusOptimal


class _FixedSolver(PulpSolver):
    def __init__(self, sol_status):
        super().__init__()
        self.backend = _FixedBackend(sol_status)

    def _backend(self):
        return self.backend, "fixed"


def test_time_limited_incumbent_is_not_optimal():
    solver = _FixedSolver(pulp.LpSolutionIntegerFeasible)
    model = build_balance_model(ten_players(), number_of_teams=2, players_per_team=5)
    outcome = solver.solve(model)
    assert outcome.status == "Solution Found"
    assert not outcome.is_optimal
    assert outcome.values == {}

    result = balance_teams(ten_players(), 2, 5, solver=_FixedSolver(pulp.LpSolutionIntegerFeasible))
    assert not result.ok
    assert "Solution Found" in result.error


def test_proven_optimum_is_accepted():
    result = balance_teams(ten_players(), 2, 5, solver=_FixedSolver(pulp.LpSolutionOptimal))
    assert result.ok
    assert [p.name for p in result.teams[0]] == [p.name for p in ten_players()[0::2]]
