import math

import networkx as nx
import pytest

from divelim.algorithms.max_flow import MaxFlowSolver
from divelim.elimination.reducer import build_elimination_network, solve_elimination
from divelim.elimination.result import EliminationStatus
from divelim.errors import InvalidNetworkConfiguration
from divelim.graph.convert import to_digraph
from divelim.model.standings import Standings


class TestBuildEliminationNetwork:
    def test_layout_for_new_york(self, teams4):
        # New_York (index 2): best = 84; opponents Atlanta, Philadelphia, Montreal
        reduction = build_elimination_network(teams4, 2)
        net = reduction.network

        assert reduction.source == 4
        assert reduction.sink == 5
        # Pairs with games left among the others: ATL-PHI, ATL-MON, PHI-MON
        assert net.vertices() == 4 + 2 + 3
        assert reduction.labels[6:] == (
            "Atlanta-Philadelphia",
            "Atlanta-Montreal",
            "Philadelphia-Montreal",
        )
        assert reduction.vertex_of == {0: 0, 1: 1, 3: 3}
        assert reduction.required_flow == 1 + 1 + 2

        source_edges = [e for e in net.edges() if e.tail == reduction.source]
        assert [(e.head, e.capacity) for e in source_edges] == [(6, 1), (7, 1), (8, 2)]

        sink_caps = {e.tail: e.capacity for e in net.edges() if e.head == reduction.sink}
        assert sink_caps == {0: 1, 1: 4, 3: 7}

        game_edges = [e for e in net.edges() if e.tail >= 6]
        assert all(math.isinf(e.capacity) for e in game_edges)
        assert sorted((e.tail, e.head) for e in game_edges) == [
            (6, 0), (6, 1), (7, 0), (7, 3), (8, 1), (8, 3),
        ]

    def test_target_vertex_is_isolated(self, teams4):
        reduction = build_elimination_network(teams4, 2)
        assert reduction.network.adj(2) == []

    def test_excess_edges_for_teams_already_ahead(self, teams4):
        # Montreal's best is 80; Atlanta already has 83
        reduction = build_elimination_network(teams4, 3)
        net = reduction.network

        atlanta_sink = [e for e in net.adj(0) if e.head == reduction.sink]
        assert [e.capacity for e in atlanta_sink] == [0]
        excess = [e for e in net.adj(0) if e.tail == reduction.source]
        assert [e.capacity for e in excess] == [3]
        # Games ATL-PHI 1, ATL-NY 6 plus Atlanta's excess of 3
        assert reduction.required_flow == 1 + 6 + 3

    def test_no_games_among_others(self, teams4):
        # Atlanta plays everyone; the others have only PHI-MON left
        reduction = build_elimination_network(teams4, 0)
        assert reduction.network.vertices() == 4 + 2 + 1
        assert reduction.required_flow == 2

    def test_target_out_of_range(self, teams4):
        with pytest.raises(InvalidNetworkConfiguration):
            build_elimination_network(teams4, 4)

    def test_max_flow_matches_networkx(self, teams5):
        for target in range(teams5.size):
            reduction = build_elimination_network(teams5, target)
            expected = nx.maximum_flow_value(
                to_digraph(reduction.network), reduction.source, reduction.sink
            )
            solver = MaxFlowSolver(reduction.network, reduction.source, reduction.sink)
            assert solver.value == expected


class TestSolveElimination:
    def test_philadelphia(self, teams4):
        result = solve_elimination(teams4, 1)
        assert result.status == EliminationStatus.ELIMINATED
        assert result.certificate == ("Atlanta", "New_York")
        assert result.method == "maxflow"

    def test_not_eliminated(self, teams4):
        for target in (0, 2):
            result = solve_elimination(teams4, target)
            assert result.status == EliminationStatus.NOT_ELIMINATED
            assert result.certificate == ()

    def test_full_reduction_catches_trivial_elimination(self, teams4):
        result = solve_elimination(teams4, 3)
        assert result.eliminated
        assert "Atlanta" in result.certificate
        assert "Montreal" not in result.certificate

    def test_detroit(self, teams5):
        result = solve_elimination(teams5, 4)
        assert result.eliminated
        assert result.certificate == ("New_York", "Baltimore", "Boston", "Toronto")

    def test_fresh_network_per_call(self, teams4):
        first = solve_elimination(teams4, 1)
        second = solve_elimination(teams4, 1)
        assert first == second

    def test_already_ahead_without_shared_games(self):
        standings = Standings(
            names=("A", "B"), wins=(10, 5), losses=(0, 0), remaining=(0, 0),
            games=((0, 0), (0, 0)),
        )
        result = solve_elimination(standings, 1)
        assert result.eliminated
        assert result.certificate == ("A",)
