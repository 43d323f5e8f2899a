import threading
from unittest.mock import patch

import pytest

from divelim.config import EliminationConfig
from divelim.elimination import reducer
from divelim.elimination.division import DivisionQuery
from divelim.elimination.result import EliminationResult, EliminationStatus
from divelim.errors import DivelimError, InconsistentResult, UnknownCompetitor
from divelim.model.standings import Standings


@pytest.fixture
def division4(teams4) -> DivisionQuery:
    return DivisionQuery(teams4)


class TestLookups:
    def test_teams_in_division_order(self, division4):
        assert division4.teams() == ["Atlanta", "Philadelphia", "New_York", "Montreal"]
        assert division4.number_of_teams() == 4
        assert len(division4) == 4
        assert "Atlanta" in division4
        assert "atlanta" not in division4

    def test_standings_lookups(self, division4):
        assert division4.wins("Philadelphia") == 80
        assert division4.losses("Philadelphia") == 79
        assert division4.remaining("Philadelphia") == 3
        assert division4.against("Atlanta", "New_York") == 6
        assert division4.against("New_York", "Atlanta") == 6
        assert division4.against("Montreal", "Montreal") == 0

    def test_leader(self, division4):
        assert division4.leader == "Atlanta"

    def test_leader_tie_picks_first(self):
        s = Standings(("A", "B"), (5, 5), (0, 0), (0, 0), ((0, 0), (0, 0)))
        division = DivisionQuery(s)
        assert division.leader == "A"
        assert not division.is_eliminated("A")
        assert not division.is_eliminated("B")

    @pytest.mark.parametrize(
        "method,args",
        [
            ("wins", ("Boston",)),
            ("losses", ("Boston",)),
            ("remaining", ("Boston",)),
            ("is_eliminated", ("Boston",)),
            ("certificate", ("Boston",)),
            ("result", ("Boston",)),
        ],
    )
    def test_unknown_competitor(self, division4, method, args):
        with pytest.raises(UnknownCompetitor) as exc_info:
            getattr(division4, method)(*args)
        assert exc_info.value.name == "Boston"

    def test_against_names_invalid_argument(self, division4):
        with pytest.raises(UnknownCompetitor) as exc_info:
            division4.against("Atlanta", "Boston")
        assert exc_info.value.name == "Boston"

        with pytest.raises(UnknownCompetitor) as exc_info:
            division4.against("Boston", "Atlanta")
        assert exc_info.value.name == "Boston"


class TestElimination:
    def test_teams4(self, division4):
        assert not division4.is_eliminated("Atlanta")
        assert division4.is_eliminated("Philadelphia")
        assert not division4.is_eliminated("New_York")
        assert division4.is_eliminated("Montreal")

        assert division4.certificate("Atlanta") is None
        assert division4.certificate("Philadelphia") == ("Atlanta", "New_York")
        assert division4.certificate("New_York") is None
        assert division4.certificate("Montreal") == ("Atlanta",)

    def test_certificate_alias(self, division4):
        assert division4.certificate_of_elimination("Montreal") == ("Atlanta",)

    def test_methods(self, division4):
        assert division4.result("Montreal").method == "trivial"
        assert division4.result("Philadelphia").method == "maxflow"
        assert division4.result("Atlanta").method == "maxflow"

    def test_trivial_check_can_be_disabled(self, teams4):
        division = DivisionQuery(teams4, config=EliminationConfig(trivial_check=False))
        result = division.result("Montreal")
        assert result.method == "maxflow"
        assert result.eliminated
        assert "Atlanta" in result.certificate

    def test_teams5_detroit(self, teams5):
        division = DivisionQuery(teams5)
        eliminated = [r.competitor for r in division.eliminations() if r.eliminated]
        assert eliminated == ["Detroit"]
        # Detroit ties the leader at best, so only the flow network decides it
        assert division.result("Detroit").method == "maxflow"
        assert division.certificate("Detroit") == (
            "New_York",
            "Baltimore",
            "Boston",
            "Toronto",
        )

    def test_eliminations_cover_every_team(self, division4):
        results = list(division4.eliminations())
        assert [r.competitor for r in results] == division4.teams()
        assert all(r.known for r in results)

    def test_single_team_division(self):
        division = DivisionQuery(Standings(("Solo",), (3,), (1,), (0,), ((0,),)))
        assert not division.is_eliminated("Solo")


class TestCache:
    def test_repeat_query_reuses_result(self, division4):
        with patch(
            "divelim.elimination.division.solve_elimination",
            wraps=reducer.solve_elimination,
        ) as solve:
            first = division4.result("Philadelphia")
            assert division4.is_eliminated("Philadelphia")
            assert division4.certificate("Philadelphia") == ("Atlanta", "New_York")
            assert solve.call_count == 1
            assert division4.result("Philadelphia") is first

    def test_different_competitor_replaces_cache(self, division4):
        with patch(
            "divelim.elimination.division.solve_elimination",
            side_effect=lambda standings, target: EliminationResult.not_eliminated(
                standings.names[target], method="maxflow"
            ),
        ) as solve:
            division4.result("Atlanta")
            division4.result("New_York")
            division4.result("Atlanta")
            assert solve.call_count == 3

    def test_cache_disabled(self, teams4):
        division = DivisionQuery(teams4, config=EliminationConfig(cache_results=False))
        with patch(
            "divelim.elimination.division.solve_elimination",
            side_effect=lambda standings, target: EliminationResult.not_eliminated(
                standings.names[target], method="maxflow"
            ),
        ) as solve:
            division.result("Atlanta")
            division.result("Atlanta")
            assert solve.call_count == 2

    def test_concurrent_queries_agree(self, teams5):
        division = DivisionQuery(teams5)
        expected = {name: division.result(name) for name in division.teams()}
        errors = []

        def worker(offset: int) -> None:
            names = division.teams()
            for k in range(50):
                name = names[(k + offset) % len(names)]
                if division.result(name) != expected[name]:
                    errors.append(name)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert errors == []


class TestEliminationResult:
    def test_default_is_unknown(self):
        result = EliminationResult("Atlanta")
        assert result.status == EliminationStatus.UNKNOWN
        assert not result.known
        assert not result.eliminated
        assert result.certificate == ()

    def test_known_not_eliminated_differs_from_unknown(self):
        assert EliminationResult.not_eliminated("A", "maxflow") != EliminationResult("A")

    def test_eliminated_requires_certificate(self):
        with pytest.raises(InconsistentResult):
            EliminationResult("A", EliminationStatus.ELIMINATED, ())
        with pytest.raises(DivelimError, match="NOT_ELIMINATED"):
            EliminationResult("A", EliminationStatus.NOT_ELIMINATED, ("B",))

    def test_to_dict(self):
        assert EliminationResult.eliminated_by("M", ("A",), "trivial").to_dict() == {
            "competitor": "M",
            "status": "eliminated",
            "eliminated": True,
            "certificate": ["A"],
            "method": "trivial",
        }
        assert EliminationResult.not_eliminated("A", "maxflow").to_dict()[
            "certificate"
        ] is None
