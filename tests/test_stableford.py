import pytest

from golf_games.errors import InvalidGameConfig
from golf_games.round_state import RoundState
from golf_games.schemas import Golfer, RoundFormat
from golf_games.stableford import GROSS, NET, StablefordEngine, format_quota_status


def pair():
    return [
        Golfer(id="ann", name="Ann", course_handicap=4),
        Golfer(id="bob", name="Bob", course_handicap=10),
    ]


def test_quota_status_strings():
    assert format_quota_status(3) == "+3 over"
    assert format_quota_status(-4) == "4 under"
    assert format_quota_status(0) == "met"


def test_gross_points_and_default_quota(make_round):
    state = make_round(pair())
    sf = state.enable_stableford(GROSS)
    state.set_score(1, "ann", 4)   # par
    state.set_score(2, "ann", 2)   # birdie on a par 3
    assert sf.points == {1: {"ann": 2}, 2: {"ann": 4}}
    assert sf.totals["ann"] == 6
    assert sf.quotas == {"ann": 32, "bob": 26}
    assert sf.quota_status("ann") == "26 under"


def test_net_variant_uses_course_strokes(make_round):
    state = make_round(pair())
    gross = state.enable_stableford(GROSS)
    net = state.enable_stableford(NET)
    # hole 3 is the hardest hole, par 5
    state.set_score(3, "bob", 6)
    assert gross.points[3]["bob"] == 1
    assert net.points[3]["bob"] == 2
    assert net.game == "stableford_net"


def test_quota_override_and_standings(make_round):
    state = make_round(pair())
    sf = state.enable_stableford(GROSS, quotas={"ann": 3, "bob": 2})
    state.set_score(1, "ann", 4)
    state.set_score(2, "ann", 3)
    state.set_score(1, "bob", 3)

    rows = sf.standings()
    assert [r.golfer_id for r in rows] == ["bob", "ann"]
    assert rows[0].over_quota == 2
    assert rows[0].quota_status == "+2 over"
    assert rows[1].quota_status == "+1 over"


def test_hole_without_data_is_skipped(tee, holes):
    holes = [h for h in holes if h.number != 2]
    state = RoundState(tee, holes, pair())
    sf = state.enable_stableford(GROSS)
    state.set_score(1, "ann", 4)
    state.set_score(2, "ann", 3)
    assert 2 not in sf.points
    assert sf.totals["ann"] == 2


def test_rescoring_replays_from_scratch(make_round):
    state = make_round(pair())
    sf = state.enable_stableford(GROSS)
    state.set_score(1, "ann", 3)
    state.set_score(1, "ann", 5)
    assert sf.totals["ann"] == 1


def test_unknown_variant(holes):
    with pytest.raises(InvalidGameConfig):
        StablefordEngine("scratch", RoundFormat.FULL18, pair(), holes)
