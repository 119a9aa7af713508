import random

import pytest

from golf_games.errors import InvalidGameConfig
from golf_games.schemas import Golfer


def threesome():
    return [
        Golfer(id="ann", name="Ann", course_handicap=4),
        Golfer(id="bob", name="Bob", course_handicap=10),
        Golfer(id="cat", name="Cat", course_handicap=6),
    ]


def scores(state, hole, ann, bob, cat):
    state.set_score(hole, "ann", ann)
    state.set_score(hole, "bob", bob)
    state.set_score(hole, "cat", cat)


def test_points_on_hole_without_strokes(make_round):
    state = make_round(threesome())
    np = state.enable_nine_point()
    scores(state, 2, 4, 5, 6)
    assert np.points[2] == {"ann": 5, "bob": 3, "cat": 1}


def test_relative_strokes(make_round):
    state = make_round(threesome())
    np = state.enable_nine_point()
    assert np.allocation.handicaps == {"ann": 0, "bob": 6, "cat": 2}
    # hardest hole: Bob and Cat both get a stroke
    scores(state, 3, 5, 6, 6)
    assert np.points[3] == {"ann": 3, "bob": 3, "cat": 3}


def test_full_course_handicap_strokes(make_round):
    state = make_round(threesome())
    np = state.enable_nine_point(relative_strokes=False)
    scores(state, 3, 5, 6, 6)
    assert np.points[3] == {"ann": 5, "bob": 2, "cat": 2}


def test_incomplete_hole_is_skipped(make_round):
    state = make_round(threesome())
    np = state.enable_nine_point()
    scores(state, 2, 4, 5, 6)
    state.set_score(4, "ann", 4)
    state.set_score(4, "bob", 4)
    assert 4 not in np.points
    assert np.totals == {"ann": 5, "bob": 3, "cat": 1}


def test_every_complete_hole_sums_to_nine(make_round):
    state = make_round(threesome())
    np = state.enable_nine_point()
    rng = random.Random(7)
    for hole in range(1, 19):
        scores(state, hole, rng.randint(3, 7), rng.randint(3, 7), rng.randint(3, 7))
    assert all(sum(p.values()) == 9 for p in np.points.values())
    assert sum(np.totals.values()) == 9 * 18


def test_out_of_order_entry_matches_in_order(make_round):
    rng = random.Random(11)
    card = [
        (hole, gid, rng.randint(3, 7))
        for hole in range(1, 10)
        for gid in ("ann", "bob", "cat")
    ]

    in_order = make_round(threesome())
    in_order.enable_nine_point()
    for hole, gid, g in card:
        in_order.set_score(hole, gid, g)

    shuffled = list(card)
    rng.shuffle(shuffled)
    scrambled = make_round(threesome())
    scrambled.enable_nine_point()
    for hole, gid, g in shuffled:
        scrambled.set_score(hole, gid, 9)
        scrambled.set_score(hole, gid, g)

    assert scrambled.nine_point.points == in_order.nine_point.points
    assert scrambled.nine_point.totals == in_order.nine_point.totals


def test_standings(make_round):
    state = make_round(threesome())
    np = state.enable_nine_point()
    scores(state, 2, 4, 4, 6)
    rows = np.standings()
    assert [(r.label, r.golfer_id, r.points) for r in rows] == [
        ("1st", "ann", 4),
        ("1st", "bob", 4),
        ("3rd", "cat", 1),
    ]


def test_needs_exactly_three(make_round, four_golfers):
    state = make_round(four_golfers)
    with pytest.raises(InvalidGameConfig):
        state.enable_nine_point()
    assert state.nine_point is None

    np = state.enable_nine_point(["ann", "bob", "cat"])
    assert np.golfer_ids == ["ann", "bob", "cat"]
