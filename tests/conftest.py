import os
import tempfile

import pytest

# the app creates its tables on import, so the database must be chosen first
_db_dir = tempfile.mkdtemp(prefix="golf_games_test_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ.pop("ADMIN_KEY", None)

from golf_games.schemas import Golfer, Hole, RoundFormat, Side, Tee  # noqa: E402
from golf_games.round_state import RoundState  # noqa: E402

# stroke index per hole, 1 = hardest
HOLE_HANDICAPS = [7, 15, 1, 11, 3, 17, 9, 13, 5, 8, 16, 2, 12, 4, 18, 10, 14, 6]
HOLE_PARS = [4, 3, 5, 4, 4, 3, 4, 5, 4, 4, 3, 5, 4, 4, 3, 4, 5, 4]


def make_holes():
    return [
        Hole(number=n, par=par, handicap=hcp)
        for n, (par, hcp) in enumerate(zip(HOLE_PARS, HOLE_HANDICAPS), start=1)
    ]


def make_tee():
    return Tee(name="white", course_rating=72.0, slope_rating=113, par=72)


@pytest.fixture
def holes():
    return make_holes()


@pytest.fixture
def tee():
    return make_tee()


@pytest.fixture
def make_round():
    def _make(golfers, round_format=RoundFormat.FULL18):
        return RoundState(make_tee(), make_holes(), golfers, round_format=round_format, course_name="Test Links")
    return _make


@pytest.fixture
def four_golfers():
    return [
        Golfer(id="ann", name="Ann", course_handicap=4, side=Side.A),
        Golfer(id="bob", name="Bob", course_handicap=10, side=Side.A),
        Golfer(id="cat", name="Cat", course_handicap=6, side=Side.B),
        Golfer(id="dan", name="Dan", course_handicap=12, side=Side.B),
    ]
