import logging

from .errors import InvalidGameConfig
from .golf_calc import allocate_strokes, game_handicaps
from .match_engine import TwoSidedMatch
from .schemas import Golfer, Hole, RoundFormat, Side

logger = logging.getLogger(__name__)


class MatchPlayEngine(TwoSidedMatch):
    """Golfer against golfer; the higher handicap gets the difference in strokes."""

    game = "match_play"

    def __init__(self, round_format: RoundFormat, golfer_a: Golfer, golfer_b: Golfer, holes: list[Hole],
                 trailing_only_presses: bool = False):
        if golfer_a.id == golfer_b.id:
            raise InvalidGameConfig("match play needs two different golfers")

        super().__init__(
            round_format,
            {Side.A: golfer_a.name, Side.B: golfer_b.name},
            trailing_only_presses=trailing_only_presses,
        )
        self.golfer_ids = {Side.A: golfer_a.id, Side.B: golfer_b.id}

        handicaps = {}
        for g in (golfer_a, golfer_b):
            if g.course_handicap is None:
                logger.warning("no course handicap for %s, playing off scratch", g.name)
            handicaps[g.id] = g.course_handicap or 0

        self.game_handicaps = game_handicaps(handicaps)
        self.allocation = allocate_strokes(self.game_handicaps, holes)
        logger.info("match play %s v %s, strokes %s", golfer_a.name, golfer_b.name, self.game_handicaps)

    def side_score(self, state, hole, side):
        return state.ledger.net(hole, self.golfer_ids[side], self.allocation)

    def net_scores(self, state):
        return state.ledger.net_table(
            self.allocation,
            golfer_ids=set(self.golfer_ids.values()),
            holes=self.round_format.holes(),
        )

    def summary_for(self, state):
        return self.summary(net_scores=self.net_scores(state), stroke_holes=self.allocation.holes)
