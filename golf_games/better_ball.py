import logging

from .errors import InvalidGameConfig
from .golf_calc import allocate_strokes, game_handicaps
from .match_engine import TwoSidedMatch, compare_scores
from .schemas import Golfer, Hole, RoundFormat, Side

logger = logging.getLogger(__name__)


class BetterBallEngine(TwoSidedMatch):
    """
    Team match where each side posts the lowest net ball among its members.

    Strokes are given off the lowest handicap across both teams. With
    ``tiebreak_balls`` > 1 a tie on the best ball is broken by the next best
    balls, in order.
    """

    game = "better_ball"

    def __init__(self, round_format: RoundFormat, golfers: list[Golfer], teams: dict[str, Side], holes: list[Hole],
                 tiebreak_balls: int = 1, trailing_only_presses: bool = False):
        by_id = {g.id: g for g in golfers}
        members = {Side.A: [], Side.B: []}
        for gid, side in teams.items():
            if gid not in by_id:
                raise InvalidGameConfig(f"golfer {gid} is not playing this round")
            members[Side(side)].append(by_id[gid])

        for side, team in members.items():
            if not team:
                raise InvalidGameConfig(f"better ball team {side.value} has no players")
        if tiebreak_balls < 1:
            raise InvalidGameConfig("tiebreak_balls must be at least 1")

        super().__init__(
            round_format,
            {Side.A: "Team A", Side.B: "Team B"},
            trailing_only_presses=trailing_only_presses,
        )
        self.members = {side: [g.id for g in team] for side, team in members.items()}
        self.tiebreak_balls = tiebreak_balls

        handicaps = {g.id: g.course_handicap or 0 for team in members.values() for g in team}
        self.game_handicaps = game_handicaps(handicaps)
        self.allocation = allocate_strokes(self.game_handicaps, holes)
        logger.info(
            "better ball %s v %s, strokes %s",
            [g.name for g in members[Side.A]], [g.name for g in members[Side.B]], self.game_handicaps,
        )

    def team_scores(self, state, hole: int, side: Side) -> list[int]:
        scores = []
        for gid in self.members[side]:
            net = state.ledger.net(hole, gid, self.allocation)
            if net is not None:
                scores.append(net)
        return sorted(scores)

    def side_score(self, state, hole, side):
        scores = self.team_scores(state, hole, side)
        return scores[0] if scores else None

    def hole_result(self, state, hole):
        a = self.team_scores(state, hole, Side.A)
        b = self.team_scores(state, hole, Side.B)
        if not a or not b:
            logger.debug("better ball hole %s unresolved, a=%s b=%s", hole, a, b)
            return None

        for i in range(min(self.tiebreak_balls, len(a), len(b))):
            result = compare_scores(a[i], b[i])
            if result:
                return result
        return 0

    def net_scores(self, state):
        golfer_ids = set(self.members[Side.A]) | set(self.members[Side.B])
        return state.ledger.net_table(self.allocation, golfer_ids=golfer_ids, holes=self.round_format.holes())

    def summary_for(self, state):
        return self.summary(net_scores=self.net_scores(state), stroke_holes=self.allocation.holes)
