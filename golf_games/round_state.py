"""
Round state: everything one scorecard needs, in one object.

Score entry goes through ``set_score``/``clear_score``; every enabled game is
then rebuilt from the gross scores (reset and replay), so the order in which
scores arrive or get corrected never changes the outcome.
"""
import logging
from datetime import date
from typing import Optional

from .better_ball import BetterBallEngine
from .errors import GolfGamesError, InvalidGameConfig, InvalidHole, InvalidPress, UnknownGolfer
from .golf_calc import allocate_strokes, course_handicap
from .ledger import ScoreLedger
from .match_play import MatchPlayEngine
from .nine_point import NinePointEngine
from .schemas import Golfer, Hole, RoundFormat, RoundIn, RoundSummary, Side, Tee
from .stableford import GROSS, NET, StablefordEngine
from .stroke_play import golfer_totals

logger = logging.getLogger(__name__)


class RoundState:

    def __init__(self, tee: Tee, holes: list[Hole], golfers: list[Golfer],
                 round_format: RoundFormat = RoundFormat.FULL18, course_name: str = "",
                 round_date: Optional[date] = None):
        if not golfers:
            raise InvalidGameConfig("a round needs at least one golfer")
        ids = [g.id for g in golfers]
        if len(set(ids)) != len(ids):
            raise InvalidGameConfig("golfer ids must be unique")

        self.tee = tee
        self.course_name = course_name
        self.round_date = round_date
        self.round_format = round_format
        self.holes = sorted((h for h in holes if round_format.contains(h.number)), key=lambda h: h.number)
        self.pars = {h.number: h.par for h in self.holes}
        if not self.holes:
            logger.warning("no hole data for %s %s, scoring will wait for it", course_name, round_format.value)

        self.golfers: dict[str, Golfer] = {}
        for g in golfers:
            if g.course_handicap is None:
                ch = course_handicap(g.handicap_index, tee.slope_rating, tee.course_rating, tee.par)
                g = g.model_copy(update={"course_handicap": ch})
            self.golfers[g.id] = g

        self.ledger = ScoreLedger()
        self.course_allocation = allocate_strokes(self.course_handicaps, self.holes)

        self.match_play: Optional[MatchPlayEngine] = None
        self.better_ball: Optional[BetterBallEngine] = None
        self.nine_point: Optional[NinePointEngine] = None
        self.stableford: dict[str, StablefordEngine] = {}

        for g in self.golfers.values():
            logger.debug("%s course handicap %s, stroke holes %s",
                         g.name, g.course_handicap, self.course_allocation.holes[g.id])

    # ---- roster ----

    @property
    def course_handicaps(self) -> dict[str, int]:
        return {gid: g.course_handicap for gid, g in self.golfers.items()}

    def golfer(self, golfer_id: str) -> Golfer:
        try:
            return self.golfers[golfer_id]
        except KeyError:
            raise UnknownGolfer(f"golfer {golfer_id} is not playing this round") from None

    # ---- games ----

    def enable_match_play(self, golfer_a_id: str, golfer_b_id: str, trailing_only_presses: bool = False):
        engine = MatchPlayEngine(
            self.round_format,
            self.golfer(golfer_a_id),
            self.golfer(golfer_b_id),
            self.holes,
            trailing_only_presses=trailing_only_presses,
        )
        self.match_play = engine
        engine.tally(self)
        return engine

    def enable_better_ball(self, teams: Optional[dict[str, Side]] = None, tiebreak_balls: int = 1,
                           trailing_only_presses: bool = False):
        if teams is None:
            teams = {gid: g.side for gid, g in self.golfers.items() if g.side is not None}
        engine = BetterBallEngine(
            self.round_format,
            list(self.golfers.values()),
            teams,
            self.holes,
            tiebreak_balls=tiebreak_balls,
            trailing_only_presses=trailing_only_presses,
        )
        self.better_ball = engine
        engine.tally(self)
        return engine

    def enable_nine_point(self, golfer_ids: Optional[list[str]] = None, relative_strokes: bool = True):
        if golfer_ids is None:
            golfer_ids = list(self.golfers)
        golfers = [self.golfer(gid) for gid in golfer_ids]
        engine = NinePointEngine(self.round_format, golfers, self.holes, relative_strokes=relative_strokes)
        self.nine_point = engine
        engine.recalculate(self)
        return engine

    def enable_stableford(self, variant: str = GROSS, quotas: Optional[dict[str, int]] = None):
        engine = StablefordEngine(
            variant,
            self.round_format,
            list(self.golfers.values()),
            self.holes,
            allocation=self.course_allocation,
            quotas=quotas,
        )
        self.stableford[variant] = engine
        engine.recalculate(self)
        return engine

    def press_match_play(self, at_hole: int, side: Optional[Side] = None):
        if self.match_play is None:
            raise InvalidPress("match play is not being played this round")
        return self.match_play.start_press(at_hole, side)

    def press_better_ball(self, at_hole: int, side: Optional[Side] = None):
        if self.better_ball is None:
            raise InvalidPress("better ball is not being played this round")
        return self.better_ball.start_press(at_hole, side)

    # ---- score entry ----

    def check_hole(self, hole: int):
        if not self.round_format.contains(hole):
            raise InvalidHole(f"hole {hole} is not part of a {self.round_format.value} round")

    def set_score(self, hole: int, golfer_id: str, gross: int):
        self.check_hole(hole)
        self.golfer(golfer_id)
        if gross < 1:
            raise GolfGamesError(f"gross score must be positive, got {gross}")
        self.ledger.set_gross(hole, golfer_id, gross)
        self.recalculate()

    def clear_score(self, hole: int, golfer_id: str):
        self.check_hole(hole)
        self.golfer(golfer_id)
        self.ledger.clear_gross(hole, golfer_id)
        self.recalculate()

    def recalculate(self, up_to_hole: Optional[int] = None):
        for engine in (self.match_play, self.better_ball):
            if engine is not None:
                engine.tally(self, up_to_hole)
        if self.nine_point is not None:
            self.nine_point.recalculate(self, up_to_hole)
        for engine in self.stableford.values():
            engine.recalculate(self, up_to_hole)

    # ---- queries ----

    def all_scores_entered(self, hole: Optional[int] = None) -> bool:
        holes = [hole] if hole is not None else self.round_format.holes()
        return all(self.ledger.has_all(h, self.golfers) for h in holes)

    def missing_scores(self) -> dict[str, list[int]]:
        return {
            gid: [h for h in self.round_format.holes() if self.ledger.get_gross(h, gid) is None]
            for gid in self.golfers
        }

    def current_hole(self) -> Optional[int]:
        for hole in self.round_format.holes():
            if not self.all_scores_entered(hole):
                return hole
        return None

    def gross_scores(self) -> dict[int, dict[str, int]]:
        return {h: dict(s) for h, s in sorted(self.ledger.gross.items()) if self.round_format.contains(h)}

    def net_scores(self) -> dict[int, dict[str, int]]:
        return self.ledger.net_table(self.course_allocation, holes=self.round_format.holes())

    def summary(self) -> RoundSummary:
        return RoundSummary(
            course_name=self.course_name,
            date=self.round_date,
            tee_name=self.tee.name,
            round_format=self.round_format,
            golfers=[golfer_totals(self, g) for g in self.golfers.values()],
            gross_scores=self.gross_scores(),
            net_scores=self.net_scores(),
            missing_scores=self.missing_scores(),
            match_play=self.match_play.summary_for(self) if self.match_play else None,
            better_ball=self.better_ball.summary_for(self) if self.better_ball else None,
            nine_point=self.nine_point.summary() if self.nine_point else None,
            stableford_gross=self.stableford[GROSS].summary() if GROSS in self.stableford else None,
            stableford_net=self.stableford[NET].summary() if NET in self.stableford else None,
        )


def build_round(data: RoundIn) -> RoundState:
    """Set up a round from a request payload and replay its scores and presses in hole order."""
    state = RoundState(
        data.tee,
        data.holes,
        data.golfers,
        round_format=data.round_format,
        course_name=data.course_name,
        round_date=data.date,
    )

    games = data.games
    presses = []
    if games.match_play is not None:
        if len(games.match_play.golfer_ids) != 2:
            raise InvalidGameConfig("match play needs exactly 2 golfers")
        a, b = games.match_play.golfer_ids
        state.enable_match_play(a, b, trailing_only_presses=games.match_play.trailing_only_presses)
        presses += [(p.at_hole, state.press_match_play, p.side) for p in games.match_play.presses]
    if games.better_ball is not None:
        state.enable_better_ball(
            games.better_ball.teams,
            tiebreak_balls=games.better_ball.tiebreak_balls,
            trailing_only_presses=games.better_ball.trailing_only_presses,
        )
        presses += [(p.at_hole, state.press_better_ball, p.side) for p in games.better_ball.presses]
    if games.nine_point is not None:
        state.enable_nine_point(games.nine_point.golfer_ids, relative_strokes=games.nine_point.relative_strokes)
    if games.stableford_gross is not None:
        state.enable_stableford(GROSS, games.stableford_gross.quotas)
    if games.stableford_net is not None:
        state.enable_stableford(NET, games.stableford_net.quotas)

    scores = sorted(data.scores, key=lambda s: s.hole)
    presses.sort(key=lambda p: p[0])

    def enter(entry):
        if entry.gross is None:
            state.clear_score(entry.hole, entry.golfer_id)
        else:
            state.set_score(entry.hole, entry.golfer_id, entry.gross)

    i = 0
    for at_hole, press, side in presses:
        while i < len(scores) and scores[i].hole < at_hole:
            enter(scores[i])
            i += 1
        press(at_hole, side)
    for entry in scores[i:]:
        enter(entry)

    return state
