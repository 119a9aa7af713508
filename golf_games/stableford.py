import logging
from typing import Optional

from .errors import InvalidGameConfig
from .golf_calc import StrokeAllocation, competition_positions, default_quota, position_label, stableford_points
from .schemas import Golfer, Hole, PointsSummary, RoundFormat, StandingRow

logger = logging.getLogger(__name__)

GROSS = "gross"
NET = "net"


def format_quota_status(over: int) -> str:
    if over > 0:
        return f"+{over} over"
    if over < 0:
        return f"{abs(over)} under"
    return "met"


class StablefordEngine:
    """
    Quota Stableford. The gross variant scores gross strokes against par, the
    net variant scores net strokes after course handicap strokes.
    """

    def __init__(self, variant: str, round_format: RoundFormat, golfers: list[Golfer], holes: list[Hole],
                 allocation: Optional[StrokeAllocation] = None, quotas: Optional[dict[str, int]] = None):
        if variant not in (GROSS, NET):
            raise InvalidGameConfig(f"unknown stableford variant {variant!r}")
        if not golfers:
            raise InvalidGameConfig("stableford needs at least one golfer")

        self.variant = variant
        self.round_format = round_format
        self.golfers = list(golfers)
        self.pars = {h.number: h.par for h in holes}
        self.allocation = allocation or StrokeAllocation()

        quotas = quotas or {}
        self.quotas = {
            g.id: quotas[g.id] if g.id in quotas else default_quota(g.course_handicap or 0)
            for g in golfers
        }

        self.points: dict[int, dict[str, int]] = {}
        self.totals: dict[str, int] = {}
        self.reset()

    @property
    def game(self) -> str:
        return f"stableford_{self.variant}"

    def reset(self):
        self.points = {}
        self.totals = {g.id: 0 for g in self.golfers}

    def score_for(self, state, hole: int, golfer_id: str) -> Optional[int]:
        gross = state.ledger.get_gross(hole, golfer_id)
        if gross is None or self.variant == GROSS:
            return gross
        return self.allocation.net(golfer_id, hole, gross)

    def score_hole(self, state, hole: int):
        par = self.pars.get(hole)
        if par is None:
            logger.debug("%s: hole data not found for hole %s", self.game, hole)
            return

        for g in self.golfers:
            score = self.score_for(state, hole, g.id)
            if score is None:
                continue
            pts = stableford_points(score, par)
            self.points.setdefault(hole, {})[g.id] = pts
            self.totals[g.id] += pts

    def recalculate(self, state, up_to_hole: Optional[int] = None):
        self.reset()
        for hole in self.round_format.holes():
            if up_to_hole is not None and hole > up_to_hole:
                break
            self.score_hole(state, hole)
        logger.debug("%s totals: %s", self.game, self.totals)

    def quota_delta(self, golfer_id: str) -> int:
        return self.totals.get(golfer_id, 0) - self.quotas.get(golfer_id, 0)

    def quota_status(self, golfer_id: str) -> str:
        return format_quota_status(self.quota_delta(golfer_id))

    def standings(self) -> list[StandingRow]:
        ordered = sorted(self.golfers, key=lambda g: -self.quota_delta(g.id))
        positions = competition_positions([self.quota_delta(g.id) for g in ordered])
        return [
            StandingRow(
                position=pos,
                label=position_label(pos),
                golfer_id=g.id,
                name=g.name,
                points=self.totals[g.id],
                quota=self.quotas[g.id],
                over_quota=self.quota_delta(g.id),
                quota_status=self.quota_status(g.id),
            )
            for pos, g in zip(positions, ordered)
        ]

    def summary(self) -> PointsSummary:
        return PointsSummary(
            game=self.game,
            points=self.points,
            totals=self.totals,
            standings=self.standings(),
            quotas=self.quotas,
        )
