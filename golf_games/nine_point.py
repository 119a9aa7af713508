import logging
from typing import Optional

from .errors import InvalidGameConfig
from .golf_calc import (
    allocate_strokes,
    competition_positions,
    game_handicaps,
    nine_point_points,
    position_label,
)
from .schemas import Golfer, Hole, PointsSummary, RoundFormat, StandingRow

logger = logging.getLogger(__name__)


class NinePointEngine:
    """Three players split nine points on every hole by net score."""

    game = "nine_point"

    def __init__(self, round_format: RoundFormat, golfers: list[Golfer], holes: list[Hole], relative_strokes: bool = True):
        ids = [g.id for g in golfers]
        if len(ids) != 3 or len(set(ids)) != 3:
            raise InvalidGameConfig(f"nine point needs exactly 3 players, got {len(set(ids))}")

        self.round_format = round_format
        self.golfers = list(golfers)
        self.relative_strokes = relative_strokes

        handicaps = {g.id: g.course_handicap or 0 for g in golfers}
        targets = game_handicaps(handicaps) if relative_strokes else handicaps
        self.allocation = allocate_strokes(targets, holes)

        self.points: dict[int, dict[str, int]] = {}
        self.totals: dict[str, int] = {}
        self.reset()

    @property
    def golfer_ids(self) -> list[str]:
        return [g.id for g in self.golfers]

    def reset(self):
        self.points = {}
        self.totals = {gid: 0 for gid in self.golfer_ids}

    def score_hole(self, state, hole: int) -> Optional[dict[str, int]]:
        if not state.ledger.has_all(hole, self.golfer_ids):
            logger.debug("nine point: not all scores entered for hole %s, skipping", hole)
            return None

        nets = {gid: state.ledger.net(hole, gid, self.allocation) for gid in self.golfer_ids}
        pts = nine_point_points(nets)
        self.points[hole] = pts
        for gid, p in pts.items():
            self.totals[gid] += p
        return pts

    def recalculate(self, state, up_to_hole: Optional[int] = None):
        self.reset()
        for hole in self.round_format.holes():
            if up_to_hole is not None and hole > up_to_hole:
                break
            self.score_hole(state, hole)
        logger.debug("nine point totals: %s", self.totals)

    def standings(self) -> list[StandingRow]:
        ordered = sorted(self.golfers, key=lambda g: -self.totals[g.id])
        positions = competition_positions([self.totals[g.id] for g in ordered])
        return [
            StandingRow(
                position=pos,
                label=position_label(pos),
                golfer_id=g.id,
                name=g.name,
                points=self.totals[g.id],
            )
            for pos, g in zip(positions, ordered)
        ]

    def summary(self) -> PointsSummary:
        return PointsSummary(
            game=self.game,
            points=self.points,
            totals=self.totals,
            standings=self.standings(),
        )
