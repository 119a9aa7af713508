import logging
from typing import Optional

from .golf_calc import StrokeAllocation

logger = logging.getLogger(__name__)


class ScoreLedger:
    """Gross scores keyed by hole number, then golfer id."""

    def __init__(self):
        self.gross: dict[int, dict[str, int]] = {}

    def set_gross(self, hole: int, golfer_id: str, score: int):
        self.gross.setdefault(hole, {})[golfer_id] = score
        logger.debug("gross score hole=%s golfer=%s score=%s", hole, golfer_id, score)

    def clear_gross(self, hole: int, golfer_id: str):
        scores = self.gross.get(hole)
        if not scores:
            return
        scores.pop(golfer_id, None)
        if not scores:
            del self.gross[hole]

    def get_gross(self, hole: int, golfer_id: str) -> Optional[int]:
        return self.gross.get(hole, {}).get(golfer_id)

    def net(self, hole: int, golfer_id: str, allocation: StrokeAllocation) -> Optional[int]:
        g = self.get_gross(hole, golfer_id)
        if g is None:
            return None
        return allocation.net(golfer_id, hole, g)

    def net_table(self, allocation: StrokeAllocation, golfer_ids=None, holes=None) -> dict[int, dict[str, int]]:
        table: dict[int, dict[str, int]] = {}
        for hole in sorted(self.gross):
            if holes is not None and hole not in holes:
                continue
            for gid, g in self.gross[hole].items():
                if golfer_ids is not None and gid not in golfer_ids:
                    continue
                table.setdefault(hole, {})[gid] = allocation.net(gid, hole, g)
        return table

    def has_all(self, hole: int, golfer_ids) -> bool:
        scores = self.gross.get(hole, {})
        return all(gid in scores for gid in golfer_ids)

