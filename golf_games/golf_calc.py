import math

from pydantic import BaseModel

from .schemas import Hole


def course_handicap(handicap_index: float, slope: int, rating: float, par: int) -> int:
    raw = handicap_index * slope / 113.0 + (rating - par)
    # .5 always goes up, for plus handicaps too (-2.5 -> -2)
    return int(math.floor(raw + 0.5))


def stroke_holes(target_handicap: int, holes: list[Hole]) -> list[int]:
    """
    holes: list of Hole with handicap rank (1 = hardest)
    returns the hole numbers that receive a stroke, hardest first.
    A plus (negative) handicap gives strokes back on the easiest holes instead.
    """
    ordered = sorted(holes, key=lambda h: h.handicap)
    count = min(abs(target_handicap), len(ordered))
    if count == 0:
        return []

    if target_handicap >= 0:
        chosen = ordered[:count]
    else:
        chosen = ordered[-count:]
    return [h.number for h in chosen]


def net_score(gross: int, is_stroke_hole: bool, target_handicap: int = 0) -> int:
    if not is_stroke_hole:
        return gross
    return gross + 1 if target_handicap < 0 else gross - 1


class StrokeAllocation(BaseModel):
    """Stroke holes per golfer for one scoring context (course, match, ...)."""

    holes: dict[str, list[int]] = {}
    handicaps: dict[str, int] = {}

    def is_stroke_hole(self, golfer_id: str, hole: int) -> bool:
        return hole in self.holes.get(golfer_id, [])

    def net(self, golfer_id: str, hole: int, gross: int) -> int:
        return net_score(gross, self.is_stroke_hole(golfer_id, hole), self.handicaps.get(golfer_id, 0))


def game_handicaps(handicaps: dict[str, float]) -> dict[str, int]:
    # lowest handicap in the group plays off scratch
    if not handicaps:
        return {}
    lowest = min(handicaps.values())
    return {gid: int(round(max(0, h - lowest))) for gid, h in handicaps.items()}


def allocate_strokes(targets: dict[str, int], holes: list[Hole]) -> StrokeAllocation:
    return StrokeAllocation(
        holes={gid: stroke_holes(t, holes) for gid, t in targets.items()},
        handicaps=dict(targets),
    )


def stableford_points(score: int, par: int) -> int:
    diff = score - par
    if diff >= 2: return 0
    if diff == 1: return 1
    if diff == 0: return 2
    if diff == -1: return 4
    if diff == -2: return 6
    return 8


def default_quota(course_hcp: int) -> int:
    return 36 - course_hcp


def nine_point_points(net_scores: dict[str, int]) -> dict[str, int]:
    """Split the nine points of a hole between three players by net score."""
    if len(net_scores) != 3:
        raise ValueError("nine point needs exactly three net scores")

    (low_id, low), (mid_id, mid), (high_id, high) = sorted(net_scores.items(), key=lambda kv: kv[1])

    if low == mid == high:
        pts = (3, 3, 3)
    elif low == mid:
        pts = (4, 4, 1)
    elif mid == high:
        pts = (5, 2, 2)
    else:
        pts = (5, 3, 1)

    return {low_id: pts[0], mid_id: pts[1], high_id: pts[2]}


def format_score_to_par(score_to_par: int) -> str:
    if score_to_par == 0:
        return "E"
    if score_to_par > 0:
        return f"+{score_to_par}"
    return str(score_to_par)


def position_label(position: int) -> str:
    if 10 <= position % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(position % 10, "th")
    return f"{position}{suffix}"


def competition_positions(values: list[int]) -> list[int]:
    """Positions for values already sorted best first; equal values share a position."""
    positions = []
    for i, v in enumerate(values):
        if i > 0 and v == values[i - 1]:
            positions.append(positions[-1])
        else:
            positions.append(i + 1)
    return positions
