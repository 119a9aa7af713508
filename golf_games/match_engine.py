"""
Two-sided match play with presses.

Match play (golfer against golfer) and better ball (team against team) share
the same state machine. A side is always ``Side.A`` or ``Side.B``; a hole
result is +1 when A wins it, -1 when B wins it and 0 when halved.
"""
import logging
from typing import Optional

from pydantic import BaseModel

from .errors import InvalidPress
from .schemas import MatchSummary, PressSummary, RoundFormat, Side, hole_to_index

logger = logging.getLogger(__name__)


def format_winning_score(lead: int, remaining: int) -> str:
    return normalize_winning_score(f"{lead}&{remaining}")


def normalize_winning_score(score: str) -> str:
    # "2&0" means the match went the distance: report it as "2UP"
    if score.endswith("&0"):
        return f"{score.split('&')[0]}UP"
    return score


def compare_scores(score_a: int, score_b: int) -> int:
    if score_a < score_b:
        return 1
    if score_b < score_a:
        return -1
    return 0


class MatchState(BaseModel):
    start_hole: int
    last_hole: int
    status: list[int]
    score: int = 0
    through_hole: Optional[int] = None
    winner: Optional[Side] = None
    winning_score: Optional[str] = None
    winning_hole: Optional[int] = None
    halved: bool = False
    dormie: bool = False

    @classmethod
    def fresh(cls, round_format: RoundFormat, start_hole: Optional[int] = None) -> "MatchState":
        return cls(
            start_hole=start_hole or round_format.starting_hole,
            last_hole=round_format.last_hole,
            status=[0] * round_format.total_holes,
        )

    @property
    def finished(self) -> bool:
        return self.winner is not None or self.halved

    @property
    def holes_played(self) -> int:
        if self.through_hole is None:
            return 0
        return self.through_hole - self.start_hole + 1

    @property
    def remaining(self) -> int:
        if self.through_hole is None:
            return self.last_hole - self.start_hole + 1
        return self.last_hole - self.through_hole

    def record(self, hole: int, result: int) -> bool:
        """Write one hole result. Frozen matches and holes outside the range are ignored."""
        if self.finished:
            return False
        if hole < self.start_hole or hole > self.last_hole:
            return False
        self.status[hole_to_index(hole, self.start_hole)] = result
        return True

    def evaluate(self, through_hole: int):
        if self.finished:
            return
        through = min(through_hole, self.last_hole)
        if through < self.start_hole:
            return

        self.through_hole = through
        self.score = sum(self.status[:hole_to_index(through, self.start_hole) + 1])
        remaining = self.last_hole - through
        lead = abs(self.score)
        self.dormie = False

        if lead > remaining:
            self.winner = Side.from_sign(self.score)
            self.winning_score = format_winning_score(lead, remaining)
            self.winning_hole = through
        elif remaining == 0:
            self.halved = True
            self.winning_hole = through
        elif lead == remaining:
            self.dormie = True

    def describe(self, names: dict[Side, str]) -> str:
        if self.winner is not None:
            return f"{names[self.winner]} won {self.winning_score}"
        if self.halved:
            return "Match ended All Square"
        if self.score == 0:
            return f"All Square thru {self.holes_played}"

        leader = names[Side.from_sign(self.score)]
        lead = abs(self.score)
        if self.dormie:
            return f"{leader} {lead}UP with {self.remaining} to play (Dormie)"
        return f"{leader} {lead}UP thru {self.holes_played}"


class Press(BaseModel):
    start_hole: int
    side: Optional[Side] = None
    state: MatchState


class TwoSidedMatch:
    """
    Main match plus presses, rebuilt from the recorded hole results on every
    recalculation so that corrected scores never double count.

    Subclasses provide ``side_score`` (the net score a side posts on a hole)
    or override ``hole_result`` for games with their own comparison rule.
    """

    game = "match"

    def __init__(self, round_format: RoundFormat, names: dict[Side, str], trailing_only_presses: bool = False):
        self.round_format = round_format
        self.names = names
        self.trailing_only_presses = trailing_only_presses
        self.hole_results: dict[int, int] = {}
        self.main = MatchState.fresh(round_format)
        self.presses: list[Press] = []
        self.through_hole: Optional[int] = None

    # ---- hole results ----

    def record_hole_result(self, hole: int, net_a: int, net_b: int) -> int:
        """Store (or overwrite) one hole and replay the match; returns +1, -1 or 0."""
        result = compare_scores(net_a, net_b)
        self.hole_results[hole] = result
        self.recalculate()
        return result

    def clear_hole_result(self, hole: int):
        self.hole_results.pop(hole, None)

    def side_score(self, state, hole: int, side: Side) -> Optional[int]:
        raise NotImplementedError

    def hole_result(self, state, hole: int) -> Optional[int]:
        a = self.side_score(state, hole, Side.A)
        b = self.side_score(state, hole, Side.B)
        if a is None or b is None:
            return None
        return compare_scores(a, b)

    def tally(self, state, up_to_hole: Optional[int] = None):
        """Pull every hole result out of the round state, then replay the match."""
        for hole in self.round_format.holes():
            result = self.hole_result(state, hole)
            if result is None:
                self.clear_hole_result(hole)
            else:
                self.hole_results[hole] = result
        self.recalculate(up_to_hole)

    def last_contiguous_hole(self) -> Optional[int]:
        last = None
        for hole in self.round_format.holes():
            if hole not in self.hole_results:
                break
            last = hole
        return last

    def recalculate(self, up_to_hole: Optional[int] = None):
        # a gap in the card stops the replay: unscored holes are never halved
        last = self.last_contiguous_hole()
        if up_to_hole is None or last is None:
            up_to_hole = last
        else:
            up_to_hole = min(up_to_hole, last)

        self.main = MatchState.fresh(self.round_format)
        for press in self.presses:
            press.state = MatchState.fresh(self.round_format, press.start_hole)

        self.through_hole = None
        if up_to_hole is None or up_to_hole < self.round_format.starting_hole:
            return
        self.through_hole = min(up_to_hole, self.round_format.last_hole)

        for hole in self.round_format.holes():
            if hole > up_to_hole:
                break
            result = self.hole_results.get(hole)
            if result is not None:
                self.main.record(hole, result)
            self.main.evaluate(hole)

            for press in self.presses:
                if hole < press.start_hole:
                    continue
                if result is not None:
                    press.state.record(hole, result)
                press.state.evaluate(hole)

        logger.debug("%s status thru %s: %s %s", self.game, up_to_hole, self.main.status, self.status_text())

    # ---- presses ----

    @property
    def current_hole(self) -> int:
        if self.through_hole is None:
            return self.round_format.starting_hole
        return self.through_hole + 1

    def leading_score(self) -> int:
        """
        Cumulative score of the latest press already under way, or of the main
        match when no press has started yet. Presses booked for a later hole
        do not count.
        """
        for press in reversed(self.presses):
            if self.through_hole is not None and press.start_hole <= self.through_hole:
                return press.state.score
        return self.main.score

    def losing_side(self) -> Optional[Side]:
        leader = Side.from_sign(self.leading_score())
        return leader.other if leader else None

    def start_press(self, at_hole: int, side: Optional[Side] = None) -> Press:
        if not self.round_format.contains(at_hole):
            raise InvalidPress(f"hole {at_hole} is not part of a {self.round_format.value} round")
        if at_hole < self.current_hole:
            raise InvalidPress(f"cannot press at hole {at_hole}, play is on hole {self.current_hole}")
        if not self.presses and self.main.winner is not None:
            raise InvalidPress("main match has been won and there are no presses")

        if self.trailing_only_presses:
            trailing = self.losing_side()
            if trailing is None:
                raise InvalidPress("nobody is trailing, no press allowed")
            if side is not None and side != trailing:
                raise InvalidPress(f"only {self.names[trailing]} may press")
            side = trailing

        press = Press(start_hole=at_hole, side=side, state=MatchState.fresh(self.round_format, at_hole))
        self.presses.append(press)
        logger.info("%s press %s started at hole %s", self.game, len(self.presses), at_hole)
        self.recalculate(self.through_hole)
        return press

    # ---- output ----

    def status_text(self) -> str:
        return self.main.describe(self.names)

    def press_statuses(self) -> list[str]:
        return [f"Press {i}: {p.state.describe(self.names)}" for i, p in enumerate(self.presses, start=1)]

    def hole_tallies(self) -> dict[str, int]:
        tallies = {Side.A.value: 0, Side.B.value: 0, "halved": 0}
        for hole, result in self.hole_results.items():
            if not self.round_format.contains(hole):
                continue
            side = Side.from_sign(result)
            tallies[side.value if side else "halved"] += 1
        return tallies

    def winner_name(self, state: MatchState) -> Optional[str]:
        return self.names[state.winner] if state.winner is not None else None

    def summary(self, net_scores=None, stroke_holes=None) -> MatchSummary:
        presses = [
            PressSummary(
                number=i,
                start_hole=p.start_hole,
                status=status,
                winner=self.winner_name(p.state),
                winning_score=p.state.winning_score,
                winning_hole=p.state.winning_hole,
            )
            for i, (p, status) in enumerate(zip(self.presses, self.press_statuses()), start=1)
        ]
        return MatchSummary(
            sides={side.value: name for side, name in self.names.items()},
            status=self.status_text(),
            winner=self.winner_name(self.main),
            winning_score=self.main.winning_score,
            winning_hole=self.main.winning_hole,
            dormie=self.main.dormie,
            status_array=list(self.main.status),
            net_scores=net_scores or {},
            stroke_holes=stroke_holes or {},
            hole_tallies=self.hole_tallies(),
            presses=presses,
        )
