from datetime import date as date_type
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# --------------------------------------------------------------------------------
# ------------------------------ Reference data ----------------------------------
# --------------------------------------------------------------------------------

class RoundFormat(str, Enum):
    FULL18 = "full18"
    FRONT9 = "front9"
    BACK9 = "back9"

    @property
    def starting_hole(self) -> int:
        return 10 if self is RoundFormat.BACK9 else 1

    @property
    def last_hole(self) -> int:
        return 9 if self is RoundFormat.FRONT9 else 18

    @property
    def total_holes(self) -> int:
        return 18 if self is RoundFormat.FULL18 else 9

    def holes(self) -> range:
        return range(self.starting_hole, self.last_hole + 1)

    def contains(self, hole: int) -> bool:
        return self.starting_hole <= hole <= self.last_hole


def hole_to_index(hole: int, starting_hole: int) -> int:
    """0-based array cell for ``hole`` in a sequence that begins at ``starting_hole``."""
    return hole - starting_hole


class Side(str, Enum):
    A = "A"
    B = "B"

    @property
    def sign(self) -> int:
        return 1 if self is Side.A else -1

    @property
    def other(self) -> "Side":
        return Side.B if self is Side.A else Side.A

    @classmethod
    def from_sign(cls, value: int) -> Optional["Side"]:
        if value > 0:
            return cls.A
        if value < 0:
            return cls.B
        return None


class Tee(BaseModel):
    name: str = "white"
    course_rating: float = 72.0
    slope_rating: int = 113
    par: int = 72
    yardage: Optional[int] = None


class Hole(BaseModel):
    number: int = Field(ge=1, le=18)
    par: int
    handicap: int = Field(ge=1, le=18)  # 1 = hardest
    yardage: Optional[int] = None


class Golfer(BaseModel):
    id: str
    name: str
    handicap_index: float = 0.0
    course_handicap: Optional[int] = None
    side: Optional[Side] = None


# --------------------------------------------------------------------------------
# --------------------------------- Requests -------------------------------------
# --------------------------------------------------------------------------------

class CourseHandicapRequest(BaseModel):
    handicap_index: float
    tee: Tee
    holes: list[Hole] = []


class CourseHandicapResponse(BaseModel):
    course_handicap: int
    stroke_holes: list[int] = []


class ScoreEntry(BaseModel):
    hole: int
    golfer_id: str
    gross: Optional[int] = None  # None clears the hole


class PressRequest(BaseModel):
    at_hole: int
    side: Optional[Side] = None


class MatchPlayConfig(BaseModel):
    golfer_ids: list[str]
    presses: list[PressRequest] = []
    trailing_only_presses: bool = False


class BetterBallConfig(BaseModel):
    teams: dict[str, Side]
    presses: list[PressRequest] = []
    trailing_only_presses: bool = False
    tiebreak_balls: int = 1


class NinePointConfig(BaseModel):
    golfer_ids: Optional[list[str]] = None
    relative_strokes: bool = True


class StablefordConfig(BaseModel):
    quotas: Optional[dict[str, int]] = None


class GamesConfig(BaseModel):
    match_play: Optional[MatchPlayConfig] = None
    better_ball: Optional[BetterBallConfig] = None
    nine_point: Optional[NinePointConfig] = None
    stableford_gross: Optional[StablefordConfig] = None
    stableford_net: Optional[StablefordConfig] = None


class RoundIn(BaseModel):
    course_name: str
    date: Optional[date_type] = None
    tee: Tee
    holes: list[Hole]
    round_format: RoundFormat = RoundFormat.FULL18
    golfers: list[Golfer]
    scores: list[ScoreEntry] = []
    games: GamesConfig = Field(default_factory=GamesConfig)


# --------------------------------------------------------------------------------
# --------------------------------- Outputs --------------------------------------
# --------------------------------------------------------------------------------

class PressSummary(BaseModel):
    number: int
    start_hole: int
    status: str
    winner: Optional[str] = None
    winning_score: Optional[str] = None
    winning_hole: Optional[int] = None


class MatchSummary(BaseModel):
    sides: dict[str, str]
    status: str
    winner: Optional[str] = None
    winning_score: Optional[str] = None
    winning_hole: Optional[int] = None
    dormie: bool = False
    status_array: list[int]
    net_scores: dict[int, dict[str, int]] = {}
    stroke_holes: dict[str, list[int]] = {}
    hole_tallies: dict[str, int] = {}
    presses: list[PressSummary] = []


class StandingRow(BaseModel):
    position: int
    label: str
    golfer_id: str
    name: str
    points: int
    quota: Optional[int] = None
    over_quota: Optional[int] = None
    quota_status: Optional[str] = None


class PointsSummary(BaseModel):
    game: str
    points: dict[int, dict[str, int]]
    totals: dict[str, int]
    standings: list[StandingRow]
    quotas: dict[str, int] = {}


class GolferTotals(BaseModel):
    golfer_id: str
    name: str
    handicap_index: float
    course_handicap: int
    stroke_holes: list[int]
    holes_played: int
    gross_total: int
    net_total: int
    to_par: str


class RoundSummary(BaseModel):
    course_name: str
    date: Optional[date_type] = None
    tee_name: str
    round_format: RoundFormat
    golfers: list[GolferTotals]
    gross_scores: dict[int, dict[str, int]]
    net_scores: dict[int, dict[str, int]]
    missing_scores: dict[str, list[int]]
    match_play: Optional[MatchSummary] = None
    better_ball: Optional[MatchSummary] = None
    nine_point: Optional[PointsSummary] = None
    stableford_gross: Optional[PointsSummary] = None
    stableford_net: Optional[PointsSummary] = None


class StoredRound(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    date: date_type
    course_name: str
    tee_name: str
    round_format: str


class StoredRoundDetail(StoredRound):
    summary: RoundSummary
