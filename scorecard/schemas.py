from datetime import date as date_type
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .validation import HOLES, validate_pars, validate_stroke_indexes

TeeColor = Literal["blue", "white", "red"]
Winner = Literal["player1", "player2", "tie"]


# ---------------------------------------------------------------------------------
# ----------------------------------- Players -------------------------------------
# ---------------------------------------------------------------------------------

class PlayerCreate(BaseModel):
    first_name: str = Field(min_length=1)
    last_name: str = ""
    code: str = ""
    handicap: int = Field(default=0, ge=0, le=54)
    tee_color: TeeColor = "white"


class PlayerUpdate(PlayerCreate):
    pass


class PlayerRead(PlayerCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int


class ScoringPlayer(PlayerCreate):
    """Player data for scoring without a stored player."""
    id: Optional[int] = None


# ---------------------------------------------------------------------------------
# ----------------------------------- Courses -------------------------------------
# ---------------------------------------------------------------------------------

class CourseCreate(BaseModel):
    name: str = Field(min_length=1)
    holes: Literal[18] = HOLES
    par: List[int]
    handicaps_blue: List[int]
    handicaps_white: List[int]
    handicaps_red: List[int]

    @field_validator("par")
    @classmethod
    def check_par(cls, v):
        return validate_pars(v)

    @field_validator("handicaps_blue", "handicaps_white", "handicaps_red")
    @classmethod
    def check_stroke_indexes(cls, v, info):
        return validate_stroke_indexes(v, info.field_name.removeprefix("handicaps_"))


class CourseUpdate(CourseCreate):
    pass


class CourseRead(CourseCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    par_total: int


# ---------------------------------------------------------------------------------
# ----------------------------------- Results -------------------------------------
# ---------------------------------------------------------------------------------

class HoleResult(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    hole: int
    strokes: int
    putts: int
    net_strokes: int


class NineSummary(BaseModel):
    strokes: int = 0
    net_strokes: int = 0
    putts: int = 0


class RoundResult(BaseModel):
    player_id: Optional[int] = None
    hole_results: List[HoleResult]
    total_strokes: int
    total_net_strokes: int
    total_putts: int
    front_nine: NineSummary
    back_nine: NineSummary


class MatchPlayResult(BaseModel):
    hole: int
    player1_net: int
    player2_net: int
    winner: Winner
    status: str  # "1UP", "2DOWN", "AS", ...


class WinnerDecision(BaseModel):
    player1_score: int
    player2_score: int
    winner: Winner


class MedalPlaySummary(BaseModel):
    front_nine: WinnerDecision
    back_nine: WinnerDecision
    total: WinnerDecision


class MatchPlaySummary(BaseModel):
    hole_results: List[MatchPlayResult]
    front_nine_status: str
    back_nine_status: str
    final_status: str


class ComparisonResult(BaseModel):
    player1: ScoringPlayer
    player2: ScoringPlayer
    medal_play: MedalPlaySummary
    match_play: MatchPlaySummary


class EvolutionPoint(BaseModel):
    hole: int
    scores: Dict[int, int]  # player_id -> cumulative net strokes to par


# ---------------------------------------------------------------------------------
# ----------------------------------- Sessions ------------------------------------
# ---------------------------------------------------------------------------------

class SessionCreate(BaseModel):
    course_id: int
    date: date_type
    player_ids: List[int] = Field(min_length=2)

    @field_validator("player_ids")
    @classmethod
    def check_distinct(cls, v):
        if len(set(v)) != len(v):
            raise ValueError("a player can only be added to a session once")
        return v


class SessionPlayerRead(PlayerRead):
    """Player as they were in the session (handicap at the time of the game)."""


class SessionRead(BaseModel):
    id: int
    date: date_type
    course: CourseRead
    players: List[SessionPlayerRead]
    results: List[RoundResult]
    available_steps: List[str]


class ScoreEntry(BaseModel):
    strokes: List[int]
    putts: List[int]

    @field_validator("strokes")
    @classmethod
    def check_strokes(cls, v):
        if len(v) != HOLES:
            raise ValueError(f"strokes must have {HOLES} values")
        if any(s < 1 for s in v):
            raise ValueError("strokes must be at least 1 on every hole")
        return v

    @field_validator("putts")
    @classmethod
    def check_putts(cls, v):
        if len(v) != HOLES:
            raise ValueError(f"putts must have {HOLES} values")
        if any(p < 0 for p in v):
            raise ValueError("putts cannot be negative")
        return v


class PlayerHistoryEntry(BaseModel):
    session_id: int
    date: date_type
    course_name: str
    players: int
    net_score: Optional[int] = None
    score_to_par: Optional[int] = None


# ---------------------------------------------------------------------------------
# ------------------------------- Stateless scoring -------------------------------
# ---------------------------------------------------------------------------------

class RoundRequest(ScoreEntry):
    player: ScoringPlayer
    course: CourseCreate


class PlayerCard(ScoreEntry):
    player: ScoringPlayer


class ComparisonRequest(BaseModel):
    course: CourseCreate
    player1: PlayerCard
    player2: PlayerCard
