from .schemas import (
    ComparisonResult,
    EvolutionPoint,
    HoleResult,
    MatchPlayResult,
    MatchPlaySummary,
    MedalPlaySummary,
    NineSummary,
    RoundResult,
    ScoringPlayer,
    WinnerDecision,
)
from .validation import (
    HOLES,
    validate_course,
    validate_hole_entries,
    validate_tee_color,
)

DEFAULT_PUTTS = 2


def strokes_received(player_handicap: int, hole_stroke_index: int) -> int:
    """
    Handicap strokes a player gets on one hole.
    Every hole gets handicap // 18; the remainder goes to the hardest holes
    (stroke index <= handicap % 18).
    """
    base = player_handicap // 18
    extra = 1 if player_handicap % 18 >= hole_stroke_index else 0
    return base + extra


def compute_net_strokes(gross_strokes: int, player_handicap: int, hole_stroke_index: int) -> int:
    # net never goes below 1
    return max(gross_strokes - strokes_received(player_handicap, hole_stroke_index), 1)


def stroke_indexes(course, tee_color: str):
    return getattr(course, f"handicaps_{validate_tee_color(tee_color)}")


def _nine(hole_results) -> NineSummary:
    return NineSummary(
        strokes=sum(h.strokes for h in hole_results),
        net_strokes=sum(h.net_strokes for h in hole_results),
        putts=sum(h.putts for h in hole_results),
    )


def round_result_from_holes(player_id, hole_results) -> RoundResult:
    """
    Builds a RoundResult from hole results whose net strokes are already known
    (e.g. rows loaded from the database). Front/back nine go by hole number.
    """
    hole_results = sorted(hole_results, key=lambda h: h.hole)
    front = [h for h in hole_results if h.hole <= 9]
    back = [h for h in hole_results if h.hole > 9]

    return RoundResult(
        player_id=player_id,
        hole_results=[HoleResult.model_validate(h) for h in hole_results],
        total_strokes=sum(h.strokes for h in hole_results),
        total_net_strokes=sum(h.net_strokes for h in hole_results),
        total_putts=sum(h.putts for h in hole_results),
        front_nine=_nine(front),
        back_nine=_nine(back),
    )


def compute_round_result(player, course, gross_strokes_per_hole, putts_per_hole) -> RoundResult:
    """
    player: anything with id / handicap / tee_color (ORM Player or schema)
    course: anything with par and handicaps_<tee> lists
    """
    validate_course(course)
    strokes = validate_hole_entries(gross_strokes_per_hole, "strokes")
    putts = validate_hole_entries(putts_per_hole, "putts")
    indexes = stroke_indexes(course, player.tee_color)

    hole_results = [
        HoleResult(
            hole=i + 1,
            strokes=strokes[i],
            putts=putts[i],
            net_strokes=compute_net_strokes(strokes[i], player.handicap, indexes[i]),
        )
        for i in range(HOLES)
    ]

    return RoundResult(
        player_id=player.id,
        hole_results=hole_results,
        total_strokes=sum(strokes),
        total_net_strokes=sum(h.net_strokes for h in hole_results),
        total_putts=sum(putts),
        front_nine=_nine(hole_results[:9]),
        back_nine=_nine(hole_results[9:]),
    )


def default_scorecard(course):
    """Scorecard for a player with nothing entered yet: par on every hole, two putts."""
    return list(course.par), [DEFAULT_PUTTS] * HOLES


# ---------------------------------------------------------------------------------
# ---------------------------------- Match play -----------------------------------
# ---------------------------------------------------------------------------------

def _status_label(player1_status: int, holes_remaining=None) -> str:
    """
    "3UP" / "2DOWN" / "AS" from player 1's side.
    With holes_remaining, a lead bigger than the holes left is marked as decided.
    """
    if player1_status == 0:
        return "AS"

    holes = abs(player1_status)
    if player1_status > 0:
        label, decided = f"{holes}UP", "Match Won"
    else:
        label, decided = f"{holes}DOWN", "Match Lost"

    if holes_remaining is not None and holes > holes_remaining:
        return f"{label} ({decided})"
    return label


def _hole_winner(player1_net: int, player2_net: int) -> str:
    if player1_net < player2_net:
        return "player1"
    if player1_net > player2_net:
        return "player2"
    return "tie"


def _status_delta(winner: str) -> int:
    if winner == "player1":
        return 1
    if winner == "player2":
        return -1
    return 0


def compare_match_play(result1: RoundResult, result2: RoundResult):
    match_results = []
    player1_status = 0  # holes up (+) / down (-)

    # order matters: the running status depends on every earlier hole
    for i in range(HOLES):
        p1_net = result1.hole_results[i].net_strokes
        p2_net = result2.hole_results[i].net_strokes

        winner = _hole_winner(p1_net, p2_net)
        player1_status += _status_delta(winner)
        holes_remaining = HOLES - (i + 1)

        match_results.append(MatchPlayResult(
            hole=i + 1,
            player1_net=p1_net,
            player2_net=p2_net,
            winner=winner,
            status=_status_label(player1_status, holes_remaining),
        ))

    return match_results


def status_at_hole(match_results, upto_hole: int) -> str:
    """Match status after `upto_hole`, counted from hole 1."""
    player1_status = sum(_status_delta(r.winner) for r in match_results[:upto_hole])
    return _status_label(player1_status, HOLES - upto_hole)


def status_over_range(match_results, start_hole: int, end_hole: int) -> str:
    """Holes won minus holes lost over [start_hole, end_hole] only (e.g. a single nine)."""
    player1_status = sum(
        _status_delta(r.winner) for r in match_results[start_hole - 1:end_hole]
    )
    return _status_label(player1_status)


def _medal_decision(score1: int, score2: int) -> WinnerDecision:
    return WinnerDecision(
        player1_score=score1,
        player2_score=score2,
        winner=_hole_winner(score1, score2),
    )


def create_comparison(player1, player2, result1: RoundResult, result2: RoundResult) -> ComparisonResult:
    match_results = compare_match_play(result1, result2)

    return ComparisonResult(
        player1=ScoringPlayer.model_validate(player1, from_attributes=True),
        player2=ScoringPlayer.model_validate(player2, from_attributes=True),
        medal_play=MedalPlaySummary(
            front_nine=_medal_decision(result1.front_nine.net_strokes, result2.front_nine.net_strokes),
            back_nine=_medal_decision(result1.back_nine.net_strokes, result2.back_nine.net_strokes),
            total=_medal_decision(result1.total_net_strokes, result2.total_net_strokes),
        ),
        match_play=MatchPlaySummary(
            hole_results=match_results,
            front_nine_status=status_over_range(match_results, 1, 9),
            back_nine_status=status_over_range(match_results, 10, 18),
            final_status=status_at_hole(match_results, HOLES),
        ),
    )


# ---------------------------------------------------------------------------------
# ---------------------------------- Evolution ------------------------------------
# ---------------------------------------------------------------------------------

def score_to_par(course, result: RoundResult) -> int:
    return result.total_net_strokes - sum(course.par)


def compute_evolution(course, results):
    """Cumulative net strokes to par after each hole, per player."""
    points = []
    running = {r.player_id: 0 for r in results}

    for i in range(HOLES):
        for r in results:
            running[r.player_id] += r.hole_results[i].net_strokes - course.par[i]
        points.append(EvolutionPoint(hole=i + 1, scores=dict(running)))

    return points
