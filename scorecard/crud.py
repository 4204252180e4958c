import logging
from collections import defaultdict

from sqlalchemy.orm import Session

from . import models, schemas
from .golf_calc import (
    compute_evolution,
    compute_round_result,
    create_comparison,
    default_scorecard,
    round_result_from_holes,
    score_to_par,
)
from .validation import ScorecardError

logger = logging.getLogger(__name__)


#---------------------------------------------------------------------------------
# ---------------------------------- Players -------------------------------------
# --------------------------------------------------------------------------------

def get_players(db: Session):
    return db.query(models.Player).order_by(models.Player.first_name).all()

def get_player(db: Session, player_id: int):
    return db.query(models.Player).filter(models.Player.id == player_id).first()

def create_player(db: Session, data: schemas.PlayerCreate):
    p = models.Player(**data.model_dump())
    db.add(p)
    db.commit()
    db.refresh(p)
    logger.info("created player %s (%s %s)", p.id, p.first_name, p.last_name)
    return p

def update_player(db: Session, player_id: int, data: schemas.PlayerUpdate):
    p = get_player(db, player_id)
    if not p:
        return None
    for k, v in data.model_dump().items():
        setattr(p, k, v)
    db.commit()
    db.refresh(p)
    logger.info("updated player %s", p.id)
    return p

def delete_player(db: Session, player_id: int):
    p = get_player(db, player_id)
    if not p:
        return False
    db.delete(p)
    db.commit()
    logger.info("deleted player %s", player_id)
    return True


#---------------------------------------------------------------------------------
# ------------------------------------ Course ------------------------------------
# --------------------------------------------------------------------------------

def get_courses(db: Session):
    return db.query(models.Course).order_by(models.Course.name).all()

def get_course(db: Session, course_id: int):
    return db.query(models.Course).filter(models.Course.id == course_id).first()

def create_course(db: Session, data: schemas.CourseCreate):
    c = models.Course(**data.model_dump())
    db.add(c)
    db.commit()
    db.refresh(c)
    logger.info("created course %s (%s)", c.id, c.name)
    return c

def update_course(db: Session, course_id: int, data: schemas.CourseUpdate):
    c = get_course(db, course_id)
    if not c:
        return None
    for k, v in data.model_dump().items():
        setattr(c, k, v)
    db.commit()
    db.refresh(c)
    logger.info("updated course %s", c.id)
    return c

def delete_course(db: Session, course_id: int):
    c = get_course(db, course_id)
    if not c:
        return False
    db.delete(c)
    db.commit()
    logger.info("deleted course %s", course_id)
    return True


#---------------------------------------------------------------------------------
# ----------------------------------- Sessions -----------------------------------
# --------------------------------------------------------------------------------

def session_player_view(sp: models.SessionPlayer) -> schemas.SessionPlayerRead:
    """The player as they played that day: stored player data with the session's handicap."""
    p = sp.player
    return schemas.SessionPlayerRead(
        id=p.id,
        first_name=p.first_name,
        last_name=p.last_name,
        code=p.code,
        handicap=sp.handicap,
        tee_color=p.tee_color,
    )


def create_session(db: Session, data: schemas.SessionCreate):
    course = get_course(db, data.course_id)
    if not course:
        raise ScorecardError(f"course {data.course_id} does not exist")

    players = []
    for pid in data.player_ids:
        player = get_player(db, pid)
        if not player:
            raise ScorecardError(f"player {pid} does not exist")
        players.append(player)

    s = models.GameSession(course=course, date=data.date)
    db.add(s)

    # handicap snapshot taken when the game is created
    for player in players:
        db.add(models.SessionPlayer(
            session=s,
            player=player,
            handicap=player.handicap,
        ))

    db.commit()
    db.refresh(s)
    logger.info("created session %s on course %s with %d players", s.id, course.id, len(players))
    return s


def get_sessions(db: Session):
    return (
        db.query(models.GameSession)
        .order_by(models.GameSession.date.desc(), models.GameSession.id.desc())
        .all()
    )


def get_session(db: Session, session_id: int):
    return db.query(models.GameSession).filter(models.GameSession.id == session_id).first()


def delete_session(db: Session, session_id: int):
    s = get_session(db, session_id)
    if not s:
        return False
    # session players and hole results go with it (cascade)
    db.delete(s)
    db.commit()
    logger.info("deleted session %s", session_id)
    return True


def _session_player(s: models.GameSession, player_id: int):
    for sp in s.session_players:
        if sp.player_id == player_id:
            return sp
    return None


def save_scores(db: Session, s: models.GameSession, player_id: int, strokes, putts):
    """
    Recomputes the player's round from scratch and replaces their stored hole results.
    Returns the RoundResult, or None if the player is not in the session.
    """
    sp = _session_player(s, player_id)
    if not sp:
        return None

    result = compute_round_result(session_player_view(sp), s.course, strokes, putts)

    (
        db.query(models.HoleScore)
        .filter(models.HoleScore.session_id == s.id, models.HoleScore.player_id == player_id)
        .delete(synchronize_session=False)
    )
    db.expire(s, ["hole_scores"])
    db.expire(sp.player, ["hole_scores"])
    for hr in result.hole_results:
        db.add(models.HoleScore(session=s, player=sp.player, **hr.model_dump()))

    db.commit()
    db.refresh(s)
    logger.info(
        "saved scores for player %s in session %s: %s gross / %s net",
        player_id, s.id, result.total_strokes, result.total_net_strokes,
    )
    return result


def fill_missing_scores(db: Session, s: models.GameSession):
    """Players without any scores get par on every hole and two putts."""
    scored = {hs.player_id for hs in s.hole_scores}
    filled = []
    for sp in list(s.session_players):
        if sp.player_id in scored:
            continue
        strokes, putts = default_scorecard(s.course)
        save_scores(db, s, sp.player_id, strokes, putts)
        filled.append(sp.player_id)
    if filled:
        logger.info("filled default scores for players %s in session %s", filled, s.id)
    return filled


def get_session_results(s: models.GameSession):
    """RoundResults rebuilt from the stored hole results, in session player order."""
    holes_by_player = defaultdict(list)
    for hs in s.hole_scores:
        holes_by_player[hs.player_id].append(hs)

    return [
        round_result_from_holes(sp.player_id, holes_by_player[sp.player_id])
        for sp in s.session_players
        if holes_by_player[sp.player_id]
    ]


def build_comparison(s: models.GameSession, player1_id: int, player2_id: int):
    sp1 = _session_player(s, player1_id)
    sp2 = _session_player(s, player2_id)
    if not sp1 or not sp2:
        return None
    if player1_id == player2_id:
        raise ScorecardError("a player cannot be compared with themselves")

    results = {r.player_id: r for r in get_session_results(s)}
    missing = [pid for pid in (player1_id, player2_id) if pid not in results]
    if missing:
        raise ScorecardError(f"no scores saved yet for players {missing}")

    return create_comparison(
        session_player_view(sp1),
        session_player_view(sp2),
        results[player1_id],
        results[player2_id],
    )


def build_evolution(s: models.GameSession):
    return compute_evolution(s.course, get_session_results(s))


#---------------------------------------------------------------------------------
# ------------------------------- Player history ---------------------------------
# --------------------------------------------------------------------------------

def get_player_history(db: Session, player_id: int):
    sessions = (
        db.query(models.GameSession)
        .join(models.SessionPlayer)
        .filter(models.SessionPlayer.player_id == player_id)
        .order_by(models.GameSession.date.desc(), models.GameSession.id.desc())
        .all()
    )

    history = []
    for s in sessions:
        result = next(
            (r for r in get_session_results(s) if r.player_id == player_id),
            None,
        )
        entry = schemas.PlayerHistoryEntry(
            session_id=s.id,
            date=s.date,
            course_name=s.course.name,
            players=len(s.session_players),
        )
        if result:
            entry.net_score = result.total_net_strokes
            entry.score_to_par = score_to_par(s.course, result)
        history.append(entry)

    return history
