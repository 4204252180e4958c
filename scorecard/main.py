import logging
import os
from typing import List

from fastapi import FastAPI, Depends, HTTPException, Request
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.orm import Session

from .db import Base, engine, get_db
from . import crud, schemas
from .flow import available_steps, state_for_session
from .golf_calc import compute_round_result, create_comparison
from .validation import ScorecardError

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


Base.metadata.create_all(bind=engine)

app = FastAPI(title="Golf Scorecard")


@app.exception_handler(ScorecardError)
def scorecard_error_handler(request: Request, exc: ScorecardError):
    logger.warning("rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


def _get_or_404(obj, what: str):
    if not obj:
        raise HTTPException(status_code=404, detail=f"{what} not found")
    return obj


# ---------------------------------------------------------------------------------

@app.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url="/docs")


#--------------------------------------------------------------------------------
#---------------------------------- PLAYERS -------------------------------------
#--------------------------------------------------------------------------------

@app.get("/api/players", response_model=List[schemas.PlayerRead])
def players_list(db: Session = Depends(get_db)):
    return crud.get_players(db)


@app.post("/api/players", response_model=schemas.PlayerRead, status_code=201)
def player_create(data: schemas.PlayerCreate, db: Session = Depends(get_db)):
    return crud.create_player(db, data)


@app.get("/api/players/{player_id}", response_model=schemas.PlayerRead)
def player_detail(player_id: int, db: Session = Depends(get_db)):
    return _get_or_404(crud.get_player(db, player_id), "Player")


@app.put("/api/players/{player_id}", response_model=schemas.PlayerRead)
def player_update(player_id: int, data: schemas.PlayerUpdate, db: Session = Depends(get_db)):
    return _get_or_404(crud.update_player(db, player_id, data), "Player")


@app.delete("/api/players/{player_id}", status_code=204)
def player_delete(player_id: int, db: Session = Depends(get_db)):
    _get_or_404(crud.delete_player(db, player_id), "Player")


@app.get("/api/players/{player_id}/history", response_model=List[schemas.PlayerHistoryEntry])
def player_history(player_id: int, db: Session = Depends(get_db)):
    _get_or_404(crud.get_player(db, player_id), "Player")
    return crud.get_player_history(db, player_id)


#--------------------------------------------------------------------------------
#---------------------------------- COURSES -------------------------------------
#--------------------------------------------------------------------------------

@app.get("/api/courses", response_model=List[schemas.CourseRead])
def courses_list(db: Session = Depends(get_db)):
    return crud.get_courses(db)


@app.post("/api/courses", response_model=schemas.CourseRead, status_code=201)
def course_create(data: schemas.CourseCreate, db: Session = Depends(get_db)):
    return crud.create_course(db, data)


@app.get("/api/courses/{course_id}", response_model=schemas.CourseRead)
def course_detail(course_id: int, db: Session = Depends(get_db)):
    return _get_or_404(crud.get_course(db, course_id), "Course")


@app.put("/api/courses/{course_id}", response_model=schemas.CourseRead)
def course_update(course_id: int, data: schemas.CourseUpdate, db: Session = Depends(get_db)):
    return _get_or_404(crud.update_course(db, course_id, data), "Course")


@app.delete("/api/courses/{course_id}", status_code=204)
def course_delete(course_id: int, db: Session = Depends(get_db)):
    _get_or_404(crud.delete_course(db, course_id), "Course")


#--------------------------------------------------------------------------------
#---------------------------------- SESSIONS ------------------------------------
#--------------------------------------------------------------------------------

def _session_read(s) -> schemas.SessionRead:
    results = crud.get_session_results(s)
    return schemas.SessionRead(
        id=s.id,
        date=s.date,
        course=schemas.CourseRead.model_validate(s.course),
        players=[crud.session_player_view(sp) for sp in s.session_players],
        results=results,
        available_steps=[step.value for step in available_steps(state_for_session(s, results))],
    )


@app.get("/api/sessions", response_model=List[schemas.SessionRead])
def sessions_list(db: Session = Depends(get_db)):
    return [_session_read(s) for s in crud.get_sessions(db)]


@app.post("/api/sessions", response_model=schemas.SessionRead, status_code=201)
def session_create(data: schemas.SessionCreate, db: Session = Depends(get_db)):
    return _session_read(crud.create_session(db, data))


@app.get("/api/sessions/{session_id}", response_model=schemas.SessionRead)
def session_detail(session_id: int, db: Session = Depends(get_db)):
    return _session_read(_get_or_404(crud.get_session(db, session_id), "Session"))


@app.delete("/api/sessions/{session_id}", status_code=204)
def session_delete(session_id: int, db: Session = Depends(get_db)):
    _get_or_404(crud.delete_session(db, session_id), "Session")


@app.put("/api/sessions/{session_id}/players/{player_id}/scores", response_model=schemas.RoundResult)
def session_scores_save(
    session_id: int,
    player_id: int,
    data: schemas.ScoreEntry,
    db: Session = Depends(get_db),
):
    s = _get_or_404(crud.get_session(db, session_id), "Session")
    result = crud.save_scores(db, s, player_id, data.strokes, data.putts)
    return _get_or_404(result, "Player in session")


@app.post("/api/sessions/{session_id}/fill-missing", response_model=schemas.SessionRead)
def session_fill_missing(session_id: int, db: Session = Depends(get_db)):
    s = _get_or_404(crud.get_session(db, session_id), "Session")
    crud.fill_missing_scores(db, s)
    return _session_read(s)


@app.get("/api/sessions/{session_id}/results", response_model=List[schemas.RoundResult])
def session_results(session_id: int, db: Session = Depends(get_db)):
    s = _get_or_404(crud.get_session(db, session_id), "Session")
    return crud.get_session_results(s)


@app.get("/api/sessions/{session_id}/comparison", response_model=schemas.ComparisonResult)
def session_comparison(
    session_id: int,
    player1: int,
    player2: int,
    db: Session = Depends(get_db),
):
    s = _get_or_404(crud.get_session(db, session_id), "Session")
    return _get_or_404(crud.build_comparison(s, player1, player2), "Player in session")


@app.get("/api/sessions/{session_id}/evolution", response_model=List[schemas.EvolutionPoint])
def session_evolution(session_id: int, db: Session = Depends(get_db)):
    s = _get_or_404(crud.get_session(db, session_id), "Session")
    return crud.build_evolution(s)


#--------------------------------------------------------------------------------
#------------------------------ STATELESS SCORING -------------------------------
#--------------------------------------------------------------------------------

@app.post("/api/scoring/round", response_model=schemas.RoundResult)
def scoring_round(data: schemas.RoundRequest):
    return compute_round_result(data.player, data.course, data.strokes, data.putts)


@app.post("/api/scoring/comparison", response_model=schemas.ComparisonResult)
def scoring_comparison(data: schemas.ComparisonRequest):
    result1 = compute_round_result(data.player1.player, data.course, data.player1.strokes, data.player1.putts)
    result2 = compute_round_result(data.player2.player, data.course, data.player2.strokes, data.player2.putts)
    return create_comparison(data.player1.player, data.player2.player, result1, result2)


@app.get("/health")
def health():
    return {"status": "ok"}
