import logging
import os
from typing import List

from fastapi import Depends, FastAPI, HTTPException, Request
from sqlalchemy.orm import Session

from . import crud, schemas
from .db import get_db, init_db
from .errors import GolfGamesError
from .golf_calc import course_handicap, stroke_holes
from .round_state import build_round

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


init_db()

app = FastAPI(title="Golf Games")

ADMIN_KEY = os.getenv("ADMIN_KEY", "")  # empty: no protection (dev)

def require_admin(request: Request):
    if not ADMIN_KEY:
        return

    key = request.headers.get("x-admin-key") or request.cookies.get("admin_key")
    if key == ADMIN_KEY:
        return

    raise HTTPException(status_code=401, detail="Admin auth required")


def compute_round(data: schemas.RoundIn) -> schemas.RoundSummary:
    try:
        return build_round(data).summary()
    except GolfGamesError as e:
        logger.warning("rejected round at %s: %s", data.course_name, e)
        raise HTTPException(status_code=422, detail=str(e))


# ================================================================================
# ================================== HANDICAPS ===================================
# ================================================================================

@app.post("/handicaps/course", response_model=schemas.CourseHandicapResponse)
def course_handicap_for(data: schemas.CourseHandicapRequest):
    ch = course_handicap(data.handicap_index, data.tee.slope_rating, data.tee.course_rating, data.tee.par)
    return schemas.CourseHandicapResponse(
        course_handicap=ch,
        stroke_holes=stroke_holes(ch, data.holes),
    )


# ================================================================================
# ================================== SCORECARDS ==================================
# ================================================================================

@app.post("/scorecards", response_model=schemas.RoundSummary)
def scorecard(data: schemas.RoundIn):
    return compute_round(data)


# ================================================================================
# ==================================== ROUNDS ====================================
# ================================================================================

@app.post("/rounds", response_model=schemas.StoredRoundDetail)
def create_round(data: schemas.RoundIn, db: Session = Depends(get_db)):
    summary = compute_round(data)
    r = crud.save_round_summary(db, summary)
    logger.info("saved round %s at %s", r.id, r.course_name)
    return crud.round_detail(r)


@app.get("/rounds", response_model=List[schemas.StoredRound])
def list_rounds(db: Session = Depends(get_db)):
    return crud.get_rounds(db)


@app.get("/rounds/{round_id}", response_model=schemas.StoredRoundDetail)
def round_detail(round_id: int, db: Session = Depends(get_db)):
    r = crud.get_round(db, round_id)
    if not r:
        raise HTTPException(status_code=404, detail="Round not found")
    return crud.round_detail(r)


@app.delete("/rounds/{round_id}", dependencies=[Depends(require_admin)])
def delete_round(round_id: int, db: Session = Depends(get_db)):
    if not crud.delete_round(db, round_id):
        raise HTTPException(status_code=404, detail="Round not found")
    logger.info("deleted round %s", round_id)
    return {"deleted": round_id}


# ---------------------------------------------------------------------------

@app.get("/health")
def health():
    return {"status": "ok"}
