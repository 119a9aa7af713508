from datetime import date

from sqlalchemy.orm import Session

from . import models, schemas


#---------------------------------------------------------------------------------
# ---------------------------------- Rounds --------------------------------------
# --------------------------------------------------------------------------------

def get_rounds(db: Session):
    return db.query(models.Round).order_by(models.Round.date.desc(), models.Round.id.desc()).all()

def get_round(db: Session, round_id: int):
    return db.query(models.Round).filter(models.Round.id == round_id).first()

def save_round_summary(db: Session, summary: schemas.RoundSummary):
    r = models.Round(
        date=summary.date or date.today(),
        course_name=summary.course_name,
        tee_name=summary.tee_name,
        round_format=summary.round_format.value,
        summary_json=summary.model_dump_json(),
    )

    for t in summary.golfers:
        rg = models.RoundGolfer(
            golfer_key=t.golfer_id,
            name=t.name,
            handicap_index=t.handicap_index,
            course_handicap=t.course_handicap,
            gross_total=t.gross_total if t.holes_played else None,
            net_total=t.net_total if t.holes_played else None,
        )
        for hole, scores in summary.gross_scores.items():
            if t.golfer_id not in scores:
                continue
            rg.hole_scores.append(models.HoleScore(
                hole_number=hole,
                gross_strokes=scores[t.golfer_id],
                net_strokes=summary.net_scores.get(hole, {}).get(t.golfer_id),
            ))
        r.round_golfers.append(rg)

    db.add(r)
    db.commit()
    db.refresh(r)
    return r

def delete_round(db: Session, round_id: int):
    r = get_round(db, round_id)
    if not r:
        return False
    db.delete(r)
    db.commit()
    return True


#---------------------------------------------------------------------------------
# ------------------------------ Stored summaries --------------------------------
# --------------------------------------------------------------------------------

def round_summary(r: models.Round) -> schemas.RoundSummary:
    return schemas.RoundSummary.model_validate_json(r.summary_json)

def round_detail(r: models.Round) -> schemas.StoredRoundDetail:
    return schemas.StoredRoundDetail(
        id=r.id,
        date=r.date,
        course_name=r.course_name,
        tee_name=r.tee_name,
        round_format=r.round_format,
        summary=round_summary(r),
    )
