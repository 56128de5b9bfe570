from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.semester import Semester
from app.schemas.semester import BatchOut, BatchSemestersOut, SemesterPublicOut
from app.utils.sections import is_valid_batch, split_section

router = APIRouter(prefix="/api", tags=["Semesters"])


def _active_semesters(db: Session) -> List[Semester]:
    return (
        db.query(Semester)
        .filter(Semester.is_active.is_(True))
        .order_by(Semester.created_at.desc())
        .all()
    )


@router.get("/semesters/public", response_model=List[SemesterPublicOut])
def public_semesters(db: Session = Depends(get_db)):
    return _active_semesters(db)


@router.get("/semesters/by-batch/{batch}", response_model=BatchSemestersOut)
def semesters_by_batch(batch: str, db: Session = Depends(get_db)):
    if not is_valid_batch(batch):
        raise HTTPException(status_code=400, detail="Invalid batch number. Must be a numeric value.")

    matched = [s for s in _active_semesters(db) if s.section and split_section(s.section)[0] == batch]
    matched.sort(key=lambda s: s.section)

    return {"batch": batch, "semesters": matched, "count": len(matched)}


@router.get("/batches", response_model=List[BatchOut])
def list_batches(db: Session = Depends(get_db)):
    """
    Distinct batches of the active semesters, newest batch first.
    "63_G" -> batch "63", section letter "G"
    """
    batches: Dict[str, dict] = {}
    for s in _active_semesters(db):
        batch, letter = split_section(s.section)
        if not batch:
            continue
        entry = batches.setdefault(batch, {"batch": batch, "sections": [], "sampleTitle": s.title or ""})
        if letter and letter not in entry["sections"]:
            entry["sections"].append(letter)

    out = []
    for batch in sorted(batches, key=_batch_sort_key, reverse=True):
        entry = batches[batch]
        out.append({
            "batch": batch,
            "sections": sorted(entry["sections"]),
            "sampleTitle": entry["sampleTitle"],
            "displayName": f"Batch {batch}",
        })
    return out


def _batch_sort_key(batch: str):
    # numeric batches first by value; anything else sorts below them
    return (1, int(batch)) if batch.isdigit() else (0, 0)
