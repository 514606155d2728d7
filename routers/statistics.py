from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dependencies.database import get_db
from services.subject_statistics import term_subject_statistics

router = APIRouter(prefix="/statistics", tags=["statistics"])


# ✅ [SUBJECTS] enrollment / passed / low counts and average per subject for one term
@router.get("/subjects")
def get_subject_statistics(
    academic_year_id: Optional[int] = None,
    term_id: Optional[int] = None,
    level_id: Optional[int] = None,
    department_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    return term_subject_statistics(db, academic_year_id, term_id, level_id, department_id)
