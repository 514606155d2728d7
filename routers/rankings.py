from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dependencies.database import get_db
from services.rankings import class_ranking, student_ranking

router = APIRouter(prefix="/rankings", tags=["rankings"])


# ==========================================================
# [1] Static routes
# ==========================================================

# ✅ [RANKING] whole cohort, term ranking when term_id is given
@router.get("/")
def get_class_ranking(
    academic_year_id: Optional[int] = None,
    term_id: Optional[int] = None,
    level_id: Optional[int] = None,
    department_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    return class_ranking(db, academic_year_id, term_id, level_id, department_id)


# ==========================================================
# [2] Dynamic routes
# ==========================================================

# ✅ [POSITION] one student's position within the class
@router.get("/student/{student_id}")
def get_student_position(
    student_id: int,
    academic_year_id: Optional[int] = None,
    term_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    return student_ranking(db, student_id, academic_year_id, term_id)
