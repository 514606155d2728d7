from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dependencies.database import get_db
from schemas.averages import AnnualAveragesRequest
from services.annual_averages import calculate_annual_averages

router = APIRouter(prefix="/averages", tags=["averages"])


# ✅ [ANNUAL] annual averages, positions and promotion eligibility of a cohort
@router.post("/annual")
def annual_averages(body: AnnualAveragesRequest, db: Session = Depends(get_db)):
    return calculate_annual_averages(
        db,
        academic_year_id=body.academic_year_id,
        student_id=body.student_id,
        level_id=body.level_id,
        department_id=body.department_id,
    )
