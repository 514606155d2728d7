from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dependencies.database import get_db
from dependencies.security import require_service_token
from schemas.promotions import PromotionRunRequest
from services.promotions import run_promotions

router = APIRouter(prefix="/promotions", tags=["promotions"])


# ✅ [RUN] year-end decisions + pending enrollments for the next academic year
@router.post("/run", dependencies=[Depends(require_service_token)])
def run_promotion_batch(body: PromotionRunRequest, db: Session = Depends(get_db)):
    return run_promotions(
        db,
        academic_year_id=body.academic_year_id,
        next_academic_year_id=body.next_academic_year_id,
        level_id=body.level_id,
        department_id=body.department_id,
        student_id=body.student_id,
        pass_threshold=body.pass_threshold,
    )
