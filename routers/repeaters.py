from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dependencies.database import get_db
from dependencies.security import require_service_token
from schemas.repeaters import RepeaterCheckRequest
from services.repeaters import check_repeaters

router = APIRouter(prefix="/repeaters", tags=["repeaters"])


# ✅ [CHECK] recompute is_repeater flags and correct the stored ones
@router.post("/check", dependencies=[Depends(require_service_token)])
def run_repeater_check(body: RepeaterCheckRequest, db: Session = Depends(get_db)):
    return check_repeaters(db, academic_year_id=body.academic_year_id, level_id=body.level_id)
