from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dependencies.database import get_db
from schemas.marks import EvaluateRequest, EvaluateResponse
from services.report_cards import student_report_card
from services.scoring.evaluator import evaluate
from services.scoring.numeric import round_half_up

router = APIRouter(prefix="/marks", tags=["marks"])


# ✅ [EVALUATE] one pair of scores -> average / weighted / grade / remark
@router.post("/evaluate")
def evaluate_scores(body: EvaluateRequest):
    result = evaluate(body.ca_score, body.exam_score, body.coefficient)
    data = EvaluateResponse(
        average=round_half_up(result.average),
        weighted=round_half_up(result.weighted),
        grade=result.grade,
        remark=result.remark,
    )
    return {"success": True, "data": data.model_dump()}


# ✅ [REPORT] report card data of one student
@router.get("/report")
def get_report_card(
    student_id: int,
    academic_year_id: int,
    term_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    return student_report_card(db, student_id, academic_year_id, term_id)
