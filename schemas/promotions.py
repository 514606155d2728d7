from pydantic import BaseModel, Field
from typing import Optional

# ✅ input for POST /promotions/run
class PromotionRunRequest(BaseModel):
    academic_year_id: Optional[int] = None
    next_academic_year_id: Optional[int] = None
    level_id: Optional[int] = None
    department_id: Optional[int] = None
    student_id: Optional[int] = None
    # class council override of PROMOTION_PASS_THRESHOLD
    pass_threshold: Optional[float] = Field(default=None, ge=0, le=20)
