from pydantic import BaseModel
from typing import Optional

# ✅ input for POST /repeaters/check (no filter = every enrollment)
class RepeaterCheckRequest(BaseModel):
    academic_year_id: Optional[int] = None
    level_id: Optional[int] = None
