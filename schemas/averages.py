from pydantic import BaseModel
from typing import Optional

# ✅ input for POST /averages/annual
#    academic_year_id is checked by the service so the caller gets a descriptive message
class AnnualAveragesRequest(BaseModel):
    academic_year_id: Optional[int] = None
    student_id: Optional[int] = None
    level_id: Optional[int] = None
    department_id: Optional[int] = None
