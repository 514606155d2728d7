from pydantic import BaseModel
from typing import Optional, Union

Numeric = Union[float, str, None]   # numeric columns may arrive as text

# ✅ input for POST /marks/evaluate
class EvaluateRequest(BaseModel):
    ca_score: Numeric = None                 # continuous assessment /20
    exam_score: Numeric = None               # exam /20
    coefficient: Numeric = 1                 # course weight

# ✅ output, rounded for display
class EvaluateResponse(BaseModel):
    average: Optional[float] = None
    weighted: Optional[float] = None
    grade: Optional[str] = None
    remark: Optional[str] = None
