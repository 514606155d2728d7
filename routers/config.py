from fastapi import APIRouter

from config.settings import settings
from services.scoring.evaluator import FAIL_GRADE, GRADE_BANDS, MAX_SCORE, REMARKS

router = APIRouter(prefix="/config", tags=["config"])


# ==========================================================
# [1] Scoring configuration (grade bands and thresholds for the UI)
# ==========================================================
@router.get("/scoring")
def get_scoring_config():
    bands = [{"grade": letter, "min": float(lower), "remark": REMARKS[letter]} for lower, letter in GRADE_BANDS]
    bands.append({"grade": FAIL_GRADE, "min": None, "remark": REMARKS[FAIL_GRADE]})
    return {
        "success": True,
        "data": {
            "max_score": float(MAX_SCORE),
            "grade_bands": bands,
            "promotion": {
                "pass_threshold": settings.PROMOTION_PASS_THRESHOLD,
                "max_promotable_level": settings.PROMOTION_MAX_LEVEL,
            },
            "statistics": {
                "pass_mark": settings.STATS_PASS_MARK,
                "low_mark": settings.STATS_LOW_MARK,
                "student_pass_average": settings.STATS_STUDENT_PASS_AVERAGE,
                "pass_rate_weight": settings.STATS_PASS_RATE_WEIGHT,
                "average_weight": settings.STATS_AVERAGE_WEIGHT,
            },
        },
    }
