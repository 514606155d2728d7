import csv
import logging
import sys

from sqlalchemy.orm import Session

from database.db import SessionLocal
from models.marks import Mark as MarkModel
from services.scoring.numeric import parse_numeric

logger = logging.getLogger(__name__)

CSV_PATH = "data/marks.csv"  # ✅ default file path

# columns: student_id, course_id, term_id, academic_year_id, ca_score, exam_score
def import_marks(db: Session, csv_path: str = CSV_PATH) -> int:
    """
    Loads mark rows from CSV. Empty or unparsable scores are stored as NULL
    (the score was not entered), rows with a bad identifier are skipped.
    Returns the number of rows imported.
    """
    imported = 0
    with open(csv_path, newline="", encoding="utf-8-sig") as csvfile:
        reader = csv.DictReader(csvfile)
        for line_no, row in enumerate(reader, start=2):
            try:
                mark = MarkModel(
                    student_id=int(row["student_id"]),
                    course_id=int(row["course_id"]),
                    term_id=int(row["term_id"]),
                    academic_year_id=int(row["academic_year_id"]),
                    ca_score=parse_numeric(row.get("ca_score")),
                    exam_score=parse_numeric(row.get("exam_score")),
                )
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"{csv_path}:{line_no} skipped: {e}")
                continue
            db.add(mark)
            imported += 1

    db.commit()
    return imported


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    db: Session = SessionLocal()
    try:
        count = import_marks(db, sys.argv[1] if len(sys.argv) > 1 else CSV_PATH)
    finally:
        db.close()
    print(f"✅ marks CSV -> DB import done ({count} rows)")
