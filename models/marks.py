from sqlalchemy import Column, Integer, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from database.db import Base

class Mark(Base):
    __tablename__ = "marks"  # raw CA / exam scores, one row per student, course and term

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False)
    term_id = Column(Integer, ForeignKey("terms.id"), nullable=False)
    academic_year_id = Column(Integer, ForeignKey("academic_years.id"), nullable=False, index=True)
    ca_score = Column(Numeric(5, 2))                        # continuous assessment /20, may be empty
    exam_score = Column(Numeric(5, 2))                      # exam /20, may be empty

    # ==========================================================
    # [Relationships]
    # ==========================================================
    course = relationship("Course")
    term = relationship("Term")
