from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from database.db import Base

class ClassStudent(Base):
    __tablename__ = "class_students"  # one enrollment per student per academic year

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    academic_year_id = Column(Integer, ForeignKey("academic_years.id"), nullable=False, index=True)
    level_id = Column(Integer, nullable=False)                          # 1, 2, 3 ...
    promoted = Column(Boolean, default=False)
    promotion_status = Column(String(10), default="pending")            # pending / promoted / repeated
    is_repeater = Column(Boolean, default=False)
    previous_level_id = Column(Integer)                                 # level held the year before

    # ✅ promotion re-runs must never insert a second record for the same year
    __table_args__ = (
        UniqueConstraint("student_id", "academic_year_id", name="uq_class_students_student_year"),
    )

    # ==========================================================
    # [Relationships]
    # ==========================================================
    student = relationship("Student")
    academic_year = relationship("AcademicYear")
