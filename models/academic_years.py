from sqlalchemy import Column, Integer, String, Date, Boolean
from database.db import Base

class AcademicYear(Base):
    __tablename__ = "academic_years"

    id = Column(Integer, primary_key=True, index=True)      # academic year ID (PK)
    label = Column(String(20), nullable=False)              # e.g. 2024/2025
    start_date = Column(Date)
    end_date = Column(Date)
    is_active = Column(Boolean, default=False)              # year currently in use
    is_closed = Column(Boolean, default=False)              # finalized, enrollments no longer editable
