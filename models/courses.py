from sqlalchemy import Column, Integer, String, Numeric, ForeignKey
from database.db import Base

class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)                  # course ID (PK)
    name = Column(String(100), nullable=False)                         # course name
    code = Column(String(20))                                          # e.g. MTH101
    coefficient = Column(Numeric(5, 2), nullable=False, default=1)     # weight in every weighted average
    level_id = Column(Integer)                                         # level the course is taught at
    department_id = Column(Integer, ForeignKey("departments.id"))
