from sqlalchemy import Column, Integer, String, ForeignKey
from database.db import Base

class Term(Base):
    __tablename__ = "terms"

    id = Column(Integer, primary_key=True, index=True)                              # term ID (PK)
    label = Column(String(50), nullable=False)                                      # e.g. First, Second, Third
    academic_year_id = Column(Integer, ForeignKey("academic_years.id"), index=True)
