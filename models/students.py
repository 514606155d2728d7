from sqlalchemy import Column, Integer, String, ForeignKey
from database.db import Base

class Student(Base):
    __tablename__ = "students"  # student master data

    id = Column(Integer, primary_key=True, index=True)                   # student ID (PK)
    name = Column(String(100), nullable=False)                          # full name
    matricule = Column(String(50), unique=True)                         # registration number
    gender = Column(String(10))                                         # e.g. M, F
    department_id = Column(Integer, ForeignKey("departments.id"))       # department (departments.id)
