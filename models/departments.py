from sqlalchemy import Column, Integer, String
from database.db import Base

class Department(Base):
    __tablename__ = "departments"

    id = Column(Integer, primary_key=True, index=True)      # department ID (PK)
    name = Column(String(100), nullable=False)              # e.g. Civil Engineering
