import os

# must be set before anything imports config.settings
os.environ.setdefault("DB_URL_OVERRIDE", "sqlite://")
os.environ.setdefault("SERVICE_TOKEN", "test-service-token")

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models
from database.db import Base
from dependencies.database import get_db
from main import app

SERVICE_TOKEN = os.environ["SERVICE_TOKEN"]


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


def _mark(student, course, term, ca, exam):
    return models.Mark(
        student_id=student,
        course_id=course,
        term_id=term,
        academic_year_id=2,
        ca_score=None if ca is None else Decimal(str(ca)),
        exam_score=None if exam is None else Decimal(str(exam)),
    )


@pytest.fixture
def school(db_session):
    """
    Year 2 (2024/2025), department 1, two terms, three courses (Math x3, English x2, Physics x1).

    Alice (L2): annual 15.33 -> promoted
    Bob   (L2): annual 10.90 -> repeated, already in L2 during 2023/2024 (stored flag wrong)
    Carol (L2): no marks -> 0, stored as repeater by mistake
    Dan   (L3): annual 18.00 -> repeated, no level above 3
    """
    db = db_session
    db.add(models.Department(id=1, name="Building"))
    db.add_all([
        models.AcademicYear(id=1, label="2023/2024", start_date=date(2023, 9, 1), is_active=False),
        models.AcademicYear(id=2, label="2024/2025", start_date=date(2024, 9, 1), is_active=True),
        models.AcademicYear(id=3, label="2025/2026", start_date=date(2025, 9, 1), is_active=False),
        models.AcademicYear(id=4, label="2022/2023", start_date=date(2022, 9, 1), is_closed=True),
    ])
    db.add_all([
        models.Term(id=21, label="First term", academic_year_id=2),
        models.Term(id=22, label="Second term", academic_year_id=2),
    ])
    db.add_all([
        models.Course(id=1, name="Mathematics", coefficient=Decimal("3"), level_id=2, department_id=1),
        models.Course(id=2, name="English", coefficient=Decimal("2"), level_id=2, department_id=1),
        models.Course(id=3, name="Physics", coefficient=Decimal("1"), level_id=2, department_id=1),
    ])
    db.add_all([
        models.Student(id=1, name="Alice", matricule="GT001", gender="F", department_id=1),
        models.Student(id=2, name="Bob", matricule="GT002", gender="M", department_id=1),
        models.Student(id=3, name="Carol", matricule="GT003", gender="F", department_id=1),
        models.Student(id=4, name="Dan", matricule="GT004", gender="M", department_id=1),
    ])
    db.add_all([
        models.ClassStudent(id=1, student_id=2, academic_year_id=1, level_id=2,
                            promoted=False, promotion_status="repeated", is_repeater=False),
        models.ClassStudent(id=2, student_id=1, academic_year_id=2, level_id=2, is_repeater=False),
        models.ClassStudent(id=3, student_id=2, academic_year_id=2, level_id=2, is_repeater=False),
        models.ClassStudent(id=4, student_id=3, academic_year_id=2, level_id=2, is_repeater=True),
        models.ClassStudent(id=5, student_id=4, academic_year_id=2, level_id=3, is_repeater=False),
    ])
    db.add_all([
        # Alice
        _mark(1, 1, 21, 14, 16), _mark(1, 2, 21, 12, 14), _mark(1, 3, 21, 18, None),
        _mark(1, 1, 22, 16, 18), _mark(1, 2, 22, 14, 14), _mark(1, 3, 22, 16, 16),
        # Bob, English not entered in the second term
        _mark(2, 1, 21, 10, 12), _mark(2, 2, 21, 10, 10),
        _mark(2, 1, 22, 12, 12), _mark(2, 2, 22, None, None),
        # Dan
        _mark(4, 1, 21, 18, 18),
    ])
    db.commit()
    return db


@pytest.fixture
def client(db_session):
    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {SERVICE_TOKEN}"}
