# Import every model so Base.metadata knows all tables (create_all, relationships by name).
from models.departments import Department
from models.students import Student
from models.academic_years import AcademicYear
from models.terms import Term
from models.courses import Course
from models.marks import Mark
from models.class_students import ClassStudent

__all__ = ["Department", "Student", "AcademicYear", "Term", "Course", "Mark", "ClassStudent"]
