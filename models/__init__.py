from models.user import User
from models.student import Student
from models.lesson import Lesson
from models.class_group import ClassGroup, ClassSchedule, GradeMap

__all__ = [
    "User",
    "Student",
    "Lesson",
    "ClassGroup",
    "ClassSchedule",
    "GradeMap",
]
