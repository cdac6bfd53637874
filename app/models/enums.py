# /app/models/enums.py

from enum import Enum


class Status(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    ARCHIVED = "ARCHIVED"


class TeacherType(str, Enum):
    CLASS = "CLASS"
    SUBJECT = "SUBJECT"


class AttendanceStatus(str, Enum):
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
    EXCUSED = "EXCUSED"


class AssessmentSystemType(str, Enum):
    MARKING_SCHEME = "MARKING_SCHEME"
    RUBRIC = "RUBRIC"
    CGPA = "CGPA"


class ActivityType(str, Enum):
    QUIZ = "QUIZ"
    ASSIGNMENT = "ASSIGNMENT"
    EXAM = "EXAM"
    PROJECT = "PROJECT"
