# /app/db/base.py

# This file acts as a central registry for all our SQLAlchemy models.
# Importing them here makes sure Base.metadata knows every table before
# `init_db` runs `create_all`.

from .base_class import Base

from .models.user_models import User, TeacherProfile, TeacherSubject, TeacherCampus, StudentProfile
from .models.campus_models import Campus, Building, Room
from .models.class_models import Program, Calendar, CalendarEvent, ClassGroup, Class, TeacherClass
from .models.subject_models import Subject, ClassGroupSubject
from .models.timetable_models import Timetable, Period
from .models.activity_models import ClassActivity, ActivitySubmission, Attendance
from .models.gradebook_models import (
    AssessmentSystem,
    TermStructure,
    AcademicTerm,
    AssessmentPeriod,
    GradeBook,
    SubjectGradeRecord,
)
