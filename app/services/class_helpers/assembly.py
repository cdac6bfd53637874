# /app/services/class_helpers/assembly.py

"""
Flat DTO assembly for class procedures.

Every function here reads only the relations the matching repository loader
set has eager-loaded, so assembling a DTO never walks further than the query
that produced it.
"""

from typing import List, Optional

from ...models import class_model
from ...db.models.class_models import Class, ClassGroup, TeacherClass
from ...db.models.user_models import StudentProfile


def entity_ref(obj, label: str = "name") -> Optional[class_model.EntityRef]:
    if obj is None:
        return None
    return class_model.EntityRef(id=obj.id, name=getattr(obj, label))


def teacher_ref(profile) -> Optional[class_model.EntityRef]:
    if profile is None:
        return None
    return class_model.EntityRef(id=profile.id, name=profile.user.name or "")


def class_group_ref(group: ClassGroup) -> class_model.ClassGroupRef:
    return class_model.ClassGroupRef(
        id=group.id,
        name=group.name,
        programId=group.program_id,
        programName=group.program.name if group.program is not None else None,
    )


def teacher_assignment(link: TeacherClass) -> class_model.TeacherAssignment:
    user = link.teacher.user
    return class_model.TeacherAssignment(
        teacherId=link.teacher_id,
        userId=user.id,
        name=user.name,
        email=user.email,
        isClassTeacher=bool(link.is_class_teacher),
        status=link.status,
    )


def student_ref(profile: StudentProfile) -> class_model.StudentRef:
    user = profile.user
    return class_model.StudentRef(
        id=profile.id,
        userId=profile.user_id,
        name=user.name if user is not None else None,
        email=user.email if user is not None else None,
        classId=profile.class_id,
        createdAt=profile.created_at,
    )


def _record_fields(cls: Class) -> dict:
    return dict(
        id=cls.id,
        name=cls.name,
        description=cls.description,
        capacity=cls.capacity,
        status=cls.status,
        classGroup=class_group_ref(cls.class_group),
        campus=entity_ref(cls.campus),
        building=entity_ref(cls.building),
        room=entity_ref(cls.room, label="number"),
        teachers=[teacher_assignment(t) for t in cls.teachers],
        createdAt=cls.created_at,
    )


def class_record(cls: Class) -> class_model.ClassRecord:
    return class_model.ClassRecord(**_record_fields(cls))


def class_search_result(cls: Class) -> class_model.ClassSearchResult:
    return class_model.ClassSearchResult(
        **_record_fields(cls),
        students=[student_ref(s) for s in cls.students],
    )


def _activity(activity, include_submissions: bool) -> class_model.ActivityView:
    submissions = None
    if include_submissions:
        submissions = [
            class_model.SubmissionView(
                id=s.id,
                studentId=s.student_id,
                obtainedMarks=s.obtained_marks,
                totalMarks=s.total_marks,
            )
            for s in activity.submissions
        ]
    return class_model.ActivityView(
        id=activity.id,
        title=activity.title,
        type=activity.type,
        subjectId=activity.subject_id,
        createdAt=activity.created_at,
        submissions=submissions,
    )


def _timetable(timetable) -> class_model.TimetableView:
    return class_model.TimetableView(
        id=timetable.id,
        name=timetable.name,
        periods=[
            class_model.PeriodView(
                id=p.id,
                dayOfWeek=p.day_of_week,
                startTime=p.start_time,
                endTime=p.end_time,
                subject=entity_ref(p.subject),
                classroom=entity_ref(p.classroom, label="number"),
                teacher=teacher_ref(p.teacher),
            )
            for p in timetable.periods
        ],
    )


def class_details(cls: Class, include_submissions: bool = False, include_calendar: bool = False) -> class_model.ClassDetails:
    calendar_events: Optional[List[class_model.CalendarEventView]] = None
    if include_calendar:
        calendar = cls.class_group.calendar
        calendar_events = [
            class_model.CalendarEventView(id=e.id, title=e.title, startDate=e.start_date, endDate=e.end_date)
            for e in (calendar.events if calendar is not None else [])
        ]
    return class_model.ClassDetails(
        **_record_fields(cls),
        students=[student_ref(s) for s in cls.students],
        activities=[_activity(a, include_submissions) for a in cls.activities],
        timetables=[_timetable(t) for t in cls.timetables],
        calendarEvents=calendar_events,
    )
