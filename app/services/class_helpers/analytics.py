# /app/services/class_helpers/analytics.py

"""
Pure reductions behind the class analytics procedures. They operate on rows
that were already fetched for one class and one date window, and are
recomputed on every call.
"""

from datetime import datetime, timezone
from typing import List

import pandas as pd

from ...models import analytics_model
from ...models.enums import AttendanceStatus
from .assembly import student_ref


def _iso_date(value: datetime) -> str:
    """UTC calendar date of a timestamp, as YYYY-MM-DD."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date().isoformat()


def _submission_percentage(submission) -> float:
    # Missing marks count as 0 obtained out of 1 total, like an unmarked entry.
    return (submission.obtained_marks or 0) / (submission.total_marks or 1) * 100


def activity_average(activity) -> float:
    """Mean submission percentage for one activity; 0 when nobody submitted."""
    scores = [_submission_percentage(s) for s in activity.submissions]
    return sum(scores) / (len(scores) or 1)


def attendance_stats(records: List) -> analytics_model.AttendanceStats:
    """
    Groups attendance by day and reports the present/total rate per day.
    The overall figure is the mean of the daily rates, so a thin day weighs
    as much as a full one.
    """
    if not records:
        return analytics_model.AttendanceStats(trends=[], averageAttendance=0)

    df = pd.DataFrame([
        {"date": _iso_date(r.date), "present": r.status == AttendanceStatus.PRESENT.value}
        for r in records
    ])
    daily = df.groupby("date", sort=False)["present"].agg(["sum", "count"])
    daily["rate"] = daily["sum"] / daily["count"] * 100

    trends = [
        analytics_model.AttendanceTrend(date=date, attendanceRate=float(rate))
        for date, rate in daily["rate"].items()
    ]
    return analytics_model.AttendanceStats(trends=trends, averageAttendance=float(daily["rate"].mean()))


def performance_trends(activities: List) -> analytics_model.PerformanceTrends:
    """
    One data point per activity (its creation date and mean submission
    percentage) plus the mean of those activity averages per subject.
    """
    if not activities:
        return analytics_model.PerformanceTrends(data=[], subjectWise=[])

    df = pd.DataFrame([
        {
            "date": _iso_date(a.created_at),
            "subject": a.subject.name,
            "averageScore": activity_average(a),
        }
        for a in activities
    ])
    data = [
        analytics_model.PerformancePoint(date=row.date, averageScore=float(row.averageScore))
        for row in df.itertuples(index=False)
    ]
    by_subject = df.groupby("subject", sort=False)["averageScore"].mean()
    subject_wise = [
        analytics_model.SubjectPerformance(subject=subject, averageScore=float(score))
        for subject, score in by_subject.items()
    ]
    return analytics_model.PerformanceTrends(data=data, subjectWise=subject_wise)


def _presence(record) -> int:
    return 1 if record.id else 0


def historical_analytics(students: List) -> analytics_model.HistoricalAnalytics:
    """
    Growth between the first and last student record in the window.

    The figure compares whether the first and last records carry an id, not
    headcounts, so with any two saved records it comes out as 0. Kept that
    way until the intended metric is confirmed.
    """
    growth = 0.0
    if len(students) > 1:
        first, last = students[0], students[-1]
        growth = (_presence(last) - _presence(first)) / (_presence(first) or 1) * 100
    return analytics_model.HistoricalAnalytics(
        studentGrowth=growth,
        historicalData=[student_ref(s) for s in students],
    )
