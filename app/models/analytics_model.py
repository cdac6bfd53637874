# /app/models/analytics_model.py

from typing import List

from pydantic import BaseModel, Field

from .class_model import StudentRef


class AttendanceTrend(BaseModel):
    date: str = Field(..., description="ISO date (YYYY-MM-DD).")
    attendanceRate: float


class AttendanceStats(BaseModel):
    trends: List[AttendanceTrend]
    averageAttendance: float = Field(..., description="Mean of the per-day rates.")


class PerformancePoint(BaseModel):
    date: str
    averageScore: float


class SubjectPerformance(BaseModel):
    subject: str
    averageScore: float


class PerformanceTrends(BaseModel):
    data: List[PerformancePoint]
    subjectWise: List[SubjectPerformance]


class HistoricalAnalytics(BaseModel):
    studentGrowth: float
    historicalData: List[StudentRef]
