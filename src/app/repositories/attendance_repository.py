"""Attendance Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.attendance_month import AttendanceMonth


class AttendanceRepository(ABC):
    """Read-only access to monthly attendance counts"""

    @abstractmethod
    async def get_for_period(
        self, student_id: int, course_id: int, year: int, month: int
    ) -> Optional[AttendanceMonth]:
        """
        Retrieve the attendance record of a student in a course for a month

        Args:
            student_id: Student ID
            course_id: Course ID
            year: Period year
            month: Period month

        Returns:
            AttendanceMonth if recorded, None otherwise
        """
        pass
