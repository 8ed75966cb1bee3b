"""SQLAlchemy Attendance Repository Implementation"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.attendance_repository import AttendanceRepository
from src.domain.attendance_month import AttendanceMonth


class SqlAlchemyAttendanceRepository(AttendanceRepository):
    """SQLAlchemy implementation of AttendanceRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_for_period(
        self, student_id: int, course_id: int, year: int, month: int
    ) -> Optional[AttendanceMonth]:
        stmt = (
            select(AttendanceMonth)
            .where(AttendanceMonth.student_id == student_id)
            .where(AttendanceMonth.course_id == course_id)
            .where(AttendanceMonth.year == year)
            .where(AttendanceMonth.month == month)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
