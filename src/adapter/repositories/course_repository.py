"""SQLAlchemy Course Repository Implementation"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.course_repository import CourseRepository
from src.domain.course import Course


class SqlAlchemyCourseRepository(CourseRepository):
    """SQLAlchemy implementation of CourseRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, course_id: int) -> Optional[Course]:
        stmt = select(Course).where(Course.id == course_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
