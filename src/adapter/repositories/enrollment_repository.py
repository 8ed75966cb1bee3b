"""SQLAlchemy Enrollment Repository Implementation"""

from typing import List, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.enrollment_repository import EnrollmentRepository
from src.domain.enrollment import Enrollment


class SqlAlchemyEnrollmentRepository(EnrollmentRepository):
    """SQLAlchemy implementation of EnrollmentRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, enrollment_id: int) -> Optional[Enrollment]:
        stmt = select(Enrollment).where(Enrollment.id == enrollment_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_student_id(self, student_id: int) -> List[Enrollment]:
        stmt = (
            select(Enrollment)
            .where(Enrollment.student_id == student_id)
            .order_by(Enrollment.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
