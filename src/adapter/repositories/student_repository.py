"""SQLAlchemy Student Repository Implementation"""

from typing import Dict, Iterable, List, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.student_repository import StudentRepository
from src.domain.student import Student


class SqlAlchemyStudentRepository(StudentRepository):
    """SQLAlchemy implementation of StudentRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, student_id: int) -> Optional[Student]:
        stmt = select(Student).where(Student.id == student_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_ids(self, student_ids: Iterable[int]) -> Dict[int, Student]:
        ids = list(student_ids)
        if not ids:
            return {}
        stmt = select(Student).where(Student.id.in_(ids))
        result = await self.session.execute(stmt)
        return {student.id: student for student in result.scalars().all()}

    async def get_active(self) -> List[Student]:
        stmt = select(Student).where(Student.is_active == True).order_by(Student.id)  # noqa: E712
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_all(self) -> List[Student]:
        stmt = select(Student).order_by(Student.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
