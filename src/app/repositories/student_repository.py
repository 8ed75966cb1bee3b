"""Student Repository Interface

Read access to students for billing runs and balances.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional
from src.domain.student import Student


class StudentRepository(ABC):
    """Repository interface for Student lookups"""

    @abstractmethod
    async def get_by_id(self, student_id: int) -> Optional[Student]:
        """
        Retrieve student by ID

        Args:
            student_id: Student ID

        Returns:
            Student if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_ids(self, student_ids: Iterable[int]) -> Dict[int, Student]:
        """
        Retrieve several students at once

        Args:
            student_ids: Student IDs

        Returns:
            Mapping of student ID to Student (missing IDs are absent)
        """
        pass

    @abstractmethod
    async def get_active(self) -> List[Student]:
        """Retrieve students with is_active set, ordered by ID"""
        pass

    @abstractmethod
    async def get_all(self) -> List[Student]:
        """Retrieve every student, ordered by ID"""
        pass
