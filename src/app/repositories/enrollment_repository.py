"""Enrollment Repository Interface"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.enrollment import Enrollment


class EnrollmentRepository(ABC):
    """Repository interface for Enrollment lookups"""

    @abstractmethod
    async def get_by_id(self, enrollment_id: int) -> Optional[Enrollment]:
        """
        Retrieve enrollment by ID

        Args:
            enrollment_id: Enrollment ID

        Returns:
            Enrollment if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_student_id(self, student_id: int) -> List[Enrollment]:
        """
        Retrieve all enrollments of a student, ordered by ID

        Args:
            student_id: Student ID

        Returns:
            List of enrollments (empty if none)
        """
        pass
