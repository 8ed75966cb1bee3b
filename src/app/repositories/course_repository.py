"""Course Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.course import Course


class CourseRepository(ABC):
    """Repository interface for Course lookups"""

    @abstractmethod
    async def get_by_id(self, course_id: int) -> Optional[Course]:
        """
        Retrieve course by ID

        Args:
            course_id: Course ID

        Returns:
            Course if found, None otherwise
        """
        pass
