"""CreatePriceOverride Use Case

Adds a dated price override to an enrollment.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.enrollment_repository import EnrollmentRepository
from src.app.repositories.price_override_repository import PriceOverrideRepository
from src.domain.money import round2
from src.domain.price_override import PriceOverride
from .dtos import CreatePriceOverrideCommandDTO, PriceOverrideResponseDTO

logger = logging.getLogger(__name__)


class CreatePriceOverride:
    """
    Use Case: Create a price override

    Business Rules:
    1. The enrollment must exist
    2. Windows of one enrollment never overlap, so at most one override
       applies to any billing month
    3. Given prices are stored rounded to cents
    """

    def __init__(
        self,
        uow: UnitOfWork,
        enrollment_repo: EnrollmentRepository,
        price_override_repo: PriceOverrideRepository,
    ):
        self.uow = uow
        self.enrollment_repo = enrollment_repo
        self.price_override_repo = price_override_repo

    async def execute(
        self, command: CreatePriceOverrideCommandDTO
    ) -> Result[PriceOverrideResponseDTO]:
        try:
            enrollment = await self.enrollment_repo.get_by_id(command.enrollment_id)
            if not enrollment:
                return Return.err(
                    Error(
                        code="ENROLLMENT_NOT_FOUND",
                        message=f"Enrollment with ID {command.enrollment_id} not found",
                    )
                )

            existing = await self.price_override_repo.get_by_enrollment_id(enrollment.id)
            for override in existing:
                if override.overlaps(command.valid_from, command.valid_to):
                    return Return.err(
                        Error(
                            code="OVERLAPPING_PRICE_OVERRIDE",
                            message=(
                                f"Enrollment {enrollment.id} already has an override "
                                f"from {override.valid_from} overlapping this window"
                            ),
                            reason=f"price_override_id={override.id}",
                        )
                    )

            created = await self.price_override_repo.create(
                PriceOverride(
                    enrollment_id=enrollment.id,
                    valid_from=command.valid_from,
                    valid_to=command.valid_to,
                    lesson_price=(
                        round2(command.lesson_price) if command.lesson_price is not None else None
                    ),
                    subscription_price=(
                        round2(command.subscription_price)
                        if command.subscription_price is not None else None
                    ),
                )
            )
            await self.uow.commit()

            logger.info(f"Created price override {created.id} for enrollment {enrollment.id}")

            return Return.ok(
                PriceOverrideResponseDTO(
                    id=created.id,
                    enrollment_id=created.enrollment_id,
                    valid_from=created.valid_from,
                    valid_to=created.valid_to,
                    lesson_price=created.lesson_price,
                    subscription_price=created.subscription_price,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Creating price override for enrollment {command.enrollment_id} failed: {e}")
            return Return.err(
                Error(
                    code="CREATE_PRICE_OVERRIDE_FAILED",
                    message="Failed to create price override",
                    reason=str(e),
                )
            )
