"""Enrollment API Routes"""

from fastapi import APIRouter, Depends, status
from pydantic import ValidationError
from sqlmodel.ext.asyncio.session import AsyncSession

from libs.result import Error
from src.api.schemas.billing_request import PriceOverrideRequestSchema
from src.app.use_cases.billing.create_price_override import CreatePriceOverride
from src.app.use_cases.billing.dtos import CreatePriceOverrideCommandDTO, PriceOverrideResponseDTO
from src.adapter.repositories.enrollment_repository import SqlAlchemyEnrollmentRepository
from src.adapter.repositories.price_override_repository import SqlAlchemyPriceOverrideRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session
from src.api.error import ClientError

router = APIRouter(prefix="/billing/enrollments", tags=["Enrollments"])


@router.post(
    "/{enrollment_id}/price-overrides",
    response_model=PriceOverrideResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {
            "description": "Window overlaps an existing override",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "OVERLAPPING_PRICE_OVERRIDE",
                            "message": "Enrollment 3 already has an override from 2024-01-01 overlapping this window"
                        }
                    }
                }
            }
        }
    }
)
async def create_price_override(
    enrollment_id: int,
    request: PriceOverrideRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """
    Add a price override to an enrollment.

    The override replaces the given prices for every billing month its
    window touches. Omit `valid_to` for an open-ended override.
    """
    try:
        command = CreatePriceOverrideCommandDTO(enrollment_id=enrollment_id, **request.model_dump())
    except ValidationError as e:
        raise ClientError(
            Error(code="VALIDATION_ERROR", message="Invalid price override", reason=str(e))
        )

    use_case = CreatePriceOverride(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyEnrollmentRepository(session),
        SqlAlchemyPriceOverrideRepository(session),
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
