from decimal import Decimal

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401  registers every table on SQLModel.metadata
from src.depends import get_invoice_output_dir, get_session
from src.domain.attendance_month import AttendanceMonth
from src.domain.course import Course
from src.domain.enrollment import BillingMode, Enrollment
from src.domain.settings import BillingSettings
from src.domain.student import Student


class IntegrationConfig:
    API_PREFIX = "/api"
    CORS_ORIGINS = ["*"]
    CORS_ALLOW_CREDENTIALS = False
    ENABLE_LOGGING_MIDDLEWARE = False
    CREATE_SCHEMA_ON_STARTUP = False


@pytest_asyncio.fixture(scope="function")
async def engine():
    """Create an in-memory SQLite engine shared by every connection of the test"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Create a new database session for each test"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with Session() as session:
        session.add(BillingSettings(id=1, org_name="Riga Language School", address="Brivibas iela 1"))
        await session.commit()
        yield session


@pytest_asyncio.fixture
async def seed(db_session):
    """Insert students, courses, enrollments and attendance"""

    class Seeder:
        async def student(self, full_name="Anna Berzina", is_active=True) -> Student:
            return await self._add(Student(full_name=full_name, is_active=is_active))

        async def course(
            self, name="English B1", lesson_price="15.00", subscription_price="0.00"
        ) -> Course:
            return await self._add(
                Course(
                    name=name,
                    lesson_price=Decimal(lesson_price),
                    subscription_price=Decimal(subscription_price),
                )
            )

        async def enrollment(
            self, student, course, billing_mode=BillingMode.PER_LESSON, discount_pct="0"
        ) -> Enrollment:
            return await self._add(
                Enrollment(
                    student_id=student.id,
                    course_id=course.id,
                    billing_mode=billing_mode,
                    discount_pct=Decimal(discount_pct),
                )
            )

        async def attendance(self, student, course, year, month, lessons_count) -> AttendanceMonth:
            return await self._add(
                AttendanceMonth(
                    student_id=student.id,
                    course_id=course.id,
                    year=year,
                    month=month,
                    lessons_count=lessons_count,
                )
            )

        async def _add(self, entity):
            db_session.add(entity)
            await db_session.commit()
            await db_session.refresh(entity)
            return entity

    return Seeder()


@pytest_asyncio.fixture
async def client(db_session, tmp_path):
    """Create test client with database session and output directory overrides"""
    from src.api.app import create_app

    app = create_app(IntegrationConfig)

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_invoice_output_dir] = lambda: str(tmp_path / "invoices")

    # Use ASGITransport for httpx AsyncClient
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
