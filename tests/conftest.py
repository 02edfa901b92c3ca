"""Shared fixtures: in-memory SQLite store, seeded users and families."""

from dataclasses import dataclass
from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from firefly.shared.models import Base, Category, Document, Family, User, UserRole
from firefly.shared.repositories import ContentRepository
from firefly.shared.schemas.content import CreateContentInput
from firefly.shared.models.enums import ContentType, Visibility


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with factory() as session:
        yield session


@dataclass
class World:
    """Seeded actors.

    family_a is created by `volunteer`; member and member_b belong to it.
    family_b is unrelated; outsider belongs to it.
    """

    admin: User
    volunteer: User
    member: User
    member_b: User
    outsider: User
    family_a: Family
    family_b: Family
    category: Category
    document: Document


@pytest.fixture
async def world(session: AsyncSession) -> World:
    admin = User(email="admin@firefly.test", first_name="Ada", role=UserRole.ADMIN)
    volunteer = User(email="volunteer@firefly.test", first_name="Val", role=UserRole.VOLUNTEER)
    session.add_all([admin, volunteer])
    await session.flush()

    family_a = Family(name="Rivera family", created_by_id=volunteer.id)
    family_b = Family(name="Okafor family")
    session.add_all([family_a, family_b])
    await session.flush()

    member = User(email="member@firefly.test", role=UserRole.MEMBER, family_id=family_a.id)
    member_b = User(email="member-b@firefly.test", role=UserRole.MEMBER, family_id=family_a.id)
    outsider = User(email="outsider@firefly.test", role=UserRole.MEMBER, family_id=family_b.id)
    category = Category(name="Care", color="#dc2626")
    session.add_all([member, member_b, outsider, category])
    await session.flush()

    document = Document(title="Care plan", file_name="care-plan.pdf", uploaded_by=member.id)
    session.add(document)
    await session.flush()

    return World(
        admin=admin,
        volunteer=volunteer,
        member=member,
        member_b=member_b,
        outsider=outsider,
        family_a=family_a,
        family_b=family_b,
        category=category,
        document=document,
    )


@pytest.fixture
def repo(session: AsyncSession) -> ContentRepository:
    return ContentRepository(session, assignment_admin_override=False)


@pytest.fixture
def make_note(repo: ContentRepository):
    async def _make(user: User, **fields):
        fields.setdefault("title", "Weekly check-in")
        fields.setdefault("visibility", Visibility.PRIVATE)
        return await repo.create(
            CreateContentInput(content_type=ContentType.NOTE, **fields),
            user.id,
            user.role,
        )

    return _make


@pytest.fixture
def make_resource(repo: ContentRepository):
    async def _make(user: User, **fields):
        fields.setdefault("title", "Respite care guide")
        fields.setdefault("visibility", Visibility.PUBLIC)
        return await repo.create(
            CreateContentInput(content_type=ContentType.RESOURCE, **fields),
            user.id,
            user.role,
        )

    return _make
