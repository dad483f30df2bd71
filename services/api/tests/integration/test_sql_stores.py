"""SQLAlchemy stores against an in-memory SQLite database."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from projects_api.stores import SqlPrebuildStore, SqlProjectStore, SqlTeamStore, SqlUserStore
from shared.models import Base, PrebuildState, PrebuiltWorkspace, Project, Team, User

T0 = datetime(2021, 6, 1, 12, 0, tzinfo=UTC)


@pytest_asyncio.fixture
async def session_maker() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with maker() as session:
        session.add_all(
            [
                Team(id="T1", name="Acme", slug="acme"),
                Team(id="T2", name="Beta", slug="beta"),
                User(id="u1", name="Octo", auth_tokens={"github.com": "ghp_x"}),
            ]
        )
        await session.commit()

    yield maker
    await engine.dispose()


def _project(project_id: str, name: str, team_id: str = "T1", minutes: int = 0) -> Project:
    return Project(
        id=project_id,
        name=name,
        clone_url=f"https://github.com/acme/{name}",
        team_id=team_id,
        app_installation_id="inst-1",
        creation_time=T0 + timedelta(minutes=minutes),
    )


def _prebuild(prebuild_id: str, branch: str | None, minutes: int) -> PrebuiltWorkspace:
    return PrebuiltWorkspace(
        id=prebuild_id,
        project_id="p1",
        clone_url="https://github.com/acme/proj-a",
        commit="c" * 40,
        branch=branch,
        state=PrebuildState.AVAILABLE.value,
        creation_time=T0 + timedelta(minutes=minutes),
    )


@pytest.mark.asyncio
class TestSqlProjectStore:
    async def test_store_and_find(self, session_maker):
        store = SqlProjectStore(session_maker)

        await store.store_project(_project("p1", "proj-a"))

        found = await store.find_project("T1", "proj-a")
        assert found is not None
        assert found.id == "p1"
        assert found.created_at is not None
        assert await store.find_project("T2", "proj-a") is None

    async def test_find_by_team_in_creation_order(self, session_maker):
        store = SqlProjectStore(session_maker)
        await store.store_project(_project("p2", "second", minutes=5))
        await store.store_project(_project("p1", "first"))
        await store.store_project(_project("p3", "other-team", team_id="T2"))

        projects = await store.find_projects_by_team("T1")

        assert [p.name for p in projects] == ["first", "second"]
        assert await store.find_projects_by_team("T-empty") == []


@pytest.mark.asyncio
class TestSqlPrebuildStore:
    async def test_ascending_creation_order(self, session_maker):
        await SqlProjectStore(session_maker).store_project(_project("p1", "proj-a"))
        async with session_maker() as session:
            session.add_all(
                [
                    _prebuild("pb-c", "main", 20),
                    _prebuild("pb-a", "main", 0),
                    _prebuild("pb-b", "feature-x", 10),
                    _prebuild("pb-d", None, 30),
                ]
            )
            await session.commit()
        store = SqlPrebuildStore(session_maker)

        everything = await store.find_prebuilt_workspaces_by_project("p1")
        main = await store.find_prebuilt_workspaces_by_project("p1", "main")

        assert [p.id for p in everything] == ["pb-a", "pb-b", "pb-c", "pb-d"]
        assert [p.id for p in main] == ["pb-a", "pb-c"]
        assert await store.find_prebuilt_workspaces_by_project("p1", "gone") == []

    async def test_ties_ordered_by_id(self, session_maker):
        await SqlProjectStore(session_maker).store_project(_project("p1", "proj-a"))
        async with session_maker() as session:
            session.add_all([_prebuild("pb-2", "main", 0), _prebuild("pb-1", "main", 0)])
            await session.commit()

        rows = await SqlPrebuildStore(session_maker).find_prebuilt_workspaces_by_project("p1")

        assert [p.id for p in rows] == ["pb-1", "pb-2"]


@pytest.mark.asyncio
class TestSqlTeamAndUserStores:
    async def test_team_lookups(self, session_maker):
        store = SqlTeamStore(session_maker)

        assert (await store.find_team_by_id("T1")).slug == "acme"
        assert (await store.find_team_by_slug("beta")).id == "T2"
        assert await store.find_team_by_slug("nope") is None
        assert [t.slug for t in await store.find_teams()] == ["acme", "beta"]

    async def test_user_tokens(self, session_maker):
        user = await SqlUserStore(session_maker).find_user_by_id("u1")

        assert user.token_for_host("github.com") == "ghp_x"
        assert user.token_for_host("gitlab.com") is None
        assert await SqlUserStore(session_maker).find_user_by_id("ghost") is None
