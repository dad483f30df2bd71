"""SQLAlchemy-backed stores.

Every call opens its own session, so calls may run concurrently.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from shared.models import PrebuiltWorkspace, Project, Team, User


class _SqlStore:
    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self.session_maker = session_maker


class SqlProjectStore(_SqlStore):
    async def find_project(self, team_id: str, name: str) -> Project | None:
        async with self.session_maker() as session:
            query = select(Project).where(Project.team_id == team_id, Project.name == name)
            result = await session.execute(query)
            return result.scalar_one_or_none()

    async def find_projects_by_team(self, team_id: str) -> list[Project]:
        async with self.session_maker() as session:
            query = (
                select(Project)
                .where(Project.team_id == team_id)
                .order_by(Project.creation_time, Project.id)
            )
            result = await session.execute(query)
            return list(result.scalars().all())

    async def store_project(self, project: Project) -> Project:
        async with self.session_maker() as session:
            session.add(project)
            await session.commit()
            await session.refresh(project)
            return project


class SqlTeamStore(_SqlStore):
    async def find_team_by_id(self, team_id: str) -> Team | None:
        async with self.session_maker() as session:
            return await session.get(Team, team_id)

    async def find_team_by_slug(self, slug: str) -> Team | None:
        async with self.session_maker() as session:
            result = await session.execute(select(Team).where(Team.slug == slug))
            return result.scalar_one_or_none()

    async def find_teams(self) -> list[Team]:
        async with self.session_maker() as session:
            result = await session.execute(select(Team).order_by(Team.slug))
            return list(result.scalars().all())


class SqlPrebuildStore(_SqlStore):
    async def find_prebuilt_workspaces_by_project(
        self, project_id: str, branch: str | None = None
    ) -> list[PrebuiltWorkspace]:
        query = select(PrebuiltWorkspace).where(PrebuiltWorkspace.project_id == project_id)
        if branch is not None:
            query = query.where(PrebuiltWorkspace.branch == branch)
        # Oldest first: callers take the last element as the latest prebuild
        query = query.order_by(PrebuiltWorkspace.creation_time.asc(), PrebuiltWorkspace.id.asc())

        async with self.session_maker() as session:
            result = await session.execute(query)
            return list(result.scalars().all())


class SqlUserStore(_SqlStore):
    async def find_user_by_id(self, user_id: str) -> User | None:
        async with self.session_maker() as session:
            return await session.get(User, user_id)
