from collections.abc import AsyncGenerator

from httpx import ASGITransport, AsyncClient
import pytest
import pytest_asyncio

from projects_api.dependencies import (
    get_project_store,
    get_projects_service,
    get_team_store,
    get_user_store,
)
from projects_api.main import app
from projects_api.providers import RepositoryProviderRegistry
from projects_api.services import ProjectsService
from shared.models import PrebuildState
from shared.tests.mocks.github import MockRepositoryProvider
from shared.tests.mocks.stores import (
    InMemoryPrebuildStore,
    InMemoryProjectStore,
    InMemoryTeamStore,
    InMemoryUserStore,
)

TEAM_ID = "T1"
PROJECT_NAME = "proj-a"
CLONE_URL = "https://github.com/acme/proj-a"


@pytest.fixture
def project_store() -> InMemoryProjectStore:
    return InMemoryProjectStore()


@pytest.fixture
def team_store() -> InMemoryTeamStore:
    store = InMemoryTeamStore()
    store.add(TEAM_ID, "acme")
    return store


@pytest.fixture
def prebuild_store() -> InMemoryPrebuildStore:
    return InMemoryPrebuildStore()


@pytest.fixture
def user_store() -> InMemoryUserStore:
    store = InMemoryUserStore()
    store.add("u1", tokens={"github.com": "ghp_user"})
    return store


@pytest.fixture
def github() -> MockRepositoryProvider:
    return MockRepositoryProvider("github.com")


@pytest.fixture
def service(project_store, prebuild_store, github) -> ProjectsService:
    return ProjectsService(
        project_store=project_store,
        prebuild_store=prebuild_store,
        providers=RepositoryProviderRegistry({"github.com": github}),
        default_branch="main",
    )


@pytest.fixture
def proj_a(project_store, prebuild_store, github):
    """T1/proj-a with branches main and feature-x and one available prebuild on main."""
    project = project_store.add(TEAM_ID, PROJECT_NAME, CLONE_URL, project_id="p-a")
    github.add_branch("acme", "proj-a", "main", sha="c" * 40, default=True)
    github.add_branch("acme", "proj-a", "feature-x", sha="d" * 40, commit_message="Add X\n\nbody")
    prebuild_store.add(project, "main", PrebuildState.AVAILABLE, commit="c" * 40, prebuild_id="pb-1")
    return project


@pytest_asyncio.fixture
async def client(
    service, project_store, team_store, user_store
) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_projects_service] = lambda: service
    app.dependency_overrides[get_project_store] = lambda: project_store
    app.dependency_overrides[get_team_store] = lambda: team_store
    app.dependency_overrides[get_user_store] = lambda: user_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
