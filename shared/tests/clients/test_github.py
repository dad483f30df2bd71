import os
from unittest.mock import patch

import httpx
import pytest
import respx

from shared.clients.github import GitHubRepositoryProvider
from shared.models.user import User


@pytest.fixture
def mock_env():
    with patch.dict(os.environ, {"GITHUB_APP_ID": "12345"}):
        yield


@pytest.fixture
def provider(mock_env):
    provider = GitHubRepositoryProvider()
    provider._private_key = "dummy_private_key"  # Bypass file loading
    return provider


@pytest.fixture
def anonymous_provider():
    with patch.dict(os.environ, {}, clear=True):
        return GitHubRepositoryProvider()


@pytest.fixture
def mock_jwt():
    with patch(
        "shared.clients.github.GitHubRepositoryProvider._generate_jwt",
        return_value="mock_jwt_token",
    ):
        yield


def _commit(sha: str, message: str, login: str | None = "octocat") -> dict:
    return {
        "sha": sha,
        "html_url": f"https://github.com/acme/proj-a/commit/{sha}",
        "commit": {
            "message": message,
            "author": {"name": "Octo Cat", "email": "o@example.com", "date": "2021-06-01T12:00:00Z"},
        },
        "author": {"login": login, "id": 1, "avatar_url": f"https://avatars/{login}"}
        if login
        else None,
    }


def _mock_repo(respx_mock, branches: list[dict] | None, commits: dict[str, dict]):
    respx_mock.get("/repos/acme/proj-a").mock(
        return_value=httpx.Response(
            httpx.codes.OK,
            json={
                "id": 1,
                "name": "proj-a",
                "full_name": "acme/proj-a",
                "html_url": "https://github.com/acme/proj-a",
                "default_branch": "main",
            },
        )
    )
    if branches is not None:
        respx_mock.get("/repos/acme/proj-a/branches").mock(
            return_value=httpx.Response(httpx.codes.OK, json=branches)
        )
    for sha, body in commits.items():
        respx_mock.get(f"/repos/acme/proj-a/commits/{sha}").mock(
            return_value=httpx.Response(httpx.codes.OK, json=body)
        )


@pytest.mark.asyncio
async def test_get_branches_with_user_token(provider):
    user = User(id="u1", auth_tokens={"github.com": "ghp_user"})

    async with respx.mock(base_url="https://api.github.com", assert_all_called=False) as respx_mock:
        installation = respx_mock.get("/repos/acme/proj-a/installation")
        _mock_repo(
            respx_mock,
            branches=[
                {"name": "main", "commit": {"sha": "aaa"}},
                {"name": "feature-x", "commit": {"sha": "bbb"}},
            ],
            commits={"aaa": _commit("aaa", "fix bug"), "bbb": _commit("bbb", "add x", login=None)},
        )

        branches = await provider.get_branches(user, "acme", "proj-a")

        assert not installation.called
        sent = respx_mock.calls.last.request
        assert sent.headers["Authorization"] == "token ghp_user"

    assert [b.name for b in branches] == ["main", "feature-x"]
    main, feature = branches
    assert main.is_default
    assert not feature.is_default
    assert main.sha == "aaa"
    assert main.commit_message == "fix bug"
    assert main.author == "Octo Cat"
    assert main.author_avatar_url == "https://avatars/octocat"
    assert main.html_url == "https://github.com/acme/proj-a/tree/main"
    assert main.commit_url == "https://github.com/acme/proj-a/commit/aaa"
    assert feature.author_avatar_url is None


@pytest.mark.asyncio
async def test_get_branches_falls_back_to_installation_token(provider, mock_jwt):
    async with respx.mock(base_url="https://api.github.com") as respx_mock:
        respx_mock.get("/repos/acme/proj-a/installation").mock(
            return_value=httpx.Response(httpx.codes.OK, json={"id": 999})
        )
        respx_mock.post("/app/installations/999/access_tokens").mock(
            return_value=httpx.Response(httpx.codes.CREATED, json={"token": "ghs_app"})
        )
        _mock_repo(respx_mock, branches=[], commits={})

        branches = await provider.get_branches(None, "acme", "proj-a")

        assert respx_mock.calls.last.request.headers["Authorization"] == "token ghs_app"

    assert branches == []


@pytest.mark.asyncio
async def test_get_branches_paginates(anonymous_provider):
    first_page = [{"name": f"b{i}", "commit": {"sha": "aaa"}} for i in range(100)]
    second_page = [{"name": "last", "commit": {"sha": "aaa"}}]

    async with respx.mock(base_url="https://api.github.com") as respx_mock:
        _mock_repo(respx_mock, branches=None, commits={"aaa": _commit("aaa", "msg")})
        respx_mock.get("/repos/acme/proj-a/branches", params={"page": "1"}).mock(
            return_value=httpx.Response(httpx.codes.OK, json=first_page)
        )
        respx_mock.get("/repos/acme/proj-a/branches", params={"page": "2"}).mock(
            return_value=httpx.Response(httpx.codes.OK, json=second_page)
        )

        branches = await anonymous_provider.get_branches(None, "acme", "proj-a")

    assert len(branches) == 101
    assert branches[-1].name == "last"


@pytest.mark.asyncio
async def test_get_branches_propagates_http_errors(anonymous_provider):
    async with respx.mock(base_url="https://api.github.com") as respx_mock:
        respx_mock.get("/repos/acme/proj-a").mock(
            return_value=httpx.Response(httpx.codes.NOT_FOUND)
        )

        with pytest.raises(httpx.HTTPStatusError):
            await anonymous_provider.get_branches(None, "acme", "proj-a")


@pytest.mark.asyncio
async def test_anonymous_requests_have_no_authorization(anonymous_provider):
    async with respx.mock(base_url="https://api.github.com") as respx_mock:
        _mock_repo(respx_mock, branches=[], commits={})

        branches = await anonymous_provider.get_branches(None, "acme", "proj-a")

        for call in respx_mock.calls:
            assert "Authorization" not in call.request.headers

    assert branches == []


@pytest.mark.asyncio
async def test_missing_app_key_falls_back_to_anonymous(tmp_path):
    with patch.dict(os.environ, {}, clear=True):
        provider = GitHubRepositoryProvider(
            app_id="123", private_key_path=str(tmp_path / "missing.pem")
        )

    async with respx.mock(base_url="https://api.github.com") as respx_mock:
        _mock_repo(
            respx_mock,
            branches=[{"name": "main", "commit": {"sha": "aaa"}}],
            commits={"aaa": _commit("aaa", "init")},
        )

        with patch.dict(os.environ, {}, clear=True):
            branches = await provider.get_branches(None, "acme", "proj-a")

        for call in respx_mock.calls:
            assert "Authorization" not in call.request.headers

    assert [b.name for b in branches] == ["main"]


@pytest.mark.asyncio
async def test_app_not_installed_falls_back_to_anonymous(provider, mock_jwt):
    async with respx.mock(base_url="https://api.github.com") as respx_mock:
        installation = respx_mock.get("/repos/acme/proj-a/installation").mock(
            return_value=httpx.Response(httpx.codes.NOT_FOUND)
        )
        _mock_repo(
            respx_mock,
            branches=[{"name": "main", "commit": {"sha": "aaa"}}],
            commits={"aaa": _commit("aaa", "init")},
        )

        branches = await provider.get_branches(None, "acme", "proj-a")

        assert installation.called
        for call in respx_mock.calls[1:]:
            assert "Authorization" not in call.request.headers

    assert [b.name for b in branches] == ["main"]
    assert branches[0].is_default
