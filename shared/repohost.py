"""Repository URL parsing.

Splits clone URLs into host, owner and repository name. GitLab subgroups are
kept in the owner ("group/subgroup").
"""

import re
from typing import NamedTuple
from urllib.parse import urlsplit

MIN_PATH_SEGMENTS = 2

_SCP_LIKE = re.compile(r"^(?:[\w.-]+@)?(?P<host>[\w.-]+):(?P<path>[^/].*)$")


class RepoUrl(NamedTuple):
    host: str
    owner: str
    repo: str


def _split_path(host: str, path: str) -> RepoUrl | None:
    segments = [s for s in path.split("/") if s]
    if len(segments) < MIN_PATH_SEGMENTS:
        return None
    repo = segments[-1]
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    if not repo:
        return None
    return RepoUrl(host=host.lower(), owner="/".join(segments[:-1]), repo=repo)


def parse_repo_url(url: str | None) -> RepoUrl | None:
    """Parse a clone URL into (host, owner, repo).

    Returns None for anything that is not an http(s) or scp-like git URL with
    at least an owner and a repository segment.
    """
    if not url:
        return None
    url = url.strip()

    if "://" not in url:
        match = _SCP_LIKE.match(url)
        if not match:
            return None
        return _split_path(match.group("host"), match.group("path"))

    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError:
        return None
    if parts.scheme not in ("http", "https") or not parts.hostname:
        return None

    host = parts.hostname if port is None else f"{parts.hostname}:{port}"
    return _split_path(host, parts.path)
