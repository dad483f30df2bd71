"""Project page: branch list of one project with its prebuild status.

Holds the page state (loaded project, branch overview and the two filters)
and the pure helpers used to render it.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from urllib.parse import quote

import httpx

from shared.contracts.dto.project import BranchDetails, ProjectInfo
from shared.contracts.dto.team import TeamDTO
from shared.logging_config import get_logger
from shared.models.prebuild import PrebuildState

logger = get_logger(__name__)

STATUS_LABELS = {
    PrebuildState.QUEUED: "pending",
    PrebuildState.BUILDING: "running",
    PrebuildState.ABORTED: "canceled",
    PrebuildState.TIMEOUT: "timeout",
    PrebuildState.AVAILABLE: "ready",
    PrebuildState.FAILED: "failed",
}

STATUS_ICONS = {
    PrebuildState.QUEUED: "[yellow]○[/yellow]",
    PrebuildState.BUILDING: "[yellow]◐[/yellow]",
    PrebuildState.ABORTED: "[grey50]⊘[/grey50]",
    PrebuildState.TIMEOUT: "[red]⏱[/red]",
    PrebuildState.AVAILABLE: "[green]●[/green]",
    PrebuildState.FAILED: "[red]✗[/red]",
}

# Title -> state; None clears the filter
STATUS_FILTER_ENTRIES: dict[str, PrebuildState | None] = {
    "All": None,
    "READY": PrebuildState.AVAILABLE,
}


@dataclass
class MenuEntry:
    title: str
    separator: bool = False
    style: str | None = None


def prebuild_status_label(state: PrebuildState) -> str:
    return STATUS_LABELS[state]


def prebuild_status_icon(state: PrebuildState) -> str:
    return STATUS_ICONS[state]


def prebuild_context_menu(branch: BranchDetails) -> list[MenuEntry]:
    """Actions offered for a branch row. None of them is wired up yet."""
    return [
        MenuEntry("New Workspace"),
        MenuEntry("Trigger Prebuild", separator=True),
        MenuEntry("Cancel Prebuild", style="red"),
    ]


def menu_markup(entries: list[MenuEntry]) -> str:
    """One-line rendering of a context menu; a separator follows its entry."""
    parts = []
    for i, entry in enumerate(entries):
        title = f"[{entry.style}]{entry.title}[/{entry.style}]" if entry.style else entry.title
        parts.append(title)
        if i < len(entries) - 1:
            parts.append(" │ " if entry.separator else ", ")
    return "".join(parts)


def remote_url(clone_url: str) -> str:
    return clone_url.replace("https://", "")


def branch_filter(
    branch: BranchDetails, search: str | None = None, status: PrebuildState | None = None
) -> bool:
    """True when the branch row should be shown.

    A status filter only keeps branches whose last prebuild has that status.
    The search text matches case-insensitively against "<title> <name>".
    """
    if status is not None:
        if branch.last_prebuild is None or branch.last_prebuild.status != status:
            return False
    if search:
        haystack = f"{branch.change_title} {branch.name}".lower()
        if search.lower() not in haystack:
            return False
    return True


_UNITS = (
    ("year", 365 * 24 * 3600),
    ("month", 30 * 24 * 3600),
    ("day", 24 * 3600),
    ("hour", 3600),
    ("minute", 60),
)


def relative_time(moment: datetime | None, now: datetime | None = None) -> str:
    """Human readable distance to now, e.g. "3 days ago"."""
    if moment is None:
        return "at an unknown time"
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    now = now or datetime.now(UTC)
    seconds = (now - moment).total_seconds()
    suffix = "ago" if seconds >= 0 else "from now"
    seconds = abs(seconds)

    for unit, size in _UNITS:
        count = int(seconds // size)
        if count >= 1:
            if count == 1:
                article = "an" if unit == "hour" else "a"
                return f"{article} {unit} {suffix}"
            return f"{count} {unit}s {suffix}"
    return f"a few seconds {suffix}"


@dataclass
class ProjectPage:
    """State of the project page."""

    project: ProjectInfo | None = None
    project_details: dict[str, BranchDetails] = field(default_factory=dict)
    search_filter: str | None = None
    status_filter: PrebuildState | None = None

    async def load(self, client: httpx.AsyncClient, team_slug: str, project_name: str) -> None:
        """Resolve team and project by name and fetch the branch overview.

        Leaves the page empty when the team or project does not exist.
        HTTP errors propagate.
        """
        resp = await client.get("/api/teams/", params={"slug": team_slug})
        resp.raise_for_status()
        teams = [TeamDTO.model_validate(t) for t in resp.json()]
        if not teams:
            logger.info("team_not_found", team_slug=team_slug)
            return
        team = teams[0]

        resp = await client.get(f"/api/teams/{team.id}/projects/")
        resp.raise_for_status()
        projects = [ProjectInfo.model_validate(p) for p in resp.json()]
        project = next((p for p in projects if p.name == project_name), None)
        if project is None:
            logger.info("project_not_found", team_id=team.id, project_name=project_name)
            return

        resp = await client.get(
            f"/api/teams/{team.id}/projects/{quote(project.name, safe='')}/overview"
        )
        resp.raise_for_status()
        self.project = project
        self.project_details = {
            name: BranchDetails.model_validate(details) for name, details in resp.json().items()
        }

    def visible_branches(self) -> list[BranchDetails]:
        return [
            branch
            for branch in self.project_details.values()
            if branch_filter(branch, self.search_filter, self.status_filter)
        ]
