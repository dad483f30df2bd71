import asyncio
import json

from rich.console import Console
from rich.table import Table
import typer

from projects_cli.client import get_api_client
from projects_cli.page import (
    STATUS_FILTER_ENTRIES,
    ProjectPage,
    menu_markup,
    prebuild_context_menu,
    prebuild_status_icon,
    prebuild_status_label,
    relative_time,
    remote_url,
)
from shared.contracts.dto.project import BranchDetails, ProjectInfo
from shared.contracts.dto.team import TeamDTO
from shared.models.prebuild import PrebuildState


async def load_page_command(
    team_slug: str,
    project_name: str,
    search: str | None = None,
    status: PrebuildState | None = None,
) -> ProjectPage:
    """
    Load the project page for TEAM/PROJECT with the given filters
    """
    page = ProjectPage(search_filter=search, status_filter=status)
    api_client = get_api_client()
    try:
        await page.load(api_client, team_slug, project_name)
    finally:
        await api_client.aclose()
    return page


async def list_projects_command(team_slug: str) -> list[ProjectInfo] | None:
    """
    Projects of a team, or None when the team does not exist
    """
    api_client = get_api_client()
    try:
        response = await api_client.get("/api/teams/", params={"slug": team_slug})
        response.raise_for_status()
        teams = [TeamDTO.model_validate(t) for t in response.json()]
        if not teams:
            return None

        response = await api_client.get(f"/api/teams/{teams[0].id}/projects/")
        response.raise_for_status()
        return [ProjectInfo.model_validate(p) for p in response.json()]
    finally:
        await api_client.aclose()


def _parse_status(value: str | None) -> PrebuildState | None:
    if value is None:
        return None
    if value in STATUS_FILTER_ENTRIES:
        return STATUS_FILTER_ENTRIES[value]
    try:
        return PrebuildState(value.lower())
    except ValueError:
        choices = ", ".join([*STATUS_FILTER_ENTRIES, *(s.value for s in PrebuildState)])
        raise typer.BadParameter(f"expected one of {choices}", param_hint="--status") from None


def _commit_cell(branch: BranchDetails) -> str:
    title = branch.change_title or ""
    return (
        f"{title}\n[dim]Authored {relative_time(branch.change_date)} · {branch.change_hash}[/dim]"
    )


def _prebuild_cell(branch: BranchDetails) -> str:
    if branch.last_prebuild is None:
        return ""
    status = branch.last_prebuild.status
    return f"{prebuild_status_icon(status)} {prebuild_status_label(status)}"


def render_page(console: Console, page: ProjectPage) -> None:
    project = page.project
    console.print(f"[bold]{project.name}[/bold]")
    console.print(f"[dim]{remote_url(project.clone_url)}[/dim]")

    table = Table(show_header=True, header_style="bold")
    table.add_column("Branch")
    table.add_column("Commit")
    table.add_column("Prebuild")
    table.add_column("Actions", style="dim")

    for branch in page.visible_branches():
        name = f"[cyan]{branch.name}[/cyan]"
        if branch.is_default:
            name += " [dim](default)[/dim]"
        actions = menu_markup(prebuild_context_menu(branch))
        table.add_row(name, _commit_cell(branch), _prebuild_cell(branch), actions)

    console.print(table)


# Typer command wrapper
app = typer.Typer()


@app.command()
def branches(
    team: str = typer.Argument(..., help="Team slug"),
    project_name: str = typer.Argument(..., metavar="PROJECT", help="Project name"),
    search: str | None = typer.Option(None, "--search", "-s", help="Search branches"),
    status: str | None = typer.Option(
        None, "--status", help="Prebuild status filter (All, READY or a prebuild state)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Show the branches of a project with their last prebuild"""
    console = Console()
    status_filter = _parse_status(status)

    try:
        page = asyncio.run(load_page_command(team, project_name, search, status_filter))
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(code=1) from None

    if page.project is None:
        console.print(f"[yellow]Project {team}/{project_name} not found[/yellow]")
        raise typer.Exit(code=1)

    if json_output:
        rows = [b.model_dump(mode="json") for b in page.visible_branches()]
        typer.echo(json.dumps(rows, indent=2))
        return

    render_page(console, page)


@app.command("list")
def list_projects(
    team: str = typer.Argument(..., help="Team slug"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """List the projects of a team"""
    console = Console()

    try:
        projects = asyncio.run(list_projects_command(team))
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(code=1) from None

    if projects is None:
        console.print(f"[yellow]Team {team} not found[/yellow]")
        raise typer.Exit(code=1)

    if json_output:
        typer.echo(json.dumps([p.model_dump(mode="json") for p in projects], indent=2))
        return

    if not projects:
        console.print("[yellow]No projects found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Name", style="cyan")
    table.add_column("Repository")
    table.add_column("Last Prebuild")

    for p in projects:
        prebuild = ""
        if p.last_prebuild is not None:
            status = p.last_prebuild.status
            prebuild = f"{prebuild_status_icon(status)} {prebuild_status_label(status)}"
        table.add_row(p.name, remote_url(p.clone_url), prebuild)

    console.print(table)
