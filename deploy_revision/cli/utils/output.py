# deploy_revision/cli/utils/output.py
"""Output formatting utilities"""

from typing import List

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

from ...api.exceptions import DeployError
from ...constants import EMOJI_ERROR, EMOJI_INFO, EMOJI_SUCCESS, EMOJI_WARNING
from ...models import DeployResult, DeploymentStatus, ReleaseInfo

console = Console()


def format_deploy_result(result: DeployResult) -> None:
    """Format and display deploy operation result"""
    if not result.updated:
        console.print(Panel(
            f"[cyan]{EMOJI_INFO}[/cyan] Revision [bold]{result.revision}[/bold] is already live, "
            f"nothing to do",
            title="Deploy Result",
            border_style="cyan"
        ))
        return

    lines = [
        f"[green]{EMOJI_SUCCESS}[/green] Deployment completed successfully!",
        "",
        f"[bold]Revision:[/bold] {result.revision}",
        f"[bold]Release:[/bold] {result.release_path}",
    ]

    if result.previous_revision:
        lines.append(f"[bold]Previous:[/bold] {result.previous_revision}")

    if result.release_created:
        lines.append("[bold]Source:[/bold] fresh checkout")
    else:
        lines.append("[bold]Source:[/bold] reused existing release")

    if result.forced:
        lines.append("[bold]Mode:[/bold] forced")

    if result.duration is not None:
        lines.append(f"[bold]Duration:[/bold] {result.duration:.2f}s")

    console.print(Panel(
        "\n".join(lines),
        title="Deploy Result",
        border_style="green"
    ))


def format_deploy_error(error: DeployError) -> None:
    """Format and display a failed deployment"""
    lines = [
        f"[red]{EMOJI_ERROR} Deployment failed during [bold]{error.stage_name}[/bold]:[/red] {error}",
    ]
    if error.error_code:
        lines.append(f"[dim]Error code: {error.error_code}[/dim]")
    if error.cause is not None:
        lines.append(f"[dim]Cause: {error.cause.__class__.__name__}: {error.cause}[/dim]")

    console.print(Panel(
        "\n".join(lines),
        title="Deploy Error",
        border_style="red"
    ))


def format_status(status: DeploymentStatus) -> None:
    """Format and display the live revision"""
    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("Key", style="bold")
    table.add_column("Value")

    table.add_row("Deploy root", status.deploy_to)
    if status.is_deployed:
        table.add_row("Current revision", status.current_revision)
    else:
        table.add_row("Current revision", "[dim]nothing deployed[/dim]")
    if status.current_target:
        table.add_row("Current target", status.current_target)
    table.add_row("Releases", str(status.release_count))

    console.print(table)

    for issue in status.issues:
        console.print(f"[yellow]{EMOJI_WARNING} {issue}[/yellow]")


def format_releases(releases: List[ReleaseInfo]) -> None:
    """Format and display release directories"""
    if not releases:
        console.print("[yellow]No releases found[/yellow]")
        return

    table = Table(title="Releases", box=box.ROUNDED)
    table.add_column("", width=1)
    table.add_column("Revision", style="cyan")
    table.add_column("Created")
    table.add_column("Path", style="dim")

    for release in releases:
        table.add_row(
            "[green]*[/green]" if release.is_current else "",
            release.short_revision,
            release.created_at.strftime("%Y-%m-%d %H:%M:%S") if release.created_at else "",
            str(release.path)
        )

    console.print(table)
