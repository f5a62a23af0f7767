# AgentSync Console Output
# Rich-based console output for user-friendly display

from typing import IO, Optional

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from agentsync.config.schema import ScanMode
from agentsync.exceptions import AgentSyncError
from agentsync.git.diagnostics import SetupCheckResult
from agentsync.sync.engine import SyncSummary
from agentsync.sync.manifest import Manifest
from agentsync.sync.planner import SyncPlan
from agentsync.sync.teams import TeamInfo


class Console:
    """
    Console output manager using Rich.

    Provides formatted output for sync runs, plans and diagnostics.
    """

    def __init__(self, *, verbose: bool = False, colored: bool = True, file: Optional[IO[str]] = None):
        """
        Initialize console.

        Args:
            verbose: Enable verbose output.
            colored: Enable colored output.
            file: Write here instead of stdout.
        """
        self.verbose = verbose
        self._console = RichConsole(file=file, force_terminal=colored, no_color=not colored)

    @property
    def rich(self) -> RichConsole:
        """Underlying rich console, shared with the sync logger."""
        return self._console

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self._console.print(f"[red]Error:[/red] {escape(message)}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self._console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def print_success(self, message: str) -> None:
        """Print success message."""
        self._console.print(f"[green]{escape(message)}[/green]")

    def print_info(self, message: str) -> None:
        """Print info message."""
        self._console.print(f"[blue]{escape(message)}[/blue]")

    def print_agentsync_error(self, error: AgentSyncError) -> None:
        """Print an engine error with its kind."""
        lines = str(error).splitlines() or [type(error).__name__]
        self.print_error(lines[0])
        for line in lines[1:]:
            self._console.print(f"  {escape(line)}" if line else "")
        if self.verbose:
            self._console.print(f"  [dim]({error.kind})[/dim]")

    def print_sync_summary(self, summary: SyncSummary) -> None:
        """
        Print sync summary panel.

        Args:
            summary: Result of run_sync.
        """
        status_text = "Dry run completed" if summary.dry_run else "Sync completed"
        files_verb = "would be written" if summary.dry_run else "written"

        body = (
            f"[green]{status_text}[/green]\n"
            f"Checkout: {escape(str(summary.checkout_path))}\n"
            f"Roots: {escape(', '.join(summary.selected_roots)) or '(none)'}\n"
            f"Mappings: {summary.mapping_count} into {summary.target_count} target\n"
            f"Files: {summary.files_written} {files_verb}"
        )
        self._console.print()
        self._console.print(Panel(body, title="Summary", border_style="green"))

    def print_plan(self, plan: SyncPlan) -> None:
        """Print the scan roots chosen for a run."""
        mode = ScanMode(plan.mode).value
        self._console.print(f"[bold]Scan mode:[/bold] {mode}")
        self._console.print(f"[bold]Selected roots:[/bold] {escape(', '.join(plan.selected_roots))}")
        if plan.uses_checkout_root:
            self._console.print("[dim]No team roots; scanning the whole checkout[/dim]")
        if plan.discovered_roots:
            self._console.print(f"[dim]Discovered teams: {escape(', '.join(plan.discovered_roots))}[/dim]")
        if plan.missing_configured_roots:
            self._console.print(
                f"[yellow]Missing roots:[/yellow] {escape(', '.join(plan.missing_configured_roots))}"
            )

    def print_manifest(self, manifest: Manifest) -> None:
        """Print manifest mappings as a table."""
        if not manifest.mappings:
            self._console.print("[dim]No mappings[/dim]")
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("Source")
        table.add_column("Destination")
        table.add_column("Kind", style="dim")
        table.add_column("Strategy", style="dim")

        for mapping in manifest.mappings:
            data = mapping.to_dict()
            table.add_row(
                escape(data["source"]),
                escape(f"~/{data['destination']}"),
                data["kind"],
                data["strategy"],
            )

        self._console.print(table)
        self._console.print(
            f"[dim]{len(manifest.mappings)} mappings from {len(manifest.sources)} sources"
            f" (manifest v{manifest.version})[/dim]"
        )

    def print_teams(self, teams: list[TeamInfo]) -> None:
        """Print discovered teams."""
        if not teams:
            self._console.print("[dim]No teams found in the registry checkout[/dim]")
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("Folder")
        table.add_column("Name")
        table.add_column("Playground")
        table.add_column("Description", style="dim")

        for team in teams:
            playground = "[green]yes[/green]" if team.has_playground else "[dim]no[/dim]"
            table.add_row(
                escape(team.folder_name),
                escape(team.display_name),
                playground,
                escape(team.description),
            )

        self._console.print(table)

    def print_setup_check(self, result: SetupCheckResult) -> None:
        """Print setup diagnostics."""
        border = "green" if result.passed else "red"
        status = "[green]All checks passed[/green]" if result.passed else "[red]Some checks failed[/red]"
        body = "\n".join(escape(line) for line in result.lines)
        self._console.print(
            Panel(
                f"{status}\n{body}",
                title=f"Setup check ({result.checked_at:%Y-%m-%d %H:%M} UTC)",
                border_style=border,
            )
        )

    def print_config_summary(self, config_path: str, remote_url: str, checkout_path: str) -> None:
        """Print configuration summary."""
        self._console.print(
            Panel(
                f"Config: {escape(config_path)}\n"
                f"Remote: {escape(remote_url) or '(not set)'}\n"
                f"Checkout: {escape(checkout_path)}",
                title="AgentSync Configuration",
                border_style="blue",
            )
        )


def create_console(*, verbose: bool = False, colored: bool = True, file: Optional[IO[str]] = None) -> Console:
    """
    Create a console instance.

    Args:
        verbose: Enable verbose output.
        colored: Enable colored output.
        file: Optional output stream.

    Returns:
        Console instance.
    """
    return Console(verbose=verbose, colored=colored, file=file)
