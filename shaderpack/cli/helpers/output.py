"""Helper functions for CLI output formatting with Rich integration."""

from rich.console import Console
from rich.table import Table

from shaderpack.config.models import PlatformProfile
from shaderpack.models.results import PackageResult
from shaderpack.packaging.models import Candidate


console = Console()
error_console = Console(stderr=True)


def print_success_message(message: str) -> None:
    console.print(f"[bold green]✓[/bold green] {message}")


def print_error_message(message: str) -> None:
    error_console.print(f"[bold red]✗[/bold red] {message}")


def print_list_item(item: str, indent: int = 1, error: bool = False) -> None:
    target = error_console if error else console
    target.print(f"{' ' * (indent * 2)}• {item}")


def print_result(result: PackageResult) -> None:
    """Print a packaging result; failures go to stderr."""
    if result.success:
        print_success_message("Package created successfully")
        for name, path in sorted(result.selected.items()):
            print_list_item(f"{name}: {path}")
        for file_type, file_path in result.get_output_files().items():
            print_list_item(f"{file_type}: {file_path}")
    else:
        stage = result.failed_stage or "unknown"
        print_error_message(f"Packaging failed during the {stage} stage")
        for error in result.errors:
            print_list_item(error, error=True)


def print_profiles_table(profiles: dict[str, PlatformProfile]) -> None:
    table = Table(title="Platform profiles")
    table.add_column("Name", style="cyan")
    table.add_column("Format")
    table.add_column("Directories")
    table.add_column("Artifacts", justify="right")
    table.add_column("Install tree")

    for name in sorted(profiles):
        profile = profiles[name]
        table.add_row(
            name,
            profile.format.value,
            ", ".join(profile.directories),
            str(len(profile.artifacts)),
            "yes" if profile.use_install_tree else "no",
        )
    console.print(table)


def print_candidates(candidates: list[Candidate], chosen: Candidate) -> None:
    table = Table(title="Candidates")
    table.add_column("", width=1)
    table.add_column("Path")
    table.add_column("Modified", justify="right")
    for candidate in candidates:
        marker = "[bold green]*[/bold green]" if candidate == chosen else ""
        table.add_row(marker, str(candidate.path), f"{candidate.mtime:.0f}")
    console.print(table)
