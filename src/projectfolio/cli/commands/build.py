"""Build, validate and connectivity commands."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table as RichTable

from projectfolio.cli.utils import console, get_config_with_data
from projectfolio.config import resolve_token
from projectfolio.core.fetcher import RemoteFetcher
from projectfolio.core.local_loader import LocalLoader
from projectfolio.core.pipeline import BuildPipeline
from projectfolio.exceptions import FolioError
from projectfolio.models import BuildStats, LoadStats


def print_load_stats(stats: LoadStats, title: str = "Local Projects") -> None:
    console.print(f"\n[bold]📁 {title}[/bold]")
    console.print(f"   Total files: {stats.total_files}")
    console.print(f"   Valid files: {stats.valid_files}")
    console.print(f"   Invalid files: {stats.invalid_files}")
    console.print(f"   Included: {stats.included}")
    console.print(f"   Skipped: {stats.skipped}")

    if stats.errors:
        console.print("\n[red]❌ Errors:[/red]")
        for error in stats.errors:
            console.print(f"   - {error}")


def _distribution(title: str, counts: dict) -> None:
    table = RichTable(title=title)
    table.add_column("Value", style="cyan")
    table.add_column("Count", style="green", justify="right")
    for key, count in sorted(counts.items()):
        table.add_row(key, str(count))
    console.print(table)


def print_build_summary(stats: BuildStats, projects) -> None:
    """Print the run summary: counts per source, distribution, errors, top projects."""
    console.print("\n[bold]📊 Build Summary[/bold]")
    console.print(f"   Repositories fetched: {stats.repos_fetched}")
    console.print(f"   Manifests found: {stats.manifests_found}")
    console.print(f"   Remote records normalized: {stats.remote_normalized}")

    print_load_stats(stats.local)

    console.print("\n[bold]🔗 Combined[/bold]")
    console.print(f"   Invalid records dropped: {stats.invalid_records}")
    console.print(f"   Duplicate slugs dropped: {stats.duplicates}")
    console.print(f"   Total projects: {stats.total}")

    for message in stats.validation_errors:
        console.print(f"   [yellow]- {message}[/yellow]")

    if projects:
        _distribution("Tiers", stats.tier_counts)
        _distribution("Status", stats.status_counts)
        _distribution("Visibility", stats.visibility_counts)

        console.print("\n[bold]🏆 Top 5 Projects[/bold]")
        for index, project in enumerate(projects[:5], start=1):
            console.print(
                f"   {index}. {project.title} ({project.tier}/{project.status})"
                f" - {project.stars} stars"
            )


def run_build(
    output: Optional[Path] = None,
    local_dir: Optional[Path] = None,
    dry_run: bool = False,
    skip_check: bool = False,
) -> None:
    config, config_data = get_config_with_data()

    if output:
        config_data.output_path = str(output.resolve())
    if local_dir:
        config_data.local_dir = str(local_dir.resolve())

    pipeline = BuildPipeline(config_data, project_dir=config.project_dir)

    try:
        result = pipeline.run(dry_run=dry_run, check_connection=not skip_check)
    except FolioError as e:
        console.print(f"[red]❌ Build failed: {e}[/red]")
        raise typer.Exit(1)

    print_build_summary(result.stats, result.projects)

    if result.written:
        console.print(
            f"\n[green]✅ Wrote {len(result.projects)} projects to {result.output_path}[/green]"
        )
    else:
        console.print("\n[yellow]Dry run: artifact not written[/yellow]")


def run_validate(local_dir: Optional[Path] = None) -> None:
    config, config_data = get_config_with_data()
    directory = local_dir or config.resolve(config_data.local_dir)

    loader = LocalLoader(namespace=config_data.tag_namespace)
    projects, stats = loader.load_all(directory)
    print_load_stats(stats, title=f"Local Projects ({directory})")

    if stats.invalid_files:
        raise typer.Exit(1)
    console.print(f"\n[green]✓ {len(projects)} local projects would be published[/green]")


def run_check() -> None:
    config, config_data = get_config_with_data()

    try:
        fetcher = RemoteFetcher(config_data, resolve_token(config_data))
        login = fetcher.test_connection()
    except FolioError as e:
        console.print(f"[red]❌ Connection failed: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ Connected to {config_data.api_url} as {login}[/green]")
