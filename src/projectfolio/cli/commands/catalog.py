"""Listing of the persisted artifact."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table as RichTable

from projectfolio.cli.utils import console, get_config_with_data
from projectfolio.core.catalog import ProjectCatalog


def show_projects(
    artifact: Optional[Path] = None,
    domain: Optional[str] = None,
    status: Optional[str] = None,
    search: Optional[str] = None,
    visibility: Optional[str] = None,
) -> None:
    if artifact is None:
        config, config_data = get_config_with_data()
        artifact = config.resolve(config_data.output_path)

    if not Path(artifact).exists():
        console.print(f"[red]❌ Artifact not found at {artifact}. Run 'folio build' first.[/red]")
        raise typer.Exit(1)

    catalog = ProjectCatalog(artifact)

    if domain or status or search or visibility:
        projects = catalog.filter(
            search=search, domain=domain, status=status, visibility=visibility
        )
    else:
        projects = catalog.all()

    if not projects:
        console.print("[yellow]No projects found[/yellow]")
        return

    table = RichTable(title=f"Projects ({len(projects)})")
    table.add_column("Slug", style="cyan")
    table.add_column("Title")
    table.add_column("Tier", style="magenta")
    table.add_column("Status", style="green")
    table.add_column("Visibility", style="yellow")
    table.add_column("Domains")
    table.add_column("Source", style="dim")

    for project in projects:
        table.add_row(
            project.slug,
            project.title,
            project.tier,
            project.status,
            project.visibility,
            ", ".join(project.domains),
            project.source,
        )

    console.print(table)
