"""Main CLI entry point for projectfolio."""

import typer
from typing import Optional
from pathlib import Path

from projectfolio.cli.utils import configure_logging

app = typer.Typer(
    name="folio",
    help="projectfolio - aggregate and rank portfolio project metadata",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    projectfolio - aggregate and rank portfolio project metadata
    """
    configure_logging(verbose)
    if ctx.invoked_subcommand is None:
        # No subcommand was invoked, show help
        print(ctx.get_help())
        raise typer.Exit(0)


@app.command()
def init(
    path: Optional[Path] = typer.Argument(
        None, help="Directory to initialize project in (default: current directory)"
    ),
    owner: Optional[str] = typer.Option(
        None, "--owner", "-o", help="Login whose repositories are listed"
    ),
):
    """Initialize a new projectfolio project."""
    from projectfolio.config import Config

    project_path = path or Path.cwd()

    try:
        Config(project_path).init_project(owner=owner)
        typer.secho(
            f"✅ Initialized projectfolio project in {project_path}",
            fg=typer.colors.GREEN,
        )
        if owner:
            typer.secho(f"   Owner: {owner}", fg=typer.colors.CYAN)
    except FileExistsError:
        typer.secho(f"❌ Project already exists in {project_path}", fg=typer.colors.RED)
        raise typer.Exit(1)


@app.command()
def build(
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Artifact path (overrides config)"
    ),
    local_dir: Optional[Path] = typer.Option(
        None, "--local-dir", "-l", help="Local record directory (overrides config)"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Build and report without writing"
    ),
    skip_check: bool = typer.Option(
        False, "--skip-check", help="Skip the connection check before paging"
    ),
):
    """Fetch, merge and rank projects, then write the artifact."""
    from projectfolio.cli.commands.build import run_build

    run_build(output=output, local_dir=local_dir, dry_run=dry_run, skip_check=skip_check)


@app.command()
def validate(
    local_dir: Optional[Path] = typer.Option(
        None, "--local-dir", "-l", help="Local record directory (overrides config)"
    ),
):
    """Validate local project records without contacting the remote host."""
    from projectfolio.cli.commands.build import run_validate

    run_validate(local_dir=local_dir)


@app.command()
def check():
    """Verify the credential and connectivity to the remote host."""
    from projectfolio.cli.commands.build import run_check

    run_check()


@app.command()
def show(
    artifact: Optional[Path] = typer.Option(
        None, "--artifact", "-a", help="Artifact to read (default: configured output)"
    ),
    domain: Optional[str] = typer.Option(None, "--domain", "-d", help="Filter by domain"),
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Filter by status"),
    search: Optional[str] = typer.Option(None, "--search", "-q", help="Search text"),
    visibility: Optional[str] = typer.Option(
        None, "--visibility", help="Filter by visibility"
    ),
):
    """List projects from the persisted artifact."""
    from projectfolio.cli.commands.catalog import show_projects

    show_projects(
        artifact=artifact,
        domain=domain,
        status=status,
        search=search,
        visibility=visibility,
    )


@app.command()
def version():
    """Show projectfolio version."""
    from projectfolio import __version__

    typer.echo(f"projectfolio version {__version__}")


@app.command()
def status():
    """Show configuration and environment variables."""
    from projectfolio.cli.utils import console, get_config_with_data, show_env_config

    config, config_data = get_config_with_data()

    console.print("\n[bold]projectfolio Status[/bold]")
    console.print(f"Project: {config.project_dir}")
    console.print(f"Owner: {config_data.owner or '[dim]authenticated user[/dim]'}")
    console.print(f"API: {config_data.api_url}")
    console.print(f"Local records: {config.resolve(config_data.local_dir)}")
    console.print(f"Artifact: {config.resolve(config_data.output_path)}")
    console.print(f"Tag namespace: {config_data.tag_namespace}")

    show_env_config(config_data.token_env)


if __name__ == "__main__":
    app()
