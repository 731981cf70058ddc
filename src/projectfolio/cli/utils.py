"""Utility functions for CLI commands."""

import logging
import os
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from projectfolio.config import Config

console = Console()


def configure_logging(verbose: bool = False) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def get_config_with_data(project_dir: Optional[Path] = None):
    """Get config and load data from the project directory.

    Returns:
        tuple: (config, config_data)
    """
    config = Config(project_dir)
    try:
        config_data = config.load()
    except FileNotFoundError:
        console.print("[red]❌ Config file not found. Run 'folio init' first.[/red]")
        raise typer.Exit(1)

    return config, config_data


def show_env_config(token_env: str = "GH_TOKEN"):
    """Display active environment variable configuration."""
    env_vars = {
        "FOLIO_PROJECT_DIR": os.environ.get("FOLIO_PROJECT_DIR"),
        "FOLIO_OWNER": os.environ.get("FOLIO_OWNER"),
        "FOLIO_OUTPUT_PATH": os.environ.get("FOLIO_OUTPUT_PATH"),
        "FOLIO_LOCAL_DIR": os.environ.get("FOLIO_LOCAL_DIR"),
        token_env: "***" if os.environ.get(token_env) else None,
    }

    active = {k: v for k, v in env_vars.items() if v}
    if active:
        console.print("\n[yellow]Active environment variables:[/yellow]")
        for key, value in active.items():
            console.print(f"  {key}={value}")
    else:
        console.print("\n[dim]No projectfolio environment variables set[/dim]")
