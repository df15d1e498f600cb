"""
Cluster Config Commands
=======================

Commands for working with k0s ClusterConfig documents:
- ``create`` prints the default configuration
- ``validate`` loads a configuration and reports every validation error
"""
import logging
import sys

import typer
from rich.console import Console
from rich.table import Table

from k0sconfig.errors import ConfigDecodeError, ConfigIOError
from k0sconfig.loader import config_from_file, config_from_stdin
from k0sconfig.models import default_cluster_config

app = typer.Typer(help="ClusterConfig commands")

console = Console()
logger = logging.getLogger(__name__)


@app.command("create")
def create_config(
    data_dir: str = typer.Option("", "--data-dir", help="Data directory used for storage defaults"),
):
    """Print the default cluster configuration as YAML."""
    typer.echo(default_cluster_config(data_dir).to_yaml(), nl=False)


@app.command("validate")
def validate_config(
    config: str = typer.Option(..., "--config", "-c", help="Config file to validate, '-' for stdin"),
    data_dir: str = typer.Option("", "--data-dir", help="Data directory used for storage defaults"),
):
    """Load a cluster configuration and report every validation error."""
    try:
        if config == "-":
            cluster_config = config_from_stdin(data_dir, sys.stdin)
        else:
            cluster_config = config_from_file(config, data_dir)
    except ConfigIOError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(code=1)
    except ConfigDecodeError as e:
        console.print(f"[red]❌ {e}[/red]")
        for loc, msg in e.field_errors:
            logger.debug("decode error at %s: %s", loc, msg)
        raise typer.Exit(code=1)

    errors = cluster_config.validate_spec()
    if errors:
        table = Table(title=f"{len(errors)} validation error(s)")
        table.add_column("Field", style="cyan")
        table.add_column("Error", style="red")
        for err in errors:
            table.add_row(err.field or "-", err.message)
        console.print(table)
        raise typer.Exit(code=1)

    console.print("✅ Configuration is valid")
