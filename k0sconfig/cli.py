import logging

import typer

from k0sconfig.commands import config
from k0sconfig.config import Config
from k0sconfig.logging import setup_logger

app = typer.Typer()

debug_mode = False


def setup_logging(debug: bool = False) -> logging.Logger:
    """Configure package logging based on debug mode."""
    return setup_logger("k0sconfig", logging.DEBUG if debug else None)


app.add_typer(config.app, name="config")


@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
):
    """k0sconfig - ClusterConfig parsing and validation."""
    global debug_mode
    debug_mode = debug
    logger = setup_logging(debug)
    try:
        Config.validate()
    except ValueError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=2)
    if debug:
        logger.debug("Debug mode enabled")


if __name__ == "__main__":
    app()
