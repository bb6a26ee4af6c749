import click
import importlib.metadata
import sys
from ..cli_logger import logger

@click.command()
def version():
    """Print the version of the patched-artifacts tool."""
    try:
        ver = importlib.metadata.version("patched-artifacts")
        click.echo(f"patched-artifacts version {ver}")
    except importlib.metadata.PackageNotFoundError:
        logger.error("Error: Could not determine the version of patched-artifacts. Is it installed correctly?")
    except Exception as e:
        logger.error(f"An unexpected error occurred while determining the version: {e}")
        logger.exception(*sys.exc_info())
