"""Command line entry point: ``folderrover <root dir path> <output dir path>``."""

import logging
import os
import sys

import click
from rich.console import Console

from .api import inventory_tree
from .config import InventoryConfig
from .errors import ConfigurationError, OutputInitError
from .progress import live_progress

logger = logging.getLogger(__name__)

USAGE = """
Usage: FolderRover <root dir path> <output dir path>

FolderRover will recursively traverse the contents of the directory specified by <root dir path>.
A count of the number of files and directories encountered will be displayed in real time and an inventory
of every file and directory will be stored in the specified output directory.
Three files will be written to the output directory:
1. {dirs} - contains every directory encountered.
2. {files} - contains the full path and size of every file encountered.
3. {exceptions} - Any problems reading files/directories will be logged here.
"""


def configure_logging() -> None:
    """Send log records to stderr at FOLDERROVER_LOG_LEVEL (default WARNING)."""
    level_name = os.environ.get("FOLDERROVER_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@click.command(add_help_option=False)
@click.argument("paths", nargs=-1, type=click.Path())
@click.pass_context
def main(ctx, paths):
    """Inventory every file and directory below a root directory."""
    config_defaults = InventoryConfig()
    if len(paths) != 2:
        click.echo(USAGE.format(
            dirs=config_defaults.directories_name,
            files=config_defaults.files_name,
            exceptions=config_defaults.exceptions_name,
        ))
        return

    configure_logging()
    root, output_dir = paths
    try:
        config = InventoryConfig.from_env()
        with live_progress(Console(stderr=True)) as update:
            inventory_tree(root, output_dir, config=config, progress_callback=update)
    except (ConfigurationError, OutputInitError) as e:
        logger.debug("Inventory aborted", exc_info=True)
        click.echo(str(e), err=True)
        ctx.exit(1)

    click.echo("Processing complete.")


if __name__ == "__main__":
    main()
