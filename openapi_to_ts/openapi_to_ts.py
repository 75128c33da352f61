import logging
import sys

import click

from . import __version__
from .cli_utils import reconstruct_command_line
from .config import DEFAULT_CONFIG_FILE, OutputMode, load_config
from .errors import ConfigError
from .pipeline import run_batch


@click.command()
@click.option("--config", "-c", "config_path", default=DEFAULT_CONFIG_FILE, type=click.Path(dir_okay=False, resolve_path=True))
@click.option("--output", "-o", default=None, type=click.Path(file_okay=False, resolve_path=True))
@click.option(
    "--type-with-prefix",
    is_flag=True,
    default=False,
    help="Prefix interfaces with 'I' and type aliases with 'T'",
)
@click.option("--force/--no-force", default=None, help="Overwrite (or refuse to overwrite) existing output files")
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("paths", nargs=-1, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
def openapi_to_ts(config_path, output, type_with_prefix, force, verbose, paths):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(f"{e.source}: {e.message}") from e

    # Command line flags override the config file
    if output is not None:
        config.output = output
    if type_with_prefix:
        config.type_with_prefix = True
    if force is not None:
        config.output_config.mode = OutputMode.FORCE if force else OutputMode.ERROR_IF_EXISTS
    config.data = [*config.data, *paths]

    if not config.data and not config.clients:
        raise click.UsageError("No documents given: pass paths or list them under 'data'/'clients' in the config file")

    generation_comment = f"Generated by {reconstruct_command_line(openapi_to_ts)} (openapi_to_ts {__version__})"
    report = run_batch(config, generation_comment=generation_comment)

    for path in report.written:
        click.echo(f"Wrote {path}")
    for failure in report.failures:
        click.echo(f"{failure.kind.value}: {failure.source}: {failure.message}", err=True)

    if report.failures and not report.written:
        sys.exit(1)
