"""Command-line interface for dirsize."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

import click

from dirsize.core.config import ConfigurationError, load_config
from dirsize.core.exceptions import DirsizeError
from dirsize.core.orchestrator import compute_directory_size
from dirsize.types.models import TraversalRequest
from dirsize.utils.formatting import format_summary
from dirsize.utils.logging import configure_logging
from dirsize.utils.units import ByteUnit

try:
    __version__ = version("dirsize")
except PackageNotFoundError:
    __version__ = "unknown"


def validate_log_level(
    ctx: click.Context,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    param: click.Parameter,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    value: str | None,
) -> str | None:
    """Validate and normalize log level.

    Raises:
        click.BadParameter: If the level is not recognised
    """
    if value is None:
        return value

    normalized_value = value.upper().strip()
    valid_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR'}
    if normalized_value not in valid_levels:
        raise click.BadParameter(
            f'Invalid log level "{value}". Valid options: {", ".join(sorted(valid_levels))}'
        )
    return normalized_value


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.argument(
    'path',
    type=click.Path(exists=True, path_type=Path),
)
@click.option(
    '--threads', '-t',
    type=click.IntRange(min=1),
    default=None,
    help='Number of threads to use, defaulting to available CPUs',
)
@click.option(
    '--debug', '-d',
    is_flag=True,
    help='Print the name of each filepath as we scan it',
)
@click.option(
    '--unit', '-u',
    type=click.Choice([unit.value for unit in ByteUnit], case_sensitive=False),
    default=None,
    help='Unit to output data in, defaulting to GB',
)
@click.option(
    '--config', '-c',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='YAML settings file providing defaults for these options',
)
@click.option(
    '--log-level', '-l',
    type=str,
    default=None,
    callback=validate_log_level,
    help='Diagnostic logging level (DEBUG, INFO, WARNING, ERROR)',
)
@click.version_option(version=__version__, prog_name='dirsize')
def cli(
    path: Path,
    threads: int | None,
    debug: bool,
    unit: str | None,
    config: Path | None,
    log_level: str | None,
) -> None:
    """Calculate the cumulative size taken up by a directory's contents.

    dirsize does not follow or read symlinks when calculating this size.
    Each file's size is divided by its hard link count; if not all hard
    links to a file live inside PATH, the total is an underestimate.

    Examples:

        # Size of the current directory in GB
        dirsize .

        # Binary units, eight threads, every file listed
        dirsize --unit MiB --threads 8 --debug /srv/data
    """
    try:
        settings = load_config(config)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    verbose = debug or settings.scan.verbose
    configure_logging(
        log_level=log_level or settings.logging.log_level,
        verbose=verbose,
    )

    request = TraversalRequest(
        path=path,
        threads=threads if threads is not None else settings.scan.threads,
        verbose=verbose,
        unit=ByteUnit.parse(unit) if unit is not None else settings.scan.unit,
    )

    try:
        result = compute_directory_size(request)
    except DirsizeError as e:
        raise click.ClickException(str(e)) from e

    click.echo(format_summary(result, result.take_errors()))
