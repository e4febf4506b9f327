"""
Main CLI entry point for repo-rev-checker.
"""

import click
from dotenv import load_dotenv

from ..shared_utilities import configure_logging, get_logger
from ..shared_utilities.telemetry import trace_function
from .config import CheckerConfig, SyncMode, parse_environment_filter
from .core import RevisionChecker
from .errors import RevisionCheckerError, ValidationError
from .output_formatter import RevisionOutputFormatter

# Load environment variables from .env file
load_dotenv()


class ProgressIndicator:
    """Simple progress indicator for CLI operations."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet

    def update(self, current: int, total: int, message: str) -> None:
        """Update progress display."""
        if self.quiet:
            return

        if total > 0:
            click.echo(f"[{current}/{total}] {message}", err=True)
        else:
            click.echo(f"[ --- ] {message}", err=True)


@click.command()
@click.argument("directory", type=click.Path(file_okay=False))
@click.option(
    "--quick",
    is_flag=True,
    help="Check out branches as-is, without fetching or resetting to the remote",
)
@click.option(
    "-e",
    "--env",
    "environments",
    multiple=True,
    help="Environments to report, comma-separated (int, stg, prod). Default: all",
)
@click.option(
    "-d",
    "--days",
    type=click.IntRange(min=0),
    default=0,
    help="Also report revisions changed in the last N days (0: tip only)",
    show_default=True,
)
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(["json", "table"]),
    default="json",
    help="Output format",
    show_default=True,
)
@click.option(
    "-o",
    "--output",
    "output_file",
    type=click.Path(dir_okay=False),
    help="Output file (default: stdout)",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    help="Suppress progress indicators",
)
@click.option("--verbose", is_flag=True, help="Enable verbose logging")
@trace_function("repo_rev_checker_main", include_args=True)
def main(
    directory: str,
    quick: bool,
    environments: tuple[str, ...],
    days: int,
    output_format: str,
    output_file: str | None,
    quiet: bool,
    verbose: bool,
) -> None:
    """
    Report the ARO-HCP repo revision deployed to each environment.

    Checks out main, release/hcp/public/stg and release/hcp/public/prod in
    DIRECTORY, extracts ARO_HCP_REPO_REVISION from hcp/Revision.mk and prints
    the value with its UTC commit date as JSON.

    Examples:

        # Fetch and report all environments
        repo-rev-checker ~/src/sdp-pipelines

        # Use branches as they are, only int and stg
        repo-rev-checker --quick --env int,stg ~/src/sdp-pipelines

        # Include every revision from the last 7 days
        repo-rev-checker --days 7 ~/src/sdp-pipelines
    """
    configure_logging(level="DEBUG" if verbose else None)
    logger = get_logger(__name__)

    try:
        selected = parse_environment_filter(environments)
        config = CheckerConfig.from_env()
        checker = RevisionChecker(directory, config=config)
    except ValidationError as e:
        click.echo(f"Error: {e}", err=True)
        raise click.Abort() from e

    sync_mode = SyncMode.AS_IS if quick else SyncMode.FAST_FORWARD
    progress = ProgressIndicator(quiet=quiet)
    formatter = RevisionOutputFormatter()

    try:
        result = checker.check(
            environments=selected,
            sync_mode=sync_mode,
            days=days,
            progress_callback=progress.update,
        )
    except RevisionCheckerError as e:
        logger.error(f"Revision check failed: {e}")
        click.echo(f"Error: {e}", err=True)
        raise click.Abort() from e

    if output_file:
        try:
            formatter.save_to_file(result, output_file, output_format)
        except OSError as e:
            click.echo(f"Error: cannot write {output_file}: {e}", err=True)
            raise click.Abort() from e
        click.echo(f"Output saved to {output_file}", err=True)
    else:
        click.echo(formatter.format_output(result, output_format))


if __name__ == "__main__":
    main()
