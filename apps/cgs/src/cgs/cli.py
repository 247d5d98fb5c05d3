"""CLI for cloning a GitHub sub-directory."""

import logging
from pathlib import Path

import click
from dotenv import load_dotenv
from ghcontents import GitHubError
from ghcontents.client import DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT

from . import __version__
from .cloner import SubdirCloner
from .exceptions import CloneError
from .models import CloneOptions, ListingFailure, ResolveMode

logger = logging.getLogger(__name__)

NO_ARGUMENTS_MESSAGE = "No options or arguments provided"


def setup_logging(verbose: int) -> None:
    """Setup logging."""
    level = logging.DEBUG if verbose >= 2 else logging.INFO if verbose == 1 else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def echo_file(path: Path) -> None:
    click.echo(f" {path}")


def echo_failure(failure: ListingFailure) -> None:
    click.echo(f"Failed to list directory content: {failure.error}")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("link", required=False)
@click.option("-u", "--url", "url_option", metavar="LINK", help="GitHub sub-directory URL")
@click.option("-c", "--curdir", is_flag=True, help="Current sub-directory only")
@click.option(
    "-o", "--output-dir", envvar="CGS_OUTPUT_DIR", default=".", show_default=True,
    type=click.Path(file_okay=False, path_type=Path), help="Where the tree is written",
)
@click.option("--user-agent", envvar="CGS_USER_AGENT", default=DEFAULT_USER_AGENT, show_default=True)
@click.option(
    "--timeout", envvar="CGS_TIMEOUT", type=float, default=DEFAULT_TIMEOUT, show_default=True,
    help="Request timeout in seconds (0 disables)",
)
@click.option(
    "-r", "--retries", envvar="CGS_RETRIES", type=click.IntRange(min=1),
    default=DEFAULT_MAX_RETRIES, show_default=True, help="Attempts per request",
)
@click.option("--max-depth", type=click.IntRange(min=0), help="Maximum directory nesting")
@click.option("--no-reset", is_flag=True, help="Keep an existing local copy instead of deleting it")
@click.option("-v", "--verbose", count=True, help="Verbosity (-v, -vv)")
@click.version_option(__version__, "-V", "--version", prog_name="Clone Github Sub-directory (cgs)")
def cli(
    link: str | None,
    url_option: str | None,
    curdir: bool,
    output_dir: Path,
    user_agent: str,
    timeout: float,
    retries: int,
    max_depth: int | None,
    no_reset: bool,
    verbose: int,
) -> None:
    """Clone the GitHub sub-directory LINK points at."""
    setup_logging(verbose)

    url = url_option or link
    if not url:
        click.echo(NO_ARGUMENTS_MESSAGE)
        return

    options = CloneOptions(
        mode=ResolveMode.CURRENT_DIR_ONLY if curdir else ResolveMode.FULL_PATH,
        dest=output_dir,
        max_depth=max_depth,
        reset=not no_reset,
        user_agent=user_agent,
        timeout=timeout,
        max_retries=retries,
    )
    cloner = SubdirCloner(options, on_file=echo_file, on_failure=echo_failure)
    try:
        report = cloner.clone(url)
    except (CloneError, GitHubError) as e:
        logger.error("Clone aborted: %s", e)
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    logger.info("Done: %d files written", len(report.written))


def main() -> None:
    load_dotenv()
    cli()


if __name__ == "__main__":
    main()
