"""CLI interface for assetsync."""

import logging
from typing import Any

import click

from . import __version__
from .cli_progress import run_sync_with_progress
from .exceptions import (
    InvalidArgumentError,
    SourceMissingError,
    SyncConfigError,
    SyncIOError,
)
from .output import OutputFormatter
from .sync import SyncConfig, SyncEngine

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


class AssetSyncCommand(click.Command):
    """Command that reports every rejected token as an unknown argument."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        tokens = list(args)
        # click would read "--" as the end of options
        if "--" in tokens:
            raise InvalidArgumentError("--", ctx=ctx)
        try:
            return super().parse_args(ctx, args)
        except (click.NoSuchOption, click.BadOptionUsage) as e:
            raise InvalidArgumentError(e.option_name, ctx=ctx) from e
        except click.UsageError as e:
            # Positional arguments are never accepted
            token = next(
                (t for t in tokens if t == "-" or not t.startswith("-")), e.message
            )
            raise InvalidArgumentError(token, ctx=ctx) from e


def configure_logging(verbose: bool) -> None:
    """Configure logging based on the verbose flag."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        # Enable debug logging for assetsync modules
        logging.getLogger("assetsync").setLevel(logging.DEBUG)
    else:
        # Set default logging level to WARNING to suppress debug/info messages
        logging.basicConfig(level=logging.WARNING)


@click.command(cls=AssetSyncCommand, context_settings=CONTEXT_SETTINGS)
@click.option(
    "--dry-run",
    "-n",
    is_flag=True,
    help="Show what would be done without making changes",
)
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose/debug logging output",
)
@click.option("--json", "json_output", is_flag=True, help="Output statistics as JSON")
@click.option("--no-progress", is_flag=True, help="Disable the progress bar")
@click.version_option(__version__, prog_name="assetsync")
@click.pass_context
def main(
    ctx: Any,
    dry_run: bool,
    quiet: bool,
    verbose: bool,
    json_output: bool,
    no_progress: bool,
) -> None:
    """Copy ./assets to ./www/public/assets, skipping any 'ignore' directory.

    The destination is deleted and rebuilt from scratch on every run, so
    nothing stale or previously ignored survives. Run it before packaging
    the web build.

    \b
    Examples:
        assetsync              # Rebuild www/public/assets
        assetsync --dry-run    # Preview the copy
        assetsync -n --json    # Preview as JSON statistics
    """
    configure_logging(verbose)
    out = OutputFormatter(json_output=json_output, quiet=quiet)
    config = SyncConfig(dry_run=dry_run)

    try:
        engine = SyncEngine(out)
        stats = run_sync_with_progress(
            engine, config, show_progress=not (no_progress or out.silent)
        )
    except (SourceMissingError, SyncConfigError) as e:
        out.error(e.message)
        ctx.exit(e.exit_code)
        return  # Unreachable, but helps type checker
    except SyncIOError as e:
        logger.debug("Copy aborted", exc_info=True)
        out.error(e.message)
        out.warning(f"Destination may be incomplete: {config.destination}")
        ctx.exit(e.exit_code)
        return
    except KeyboardInterrupt:
        out.warning("\nCopy cancelled by user")
        ctx.exit(130)  # Standard exit code for SIGINT
        return

    if out.json_output:
        out.output_json(stats)
