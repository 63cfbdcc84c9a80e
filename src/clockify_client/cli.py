"""Command-line interface: print a user's Clockify account as JSON."""

import logging
import sys

import click
from rich.console import Console

from clockify_client import __version__
from clockify_client.errors import ClockifyError
from clockify_client.session import CLOCKIFY_API, DEFAULT_TIMEOUT, open_session
from clockify_client.utils import get_logger, setup_logging

console = Console(stderr=True)
logger = get_logger(__name__)


@click.command(name="clockify")
@click.version_option(version=__version__, prog_name="clockify")
@click.option("--base-url", envvar="CLOCKIFY_API_URL", default=CLOCKIFY_API, show_default=True,
              help="Clockify API root.")
@click.option("--timeout", type=float, default=DEFAULT_TIMEOUT, show_default=True,
              help="Request timeout in seconds.")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging.")
@click.argument("args", nargs=-1, metavar="API_TOKEN")
@click.pass_context
def cli(
    ctx: click.Context,
    args: tuple[str, ...],
    base_url: str,
    timeout: float,
    verbose: bool,
) -> None:
    """Display a user's Clockify account information.

    The API token can be retrieved from the profile settings page at clockify.me.
    """
    if len(args) != 1:
        click.echo(f"usage: {ctx.info_name} API_TOKEN", err=True)
        return

    setup_logging(log_level=logging.DEBUG if verbose else logging.WARNING)

    try:
        with open_session(args[0], base_url=base_url, timeout=timeout) as session:
            account = session.get_account()
    except ClockifyError as e:
        logger.debug("Fetching account failed", exc_info=True)
        console.print(f"error: {e}", style="red", markup=False, soft_wrap=True)
        sys.exit(1)

    click.echo(account.model_dump_json(indent=4, by_alias=True))


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        sys.exit(0)


if __name__ == "__main__":
    main()
