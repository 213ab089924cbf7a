import logging

import click

from receiving.infrastructure.bootstrap import data_dir
from receiving.infrastructure.cli.conference_commands import (
    conference_finalize,
    conference_pending,
    conference_resolve,
    conference_scan,
    conference_show,
    conference_start,
)
from receiving.infrastructure.cli.stock_commands import stock_show


@click.group()
@click.option(
    "--data-dir",
    "data_path",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory holding the JSON stores (default: $RECEIVING_DATA_DIR or ./data).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output.")
@click.pass_context
def cli(ctx: click.Context, data_path: str | None, verbose: bool) -> None:
    """Receiving — goods-receipt conference"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = data_dir(data_path)


@cli.group()
def conference() -> None:
    """Conference incoming merchandise against receipt documents."""


@cli.group()
def stock() -> None:
    """Inspect stock balances."""


# Register subcommands
conference.add_command(conference_finalize)
conference.add_command(conference_pending)
conference.add_command(conference_resolve)
conference.add_command(conference_scan)
conference.add_command(conference_show)
conference.add_command(conference_start)
stock.add_command(stock_show)
