"""CLI commands for stock balances."""

from __future__ import annotations

from pathlib import Path

import click

from receiving.application.show_stock import ShowStockHandler
from receiving.infrastructure.bootstrap import inventory_repository


@click.command("show")
@click.pass_obj
def stock_show(root: Path) -> None:
    """Show current stock levels."""
    handler = ShowStockHandler(inventory_repo=inventory_repository(root))
    lines = handler.handle()

    if not lines:
        click.echo("No stock records found.")
        return

    click.echo(f"{'Product':<12} {'On hand':>8} {'Last receipt':>14} {'Qty':>6}")
    click.echo("-" * 43)
    for line in lines:
        click.echo(
            f"{line.product_id:<12} {line.quantity:>8} "
            f"{line.last_receipt_date or '-':>14} {line.last_receipt_quantity:>6}"
        )
