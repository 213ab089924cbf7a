"""CLI commands for the receiving conference."""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path

import click

from receiving.application.finalize_conference import FinalizeConferenceHandler
from receiving.application.list_pending import ListPendingDocumentsHandler
from receiving.application.resolve_barcode import ResolveBarcodeHandler
from receiving.application.show_conference import ShowConferenceHandler
from receiving.application.start_conference import StartConferenceHandler
from receiving.application.submit_line import SubmitLineHandler
from receiving.domain.exceptions import DomainException, IncompleteConference
from receiving.infrastructure.bootstrap import (
    conference_line_repository,
    document_repository,
    lookup_index,
    product_repository,
    reconciliation_engine,
)

_DATE = click.DateTime(formats=["%Y-%m-%d"])

_REASON_MESSAGES = {
    "UNKNOWN_BARCODE": "Unknown barcode",
    "NOT_ON_DOCUMENT": "Product is not on this document",
}


def _as_date(value: datetime | None) -> date | None:
    return value.date() if value is not None else None


@click.command("pending")
@click.pass_obj
def conference_pending(root: Path) -> None:
    """List documents awaiting conference."""
    handler = ListPendingDocumentsHandler(document_repo=document_repository(root))
    documents = handler.handle()

    if not documents:
        click.echo("No documents pending conference.")
        return

    click.echo(f"{'ID':<6} {'Reference':<16} {'Supplier':<24} {'Lines':>5}  {'Status':<12}")
    click.echo("-" * 68)
    for d in documents:
        hint = "resume" if d.status == "IN_PROGRESS" else "start"
        click.echo(
            f"{d.id:<6} {d.reference:<16} {d.supplier:<24} {d.line_count:>5}  "
            f"{d.status:<12} ({hint})"
        )


@click.command("start")
@click.option("--document", "document_id", required=True, type=int, help="Document ID.")
@click.pass_obj
def conference_start(root: Path, document_id: int) -> None:
    """Start (or resume) the conference of a document."""
    handler = StartConferenceHandler(engine=reconciliation_engine(root))

    try:
        dto = handler.handle(document_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Document #{dto.id} {dto.reference} in conference "
        f"({dto.line_count} expected line(s), {dto.expected_value})"
    )


@click.command("resolve")
@click.option("--document", "document_id", required=True, type=int, help="Document ID.")
@click.option("--barcode", required=True, help="Scanned barcode or product code.")
@click.pass_obj
def conference_resolve(root: Path, document_id: int, barcode: str) -> None:
    """Look a barcode up on a document without counting it."""
    handler = ResolveBarcodeHandler(lookup_index=lookup_index(root))

    try:
        dto = handler.handle(document_id, barcode)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not dto.found:
        raise click.ClickException(f"{_REASON_MESSAGES[dto.reason]}: '{dto.barcode}'")

    click.echo(
        f"{dto.product_id} {dto.description} — expected {dto.expected_quantity}"
    )


@click.command("scan")
@click.option("--document", "document_id", required=True, type=int, help="Document ID.")
@click.option("--barcode", required=True, help="Scanned barcode or product code.")
@click.option("--quantity", required=True, type=int, help="Counted quantity.")
@click.option("--arrival", type=_DATE, default=None, help="Arrival date (YYYY-MM-DD, default today).")
@click.option("--expiry", type=_DATE, default=None, help="Expiry date (YYYY-MM-DD).")
@click.pass_obj
def conference_scan(
    root: Path,
    document_id: int,
    barcode: str,
    quantity: int,
    arrival: datetime | None,
    expiry: datetime | None,
) -> None:
    """Count a scanned product on a document."""
    handler = SubmitLineHandler(engine=reconciliation_engine(root))

    try:
        dto = handler.handle(
            document_id,
            barcode,
            quantity,
            arrival_date=_as_date(arrival),
            expiry_date=_as_date(expiry),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"{dto.product_id}: counted {dto.counted_quantity} of "
        f"{dto.expected_quantity}  [{dto.status}]"
    )


@click.command("show")
@click.option("--document", "document_id", required=True, type=int, help="Document ID.")
@click.pass_obj
def conference_show(root: Path, document_id: int) -> None:
    """Show expected versus counted quantities of a document."""
    handler = ShowConferenceHandler(
        document_repo=document_repository(root),
        line_repo=conference_line_repository(root),
        product_repo=product_repository(root),
    )

    try:
        dto = handler.handle(document_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    doc = dto.document
    click.echo(f"Document #{doc.id} {doc.reference}  (status={doc.status})")
    click.echo(f"Supplier: {doc.supplier}")
    click.echo()
    click.echo(f"  {'Product':<10} {'Description':<24} {'Expected':>8} {'Counted':>8}  Status")
    click.echo(f"  {'-'*66}")
    for row in dto.rows:
        click.echo(
            f"  {row.product_id:<10} {row.description:<24} "
            f"{row.expected_quantity:>8} {row.counted_quantity:>8}  {row.status}"
        )
    click.echo(f"  {'-'*66}")
    if dto.missing:
        click.echo(f"  {len(dto.missing)} product(s) not counted yet.")


@click.command("finalize")
@click.option("--document", "document_id", required=True, type=int, help="Document ID.")
@click.pass_obj
def conference_finalize(root: Path, document_id: int) -> None:
    """Finalize the conference and apply counted stock."""
    handler = FinalizeConferenceHandler(engine=reconciliation_engine(root))

    try:
        dto = handler.handle(document_id)
    except IncompleteConference as exc:
        missing = "\n".join(
            f"  {line.product_id} (expected {line.expected_quantity})"
            for line in exc.missing
        )
        raise click.ClickException(
            f"Count every product before finalizing. Missing:\n{missing}"
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Document #{dto.document_id} finalized  (status={dto.status})")
    click.echo(f"  Matched:   {dto.matched}")
    click.echo(f"  Divergent: {dto.divergent}")
    click.echo(f"  Total:     {dto.total}")
    click.echo(f"  Expected value: {dto.expected_value}")
    click.echo(f"  Counted value:  {dto.counted_value}")
    if dto.divergences:
        click.echo()
        click.echo("  Divergences:")
        for d in dto.divergences:
            click.echo(f"    Product {d.product_id}: {d.note}  [{d.value}]")
