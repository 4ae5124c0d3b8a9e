# ruff: noqa: I001
"""CLI for the ``bill_recognition`` package.

Two commands are exposed through a Typer app:

- ``recognize IMAGE --uid N`` runs the full flow against the bookkeeping
  database (``LEDGER_DATABASE_URL`` or ``--database-url``) and the configured
  OCR provider.
- ``parse-text TEXT_FILE`` runs only the parser and the assembler over an
  existing OCR transcript; no database or OCR service is needed.

Environment variables are loaded from a local ``.env`` using
``python-dotenv`` before any command runs. Business logic lives in
``bill_recognition.api`` and related modules.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from .logging_setup import configure_logging
from .errors import RecognitionError
from .models import RecognizedCandidateList, TransactionType

console = Console()
err_console = Console(stderr=True)


def _format_amount(cents: int | None) -> str:
    if cents is None:
        return ""
    return f"{cents // 100}.{cents % 100:02d}"


def _format_time(epoch: int | None, tz) -> str:
    if epoch is None:
        return ""
    return datetime.fromtimestamp(epoch, tz).strftime("%Y-%m-%d %H:%M:%S")


def _render(result: RecognizedCandidateList, *, as_json: bool, tz) -> None:
    if as_json:
        typer.echo(json.dumps(result.to_payload(), ensure_ascii=False, indent=2))
        return

    table = Table(title=f"{len(result.transactions)} transaction(s) recognized")
    table.add_column("#", justify="right")
    table.add_column("Type")
    table.add_column("Time")
    table.add_column("Amount", justify="right")
    table.add_column("Category")
    table.add_column("Account")
    table.add_column("Tags")
    table.add_column("Comment")
    for i, c in enumerate(result.transactions, start=1):
        table.add_row(
            str(i),
            TransactionType(c.type).name.lower(),
            _format_time(c.time, tz),
            _format_amount(c.source_amount),
            "" if c.category_id is None else str(c.category_id),
            "" if c.source_account_id is None else str(c.source_account_id),
            ",".join(str(t) for t in c.tag_ids),
            c.comment or "",
        )
    console.print(table)


def _fail(e: RecognitionError) -> typer.Exit:
    err_console.print(f"[red]Error:[/red] {e.code}: {e.message}")
    return typer.Exit(1)


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    name="bill-recognition",
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Recognize transactions in bill / transaction-list screenshots. "
        "Loads BILL_RECOGNITION_* and LEDGER_DATABASE_URL from a local .env before running."
    ),
)


@app.command("recognize")
def recognize_cmd(
    image: Annotated[Path, typer.Argument(help="Screenshot to recognize", dir_okay=False)],
    uid: Annotated[int, typer.Option(help="Owner of the accounts, categories and tags.")],
    timezone: Annotated[str, typer.Option(help="Client IANA timezone name.")] = "UTC",
    database_url: Annotated[
        str | None, typer.Option(help="Override LEDGER_DATABASE_URL (falls back to env var).")
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the response payload as JSON.")] = False,
) -> None:
    """Run OCR on IMAGE and print the recognized transaction candidates."""

    # Deferred imports keep `--help` fast and free of DB drivers
    from ledger_db.client import read_scope

    from .api import RecognitionRequest, recognize_bill_image
    from .config import load_settings
    from .recognize import resolve_timezone
    from .repository import SqlBookkeepingReader
    from .uploads import ImageUpload

    try:
        settings = load_settings()
    except ValueError as e:
        err_console.print(f"[red]Error:[/red] invalid configuration: {e}")
        raise typer.Exit(1) from e

    try:
        data = image.read_bytes()
    except OSError as e:
        err_console.print(f"[red]Error:[/red] cannot read {image}: {e}")
        raise typer.Exit(1) from e

    request = RecognitionRequest(
        uid=uid,
        image=ImageUpload(filename=image.name, data=data),
        timezone=timezone,
    )
    try:
        with read_scope(database_url=database_url) as session:
            result = recognize_bill_image(
                request, settings=settings, reader=SqlBookkeepingReader(session)
            )
    except RecognitionError as e:
        raise _fail(e) from e
    except RuntimeError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    _render(result, as_json=as_json, tz=resolve_timezone(timezone))


@app.command("parse-text")
def parse_text_cmd(
    text_file: Annotated[Path, typer.Argument(help="OCR transcript (UTF-8)", dir_okay=False)],
    timezone: Annotated[str, typer.Option(help="Client IANA timezone name.")] = "UTC",
    year: Annotated[
        int | None, typer.Option(help="Year for recognized dates (defaults to the current year).")
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the response payload as JSON.")] = False,
) -> None:
    """Parse an OCR transcript without touching the database."""

    from .api import recognize_from_text
    from .recognize import resolve_timezone

    try:
        text = text_file.read_text(encoding="utf-8")
    except OSError as e:
        err_console.print(f"[red]Error:[/red] cannot read {text_file}: {e}")
        raise typer.Exit(1) from e

    try:
        tz = resolve_timezone(timezone)
        reference_time = datetime.now(UTC).astimezone(tz)
        if year is not None:
            reference_time = datetime(year, 1, 1, tzinfo=tz)
        result = recognize_from_text(text, timezone=tz, reference_time=reference_time)
    except RecognitionError as e:
        raise _fail(e) from e

    _render(result, as_json=as_json, tz=tz)


@app.callback()
def _root() -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables) and configures package logging.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

    # Central logging setup so child loggers inherit configuration
    configure_logging()


if __name__ == "__main__":  # pragma: no cover
    # Running as a module: `python -m bill_recognition.cli`
    app()
