"""CLI interface for ticketscan.

Scan a page URL for the ticket it shows and print it:

    ticketscan scan https://acme.atlassian.net/browse/ACME-42
    ticketscan scan https://tracker.example/jira/browse/OPS-3 --body-id jira
    ticketscan scan https://tracker.example/jira/browse/OPS-3 --html saved-page.html --json
"""

import asyncio
import json
from pathlib import Path
from typing import Annotated

import typer
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel

from ticketscan.config.settings import Settings
from ticketscan.integrations.adapters.base import TicketData
from ticketscan.integrations.page import (
    HtmlPageDocument,
    PageDocument,
    PageUrl,
    StaticPageDocument,
)
from ticketscan.integrations.scanner import scan_page
from ticketscan.utils.console import (
    console,
    print_error,
    print_info,
    print_warning,
    show_version,
)
from ticketscan.utils.errors import ExitCode, TicketScanError
from ticketscan.utils.logging import log_message, setup_logging

app = typer.Typer(
    name="ticketscan",
    help="Detect the issue-tracker ticket shown on a web page",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        show_version()
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version information",
        ),
    ] = None,
) -> None:
    """ticketscan - Detect the issue-tracker ticket shown on a web page."""
    setup_logging()


@app.command()
def scan(
    url: Annotated[
        str,
        typer.Argument(
            help=(
                "Page URL. Examples: https://example.atlassian.net/browse/PROJ-123, "
                "https://example.atlassian.net/secure/RapidBoard.jspa?selectedIssue=PROJ-7"
            ),
        ),
    ],
    html: Annotated[
        Path | None,
        typer.Option(
            "--html",
            help="Saved HTML of the page, used to detect self-managed instances",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ] = None,
    body_id: Annotated[
        str | None,
        typer.Option(
            "--body-id",
            help="id attribute of the page's <body> (e.g. 'jira'), instead of --html",
        ),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Print tickets as JSON",
        ),
    ] = False,
) -> None:
    """Scan a page URL and print the tickets found on it."""
    try:
        page_url = PageUrl.parse(url)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR) from e

    document: PageDocument
    if html is not None:
        if body_id is not None:
            print_warning("--body-id is ignored when --html is given")
        document = HtmlPageDocument(html.read_text(encoding="utf-8", errors="replace"))
    else:
        document = StaticPageDocument(body_id=body_id)

    try:
        settings = Settings.from_env()
        tickets = asyncio.run(scan_page(page_url, document, settings=settings))
    except TicketScanError as e:
        print_error(str(e))
        raise typer.Exit(e.exit_code) from e
    except (KeyError, TypeError, AttributeError) as e:
        print_error(f"Unexpected ticket record from the tracker API: {e!r}")
        raise typer.Exit(ExitCode.FETCH_ERROR) from e
    except KeyboardInterrupt as e:
        print_info("\nOperation cancelled by user")
        raise typer.Exit(ExitCode.USER_CANCELLED) from e

    log_message(f"Scanned {url}: {len(tickets)} ticket(s)")

    if as_json:
        console.print_json(json.dumps([ticket.to_dict() for ticket in tickets]))
        return

    if not tickets:
        print_info("No ticket found on this page")
        return

    for ticket in tickets:
        _show_ticket(ticket)


def _show_ticket(ticket: TicketData) -> None:
    """Render one ticket as a panel with its Markdown description."""
    body = Markdown(ticket.description) if ticket.description else "[dim]No description[/dim]"
    label = f"[bold]{escape(ticket.id)}[/bold] [dim]({escape(ticket.type)})[/dim]"
    title = f"{label} {escape(ticket.title)}"
    console.print(
        Panel(
            body,
            title=title,
            subtitle=escape(ticket.url),
            title_align="left",
            subtitle_align="left",
        )
    )


__all__ = ["app", "main", "scan"]
