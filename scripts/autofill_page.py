#!/usr/bin/env python3
"""
Autofill CLI

Fills form fields on a page from the active profile.

Subcommands:
- html: Fill a saved HTML form offline and write the result
- url:  Open a live page in Chromium and fill it in place

Both send the active profile as an autofill request to the page and report
the outcome the same way.

Usage:
    python autofill_page.py html application.html filled.html
    python autofill_page.py url https://example.com/apply
"""

from functools import partial
from pathlib import Path

import typer
from typing_extensions import Annotated

from cvfill.contexts.autofill.html_page import HtmlPageContext
from cvfill.contexts.autofill.logger import setup_autofill_logger
from cvfill.contexts.autofill.messaging import (
    StatusMessage,
    handle_autofill_request,
    request_autofill,
)
from cvfill.contexts.matching.field_matcher import FieldMatcher
from cvfill.contexts.matching.field_mappings import load_field_mappings
from cvfill.contexts.profiles.profile_store import ProfileStore

app = typer.Typer(
    add_completion=False,
    help="Fill form fields on a page from the active CV profile",
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _report(status: StatusMessage) -> None:
    """Print a status message and exit non-zero on failure."""
    if status.ok:
        typer.secho(f"✓ {status.text}", fg=typer.colors.GREEN)
    else:
        typer.secho(f"✗ {status.text}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command("html")
def html_command(
    input_file: Annotated[
        Path,
        typer.Argument(help="Saved HTML form", exists=True, dir_okay=False, resolve_path=True),
    ],
    output_file: Annotated[
        Path,
        typer.Argument(help="Where to write the filled HTML", dir_okay=False, resolve_path=True),
    ],
    keep_feedback: Annotated[
        bool,
        typer.Option(
            "--keep-feedback",
            help="Keep highlight classes and the notification in the output",
        ),
    ] = False,
):
    """
    Fill a saved HTML form offline.

    Example:\n

        $ autofill_page.py html application.html filled.html
    """
    setup_autofill_logger(target=str(input_file))

    page = HtmlPageContext(input_file.read_text(encoding="utf-8"))
    matcher = FieldMatcher(load_field_mappings())
    transport = partial(handle_autofill_request, page=page, matcher=matcher)

    status = request_autofill(ProfileStore(), transport)

    if not keep_feedback:
        # Run the highlight and notification timers to completion
        page.flush_timers()

    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(page.to_html(), encoding="utf-8")
    typer.echo(f"Wrote {output_file}")

    _report(status)


@app.command("url")
def url_command(
    url: Annotated[str, typer.Argument(help="Page to open and fill")],
    headless: Annotated[
        bool, typer.Option("--headless", help="Run the browser without a window")
    ] = False,
):
    """
    Open a live page in Chromium and fill it.

    The browser stays open until Enter is pressed, so the result can be
    reviewed and submitted by hand.

    Example:\n

        $ autofill_page.py url https://example.com/apply
    """
    # Imported here so the html command works without browser binaries installed
    from cvfill.contexts.autofill.browser_page import open_browser_page

    setup_autofill_logger(target=url)

    matcher = FieldMatcher(load_field_mappings())
    with open_browser_page(url, headless=headless) as page:
        transport = partial(handle_autofill_request, page=page, matcher=matcher)
        status = request_autofill(ProfileStore(), transport)

        if not headless:
            typer.prompt("Press Enter to close the browser", default="", show_default=False)

    _report(status)


if __name__ == "__main__":
    app()
