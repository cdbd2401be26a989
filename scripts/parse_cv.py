#!/usr/bin/env python3
"""
Resume Parsing CLI

Extracts a structured CV record from a PDF or plain-text resume and either
prints it or stores it as a new, active profile.

Usage:
    # Show what was extracted
    python parse_cv.py resume.pdf

    # Print the record as JSON (profile store layout)
    python parse_cv.py resume.pdf --json

    # Store as a new active profile
    python parse_cv.py resume.pdf --save --name "Startup CV"
"""

import json
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from cvfill.contexts.intake import CVParseError, CVRecord, parse_cv_file
from cvfill.contexts.intake.logger import setup_intake_logger
from cvfill.contexts.profiles.profile_store import PARSED_PROFILE_NAME, ProfileStore

app = typer.Typer(
    help="Extract a structured CV record from a resume",
    add_completion=False,
)


def print_record(record: CVRecord) -> None:
    """Print a human-readable summary of an extracted record."""
    personal = record.personal_info.to_dict()

    typer.secho("\nPersonal Info", fg=typer.colors.BLUE, bold=True)
    if personal:
        for key, value in personal.items():
            typer.echo(f"  {key:<10} {value}")
    else:
        typer.echo("  (none found)")

    typer.secho("\nEducation", fg=typer.colors.BLUE, bold=True)
    for entry in record.education:
        year = f" ({entry.year})" if entry.year else ""
        typer.echo(f"  • {entry.degree}, {entry.institution}{year}")
    if not record.education:
        typer.echo("  (none found)")

    typer.secho("\nExperience", fg=typer.colors.BLUE, bold=True)
    for entry in record.experience:
        duration = f" [{entry.duration}]" if entry.duration else ""
        typer.echo(f"  • {entry.title} @ {entry.company}{duration}")
    if not record.experience:
        typer.echo("  (none found)")

    typer.secho("\nSkills", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"  {', '.join(record.skills) if record.skills else '(none found)'}")

    if record.custom_fields:
        typer.secho("\nCustom Fields", fg=typer.colors.BLUE, bold=True)
        for heading, value in record.custom_fields.items():
            first_line = value.split("\n", 1)[0]
            typer.echo(f"  {heading}: {first_line}")


@app.command()
def main(
    resume: Annotated[
        Path,
        typer.Argument(
            help="Resume file (.pdf or .txt)",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    save: Annotated[
        bool,
        typer.Option("--save", "-s", help="Store the record as a new active profile"),
    ] = False,
    name: Annotated[
        Optional[str],
        typer.Option("--name", help=f"Profile name when saving (default: '{PARSED_PROFILE_NAME}')"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the record as JSON instead of a summary"),
    ] = False,
):
    """
    Parse a resume and display or store the extracted record.

    Examples:\n

        $ parse_cv.py resume.pdf

        $ parse_cv.py resume.pdf --save --name "Startup CV"
    """
    setup_intake_logger(source=str(resume))

    try:
        record = parse_cv_file(resume)
    except CVParseError as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))
    else:
        print_record(record)

    if record.is_empty():
        typer.secho("\nNothing could be extracted from this resume", fg=typer.colors.YELLOW)

    if save:
        profile_name = name or PARSED_PROFILE_NAME
        result = ProfileStore().save_profile(profile_name, record)
        if not result.success:
            typer.secho(f"✗ Could not save profile: {result.error}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)
        typer.secho(
            f"\n✓ Saved as '{profile_name}' ({result.id}), now active", fg=typer.colors.GREEN
        )


if __name__ == "__main__":
    app()
