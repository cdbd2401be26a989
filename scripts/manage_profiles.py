#!/usr/bin/env python3
"""
Command-line interface for managing stored CV profiles.

Profiles live in the JSON store at CVFILL_PROFILE_STORE (default
~/.cvfill/profiles.json). The active profile is the one autofill uses.

Commands:
    list         - List profiles, marking the active one
    show         - Show a profile's record (active profile by default)
    activate     - Make a profile active
    rename       - Rename a profile
    delete       - Delete a profile
    create       - Create an empty profile for manual editing
    set-field    - Edit one field of the active profile
    add-field    - Add an empty custom field to the active profile
    remove-field - Remove a custom field from the active profile
    events       - Show recent profile events
    clear        - Remove all profiles
"""

import json
from typing import Optional

import typer

from cvfill.contexts.profiles.logger import setup_profiles_logger
from cvfill.contexts.profiles.profile_store import (
    EVENTS_FILE,
    PROFILE_STORE_PATH,
    ProfileStore,
    StoreResult,
)
from cvfill.utils.event_logging import format_profile_event, get_recent_events

app = typer.Typer(
    add_completion=False,
    help="Manage stored CV profiles",
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()
    setup_profiles_logger(store_path=PROFILE_STORE_PATH)


def _check(result: StoreResult) -> StoreResult:
    """Exit with an error message when a store operation failed."""
    if not result.success:
        typer.secho(f"✗ {result.error}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return result


@app.command("list")
def list_command():
    """
    List all profiles.

    Example:\n

        $ manage_profiles.py list
    """
    listing = _check(ProfileStore().get_profiles())

    if not listing.profiles:
        typer.secho("No profiles stored", fg=typer.colors.YELLOW)
        return

    typer.secho(f"\n{len(listing.profiles)} profile(s)\n", fg=typer.colors.BLUE, bold=True)
    for profile in listing.profiles:
        marker = "●" if profile.id == listing.active_id else " "
        typer.echo(f"{marker} {profile.id}  {profile.name}")


@app.command("show")
def show_command(
    profile_id: Optional[str] = typer.Argument(None, help="Profile id (defaults to active)"),
):
    """Show a profile's record as JSON."""
    store = ProfileStore()

    if profile_id:
        profile = store.get_profile(profile_id)
        if profile is None:
            typer.secho(f"✗ No profile with id {profile_id}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)
        record = profile.data
    else:
        record = _check(store.load()).data
        if record is None:
            typer.secho("No active profile", fg=typer.colors.YELLOW)
            raise typer.Exit(code=1)

    typer.echo(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))


@app.command("activate")
def activate_command(profile_id: str = typer.Argument(..., help="Profile id")):
    """Make a profile the active one."""
    store = ProfileStore()
    if store.get_profile(profile_id) is None:
        typer.secho(f"✗ No profile with id {profile_id}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    _check(store.set_active(profile_id))
    typer.secho(f"✓ {profile_id} is now active", fg=typer.colors.GREEN)


@app.command("rename")
def rename_command(
    profile_id: str = typer.Argument(..., help="Profile id"),
    name: str = typer.Argument(..., help="New profile name"),
):
    """Rename a profile."""
    _check(ProfileStore().rename_profile(profile_id, name))
    typer.secho(f"✓ Renamed {profile_id} to '{name}'", fg=typer.colors.GREEN)


@app.command("delete")
def delete_command(
    profile_id: str = typer.Argument(..., help="Profile id"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Delete a profile. The first remaining profile becomes active if needed."""
    if not yes:
        typer.confirm(f"Delete profile {profile_id}?", abort=True)

    result = _check(ProfileStore().delete_profile(profile_id))
    typer.secho(f"✓ Deleted {profile_id}", fg=typer.colors.GREEN)
    typer.echo(f"Active profile: {result.active_id or '(none)'}")


@app.command("create")
def create_command(
    name: Optional[str] = typer.Argument(None, help="Profile name (default: 'My Custom Form')"),
):
    """Create an empty, active profile for manual editing."""
    result = _check(ProfileStore().create_manual_profile(name))
    typer.secho(f"✓ Created profile {result.id}, now active", fg=typer.colors.GREEN)


@app.command("set-field")
def set_field_command(
    key: str = typer.Argument(
        ...,
        help="Field key: personalInfo.<field>, education.0.degree, experience.0.title, "
        "experience.0.company, skills, customFields.<key>",
    ),
    value: str = typer.Argument(..., help="New value (skills as a comma-separated list)"),
):
    """
    Edit one field of the active profile.

    Examples:\n

        $ manage_profiles.py set-field personalInfo.city Berlin

        $ manage_profiles.py set-field skills "Python, Go, SQL"
    """
    _check(ProfileStore().update_field(key, value))
    typer.secho(f"✓ Updated {key}", fg=typer.colors.GREEN)


@app.command("add-field")
def add_field_command(key: str = typer.Argument(..., help="Custom field name")):
    """Add an empty custom field to the active profile."""
    _check(ProfileStore().add_custom_field(key))
    typer.secho(f"✓ Added custom field '{key.strip()}'", fg=typer.colors.GREEN)


@app.command("remove-field")
def remove_field_command(key: str = typer.Argument(..., help="Custom field name")):
    """Remove a custom field from the active profile."""
    _check(ProfileStore().delete_custom_field(key))
    typer.secho(f"✓ Removed custom field '{key}'", fg=typer.colors.GREEN)


@app.command("events")
def events_command(
    n: int = typer.Option(10, "--count", "-n", help="Number of events to show"),
    profile_id: Optional[str] = typer.Option(None, "--profile", "-p", help="Filter by profile"),
):
    """Show recent profile events (requires CVFILL_EVENTS_FILE)."""
    if EVENTS_FILE is None:
        typer.secho("CVFILL_EVENTS_FILE is not set", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)

    for event in get_recent_events(EVENTS_FILE, n=n, profile_id=profile_id):
        typer.echo(format_profile_event(event))


@app.command("clear")
def clear_command(yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation")):
    """Remove every stored profile."""
    if not yes:
        typer.confirm("Are you sure you want to clear your CV data?", abort=True)

    _check(ProfileStore().clear())
    typer.secho("✓ CV data cleared", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
