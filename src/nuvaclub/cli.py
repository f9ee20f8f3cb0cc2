"""Command-line interface for nuvaclub.

Built with Typer for commands and Rich for beautiful output.
"""

import logging
from datetime import MAXYEAR, MINYEAR, datetime
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .clock import SimulatedClock, get_clock
from .config import get_config
from .db import Database
from .participations import ParticipationManager, ParticipationStatus, ParticipationSubmit
from .roles import ProfileCreate, ProfileResponse, RoleManager, UserRole
from .seasons import (
    ChallengeStatusResult,
    format_challenge_date,
    format_countdown,
    format_progress_bar,
    get_challenge_status,
    get_year_challenges,
)

# Create the main app
app = typer.Typer(
    name="nuvaclub",
    help="Seasonal challenges, roles and participations for the club.",
    no_args_is_help=True,
)

# Create sub-apps for command groups
simulate_app = typer.Typer(help="Preview the club on a simulated date.")
app.add_typer(simulate_app, name="simulate")

profile_app = typer.Typer(help="Manage profiles and their roles.")
app.add_typer(profile_app, name="profile")

challenge_app = typer.Typer(help="Join and submit seasonal challenges.")
app.add_typer(challenge_app, name="challenge")

# Rich console for pretty output
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Seasonal challenges, roles and participations for the club."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[dim]{message}[/dim]")


def _open_db() -> Database:
    db = Database(str(get_config().db_path))
    db.create_tables()
    return db


def _clock() -> SimulatedClock:
    return get_clock(get_config())


def _parse_moment(value: str) -> datetime:
    """Parse an ISO date or datetime, attaching the configured zone to naive input."""
    try:
        moment = datetime.fromisoformat(value)
    except ValueError:
        print_error(f"Invalid date: {value} (expected ISO format, e.g. 2025-03-01T09:00)")
        raise typer.Exit(1)
    tz = get_config().tzinfo
    if moment.tzinfo is None and tz is not None:
        moment = moment.replace(tzinfo=tz)
    return moment


def _require_profile(manager: RoleManager, username: str) -> ProfileResponse:
    profile = manager.get_profile_by_username(username)
    if profile is None:
        print_error(f"Profile not found: {username}")
        raise typer.Exit(1)
    return profile


def render_status(status: ChallengeStatusResult, locale: str) -> Panel:
    """Build the status panel shown by the ``status`` command."""
    upcoming = status.next_challenge
    countdown = format_countdown(status, locale)

    if status.is_active:
        current = status.current_challenge
        lines = [
            f"[bold]{current.theme.emoji} {current.theme.title}[/bold]",
            f"[dim]{current.theme.description}[/dim]",
            f"Dates: {format_challenge_date(current)}",
            f"Ends in: [yellow]{countdown}[/yellow]",
            f"{format_progress_bar(status.progress_percentage)} {status.progress_percentage}%",
            f"Next: {upcoming.theme.emoji} {upcoming.theme.title} ({format_challenge_date(upcoming)})",
        ]
        return Panel("\n".join(lines), title="Challenge in progress", style="green")

    lines = [
        f"[bold]{upcoming.theme.emoji} {upcoming.theme.title}[/bold]",
        f"[dim]{upcoming.theme.description}[/dim]",
        f"Dates: {format_challenge_date(upcoming)}",
        f"Starts in: [yellow]{countdown}[/yellow]",
    ]
    return Panel("\n".join(lines), title="Next challenge", style="cyan")


# ============================================================================
# Challenge Calendar Commands
# ============================================================================


@app.command()
def status(
    at: Optional[str] = typer.Option(None, "--at", help="Evaluate at this ISO date instead of now"),
    locale: Optional[str] = typer.Option(None, "--locale", "-l", help="Countdown language (en, zh-TW)"),
) -> None:
    """Show the current seasonal challenge or the countdown to the next."""
    config = get_config()
    clock = _clock()

    if at is not None:
        now = _parse_moment(at)
    else:
        now = clock.now()
        if clock.is_simulating:
            print_info(f"Simulated time: {now.isoformat()}")

    try:
        result = get_challenge_status(now)
        panel = render_status(result, locale or config.locale)
    except (LookupError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(1)

    console.print(panel)


@app.command()
def calendar(
    year: Optional[int] = typer.Option(
        None, "--year", "-y", min=MINYEAR, max=MAXYEAR, help="Year (default: current)"
    ),
) -> None:
    """Show every challenge of a year."""
    now = _clock().now()
    if year is None:
        year = now.year

    table = Table(title=f"{year} Challenges", show_header=True, header_style="bold magenta")
    table.add_column("Key", style="dim")
    table.add_column("Theme", style="cyan")
    table.add_column("Dates")
    table.add_column("State", justify="center")

    for window in get_year_challenges(year, now.tzinfo):
        if window.contains(now):
            state = "[bold green]active[/bold green]"
        elif window.end_date <= now:
            state = "[dim]ended[/dim]"
        else:
            state = "[yellow]upcoming[/yellow]"
        table.add_row(
            window.key,
            f"{window.theme.emoji} {window.theme.title}",
            format_challenge_date(window),
            state,
        )

    console.print(table)


# ============================================================================
# Simulated Time Commands
# ============================================================================


@simulate_app.command("set")
def simulate_set(
    when: str = typer.Argument(..., help="ISO date or datetime to simulate"),
) -> None:
    """Pretend it is ``when`` for subsequent commands."""
    moment = _parse_moment(when)
    _clock().set(moment)
    print_success(f"Simulating {moment.isoformat()}")


@simulate_app.command("reset")
def simulate_reset() -> None:
    """Return to real time."""
    _clock().reset()
    print_success("Back to real time")


@simulate_app.command("show")
def simulate_show() -> None:
    """Show whether a simulated date is active."""
    clock = _clock()
    simulated = clock.simulated_date
    if simulated is None:
        console.print("Using real time")
    else:
        console.print(f"Simulating {simulated.isoformat()}")


# ============================================================================
# Profile Commands
# ============================================================================


def _format_roles(profile: ProfileResponse) -> str:
    return ", ".join(
        f"[bold]{r.value}[/bold]" if r == profile.role else r.value
        for r in profile.available_roles
    )


@profile_app.command("create")
def profile_create(
    username: str = typer.Argument(..., help="Unique username"),
    display_name: Optional[str] = typer.Option(None, "--name", "-n", help="Display name"),
    role: UserRole = typer.Option(UserRole.VAVA, "--role", "-r", help="Active role"),
    extra_roles: Optional[List[UserRole]] = typer.Option(
        None, "--also", "-a", help="Additional roles the profile may switch to"
    ),
) -> None:
    """Create a profile."""
    manager = RoleManager(_open_db())
    try:
        data = ProfileCreate(
            username=username,
            display_name=display_name,
            role=role,
            available_roles=[role, *(extra_roles or [])],
        )
        profile = manager.create_profile(data)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success(f"Created {profile.username} as {profile.variant.icon} {profile.variant.label}")


@profile_app.command("show")
def profile_show(
    username: str = typer.Argument(..., help="Username"),
) -> None:
    """Show a profile and its roles."""
    profile = _require_profile(RoleManager(_open_db()), username)
    variant = profile.variant

    lines = [
        f"[bold]{profile.display_name or profile.username}[/bold] (@{profile.username})",
        f"Role: {variant.icon} {variant.label}",
        f"Available: {_format_roles(profile)}",
        f"Can coach: {'yes' if variant.can_coach else 'no'}",
        f"Can administer: {'yes' if variant.can_administer else 'no'}",
    ]
    console.print(Panel("\n".join(lines), title="Profile", style="magenta"))


@profile_app.command("list")
def profile_list(
    role: Optional[UserRole] = typer.Option(None, "--role", "-r", help="Only profiles acting as this role"),
) -> None:
    """List profiles."""
    profiles = RoleManager(_open_db()).list_profiles(role)
    if not profiles:
        print_info("No profiles found.")
        return

    table = Table(title="Profiles", show_header=True, header_style="bold magenta")
    table.add_column("Username", style="cyan")
    table.add_column("Name")
    table.add_column("Roles")
    for profile in profiles:
        table.add_row(profile.username, profile.display_name or "-", _format_roles(profile))
    console.print(table)


@profile_app.command("switch")
def profile_switch(
    username: str = typer.Argument(..., help="Username"),
    role: UserRole = typer.Argument(..., help="Role to act as"),
) -> None:
    """Switch the role a profile is acting as."""
    manager = RoleManager(_open_db())
    profile = _require_profile(manager, username)
    try:
        profile = manager.switch_role(str(profile.id), role)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)
    print_success(f"{profile.username} is now acting as {profile.variant.icon} {profile.variant.label}")


@profile_app.command("grant")
def profile_grant(
    username: str = typer.Argument(..., help="Username"),
    role: UserRole = typer.Argument(..., help="Role to grant"),
) -> None:
    """Allow a profile to act as another role."""
    manager = RoleManager(_open_db())
    profile = _require_profile(manager, username)
    profile = manager.grant_role(str(profile.id), role)
    print_success(f"{profile.username} roles: {_format_roles(profile)}")


@profile_app.command("revoke")
def profile_revoke(
    username: str = typer.Argument(..., help="Username"),
    role: UserRole = typer.Argument(..., help="Role to revoke"),
) -> None:
    """Remove a role from a profile."""
    manager = RoleManager(_open_db())
    profile = _require_profile(manager, username)
    try:
        profile = manager.revoke_role(str(profile.id), role)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)
    print_success(f"{profile.username} roles: {_format_roles(profile)}")


# ============================================================================
# Participation Commands
# ============================================================================


@challenge_app.command("join")
def challenge_join(
    username: str = typer.Argument(..., help="Username"),
) -> None:
    """Join the challenge that is open now."""
    db = _open_db()
    profile = _require_profile(RoleManager(db), username)
    manager = ParticipationManager(db, _clock())
    try:
        participation = manager.join(str(profile.id))
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)

    window = participation.window
    print_success(f"{username} joined {window.theme.emoji} {window.theme.title} ({participation.challenge_key})")


@challenge_app.command("submit")
def challenge_submit(
    username: str = typer.Argument(..., help="Username"),
    url: str = typer.Argument(..., help="Link to the submitted work"),
    key: Optional[str] = typer.Option(None, "--challenge", "-c", help="Challenge key (default: open challenge)"),
) -> None:
    """Submit work for a joined challenge."""
    db = _open_db()
    profile = _require_profile(RoleManager(db), username)
    manager = ParticipationManager(db, _clock())

    try:
        if key is None:
            result = get_challenge_status(manager.clock.now())
            if not result.is_active:
                print_error("No challenge is open; pass --challenge to submit to a past one")
                raise typer.Exit(1)
            key = result.current_challenge.key
        participation = manager.submit(str(profile.id), key, ParticipationSubmit(submission_url=url))
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success(f"Submitted {participation.submission_url} to {participation.challenge_key}")


@challenge_app.command("complete")
def challenge_complete(
    username: str = typer.Argument(..., help="Username"),
    key: str = typer.Argument(..., help="Challenge key, e.g. 2025-03"),
) -> None:
    """Mark a submitted participation as completed."""
    db = _open_db()
    profile = _require_profile(RoleManager(db), username)
    try:
        participation = ParticipationManager(db, _clock()).complete(str(profile.id), key)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)
    print_success(f"{username} completed {participation.challenge_key}")


@challenge_app.command("list")
def challenge_list(
    username: str = typer.Argument(..., help="Username"),
) -> None:
    """List a profile's challenge participations."""
    db = _open_db()
    profile = _require_profile(RoleManager(db), username)
    participations = ParticipationManager(db, _clock()).list_for_user(str(profile.id))

    if not participations:
        print_info("No challenges joined yet.")
        return

    status_styles = {
        ParticipationStatus.JOINED: "yellow",
        ParticipationStatus.SUBMITTED: "cyan",
        ParticipationStatus.COMPLETED: "green",
    }

    table = Table(title=f"Challenges of {username}", show_header=True, header_style="bold magenta")
    table.add_column("Key", style="dim")
    table.add_column("Theme", style="cyan")
    table.add_column("Status")
    table.add_column("Submission")
    for p in participations:
        window = p.window
        style = status_styles[p.status]
        table.add_row(
            p.challenge_key,
            f"{window.theme.emoji} {window.theme.title}",
            f"[{style}]{p.status.value}[/{style}]",
            p.submission_url or "-",
        )
    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__

    console.print(f"nuvaclub version {__version__}")


# ============================================================================
# Main Entry Point
# ============================================================================


if __name__ == "__main__":
    app()
