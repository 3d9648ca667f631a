"""CLI interface for UniMatch."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from matching_core.resolver import mutual_pairs
from matching_core.seed import demo_records
from matching_core.validation import ISSUE_MESSAGES
from portal.config import AppConfig, load_config
from portal.session import MatchSession, build_session
from store.repository import PersistenceFailure

app = typer.Typer(help="UniMatch - mutual nomination matching")

CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Path to YAML config")


def _load(config_path: Optional[str]) -> AppConfig:
    if config_path is None:
        config = AppConfig()
    else:
        try:
            config = load_config(config_path)
        except FileNotFoundError as e:
            typer.secho(f"❌ Config file not found: {e}", fg=typer.colors.RED, err=True)
            raise typer.Exit(1)
        except ValueError as e:
            typer.secho(f"❌ Invalid config: {e}", fg=typer.colors.RED, err=True)
            raise typer.Exit(1)
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return config


def _session(config_path: Optional[str]) -> MatchSession:
    return build_session(_load(config_path))


def _persistence_error(e: PersistenceFailure) -> typer.Exit:
    typer.secho(f"❌ Storage error: {e}", fg=typer.colors.RED, err=True)
    return typer.Exit(2)


def _echo_matches(matches: list[str]) -> None:
    if not matches:
        typer.secho("No mutual matches yet.", fg=typer.colors.YELLOW)
        return
    typer.secho(f"💘 {len(matches)} match(es):", fg=typer.colors.MAGENTA)
    for target in matches:
        typer.echo(f"   {target}")


@app.command()
def login(
    roll_number: str = typer.Argument(..., help="Your roll number"),
    config_path: Optional[str] = CONFIG_OPTION,
) -> None:
    """Log in (creating your profile on first use) and show your matches."""
    session = _session(config_path)
    try:
        result = session.login(roll_number)
    except PersistenceFailure as e:
        raise _persistence_error(e)
    if result.issue is not None or result.record is None:
        message = ISSUE_MESSAGES[result.issue] if result.issue else "Login failed."
        typer.secho(f"❌ {message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    record = result.record
    typer.secho(f"✅ Logged in as {record.identifier}", fg=typer.colors.GREEN)
    if record.nominations:
        typer.echo(f"   Your picks: {', '.join(record.nominations)}")
        _echo_matches(result.matches)
    else:
        typer.echo("   You have not picked anyone yet.")


@app.command()
def submit(
    roll_number: str = typer.Argument(..., help="Your roll number"),
    picks: list[str] = typer.Argument(..., help="Exactly three roll numbers you like"),
    config_path: Optional[str] = CONFIG_OPTION,
) -> None:
    """Save your three picks and show any mutual matches."""
    session = _session(config_path)
    try:
        result = session.submit(roll_number, picks)
    except PersistenceFailure as e:
        raise _persistence_error(e)
    if result.issue is not None:
        typer.secho(f"❌ {ISSUE_MESSAGES[result.issue]}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    typer.secho("✅ Choices saved!", fg=typer.colors.GREEN)
    _echo_matches(result.matches)


@app.command()
def matches(
    roll_number: str = typer.Argument(..., help="Your roll number"),
    icebreakers: bool = typer.Option(False, "--icebreakers", help="Suggest an opening line per match"),
    config_path: Optional[str] = CONFIG_OPTION,
) -> None:
    """List your mutual matches."""
    session = _session(config_path)
    try:
        results = session.matches(roll_number.strip(), with_icebreakers=icebreakers)
    except PersistenceFailure as e:
        raise _persistence_error(e)
    if not results:
        typer.secho("No mutual matches yet.", fg=typer.colors.YELLOW)
        return
    typer.secho(f"💘 {len(results)} match(es):", fg=typer.colors.MAGENTA)
    for result in results:
        typer.echo(f"   {result.matched_user}")
        if result.icebreaker:
            typer.echo(f"      💬 {result.icebreaker}")


@app.command()
def show(
    roll_number: str = typer.Argument(..., help="Roll number to look up"),
    config_path: Optional[str] = CONFIG_OPTION,
) -> None:
    """Show a stored profile without creating it."""
    session = _session(config_path)
    try:
        record = session.store.read(roll_number.strip())
        admirers = session.admirer_count(roll_number.strip())
    except PersistenceFailure as e:
        raise _persistence_error(e)
    if record is None:
        typer.secho(f"❌ No profile for {roll_number}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    typer.echo(f"{record.identifier}")
    typer.echo(f"   Picks:         {', '.join(record.nominations) or '(none)'}")
    typer.echo(f"   Picked by:     {admirers} participant(s)")


@app.command("list")
def list_participants(
    config_path: Optional[str] = CONFIG_OPTION,
) -> None:
    """List every stored participant and all mutual pairs."""
    session = _session(config_path)
    try:
        records = session.store.list_records()
        pairs = mutual_pairs(session.store)
    except PersistenceFailure as e:
        raise _persistence_error(e)
    if not records:
        typer.secho("Store is empty.", fg=typer.colors.YELLOW)
        return
    typer.secho(f"\n📁 {len(records)} participant(s):\n", fg=typer.colors.BLUE)
    for record in records:
        typer.echo(f"  {record.identifier}: {', '.join(record.nominations) or '(none)'}")
    if pairs:
        typer.secho(f"\n💘 {len(pairs)} mutual pair(s):", fg=typer.colors.MAGENTA)
        for left, right in pairs:
            typer.echo(f"  {left} <-> {right}")


@app.command()
def seed(
    config_path: Optional[str] = CONFIG_OPTION,
) -> None:
    """Insert demo participants if the store is empty."""
    session = _session(config_path)
    try:
        seeded = session.store.seed_if_empty(demo_records())
    except PersistenceFailure as e:
        raise _persistence_error(e)
    if seeded:
        typer.secho("✅ Demo participants added.", fg=typer.colors.GREEN)
    else:
        typer.secho("⚠️  Store is not empty; nothing seeded.", fg=typer.colors.YELLOW)


@app.command()
def reset(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    config_path: Optional[str] = CONFIG_OPTION,
) -> None:
    """Delete every stored profile and nomination."""
    session = _session(config_path)
    if not yes:
        typer.confirm("This deletes all stored nominations. Continue?", abort=True)
    try:
        session.store.clear()
    except PersistenceFailure as e:
        raise _persistence_error(e)
    typer.secho("✅ Store cleared.", fg=typer.colors.GREEN)


@app.command()
def export(
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write JSON to this file"),
    config_path: Optional[str] = CONFIG_OPTION,
) -> None:
    """Print or save the stored document as JSON."""
    session = _session(config_path)
    try:
        payload = session.store.export_json()
    except PersistenceFailure as e:
        raise _persistence_error(e)
    if output is None:
        typer.echo(payload)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(payload + "\n", encoding="utf-8")
    typer.secho(f"✅ Exported to {output}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
