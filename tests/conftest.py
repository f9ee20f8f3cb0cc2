"""Pytest configuration and shared fixtures.

This module provides fixtures for testing nuvaclub, including temporary
databases, fixed clocks and sample profiles.
"""

from datetime import datetime
from pathlib import Path
from typing import Generator

import pytest

from nuvaclub.clock import FixedClock
from nuvaclub.config import reset_config
from nuvaclub.db import Database
from nuvaclub.roles import ProfileCreate, ProfileResponse, RoleManager, UserRole


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture
def club_env(tmp_path: Path, monkeypatch) -> Generator[Path, None, None]:
    """Point configuration at a temporary directory."""
    reset_config()
    monkeypatch.setenv("NUVACLUB_DB_PATH", str(tmp_path / "club.db"))
    monkeypatch.setenv("NUVACLUB_STATE_PATH", str(tmp_path / "simulated-time.json"))
    monkeypatch.delenv("NUVACLUB_TIMEZONE", raising=False)
    monkeypatch.delenv("NUVACLUB_LOCALE", raising=False)
    yield tmp_path
    reset_config()


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
def db(tmp_path: Path) -> Database:
    """Create a test database instance."""
    database = Database(str(tmp_path / "test.db"))
    database.create_tables()
    return database


@pytest.fixture
def role_manager(db: Database) -> RoleManager:
    """Create a role manager bound to the test database."""
    return RoleManager(db)


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def learner(role_manager: RoleManager) -> ProfileResponse:
    """A profile that can only act as a learner."""
    return role_manager.create_profile(ProfileCreate(username="mei_learns"))


@pytest.fixture
def coach(role_manager: RoleManager) -> ProfileResponse:
    """A profile that coaches and can switch back to learning."""
    return role_manager.create_profile(
        ProfileCreate(
            username="coach_lin",
            display_name="Coach Lin",
            role=UserRole.NUNU,
            available_roles=[UserRole.NUNU, UserRole.VAVA],
        )
    )


@pytest.fixture
def mid_january_clock() -> FixedClock:
    """Clock inside the January challenge."""
    return FixedClock(datetime(2025, 1, 23, 12, 0))


@pytest.fixture
def february_gap_clock() -> FixedClock:
    """Clock between the January and March challenges."""
    return FixedClock(datetime(2025, 2, 20))


# ============================================================================
# CLI Testing Fixtures
# ============================================================================


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner."""
    from typer.testing import CliRunner
    return CliRunner()


@pytest.fixture
def cli_app():
    """Get the CLI app for testing."""
    from nuvaclub.cli import app
    return app
