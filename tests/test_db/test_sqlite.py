"""Tests for the SQLite database handle."""

import pytest
from sqlalchemy import inspect

from nuvaclub.db import Database
from nuvaclub.roles import ProfileCreate, RoleManager
from nuvaclub.roles.models import Profile


class TestDatabase:
    """Tests for Database class."""

    def test_create_tables(self, db: Database):
        """Test every feature table is registered."""
        tables = set(inspect(db.engine).get_table_names())
        assert {"profiles", "challenge_participations"} <= tables

    def test_creates_parent_directory(self, tmp_path):
        db = Database(str(tmp_path / "nested" / "dir" / "club.db"))
        assert (tmp_path / "nested" / "dir").is_dir()
        assert not db._is_memory

    def test_memory_database_shared_between_sessions(self):
        """Test in-memory data is visible to later sessions."""
        db = Database(":memory:")
        db.create_tables()
        RoleManager(db).create_profile(ProfileCreate(username="in_memory"))

        with db.get_session() as session:
            assert session.query(Profile).count() == 1

    def test_session_rolls_back_on_error(self, db: Database):
        """Test a failing block leaves nothing behind."""
        with pytest.raises(RuntimeError):
            with db.get_session() as session:
                session.add(Profile(username="ghost"))
                session.flush()
                raise RuntimeError("boom")

        with db.get_session() as session:
            assert session.query(Profile).count() == 0

    def test_drop_tables(self, db: Database):
        db.drop_tables()
        assert inspect(db.engine).get_table_names() == []
