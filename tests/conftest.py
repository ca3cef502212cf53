from __future__ import annotations

import sqlite3
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient

import settings
from auth import create_user_token
from database import get_db, init_db, new_id, utc_now


@pytest.fixture(autouse=True)
def temp_db(tmp_path, monkeypatch) -> None:
    """Every test gets its own SQLite file and upload folder."""
    monkeypatch.setattr(settings, "DB_NAME", str(tmp_path / "test.sqlite3"))
    monkeypatch.setattr(settings, "UPLOAD_FOLDER", str(tmp_path / "uploads"))
    init_db()


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    from main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def make_user() -> Callable[[str], dict]:
    """Insert a user row directly (no bcrypt) and attach a bearer token."""

    def _make_user(nickname: str) -> dict:
        user_id = new_id()
        with get_db() as conn:
            conn.execute(
                "INSERT INTO users (id, nickname, password, avatar, created_at) VALUES (?, ?, ?, ?, ?)",
                (user_id, nickname, "not-a-real-hash", settings.DEFAULT_AVATAR_URL, utc_now()),
            )
            conn.commit()
        token = create_user_token(user_id, nickname)
        return {
            "id": user_id,
            "nickname": nickname,
            "token": token,
            "headers": {"Authorization": f"Bearer {token}"},
        }

    return _make_user


@pytest.fixture()
def alice(make_user) -> dict:
    return make_user("alice")


@pytest.fixture()
def bob(make_user) -> dict:
    return make_user("bob")


@pytest.fixture()
def carol(make_user) -> dict:
    return make_user("carol")


@pytest.fixture()
def paper(alice) -> dict:
    """A text paper by alice at the origin."""
    from stores import papers

    return papers.create_paper(alice["id"], "hello from the origin", "text", None, 0.0, 0.0)


@pytest.fixture()
def message_rows() -> Callable[[], list]:
    """Raw (user_id, type, from_user_id, paper_id, comment_id, content) rows of the messages table."""

    def _rows() -> list:
        with get_db() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT user_id, type, from_user_id, paper_id, comment_id, content FROM messages")
            return cursor.fetchall()

    return _rows


@pytest.fixture()
def competing_like(monkeypatch) -> Callable[[str, str], None]:
    """Make the next toggle_like lose a race: another connection commits the
    same like between its lookup and its insert."""
    from stores import papers

    real_new_id = papers.new_id

    def _arm(paper_id: str, user_id: str) -> None:
        def racing_new_id() -> str:
            monkeypatch.setattr(papers, "new_id", real_new_id)
            conn = sqlite3.connect(settings.DB_NAME)
            try:
                conn.execute(
                    "INSERT INTO likes (id, paper_id, user_id, created_at) VALUES (?, ?, ?, ?)",
                    (real_new_id(), paper_id, user_id, utc_now()),
                )
                conn.commit()
            finally:
                conn.close()
            return real_new_id()

        monkeypatch.setattr(papers, "new_id", racing_new_id)

    return _arm
