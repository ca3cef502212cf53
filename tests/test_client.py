from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from client.api import APIError, PaperBallAPI
from client.feed import PaperFeed
from client.session import SessionStore
from client.time_utils import format_time_ago, normalize_timestamp


@pytest.fixture()
def api():
    api = MagicMock(spec=PaperBallAPI)
    api.token = None
    api.login.return_value = {
        "success": True,
        "token": "tok",
        "user": {"id": "u1", "nickname": "alice", "avatar": "/a.png"},
    }
    return api


@pytest.fixture()
def session(api):
    store = SessionStore(api)
    assert store.login("alice", "pw")
    return store


def test_api_request_sends_token_and_raises_on_error():
    http = MagicMock()
    http.request.return_value.ok = False
    http.request.return_value.status_code = 409
    http.request.return_value.json.return_value = {"detail": "Nickname already taken"}

    api = PaperBallAPI("http://server/", session=http)
    api.token = "tok"
    with pytest.raises(APIError) as excinfo:
        api.update_nickname("u1", "bob")
    assert excinfo.value.status_code == 409
    assert excinfo.value.detail == "Nickname already taken"

    args, kwargs = http.request.call_args
    assert args == ("PUT", "http://server/api/users/u1/nickname")
    assert kwargs["headers"] == {"Authorization": "Bearer tok"}


def test_session_login_and_logout(api, session):
    assert session.is_logged_in
    assert api.token == "tok"
    assert session.user["nickname"] == "alice"

    session.logout()
    assert not session.is_logged_in
    assert api.token is None


def test_session_login_failure(api):
    api.login.side_effect = APIError(401, "Incorrect nickname or password")
    store = SessionStore(api)
    assert store.login("alice", "bad") is False
    assert not store.is_logged_in


def test_session_profile_updates(api, session):
    api.update_nickname.return_value = {"success": True, "nickname": "alicia"}
    assert session.update_nickname("alicia")
    assert session.user["nickname"] == "alicia"
    api.update_nickname.assert_called_once_with("u1", "alicia")

    api.check_nickname.side_effect = APIError(500, "boom")
    assert session.check_nickname_available("bob") is False


def test_feed_search_sorts_by_distance(api, session):
    api.search_nearby.return_value = {"success": True, "papers": [
        {"id": "far", "latitude": 0, "longitude": 0.008, "likes": 0},
        {"id": "near", "latitude": 0, "longitude": 0.001, "likes": 0},
    ]}
    feed = PaperFeed(api, session)
    with pytest.raises(ValueError):
        feed.search_nearby()

    feed.set_location(0, 0)
    found = feed.search_nearby()
    assert [p["id"] for p in found] == ["near", "far"]
    assert found[0]["distance"] == pytest.approx(111.19, abs=0.1)
    api.search_nearby.assert_called_once_with(0, 0, 1000)


def test_feed_like_keeps_cache_in_step(api, session):
    api.search_nearby.return_value = {"success": True, "papers": [{"id": "p1", "latitude": 0, "longitude": 0, "likes": 3}]}
    feed = PaperFeed(api, session)
    feed.set_location(0, 0)
    feed.search_nearby()

    api.like_paper.return_value = {"success": True, "liked": True}
    assert feed.like("p1") is True
    assert feed.papers[0]["likes"] == 4
    assert feed.papers[0]["isLiked"] is True

    api.like_paper.return_value = {"success": True, "liked": False}
    feed.like("p1")
    assert feed.papers[0]["likes"] == 3


def test_feed_actions_need_login(api):
    feed = PaperFeed(api, SessionStore(api))
    feed.set_location(0, 0)
    with pytest.raises(PermissionError):
        feed.throw_paper("hi")
    with pytest.raises(PermissionError):
        feed.like("p1")


def test_feed_throw_paper_with_media(api, session):
    api.upload_media.return_value = {"success": True, "url": "/uploads/x.mp3", "type": "audio"}
    api.throw_paper.return_value = {"success": True, "paper": {"id": "p1", "likes": 0}}
    feed = PaperFeed(api, session)
    feed.set_location(1.5, 2.5)

    paper = feed.throw_paper("listen", media=("x.mp3", b"data"))
    api.throw_paper.assert_called_once_with("listen", "audio", 1.5, 2.5, media_url="/uploads/x.mp3")
    assert paper["distance"] == 0.0
    assert feed.papers == [paper]


def test_comment_tree_groups_replies():
    comments = [
        {"id": "c1", "parentId": None},
        {"id": "c2", "parentId": None},
        {"id": "r1", "parentId": "c1"},
        {"id": "r2", "parentId": "c1"},
        {"id": "orphan", "parentId": "gone"},
    ]
    tree = PaperFeed.comment_tree(comments)
    assert [node["id"] for node in tree] == ["c1", "c2"]
    assert [reply["id"] for reply in tree[0]["replies"]] == ["r1", "r2"]
    assert tree[1]["replies"] == []


def test_normalize_timestamp():
    expected = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    assert normalize_timestamp("2024-05-01T12:00:00Z") == expected
    assert normalize_timestamp("2024-05-01T12:00:00") == expected
    assert normalize_timestamp(expected.timestamp() * 1000) == expected


@pytest.mark.parametrize("delta, expected", [
    (timedelta(seconds=10), "just now"),
    (timedelta(minutes=1), "1 minute ago"),
    (timedelta(minutes=5), "5 minutes ago"),
    (timedelta(hours=3), "3 hours ago"),
    (timedelta(days=1), "1 day ago"),
    (timedelta(days=65), "2 months ago"),
    (timedelta(days=800), "2 years ago"),
])
def test_format_time_ago(delta, expected):
    now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    assert format_time_ago((now - delta).isoformat(), now=now) == expected


def test_feed_search_with_zero_radius(api, session):
    api.search_nearby.return_value = {"success": True, "papers": []}
    feed = PaperFeed(api, session)
    feed.set_location(0, 0)
    feed.search_nearby(radius=0)
    api.search_nearby.assert_called_once_with(0, 0, 0)


def test_feed_search_keeps_like_state_and_age(api, session):
    created = (datetime.now(timezone.utc) - timedelta(hours=2)).isoformat()
    api.search_nearby.return_value = {"success": True, "papers": [
        {"id": "p1", "latitude": 0, "longitude": 0, "likes": 1, "isLiked": True, "createdAt": created},
        {"id": "p2", "latitude": 0, "longitude": 0.001, "likes": 0, "createdAt": created},
    ]}
    feed = PaperFeed(api, session)
    feed.set_location(0, 0)
    first, second = feed.search_nearby()
    assert first["isLiked"] is True
    assert second["isLiked"] is False
    assert first["timeAgo"] == "2 hours ago"
