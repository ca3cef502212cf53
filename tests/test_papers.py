import sqlite3

import pytest

import settings
from database import new_id, utc_now
from errors import InvalidArgument, NotFound
from stores import comments, papers
from utils.geo import distance


def test_create_requires_content_or_media(alice):
    with pytest.raises(InvalidArgument):
        papers.create_paper(alice["id"], "", "text", None, 0, 0)
    with pytest.raises(InvalidArgument):
        papers.create_paper(alice["id"], "   ", "image", "", 0, 0)

    paper = papers.create_paper(alice["id"], "", "image", "/uploads/a.png", 0, 0)
    assert paper["content"] == ""
    assert paper["media_url"] == "/uploads/a.png"


def test_create_requires_valid_location_and_type(alice):
    with pytest.raises(InvalidArgument):
        papers.create_paper(alice["id"], "hi", "text", None, None, 0)
    with pytest.raises(InvalidArgument):
        papers.create_paper(alice["id"], "hi", "text", None, 95, 0)
    with pytest.raises(InvalidArgument):
        papers.create_paper(alice["id"], "hi", "poem", None, 0, 0)


def test_create_rejects_before_writing(alice):
    with pytest.raises(InvalidArgument):
        papers.create_paper(alice["id"], "", "text", None, 0, 0)
    assert papers.list_by_author(alice["id"]) == []


def test_get_paper_joins_author_and_counts(paper, alice, bob):
    fetched = papers.get_paper(paper["id"])
    assert fetched["author_nickname"] == "alice"
    assert fetched["author_avatar"]
    assert fetched["likes"] == 0
    assert fetched["comment_count"] == 0
    assert fetched["type"] == "text"

    papers.toggle_like(paper["id"], bob["id"])
    comments.create_comment(paper["id"], bob["id"], "one")
    comments.create_comment(paper["id"], alice["id"], "two")
    fetched = papers.get_paper(paper["id"])
    assert fetched["likes"] == 1
    assert fetched["comment_count"] == 2


def test_get_unknown_paper(alice):
    with pytest.raises(NotFound):
        papers.get_paper("missing")


def test_nearby_radius_filter(alice):
    near = papers.create_paper(alice["id"], "near", "text", None, 0, 0.005)
    far = papers.create_paper(alice["id"], "far", "text", None, 0, 0.02)

    found = papers.list_nearby(0, 0, 1000)
    ids = [p["id"] for p in found]
    assert near["id"] in ids
    assert far["id"] not in ids
    assert found[0]["distance"] == pytest.approx(555.97, abs=0.5)


def test_nearby_matches_exact_distance_predicate(alice):
    coords = [(0, 0), (0.001, 0.001), (0, 0.009), (0.009, 0), (0.01, 0.01), (-0.004, 0.003), (1, 1)]
    created = {papers.create_paper(alice["id"], f"p{i}", "text", None, lat, lon)["id"]: (lat, lon)
               for i, (lat, lon) in enumerate(coords)}
    radius = 1000
    expected = {pid for pid, (lat, lon) in created.items() if distance(0, 0, lat, lon) <= radius}
    assert {p["id"] for p in papers.list_nearby(0, 0, radius)} == expected


def test_nearby_aggregates_and_sorting(alice, bob):
    older_far = papers.create_paper(alice["id"], "older", "text", None, 0, 0.004)
    newer_near = papers.create_paper(alice["id"], "newer", "text", None, 0, 0.001)
    papers.toggle_like(older_far["id"], bob["id"])
    comments.create_comment(older_far["id"], bob["id"], "hi")

    by_distance = papers.list_nearby(0, 0, 1000, sort="distance")
    assert [p["id"] for p in by_distance] == [newer_near["id"], older_far["id"]]
    assert by_distance[1]["likes"] == 1
    assert by_distance[1]["comment_count"] == 1

    by_recency = papers.list_nearby(0, 0, 1000, sort="newest")
    assert [p["id"] for p in by_recency] == [newer_near["id"], older_far["id"]]


def test_nearby_rejects_bad_input():
    with pytest.raises(InvalidArgument):
        papers.list_nearby(100, 0, 10)
    with pytest.raises(InvalidArgument):
        papers.list_nearby(0, 0, -1)


def test_list_by_author_newest_first(alice, bob):
    first = papers.create_paper(alice["id"], "first", "text", None, 0, 0)
    second = papers.create_paper(alice["id"], "second", "text", None, 0, 0)
    papers.create_paper(bob["id"], "bob's", "text", None, 0, 0)
    assert [p["id"] for p in papers.list_by_author(alice["id"])] == [second["id"], first["id"]]


def test_list_commented_by_user_is_distinct(alice, bob):
    one = papers.create_paper(alice["id"], "one", "text", None, 0, 0)
    two = papers.create_paper(alice["id"], "two", "text", None, 0, 0)
    papers.create_paper(alice["id"], "three", "text", None, 0, 0)
    comments.create_comment(one["id"], bob["id"], "a")
    comments.create_comment(one["id"], bob["id"], "b")
    comments.create_comment(two["id"], bob["id"], "c")

    commented = papers.list_commented_by_user(bob["id"])
    assert [p["id"] for p in commented] == [two["id"], one["id"]]
    assert commented[1]["comment_count"] == 2


def test_toggle_like(paper, bob):
    assert papers.toggle_like(paper["id"], bob["id"]) == (True, True)
    assert papers.has_liked(paper["id"], bob["id"])
    assert papers.toggle_like(paper["id"], bob["id"]) == (False, False)
    assert not papers.has_liked(paper["id"], bob["id"])
    assert papers.get_paper(paper["id"])["likes"] == 0


def test_toggle_like_unknown_paper(bob):
    with pytest.raises(NotFound):
        papers.toggle_like("missing", bob["id"])


def test_like_uniqueness_is_enforced_by_storage(paper, bob):
    papers.toggle_like(paper["id"], bob["id"])
    conn = sqlite3.connect(settings.DB_NAME)
    try:
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute(
                "INSERT INTO likes (id, paper_id, user_id, created_at) VALUES (?, ?, ?, ?)",
                (new_id(), paper["id"], bob["id"], utc_now()),
            )
    finally:
        conn.close()


def test_concurrent_like_counts_as_already_applied(competing_like, paper, bob):
    competing_like(paper["id"], bob["id"])
    assert papers.toggle_like(paper["id"], bob["id"]) == (True, False)
    assert papers.has_liked(paper["id"], bob["id"])
    assert papers.get_paper(paper["id"])["likes"] == 1
