import logging
from typing import Optional

from client.api import PaperBallAPI
from client.session import SessionStore
from client.time_utils import format_time_ago
from utils.geo import distance

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_RADIUS_METERS = 1000


class PaperFeed:
    """Client-side cache of nearby papers around the current location.

    Needs an explicit SessionStore for actions that require a logged-in user.
    """

    def __init__(self, api: PaperBallAPI, session: SessionStore,
                 search_radius: float = DEFAULT_SEARCH_RADIUS_METERS):
        self.api = api
        self.session = session
        self.search_radius = search_radius
        self.location = None
        self.papers = []

    def set_location(self, latitude: float, longitude: float):
        self.location = (latitude, longitude)

    def _require_location(self):
        if self.location is None:
            raise ValueError("Current location is unknown")
        return self.location

    def _require_login(self):
        if not self.session.is_logged_in:
            raise PermissionError("Log in first")

    def _find(self, paper_id: str):
        for paper in self.papers:
            if paper["id"] == paper_id:
                return paper
        return None

    def search_nearby(self, radius: Optional[float] = None):
        """Fetch papers within radius meters, nearest first, and cache them."""
        latitude, longitude = self._require_location()
        response = self.api.search_nearby(latitude, longitude, self.search_radius if radius is None else radius)
        papers = []
        for paper in response.get("papers", []):
            paper = dict(paper)
            paper["distance"] = distance(latitude, longitude, paper["latitude"], paper["longitude"])
            paper["isLiked"] = bool(paper.get("isLiked"))
            if paper.get("createdAt"):
                paper["timeAgo"] = format_time_ago(paper["createdAt"])
            papers.append(paper)
        papers.sort(key=lambda p: p["distance"])
        self.papers = papers
        return papers

    def throw_paper(self, content: str, paper_type: str = "text", media: Optional[tuple] = None):
        """Drop a paper at the current location. media is an optional (filename, bytes) pair."""
        self._require_login()
        latitude, longitude = self._require_location()
        media_url = None
        if media is not None:
            filename, data = media
            uploaded = self.api.upload_media(filename, data)
            media_url = uploaded["url"]
            if paper_type == "text":
                paper_type = uploaded.get("type", paper_type)
        paper = dict(self.api.throw_paper(content, paper_type, latitude, longitude, media_url=media_url)["paper"])
        paper["distance"] = 0.0
        paper["isLiked"] = False
        self.papers.append(paper)
        return paper

    def load_paper(self, paper_id: str):
        paper = self.api.get_paper(paper_id)["paper"]
        cached = self._find(paper_id)
        if cached is not None:
            cached.update(paper)
            return cached
        return paper

    def like(self, paper_id: str) -> bool:
        """Toggle the like on a paper and keep the cached count in step."""
        self._require_login()
        liked = self.api.like_paper(paper_id)["liked"]
        cached = self._find(paper_id)
        if cached is not None:
            cached["likes"] = max(0, cached.get("likes", 0) + (1 if liked else -1))
            cached["isLiked"] = liked
        return liked

    def add_comment(self, paper_id: str, content: str, parent_id: Optional[str] = None):
        self._require_login()
        comment = self.api.add_comment(paper_id, content, parent_id)["comment"]
        cached = self._find(paper_id)
        if cached is not None:
            cached.setdefault("comments", []).append(comment)
            cached["commentCount"] = cached.get("commentCount", 0) + 1
        return comment

    @staticmethod
    def comment_tree(comments):
        """Group an oldest-first comment list into top-level comments with their replies."""
        tree = []
        by_id = {}
        for comment in comments:
            if not comment.get("parentId"):
                node = dict(comment, replies=[])
                by_id[comment["id"]] = node
                tree.append(node)
        for comment in comments:
            parent_id = comment.get("parentId")
            if parent_id in by_id:
                by_id[parent_id]["replies"].append(comment)
            elif parent_id:
                logger.debug(f"Reply {comment['id']} has no loaded parent {parent_id}")
        return tree
