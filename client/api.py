"""HTTP client for the paper ball API."""

import logging
from typing import Optional

import requests
from urllib.parse import quote

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


class APIError(Exception):
    def __init__(self, status_code: int, detail):
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class PaperBallAPI:
    """Thin wrapper over the REST endpoints. Holds the bearer token, nothing else."""

    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.token = None

    def _request(self, method: str, path: str, **kwargs):
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        response = self.session.request(
            method, f"{self.base_url}{path}", headers=headers, timeout=self.timeout, **kwargs
        )
        try:
            data = response.json()
        except ValueError:
            data = {}
        if not response.ok:
            detail = data.get("detail") if isinstance(data, dict) else None
            logger.warning(f"{method} {path} failed with {response.status_code}")
            raise APIError(response.status_code, detail or response.reason)
        return data

    # Users

    def register(self, nickname: str, password: str, avatar: Optional[str] = None):
        return self._request("POST", "/api/register", json={"nickname": nickname, "password": password, "avatar": avatar})

    def login(self, nickname: str, password: str):
        return self._request("POST", "/api/login", json={"nickname": nickname, "password": password})

    def check_nickname(self, nickname: str):
        return self._request("GET", f"/api/users/check-nickname/{quote(nickname, safe='')}")

    def update_avatar(self, user_id: str, avatar: str):
        return self._request("PUT", f"/api/users/{user_id}/avatar", json={"avatar": avatar})

    def update_nickname(self, user_id: str, nickname: str):
        return self._request("PUT", f"/api/users/{user_id}/nickname", json={"nickname": nickname})

    def get_messages(self, user_id: str):
        return self._request("GET", f"/api/users/{user_id}/messages")

    def get_unread_count(self, user_id: str):
        return self._request("GET", f"/api/users/{user_id}/unread-count")

    def mark_message_read(self, message_id: str):
        return self._request("PUT", f"/api/messages/{message_id}/read")

    def get_user_papers(self, user_id: str):
        return self._request("GET", f"/api/users/{user_id}/papers")

    def get_user_commented_papers(self, user_id: str):
        return self._request("GET", f"/api/users/{user_id}/commented-papers")

    # Papers

    def throw_paper(self, content: str, paper_type: str, latitude: float, longitude: float,
                    media_url: Optional[str] = None):
        return self._request("POST", "/api/papers", json={
            "content": content,
            "type": paper_type,
            "mediaUrl": media_url,
            "latitude": latitude,
            "longitude": longitude,
        })

    def search_nearby(self, latitude: float, longitude: float, radius_meters: float, sort: str = "distance"):
        return self._request("GET", "/api/papers/nearby", params={
            "latitude": latitude, "longitude": longitude, "radius": radius_meters, "sort": sort,
        })

    def get_paper(self, paper_id: str):
        return self._request("GET", f"/api/papers/{paper_id}")

    def like_paper(self, paper_id: str):
        return self._request("POST", f"/api/papers/{paper_id}/like")

    def add_comment(self, paper_id: str, content: str, parent_id: Optional[str] = None):
        return self._request("POST", f"/api/papers/{paper_id}/comments", json={"content": content, "parentId": parent_id})

    def upload_media(self, filename: str, content: bytes):
        return self._request("POST", "/api/upload", files={"media": (filename, content)})

    def health(self):
        return self._request("GET", "/api/health")
