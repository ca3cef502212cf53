import logging
from typing import Optional

from client.api import APIError, PaperBallAPI

logger = logging.getLogger(__name__)


class SessionStore:
    """Current user and token. Pass it explicitly to whatever needs the session."""

    def __init__(self, api: PaperBallAPI):
        self.api = api
        self.user = None

    @property
    def is_logged_in(self) -> bool:
        return self.user is not None and self.api.token is not None

    def _apply_auth(self, response) -> bool:
        if response.get("success") and response.get("token") and response.get("user"):
            self.api.token = response["token"]
            self.user = dict(response["user"])
            return True
        return False

    def login(self, nickname: str, password: str) -> bool:
        try:
            return self._apply_auth(self.api.login(nickname, password))
        except APIError as e:
            logger.info(f"Login failed: {e.detail}")
            return False

    def register(self, nickname: str, password: str, avatar: Optional[str] = None) -> bool:
        try:
            return self._apply_auth(self.api.register(nickname, password, avatar))
        except APIError as e:
            logger.info(f"Registration failed: {e.detail}")
            return False

    def logout(self):
        self.api.token = None
        self.user = None

    def update_avatar(self, avatar: str) -> bool:
        if not self.user:
            return False
        response = self.api.update_avatar(self.user["id"], avatar)
        if response.get("success"):
            self.user["avatar"] = response["avatar"]
            return True
        return False

    def update_nickname(self, nickname: str) -> bool:
        if not self.user:
            return False
        response = self.api.update_nickname(self.user["id"], nickname)
        if response.get("success"):
            self.user["nickname"] = response["nickname"]
            return True
        return False

    def check_nickname_available(self, nickname: str) -> bool:
        try:
            response = self.api.check_nickname(nickname)
        except APIError:
            return False
        return bool(response.get("success") and response.get("available"))
