# app/services/github_service.py
# 代理 GitHub API：取得使用者最近建立的公開 repo
import logging
from typing import Any, List, Optional
from urllib.parse import quote
import httpx
from fastapi import HTTPException, status
from app.core.config import settings

logger = logging.getLogger(__name__)


class GitHubService:
    def __init__(
        self,
        client_id: str = "",
        client_secret: str = "",
        base_url: str = "https://api.github.com",
        timeout: float = 10.0,
        repo_limit: int = 5,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.base_url = base_url
        self.timeout = timeout
        self.repo_limit = repo_limit
        # 測試時可注入 httpx.MockTransport
        self.transport = transport

    @classmethod
    def from_settings(cls) -> "GitHubService":
        return cls(
            client_id=settings.GITHUB_CLIENT_ID,
            client_secret=settings.GITHUB_SECRET,
            base_url=settings.GITHUB_API_URL,
            timeout=settings.GITHUB_TIMEOUT_SECONDS,
            repo_limit=settings.GITHUB_REPO_LIMIT,
        )

    def _auth(self) -> Optional[httpx.BasicAuth]:
        # 有設定 OAuth App 憑證時以 Basic Auth 送出 (提高 rate limit)
        if self.client_id and self.client_secret:
            return httpx.BasicAuth(self.client_id, self.client_secret)
        return None

    async def get_recent_repos(self, username: str) -> List[Any]:
        """
        回傳 GitHub 的 repo 列表 (原樣轉發)。

        - GitHub 回應非 200 -> 404 "No Github profile found"
        - 連線錯誤 / 逾時 / 回應無法解析 -> 502，一定會回應
        """
        params = {
            "per_page": self.repo_limit,
            "sort": "created",
            "direction": "desc",
        }
        headers = {
            "User-Agent": "devconnector-api",
            "Accept": "application/vnd.github+json",
        }

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                auth=self._auth(),
                transport=self.transport,
            ) as client:
                # username 需整段跳脫，避免 ? # / 改變實際呼叫的 GitHub 路徑
                path = f"/users/{quote(username, safe='')}/repos"
                response = await client.get(path, params=params, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"GitHub request for {username} failed: {e}", exc_info=True)
            raise HTTPException(status.HTTP_502_BAD_GATEWAY, "GitHub service unavailable")

        if response.status_code != 200:
            logger.info(f"GitHub returned {response.status_code} for {username}")
            raise HTTPException(status.HTTP_404_NOT_FOUND, "No Github profile found")

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"GitHub returned invalid JSON for {username}: {e}")
            raise HTTPException(status.HTTP_502_BAD_GATEWAY, "GitHub service unavailable")


def get_github_service() -> GitHubService:
    """FastAPI Dependency"""
    return GitHubService.from_settings()
