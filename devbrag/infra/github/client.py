import asyncio
from typing import Any, Dict, Optional

from github import Auth, Github

DEFAULT_BASE_URL = "https://api.github.com"


class GitHubClient:
    """Authenticated JSON access to the GitHub REST API.

    Requests go through PyGithub's requester so its error mapping applies,
    and run on a worker thread so callers can await them. PyGithub's own
    retry loop is disabled.
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
    ) -> None:
        self._client = Github(
            auth=Auth.Token(token),
            base_url=base_url,
            timeout=int(timeout),
            retry=None,
        )

    async def get_json(
        self, url: str, params: Optional[Dict[str, Any]] = None
    ) -> Any:
        return await asyncio.to_thread(self._get_json, url, params)

    def _get_json(self, url: str, params: Optional[Dict[str, Any]]) -> Any:
        _, data = self._client.requester.requestJsonAndCheck(
            "GET", url, parameters=params
        )
        return data

    async def close(self) -> None:
        await asyncio.to_thread(self._close)

    def _close(self) -> None:
        try:
            self._client.close()
        except AttributeError:
            return

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        await self.close()
