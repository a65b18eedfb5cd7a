from typing import Any, Callable, Dict, List, Optional, Set
from urllib.parse import quote

import httpx

TokenProvider = Callable[[], Optional[str]]


class ApiError(Exception):
    """Non-2xx response from the blog API"""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class NotSignedIn(Exception):
    """Raised before sending a request that needs a token when there is none"""


class BlogApiClient:
    """
    HTTP client for the blog API.
    - Attaches the caller's identity token as a bearer header
    - Turns error responses into ApiError carrying the server's message
    """

    def __init__(
        self,
        base_url: str = "",
        token_provider: Optional[TokenProvider] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self.token_provider = token_provider
        self.http_client = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    @property
    def signed_in(self) -> bool:
        return self._token() is not None

    async def list_articles(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/api/articles", auth=False)

    async def get_liked_article_ids(self) -> Set[str]:
        data = await self._request("GET", "/api/likes")
        return set(data.get("likedArticleIds") or [])

    async def like(self, article_id: str) -> int:
        data = await self._request("POST", "/api/likes", json={"articleId": article_id})
        return int(data["likesCount"])

    async def unlike(self, article_id: str) -> int:
        data = await self._request("DELETE", f"/api/likes/{quote(article_id, safe='')}")
        return int(data["likesCount"])

    async def add_comment(
        self, article_id: str, text: str, name: Optional[str] = None
    ) -> Dict[str, Any]:
        payload = {"text": text}
        if name:
            payload["name"] = name
        data = await self._request(
            "POST", f"/api/comments/{quote(article_id, safe='')}", json=payload
        )
        return data["comment"]

    async def aclose(self) -> None:
        await self.http_client.aclose()

    def _token(self) -> Optional[str]:
        if self.token_provider is None:
            return None
        return self.token_provider() or None

    async def _request(self, method: str, path: str, auth: bool = True, **kwargs) -> Any:
        headers = {}
        if auth:
            token = self._token()
            if token is None:
                raise NotSignedIn("Sign in to continue")
            headers["Authorization"] = f"Bearer {token}"

        response = await self.http_client.request(method, path, headers=headers, **kwargs)

        if not response.is_success:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = body.get("message") if isinstance(body, dict) else None
            raise ApiError(response.status_code, message or response.text or response.reason_phrase)

        return response.json()
