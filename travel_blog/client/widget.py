import logging
from typing import Callable, Optional

import httpx

from travel_blog.client.api import ApiError, BlogApiClient, NotSignedIn
from travel_blog.client.like_state import (
    LikeState,
    PendingToggle,
    ToggleAction,
    begin_toggle,
    counter_refreshed,
    status_failed,
    status_loaded,
    toggle_failed,
    toggle_succeeded,
)

logger = logging.getLogger(__name__)

# Failures reported to the user; anything else is a bug and propagates
REQUEST_ERRORS = (ApiError, NotSignedIn, httpx.HTTPError)

ErrorCallback = Callable[[Exception], None]


class LikeWidget:
    """
    Drives one article's like button against the API.

    Toggles update the state optimistically, then settle on the server's
    counter or roll back to the values captured before the request. Responses
    that arrive after `unmount` are dropped.
    """

    def __init__(
        self,
        article_id: str,
        api: BlogApiClient,
        on_error: Optional[ErrorCallback] = None,
    ):
        self.article_id = article_id
        self.api = api
        self.on_error = on_error
        self.state = LikeState()
        self.mounted = False
        # Toggles started so far; status replies older than the latest one are dropped
        self.toggle_generation = 0
        # Last counter handed in by the owning article, as opposed to the displayed one
        self.external_count: Optional[int] = None

    @property
    def liked(self) -> bool:
        return bool(self.state.liked)

    @property
    def count(self) -> int:
        return self.state.count

    async def mount(self, likes_count: int) -> None:
        self.mounted = True
        self.external_count = likes_count
        self.state = counter_refreshed(self.state, likes_count)
        await self._load_status()

    async def refresh_counter(self, likes_count: int) -> None:
        """The article's counter changed upstream; re-read the like status too"""
        if self.state.known and likes_count == self.external_count:
            return
        self.external_count = likes_count
        self.state = counter_refreshed(self.state, likes_count)
        await self._load_status()

    def unmount(self) -> None:
        self.mounted = False

    async def toggle(self) -> None:
        if not self.api.signed_in:
            self._report(NotSignedIn("Sign in to like articles"))
            return

        self.state, pending = begin_toggle(self.state)
        if pending is None:
            return
        self.toggle_generation += 1

        try:
            count = await self._send(pending)
        except Exception as e:
            if self.mounted:
                self.state = toggle_failed(self.state, pending)
            if not isinstance(e, REQUEST_ERRORS):
                raise
            logger.info(f"{pending.action.value} of {self.article_id} failed: {e}")
            self._report(e)
            return

        if self.mounted:
            self.state = toggle_succeeded(self.state, pending, count)

    async def _send(self, pending: PendingToggle) -> int:
        if pending.action is ToggleAction.LIKE:
            return await self.api.like(self.article_id)
        return await self.api.unlike(self.article_id)

    async def _load_status(self) -> None:
        generation = self.toggle_generation
        try:
            liked_ids = await self.api.get_liked_article_ids()
        except REQUEST_ERRORS as e:
            logger.info(f"Could not load like status of {self.article_id}: {e}")
            if self.mounted:
                self.state = status_failed(self.state, generation, self.toggle_generation)
            return

        if self.mounted:
            self.state = status_loaded(
                self.state,
                self.article_id in liked_ids,
                generation,
                self.toggle_generation,
            )

    def _report(self, error: Exception) -> None:
        if self.on_error is not None and self.mounted:
            self.on_error(error)
