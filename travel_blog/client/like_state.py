"""
Like button state machine.

`LikeState` is one article's like button: whether the caller likes it
(`None` while the status has not been fetched yet), the displayed counter,
and whether a like/unlike request is outstanding. Every transition is a pure
function returning a new state, so the optimistic update and its rollback
can be exercised without any UI or network.
"""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict


class ToggleAction(str, Enum):
    LIKE = "like"
    UNLIKE = "unlike"


class LikeState(BaseModel):
    model_config = ConfigDict(frozen=True)

    liked: Optional[bool] = None
    count: int = 0
    in_flight: bool = False

    @property
    def known(self) -> bool:
        return self.liked is not None


class PendingToggle(BaseModel):
    """Request to send plus the values to restore if it fails"""
    model_config = ConfigDict(frozen=True)

    action: ToggleAction
    previous_liked: bool
    previous_count: int


def status_loaded(
    state: LikeState,
    liked: bool,
    requested_generation: int = 0,
    current_generation: int = 0,
) -> LikeState:
    """
    Apply a fetched like status.

    Generations count the toggles started so far. A reply to a request sent
    before the latest toggle began is stale and dropped, as is any reply
    that lands while a toggle is outstanding.
    """
    if state.in_flight or requested_generation != current_generation:
        return state
    return state.model_copy(update={"liked": liked})


def status_failed(
    state: LikeState,
    requested_generation: int = 0,
    current_generation: int = 0,
) -> LikeState:
    """Unreadable status settles as not liked"""
    return status_loaded(state, False, requested_generation, current_generation)


def counter_refreshed(state: LikeState, count: int) -> LikeState:
    return state.model_copy(update={"count": max(count, 0)})


def begin_toggle(state: LikeState) -> Tuple[LikeState, Optional[PendingToggle]]:
    """
    Flip the flag and adjust the counter before the request is sent.

    Returns the state unchanged and no pending toggle while the status is
    unknown or another toggle is outstanding.
    """
    if not state.known or state.in_flight:
        return state, None

    pending = PendingToggle(
        action=ToggleAction.UNLIKE if state.liked else ToggleAction.LIKE,
        previous_liked=state.liked,
        previous_count=state.count,
    )
    if state.liked:
        count = max(state.count - 1, 0)
    else:
        count = state.count + 1

    return LikeState(liked=not state.liked, count=count, in_flight=True), pending


def toggle_succeeded(state: LikeState, pending: PendingToggle, count: int) -> LikeState:
    """The server's counter replaces the optimistic one"""
    return LikeState(
        liked=pending.action is ToggleAction.LIKE,
        count=max(count, 0),
        in_flight=False,
    )


def toggle_failed(state: LikeState, pending: PendingToggle) -> LikeState:
    return LikeState(
        liked=pending.previous_liked,
        count=pending.previous_count,
        in_flight=False,
    )
