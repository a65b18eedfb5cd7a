from travel_blog.client.api import ApiError, BlogApiClient, NotSignedIn
from travel_blog.client.like_state import LikeState, PendingToggle, ToggleAction
from travel_blog.client.widget import LikeWidget

__all__ = [
    "ApiError",
    "BlogApiClient",
    "NotSignedIn",
    "LikeState",
    "PendingToggle",
    "ToggleAction",
    "LikeWidget",
]
