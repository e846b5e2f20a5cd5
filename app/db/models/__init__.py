from app.db.models.user import User
from app.db.models.video import Video
from app.db.models.comment import Comment
from app.db.models.like import Like
from app.db.models.tweet import Tweet
from app.db.models.playlist import Playlist, PlaylistVideo
from app.db.models.subscription import Subscription
from app.db.models.history import WatchHistory

__all__ = [
    "User",
    "Video",
    "Comment",
    "Like",
    "Tweet",
    "Playlist",
    "PlaylistVideo",
    "Subscription",
    "WatchHistory",
]
