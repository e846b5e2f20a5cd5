# ============================================================================
# FILE: app/services/read_models.py
# Per-endpoint read models: how users, videos, comments, likes and
# subscriptions are joined and aggregated into each response shape
# ============================================================================
from typing import Any, Dict, List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session, aliased, join
from app.db.models import Comment, Like, Playlist, PlaylistVideo, Subscription, Tweet, User, Video, WatchHistory
from app.db.read_model import ReadModel, count_related, group_rows, sum_related, viewer_in

OWNER_FIELDS = ("id", "username", "full_name", "avatar")

VIDEO_LIST_FIELDS = (
    "video_file",
    "thumbnail",
    "title",
    "description",
    "duration",
    "views",
    "is_published",
    "created_at",
)

# Public sort keys accepted by the video feed
VIDEO_SORT_FIELDS = {
    "createdAt": Video.created_at,
    "views": Video.views,
    "duration": Video.duration,
    "title": Video.title,
}


def visible_videos(viewer_id: Optional[str]):
    """Published videos, plus the viewer's own unpublished ones"""
    if viewer_id is None:
        return Video.is_published.is_(True)
    return or_(Video.is_published.is_(True), Video.owner_id == viewer_id)


def _owner():
    return aliased(User, name="owner")


# ---------------------------------------------------------------------------
# Videos
# ---------------------------------------------------------------------------

def video_feed(
    viewer_id: Optional[str],
    query: Optional[str] = None,
    owner_id: Optional[str] = None,
    sort_column=Video.created_at,
    descending: bool = True,
) -> ReadModel:
    owner = _owner()
    return (
        ReadModel(Video)
        .search(query, Video.title, Video.description)
        .match(visible_videos(viewer_id), Video.owner_id == owner_id if owner_id else None)
        .join("owner", owner, Video.owner_id == owner.id, *OWNER_FIELDS)
        .project(*VIDEO_LIST_FIELDS)
        .sort(sort_column, descending)
    )


def video_detail(video_id: str, viewer_id: Optional[str]) -> ReadModel:
    owner = _owner()
    return (
        ReadModel(Video)
        .match(Video.id == video_id, visible_videos(viewer_id))
        .join("owner", owner, Video.owner_id == owner.id, *OWNER_FIELDS)
        .derive("owner__subscribers_count", count_related(Subscription, Subscription.channel_id == owner.id))
        .derive(
            "owner__is_subscribed",
            viewer_in(Subscription.subscriber_id, viewer_id, Subscription.channel_id == owner.id),
        )
        .derive("likes_count", count_related(Like, Like.video_id == Video.id))
        .derive("is_liked", viewer_in(Like.liked_by_id, viewer_id, Like.video_id == Video.id))
        .derive("comments_count", count_related(Comment, Comment.video_id == Video.id))
        .project(*VIDEO_LIST_FIELDS, "updated_at")
    )


def liked_videos(viewer_id: str) -> ReadModel:
    """Videos the viewer liked and can still see, most recent like first"""
    owner = _owner()
    return (
        ReadModel(Video)
        .join(None, Like, Like.video_id == Video.id)
        .match(Like.liked_by_id == viewer_id, visible_videos(viewer_id))
        .join("owner", owner, Video.owner_id == owner.id, *OWNER_FIELDS)
        .derive("liked_at", Like.created_at)
        .project(*VIDEO_LIST_FIELDS)
        .sort(Like.created_at)
    )


def watch_history(viewer_id: str) -> ReadModel:
    """One row per history entry, newest first; repeated views stay repeated"""
    owner = _owner()
    return (
        ReadModel(Video)
        .join(None, WatchHistory, WatchHistory.video_id == Video.id)
        .match(WatchHistory.user_id == viewer_id, visible_videos(viewer_id))
        .join("owner", owner, Video.owner_id == owner.id, *OWNER_FIELDS)
        .derive("watched_at", WatchHistory.watched_at)
        .project(*VIDEO_LIST_FIELDS)
        .sort(WatchHistory.id)
    )


def channel_videos(channel_id: str) -> ReadModel:
    """Every video of a channel, unpublished included, for its owner's dashboard"""
    return (
        ReadModel(Video)
        .match(Video.owner_id == channel_id)
        .derive("likes_count", count_related(Like, Like.video_id == Video.id))
        .derive("comments_count", count_related(Comment, Comment.video_id == Video.id))
        .project("thumbnail", "title", "description", "duration", "views", "is_published", "created_at")
        .sort(Video.created_at)
    )


# ---------------------------------------------------------------------------
# Comments and tweets
# ---------------------------------------------------------------------------

def comment_feed(video_id: str, viewer_id: Optional[str]) -> ReadModel:
    owner = _owner()
    return (
        ReadModel(Comment)
        .match(Comment.video_id == video_id)
        .join("owner", owner, Comment.owner_id == owner.id, *OWNER_FIELDS)
        .derive("likes_count", count_related(Like, Like.comment_id == Comment.id))
        .derive("is_liked", viewer_in(Like.liked_by_id, viewer_id, Like.comment_id == Comment.id))
        .project("content", "video_id", "created_at", "updated_at")
        .sort(Comment.created_at)
    )


def tweet_feed(owner_id: str, viewer_id: Optional[str]) -> ReadModel:
    owner = _owner()
    return (
        ReadModel(Tweet)
        .match(Tweet.owner_id == owner_id)
        .join("owner", owner, Tweet.owner_id == owner.id, *OWNER_FIELDS)
        .derive("likes_count", count_related(Like, Like.tweet_id == Tweet.id))
        .derive("is_liked", viewer_in(Like.liked_by_id, viewer_id, Like.tweet_id == Tweet.id))
        .project("content", "created_at", "updated_at")
        .sort(Tweet.created_at)
    )


# ---------------------------------------------------------------------------
# Channels and subscriptions
# ---------------------------------------------------------------------------

def channel_profile(username: str, viewer_id: Optional[str]) -> ReadModel:
    return (
        ReadModel(User)
        .match(User.username == username.strip().lower())
        .derive("subscribers_count", count_related(Subscription, Subscription.channel_id == User.id))
        .derive("channels_subscribed_to_count", count_related(Subscription, Subscription.subscriber_id == User.id))
        .derive("videos_count", count_related(Video, Video.owner_id == User.id, visible_videos(viewer_id)))
        .derive(
            "is_subscribed",
            viewer_in(Subscription.subscriber_id, viewer_id, Subscription.channel_id == User.id),
        )
        .project("username", "full_name", "avatar", "email", "cover_image", "created_at")
    )


def _subscription_users(viewer_id: Optional[str]) -> ReadModel:
    # The outer query already reads the subscriptions table, so counts need their own alias
    other = aliased(Subscription, name="other_subscription")
    return (
        ReadModel(User)
        .derive("subscribers_count", count_related(other, other.channel_id == User.id))
        .derive("is_subscribed", viewer_in(other.subscriber_id, viewer_id, other.channel_id == User.id))
        .derive("subscribed_at", Subscription.created_at)
        .project("username", "full_name", "avatar")
    )


def channel_subscribers(channel_id: str, viewer_id: Optional[str]) -> ReadModel:
    """Users subscribed to a channel, newest subscription first"""
    return (
        _subscription_users(viewer_id)
        .join(None, Subscription, Subscription.subscriber_id == User.id)
        .match(Subscription.channel_id == channel_id)
        .sort(Subscription.created_at)
    )


def subscribed_channels(subscriber_id: str, viewer_id: Optional[str]) -> ReadModel:
    """Channels a user follows, newest subscription first"""
    return (
        _subscription_users(viewer_id)
        .join(None, Subscription, Subscription.channel_id == User.id)
        .match(Subscription.subscriber_id == subscriber_id)
        .sort(Subscription.created_at)
    )


def channel_stats(channel_id: str) -> ReadModel:
    return (
        ReadModel(User)
        .match(User.id == channel_id)
        .derive("total_videos", count_related(Video, Video.owner_id == User.id))
        .derive("total_views", sum_related(Video.views, Video.owner_id == User.id))
        .derive("total_subscribers", count_related(Subscription, Subscription.channel_id == User.id))
        .derive(
            "total_likes",
            count_related(join(Like, Video, Like.video_id == Video.id), Video.owner_id == User.id),
        )
        .derive(
            "total_comments",
            count_related(join(Comment, Video, Comment.video_id == Video.id), Video.owner_id == User.id),
        )
    )


# ---------------------------------------------------------------------------
# Playlists
# ---------------------------------------------------------------------------

def _playlist_members():
    return join(PlaylistVideo, Video, PlaylistVideo.video_id == Video.id)


def _playlist_totals(model: ReadModel, viewer_id: Optional[str]) -> ReadModel:
    members = (PlaylistVideo.playlist_id == Playlist.id, visible_videos(viewer_id))
    return (
        model
        .derive("video_count", count_related(_playlist_members(), *members))
        .derive("total_duration", sum_related(Video.duration, *members, select_from=_playlist_members()))
    )


def _playlist_video_loader(viewer_id: Optional[str], with_owner: bool):
    """Load visible member videos of many playlists in insertion order"""

    def load(db: Session, playlist_ids: List[Any]) -> Dict[Any, List[Dict[str, Any]]]:
        model = (
            ReadModel(Video)
            .join(None, PlaylistVideo, PlaylistVideo.video_id == Video.id)
            .match(PlaylistVideo.playlist_id.in_(playlist_ids), visible_videos(viewer_id))
            .derive("playlist_id", PlaylistVideo.playlist_id)
            .sort(PlaylistVideo.id, descending=False)
        )
        if with_owner:
            owner = _owner()
            model.join("owner", owner, Video.owner_id == owner.id, *OWNER_FIELDS)
            model.project("title", "thumbnail", "duration", "views", "created_at")
        else:
            model.project("title", "description", "thumbnail", "duration", "views", "created_at")
        return group_rows(model.all(db), "playlist_id")

    return load


def playlist_summaries(owner_id: str, viewer_id: Optional[str]) -> ReadModel:
    model = ReadModel(Playlist).match(Playlist.owner_id == owner_id)
    return (
        _playlist_totals(model, viewer_id)
        .project("name", "description", "created_at", "updated_at")
        .lookup("videos", _playlist_video_loader(viewer_id, with_owner=False))
        .sort(Playlist.created_at)
    )


def playlist_detail(playlist_id: str, viewer_id: Optional[str]) -> ReadModel:
    owner = _owner()
    model = (
        ReadModel(Playlist)
        .match(Playlist.id == playlist_id)
        .join("owner", owner, Playlist.owner_id == owner.id, *OWNER_FIELDS)
    )
    return (
        _playlist_totals(model, viewer_id)
        .project("name", "description", "created_at", "updated_at")
        .lookup("videos", _playlist_video_loader(viewer_id, with_owner=True))
    )
