# ============================================================================
# FILE: app/api/v1/endpoints/tweet.py
# ============================================================================
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.api.dependencies import get_pagination, get_viewer_id, require_current_user
from app.core.validation import Pagination
from app.schemas.common import ApiResponse, DeletedResource, Page, envelope
from app.schemas.tweet import TweetContent, TweetItem, TweetOut
from app.services.tweet_service import tweet_service
from app.db.models.user import User
from typing import Optional

router = APIRouter()

@router.post("", response_model=ApiResponse[TweetOut], status_code=status.HTTP_201_CREATED)
def create_tweet(
    body: TweetContent,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    tweet = tweet_service.create_tweet(db, current_user.id, body.content)
    return envelope(tweet, "Tweet created successfully", status.HTTP_201_CREATED)

@router.get("/user/{user_id}", response_model=ApiResponse[Page[TweetItem]])
def get_user_tweets(
    user_id: str,
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    viewer_id: Optional[str] = Depends(get_viewer_id)
):
    page = tweet_service.get_user_tweets(db, user_id, viewer_id, pagination)
    return envelope(page.to_dict(), "Tweets fetched successfully")

@router.patch("/{tweet_id}", response_model=ApiResponse[TweetOut])
def update_tweet(
    tweet_id: str,
    body: TweetContent,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    tweet = tweet_service.update_tweet(db, tweet_id, current_user.id, body.content)
    return envelope(tweet, "Tweet updated successfully")

@router.delete("/{tweet_id}", response_model=ApiResponse[DeletedResource])
def delete_tweet(
    tweet_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    tweet_service.delete_tweet(db, tweet_id, current_user.id)
    return envelope({"id": tweet_id.lower()}, "Tweet deleted successfully")
