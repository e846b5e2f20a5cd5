import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="vidtube-tests-")

os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["MEDIA_BACKEND"] = "local"
os.environ["MEDIA_ROOT"] = os.path.join(_TMP_DIR, "media")
os.environ["COOKIE_SECURE"] = "false"

import pytest
from fastapi.testclient import TestClient

from app.core.security import create_access_token, get_password_hash
from app.db import models
from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.main import app as application

PASSWORD = "secret-pass"


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    with TestClient(application) as test_client:
        yield test_client


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def auth_headers(user_id):
    return {"Authorization": f"Bearer {create_access_token({'sub': user_id})}"}


def _persist(instance):
    session = SessionLocal()
    try:
        session.add(instance)
        session.commit()
        session.refresh(instance)
        session.expunge(instance)
        return instance
    finally:
        session.close()


@pytest.fixture
def make_user():
    counter = {"n": 0}

    def factory(username=None, **overrides):
        counter["n"] += 1
        username = username or f"user{counter['n']}"
        fields = {
            "username": username,
            "email": f"{username}@example.com",
            "full_name": f"User {username}",
            "hashed_password": get_password_hash(PASSWORD),
            "avatar": f"/media/avatars/{username}.png",
        }
        fields.update(overrides)
        return _persist(models.User(**fields))

    return factory


@pytest.fixture
def make_video():
    counter = {"n": 0}

    def factory(owner, **overrides):
        counter["n"] += 1
        fields = {
            "owner_id": owner.id,
            "title": f"Video {counter['n']}",
            "description": f"Description of video {counter['n']}",
            "video_file": f"/media/videos/{counter['n']}.mp4",
            "thumbnail": f"/media/thumbnails/{counter['n']}.png",
            "duration": 60.0,
            "is_published": True,
        }
        fields.update(overrides)
        return _persist(models.Video(**fields))

    return factory


@pytest.fixture
def make_comment():
    def factory(video, owner, content="Nice video"):
        return _persist(models.Comment(video_id=video.id, owner_id=owner.id, content=content))

    return factory


@pytest.fixture
def make_tweet():
    def factory(owner, content="Hello world"):
        return _persist(models.Tweet(owner_id=owner.id, content=content))

    return factory


@pytest.fixture
def make_like():
    def factory(user, **target):
        return _persist(models.Like(liked_by_id=user.id, **target))

    return factory


@pytest.fixture
def make_subscription():
    def factory(subscriber, channel):
        return _persist(models.Subscription(subscriber_id=subscriber.id, channel_id=channel.id))

    return factory
