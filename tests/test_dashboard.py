from tests.conftest import auth_headers


def test_channel_stats(client, make_user, make_video, make_comment, make_like, make_subscription):
    owner = make_user()
    fan = make_user()
    first = make_video(owner, views=10)
    make_video(owner, views=5, is_published=False)
    make_video(fan, views=100)
    make_comment(first, fan)
    make_like(fan, video_id=first.id)
    make_subscription(fan, owner)

    stats = client.get("/api/v1/dashboard/stats", headers=auth_headers(owner.id)).json()["data"]
    assert stats == {
        "totalVideos": 2,
        "totalViews": 15,
        "totalSubscribers": 1,
        "totalLikes": 1,
        "totalComments": 1,
    }


def test_empty_channel_stats(client, make_user):
    stats = client.get("/api/v1/dashboard/stats", headers=auth_headers(make_user().id)).json()["data"]
    assert stats["totalVideos"] == 0
    assert stats["totalViews"] == 0


def test_channel_videos_include_drafts(client, make_user, make_video, make_like):
    owner = make_user()
    published = make_video(owner)
    make_video(owner, is_published=False)
    make_video(make_user())
    make_like(owner, video_id=published.id)

    page = client.get("/api/v1/dashboard/videos", headers=auth_headers(owner.id)).json()["data"]
    assert page["totalItems"] == 2
    assert page["limit"] == 20
    liked = next(item for item in page["items"] if item["id"] == published.id)
    assert liked["likesCount"] == 1
    assert liked["commentsCount"] == 0


def test_dashboard_requires_auth(client):
    assert client.get("/api/v1/dashboard/stats").status_code == 401
    assert client.get("/api/v1/dashboard/videos").status_code == 401
