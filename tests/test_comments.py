from app.db.models import Like
from tests.conftest import auth_headers


def test_add_and_list_comments(client, make_user, make_video, make_like, make_comment):
    owner = make_user()
    fan = make_user()
    video = make_video(owner)
    older = make_comment(video, owner, content="first!")
    make_like(fan, comment_id=older.id)

    created = client.post(
        f"/api/v1/comments/{video.id}",
        json={"content": "  great stuff  "},
        headers=auth_headers(fan.id),
    )
    assert created.status_code == 201
    assert created.json()["data"]["content"] == "great stuff"
    assert created.json()["data"]["ownerId"] == fan.id

    page = client.get(f"/api/v1/comments/{video.id}", headers=auth_headers(fan.id)).json()["data"]
    assert page["totalItems"] == 2
    newest, oldest = page["items"]
    assert newest["content"] == "great stuff"
    assert newest["owner"]["id"] == fan.id
    assert oldest["likesCount"] == 1
    assert oldest["isLiked"] is True


def test_comment_validation(client, make_user, make_video):
    user = make_user()
    video = make_video(user)
    headers = auth_headers(user.id)

    assert client.post(f"/api/v1/comments/{video.id}", json={"content": "   "}, headers=headers).status_code == 400
    assert client.post("/api/v1/comments/bad-id", json={"content": "x"}, headers=headers).status_code == 400
    assert client.post(f"/api/v1/comments/{'f' * 24}", json={"content": "x"}, headers=headers).status_code == 404
    assert client.get(f"/api/v1/comments/{'f' * 24}").status_code == 404


def test_cannot_comment_on_someone_elses_draft(client, make_user, make_video):
    owner = make_user()
    draft = make_video(owner, is_published=False)

    response = client.post(f"/api/v1/comments/{draft.id}", json={"content": "x"}, headers=auth_headers(make_user().id))
    assert response.status_code == 404


def test_update_comment_ownership(client, make_user, make_video, make_comment):
    owner = make_user()
    video = make_video(owner)
    comment = make_comment(video, owner)

    stranger = client.patch(
        f"/api/v1/comments/c/{comment.id}", json={"content": "hijack"}, headers=auth_headers(make_user().id)
    )
    assert stranger.status_code == 404

    updated = client.patch(f"/api/v1/comments/c/{comment.id}", json={"content": "edited"}, headers=auth_headers(owner.id))
    assert updated.status_code == 200
    assert updated.json()["data"]["content"] == "edited"


def test_delete_comment_removes_its_likes(client, db, make_user, make_video, make_comment, make_like):
    owner = make_user()
    video = make_video(owner)
    comment = make_comment(video, owner)
    make_like(owner, comment_id=comment.id)

    assert client.delete(f"/api/v1/comments/c/{comment.id}", headers=auth_headers(make_user().id)).status_code == 404

    response = client.delete(f"/api/v1/comments/c/{comment.id}", headers=auth_headers(owner.id))
    assert response.status_code == 200
    assert response.json()["data"] == {"id": comment.id}
    assert db.query(Like).count() == 0
