from tests.conftest import auth_headers


def _create_playlist(client, user, name="Favorites", description="Best videos"):
    response = client.post(
        "/api/v1/playlists", json={"name": name, "description": description}, headers=auth_headers(user.id)
    )
    assert response.status_code == 201
    return response.json()["data"]


def test_create_playlist_and_add_video(client, make_user, make_video):
    alice = make_user()
    video = make_video(alice, duration=42.5)
    playlist = _create_playlist(client, alice)

    added = client.patch(f"/api/v1/playlists/add/{video.id}/{playlist['id']}", headers=auth_headers(alice.id))
    assert added.status_code == 200

    detail = client.get(f"/api/v1/playlists/{playlist['id']}").json()["data"]
    assert detail["name"] == "Favorites"
    assert detail["videoCount"] == 1
    assert detail["totalDuration"] == 42.5
    assert detail["owner"]["id"] == alice.id
    assert [item["id"] for item in detail["videos"]] == [video.id]
    assert detail["videos"][0]["owner"]["id"] == alice.id


def test_create_playlist_validation(client, make_user):
    headers = auth_headers(make_user().id)
    assert client.post("/api/v1/playlists", json={"name": "  ", "description": "d"}, headers=headers).status_code == 400
    assert client.post("/api/v1/playlists", json={"name": "n"}, headers=headers).status_code == 400


def test_membership_rules(client, make_user, make_video):
    alice = make_user()
    bob = make_user()
    own_video = make_video(alice)
    bobs_draft = make_video(bob, is_published=False)
    playlist = _create_playlist(client, alice)
    headers = auth_headers(alice.id)

    url = f"/api/v1/playlists/add/{own_video.id}/{playlist['id']}"
    assert client.patch(url, headers=headers).status_code == 200
    assert client.patch(url, headers=headers).status_code == 409

    draft = client.patch(f"/api/v1/playlists/add/{bobs_draft.id}/{playlist['id']}", headers=headers)
    assert draft.status_code == 403

    not_owner = client.patch(url, headers=auth_headers(bob.id))
    assert not_owner.status_code == 403

    missing = "e" * 24
    assert client.patch(f"/api/v1/playlists/add/{missing}/{playlist['id']}", headers=headers).status_code == 404
    assert client.patch(f"/api/v1/playlists/add/{own_video.id}/{missing}", headers=headers).status_code == 404


def test_remove_video(client, make_user, make_video):
    alice = make_user()
    first = make_video(alice)
    second = make_video(alice)
    playlist = _create_playlist(client, alice)
    headers = auth_headers(alice.id)
    for video in (first, second):
        client.patch(f"/api/v1/playlists/add/{video.id}/{playlist['id']}", headers=headers)

    removed = client.patch(f"/api/v1/playlists/remove/{first.id}/{playlist['id']}", headers=headers)
    assert removed.status_code == 200
    again = client.patch(f"/api/v1/playlists/remove/{first.id}/{playlist['id']}", headers=headers)
    assert again.status_code == 404

    stranger = client.patch(
        f"/api/v1/playlists/remove/{second.id}/{playlist['id']}", headers=auth_headers(make_user().id)
    )
    assert stranger.status_code == 404

    detail = client.get(f"/api/v1/playlists/{playlist['id']}").json()["data"]
    assert [item["id"] for item in detail["videos"]] == [second.id]


def test_unpublished_videos_are_hidden_from_other_viewers(client, make_user, make_video):
    alice = make_user()
    published = make_video(alice, duration=10)
    draft = make_video(alice, duration=20, is_published=False)
    playlist = _create_playlist(client, alice)
    headers = auth_headers(alice.id)
    for video in (published, draft):
        client.patch(f"/api/v1/playlists/add/{video.id}/{playlist['id']}", headers=headers)

    as_owner = client.get(f"/api/v1/playlists/{playlist['id']}", headers=headers).json()["data"]
    assert (as_owner["videoCount"], as_owner["totalDuration"]) == (2, 30)

    anonymous = client.get(f"/api/v1/playlists/{playlist['id']}").json()["data"]
    assert (anonymous["videoCount"], anonymous["totalDuration"]) == (1, 10)
    assert [item["id"] for item in anonymous["videos"]] == [published.id]


def test_user_playlists(client, make_user, make_video):
    alice = make_user()
    video = make_video(alice, duration=15)
    older = _create_playlist(client, alice, name="Older")
    newer = _create_playlist(client, alice, name="Newer")
    _create_playlist(client, make_user(), name="Someone else's")
    client.patch(f"/api/v1/playlists/add/{video.id}/{older['id']}", headers=auth_headers(alice.id))

    page = client.get(f"/api/v1/playlists/user/{alice.id}").json()["data"]
    assert page["totalItems"] == 2
    assert [item["id"] for item in page["items"]] == [newer["id"], older["id"]]
    assert page["items"][0]["videos"] == []
    assert page["items"][1]["videoCount"] == 1
    assert page["items"][1]["totalDuration"] == 15
    assert page["items"][1]["videos"][0]["id"] == video.id

    assert client.get(f"/api/v1/playlists/user/{'d' * 24}").status_code == 404


def test_update_and_delete_playlist(client, make_user):
    alice = make_user()
    playlist = _create_playlist(client, alice)
    headers = auth_headers(alice.id)
    url = f"/api/v1/playlists/{playlist['id']}"

    assert client.patch(url, json={}, headers=headers).status_code == 400
    assert client.patch(url, json={"name": "Hijacked"}, headers=auth_headers(make_user().id)).status_code == 404

    updated = client.patch(url, json={"name": "Renamed"}, headers=headers).json()["data"]
    assert updated["name"] == "Renamed"
    assert updated["description"] == "Best videos"

    assert client.delete(url, headers=auth_headers(make_user().id)).status_code == 404
    assert client.delete(url, headers=headers).status_code == 200
    assert client.get(url).status_code == 404
