from tests.conftest import PASSWORD, auth_headers

PNG = ("avatar.png", b"\x89PNG fake image bytes", "image/png")


def _register(client, username="alice", email="alice@example.com", **files):
    data = {"username": username, "email": email, "fullName": "Alice Doe", "password": PASSWORD}
    return client.post("/api/v1/users/register", data=data, files=files or {"avatar": PNG})


def test_register_creates_user_and_stores_avatar(client):
    response = _register(client, username="Alice")

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["statusCode"] == 201
    user = body["data"]
    assert user["username"] == "alice"
    assert user["fullName"] == "Alice Doe"
    assert user["avatar"].startswith("/media/avatars/")
    assert user["coverImage"] is None
    assert "hashedPassword" not in user
    assert "refreshToken" not in user


def test_register_requires_avatar(client):
    data = {"username": "bob", "email": "bob@example.com", "fullName": "Bob", "password": PASSWORD}
    response = client.post("/api/v1/users/register", data=data)

    assert response.status_code == 400
    assert response.json()["message"] == "Avatar image is required"


def test_register_rejects_blank_fields(client):
    data = {"username": "  ", "email": "bob@example.com", "fullName": "Bob", "password": PASSWORD}
    response = client.post("/api/v1/users/register", data=data, files={"avatar": PNG})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_register_duplicate_username_or_email_conflicts(client, make_user):
    make_user(username="alice")

    assert _register(client, username="alice", email="new@example.com").status_code == 409
    assert _register(client, username="newname", email="alice@example.com").status_code == 409


def test_login_with_username_or_email(client, make_user):
    make_user(username="alice")

    by_name = client.post("/api/v1/users/login", json={"username": "alice", "password": PASSWORD})
    assert by_name.status_code == 200
    data = by_name.json()["data"]
    assert data["user"]["username"] == "alice"
    assert data["accessToken"] and data["refreshToken"]
    assert by_name.cookies.get("accessToken") == data["accessToken"]

    by_email = client.post("/api/v1/users/login", json={"email": "alice@example.com", "password": PASSWORD})
    assert by_email.status_code == 200


def test_login_failures(client, make_user):
    make_user(username="alice")

    assert client.post("/api/v1/users/login", json={"password": PASSWORD}).status_code == 400
    assert client.post("/api/v1/users/login", json={"username": "ghost", "password": PASSWORD}).status_code == 404
    wrong = client.post("/api/v1/users/login", json={"username": "alice", "password": "nope"})
    assert wrong.status_code == 401
    assert wrong.json()["message"] == "Invalid user credentials"


def test_refresh_token_rotates_and_rejects_reuse(client, make_user):
    make_user(username="alice")
    login = client.post("/api/v1/users/login", json={"username": "alice", "password": PASSWORD})
    old_refresh = login.json()["data"]["refreshToken"]
    client.cookies.clear()

    refreshed = client.post("/api/v1/users/refresh-token", json={"refreshToken": old_refresh})
    assert refreshed.status_code == 200
    assert refreshed.json()["data"]["refreshToken"] != old_refresh
    client.cookies.clear()

    reused = client.post("/api/v1/users/refresh-token", json={"refreshToken": old_refresh})
    assert reused.status_code == 401


def test_refresh_token_required(client):
    response = client.post("/api/v1/users/refresh-token")
    assert response.status_code == 401


def test_logout_clears_refresh_token(client, make_user):
    make_user(username="alice")
    login = client.post("/api/v1/users/login", json={"username": "alice", "password": PASSWORD})
    data = login.json()["data"]
    headers = {"Authorization": f"Bearer {data['accessToken']}"}

    assert client.post("/api/v1/users/logout", headers=headers).status_code == 200
    client.cookies.clear()
    response = client.post("/api/v1/users/refresh-token", json={"refreshToken": data["refreshToken"]})
    assert response.status_code == 401


def test_protected_routes_require_authentication(client):
    response = client.get("/api/v1/users/current-user")
    assert response.status_code == 401
    assert response.json() == {
        "statusCode": 401,
        "message": "Unauthorized request",
        "success": False,
        "errors": [],
    }

    bad_token = client.get("/api/v1/users/current-user", headers={"Authorization": "Bearer not-a-jwt"})
    assert bad_token.status_code == 401


def test_current_user(client, make_user):
    user = make_user(username="alice")
    response = client.get("/api/v1/users/current-user", headers=auth_headers(user.id))

    assert response.status_code == 200
    assert response.json()["data"]["id"] == user.id


def test_change_password(client, make_user):
    user = make_user(username="alice")
    headers = auth_headers(user.id)

    wrong = client.post(
        "/api/v1/users/change-password",
        json={"oldPassword": "nope", "newPassword": "brand-new"},
        headers=headers,
    )
    assert wrong.status_code == 400

    ok = client.post(
        "/api/v1/users/change-password",
        json={"oldPassword": PASSWORD, "newPassword": "brand-new"},
        headers=headers,
    )
    assert ok.status_code == 200
    login = client.post("/api/v1/users/login", json={"username": "alice", "password": "brand-new"})
    assert login.status_code == 200


def test_update_account(client, make_user):
    user = make_user(username="alice")
    make_user(username="bob")
    headers = auth_headers(user.id)

    assert client.patch("/api/v1/users/update-account", json={}, headers=headers).status_code == 400

    taken = client.patch("/api/v1/users/update-account", json={"email": "bob@example.com"}, headers=headers)
    assert taken.status_code == 409

    response = client.patch(
        "/api/v1/users/update-account",
        json={"fullName": "Alice Cooper", "email": "alice.cooper@example.com"},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["fullName"] == "Alice Cooper"
    assert response.json()["data"]["email"] == "alice.cooper@example.com"


def test_update_avatar_and_cover(client, make_user):
    user = make_user(username="alice")
    headers = auth_headers(user.id)

    avatar = client.patch("/api/v1/users/avatar", files={"avatar": PNG}, headers=headers)
    assert avatar.status_code == 200
    assert avatar.json()["data"]["avatar"].startswith("/media/avatars/")

    cover = client.patch("/api/v1/users/cover-image", files={"coverImage": PNG}, headers=headers)
    assert cover.status_code == 200
    assert cover.json()["data"]["coverImage"].startswith("/media/covers/")

    missing = client.patch("/api/v1/users/cover-image", headers=headers)
    assert missing.status_code == 400
    assert missing.json()["message"] == "Cover image is required"


def test_channel_profile(client, make_user, make_video, make_subscription):
    alice = make_user(username="alice")
    bob = make_user(username="bob")
    make_video(alice)
    make_video(alice, is_published=False)
    make_subscription(bob, alice)

    as_bob = client.get("/api/v1/users/c/Alice", headers=auth_headers(bob.id)).json()["data"]
    assert as_bob["username"] == "alice"
    assert as_bob["subscribersCount"] == 1
    assert as_bob["channelsSubscribedToCount"] == 0
    assert as_bob["isSubscribed"] is True
    assert as_bob["videosCount"] == 1

    as_alice = client.get("/api/v1/users/c/alice", headers=auth_headers(alice.id)).json()["data"]
    assert as_alice["isSubscribed"] is False
    assert as_alice["videosCount"] == 2

    anonymous = client.get("/api/v1/users/c/alice").json()["data"]
    assert anonymous["isSubscribed"] is False

    assert client.get("/api/v1/users/c/ghost").status_code == 404


def test_watch_history_records_each_view(client, make_user, make_video):
    owner = make_user()
    viewer = make_user()
    first = make_video(owner, title="first")
    second = make_video(owner, title="second")
    headers = auth_headers(viewer.id)

    for video in (first, second, first):
        assert client.get(f"/api/v1/videos/{video.id}", headers=headers).status_code == 200

    history = client.get("/api/v1/users/history", headers=headers).json()["data"]
    assert history["totalItems"] == 3
    assert [item["title"] for item in history["items"]] == ["first", "second", "first"]
    assert history["items"][0]["owner"]["id"] == owner.id


def test_email_is_unique_regardless_of_case(client):
    first = _register(client, username="bob", email="Bob@Example.com")
    assert first.status_code == 201
    assert first.json()["data"]["email"] == "bob@example.com"

    assert _register(client, username="bobby", email="bob@example.com").status_code == 409

    login = client.post("/api/v1/users/login", json={"email": "BOB@example.com", "password": PASSWORD})
    assert login.status_code == 200
    assert login.json()["data"]["user"]["username"] == "bob"


def test_refresh_token_in_body_wins_over_stale_cookie(client, make_user):
    make_user(username="alice")
    login = client.post("/api/v1/users/login", json={"username": "alice", "password": PASSWORD})
    stale = login.json()["data"]["refreshToken"]
    current = client.post("/api/v1/users/refresh-token").json()["data"]["refreshToken"]
    client.cookies.clear()
    client.cookies.set("refreshToken", stale)

    response = client.post("/api/v1/users/refresh-token", json={"refreshToken": current})
    assert response.status_code == 200
