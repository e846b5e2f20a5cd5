from tests.conftest import auth_headers


def test_create_and_list_tweets(client, make_user, make_tweet, make_like):
    author = make_user()
    fan = make_user()
    older = make_tweet(author, content="older")
    make_like(fan, tweet_id=older.id)

    created = client.post("/api/v1/tweets", json={"content": "newer"}, headers=auth_headers(author.id))
    assert created.status_code == 201
    assert created.json()["data"]["ownerId"] == author.id

    page = client.get(f"/api/v1/tweets/user/{author.id}", headers=auth_headers(fan.id)).json()["data"]
    assert [item["content"] for item in page["items"]] == ["newer", "older"]
    assert page["items"][1]["likesCount"] == 1
    assert page["items"][1]["isLiked"] is True
    assert page["items"][0]["owner"]["id"] == author.id


def test_tweet_validation(client, make_user):
    headers = auth_headers(make_user().id)
    assert client.post("/api/v1/tweets", json={"content": ""}, headers=headers).status_code == 400
    assert client.post("/api/v1/tweets", json={}, headers=headers).status_code == 400
    assert client.get(f"/api/v1/tweets/user/{'3' * 24}").status_code == 404


def test_update_and_delete_tweet(client, make_user, make_tweet):
    author = make_user()
    tweet = make_tweet(author)
    stranger = auth_headers(make_user().id)
    headers = auth_headers(author.id)

    assert client.patch(f"/api/v1/tweets/{tweet.id}", json={"content": "x"}, headers=stranger).status_code == 404
    updated = client.patch(f"/api/v1/tweets/{tweet.id}", json={"content": "edited"}, headers=headers)
    assert updated.json()["data"]["content"] == "edited"

    assert client.delete(f"/api/v1/tweets/{tweet.id}", headers=stranger).status_code == 404
    assert client.delete(f"/api/v1/tweets/{tweet.id}", headers=headers).status_code == 200
    assert client.get(f"/api/v1/tweets/user/{author.id}").json()["data"]["totalItems"] == 0
