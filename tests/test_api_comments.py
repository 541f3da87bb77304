from uuid import uuid4


def _comment(client, video_id, headers, text="Great clip"):
    return client.post(f"/api/comments/{video_id}", json={"text": text}, headers=headers)


def test_add_comment_uses_token_identity(client, register_user, create_video):
    alice = register_user("alice")
    bob = register_user("bob")
    video = create_video(alice["headers"])

    response = _comment(client, video["videoId"], bob["headers"])

    assert response.status_code == 201
    comment = response.json()
    assert comment["userId"] == bob["user"]["userId"]
    assert comment["username"] == "bob"
    assert comment["avatar"] == bob["user"]["avatar"]
    assert comment["text"] == "Great clip"

    stored = client.get(f"/api/videos/{video['videoId']}").json()["comments"]
    assert [entry["commentId"] for entry in stored] == [comment["commentId"]]


def test_add_comment_rejects_client_supplied_identity(client, register_user, create_video):
    alice = register_user("alice")
    video = create_video(alice["headers"])

    response = client.post(
        f"/api/comments/{video['videoId']}",
        json={"text": "hi", "userId": "someone-else"},
        headers=alice["headers"],
    )

    assert response.status_code == 400


def test_add_comment_validation(client, register_user, create_video):
    alice = register_user("alice")
    video = create_video(alice["headers"])

    assert _comment(client, video["videoId"], alice["headers"], text="   ").status_code == 400
    assert _comment(client, video["videoId"], {}).status_code == 401
    assert _comment(client, uuid4(), alice["headers"]).status_code == 404


def test_author_can_edit(client, register_user, create_video):
    alice = register_user("alice")
    video = create_video(alice["headers"])
    comment = _comment(client, video["videoId"], alice["headers"]).json()

    response = client.put(
        f"/api/comments/{video['videoId']}/comment/{comment['commentId']}",
        json={"text": "Edited"},
        headers=alice["headers"],
    )

    assert response.status_code == 200
    assert response.json()["text"] == "Edited"
    assert response.json()["editedAt"] is not None


def test_only_author_can_edit_or_delete(client, register_user, create_video):
    alice = register_user("alice")
    bob = register_user("bob")
    video = create_video(alice["headers"])
    comment = _comment(client, video["videoId"], alice["headers"]).json()
    path = f"/api/comments/{video['videoId']}/comment/{comment['commentId']}"

    assert client.put(path, json={"text": "Hacked"}, headers=bob["headers"]).status_code == 403
    assert client.delete(path, headers=bob["headers"]).status_code == 403


def test_delete_comment(client, register_user, create_video):
    alice = register_user("alice")
    video = create_video(alice["headers"])
    keep = _comment(client, video["videoId"], alice["headers"], text="keep").json()
    drop = _comment(client, video["videoId"], alice["headers"], text="drop").json()

    response = client.delete(
        f"/api/comments/{video['videoId']}/comment/{drop['commentId']}",
        headers=alice["headers"],
    )

    assert response.json() == {"message": "Comment deleted"}
    remaining = client.get(f"/api/videos/{video['videoId']}").json()["comments"]
    assert [entry["commentId"] for entry in remaining] == [keep["commentId"]]


def test_unknown_comment_is_not_found(client, register_user, create_video):
    alice = register_user("alice")
    video = create_video(alice["headers"])

    for comment_id in (uuid4(), "bogus"):
        response = client.put(
            f"/api/comments/{video['videoId']}/comment/{comment_id}",
            json={"text": "x"},
            headers=alice["headers"],
        )
        assert response.status_code == 404
        assert response.json() == {"message": "Comment not found"}
