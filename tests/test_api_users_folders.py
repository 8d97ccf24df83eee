def test_user_lifecycle(client):
    created = client.post("/api/users", json={"username": "  佐藤花子 "})
    assert created.status_code == 201
    user = created.json()
    assert user["username"] == "佐藤花子"

    assert client.post("/api/users", json={"username": "佐藤花子"}).status_code == 409
    assert client.post("/api/users", json={"username": "   "}).status_code == 400
    assert client.post("/api/users", json={}).status_code == 400

    renamed = client.put(f"/api/users/{user['id']}", json={"username": "鈴木一郎"})
    assert renamed.status_code == 200
    assert renamed.json()["username"] == "鈴木一郎"

    # Keeping one's own name is not a conflict
    assert client.put(f"/api/users/{user['id']}", json={"username": "鈴木一郎"}).status_code == 200

    assert client.get(f"/api/users/{user['id']}").json()["username"] == "鈴木一郎"
    assert client.delete(f"/api/users/{user['id']}").status_code == 200
    assert client.get(f"/api/users/{user['id']}").status_code == 404


def test_user_list_and_bulk_delete(client):
    ids = [client.post("/api/users", json={"username": name}).json()["id"] for name in ("a", "b", "c")]

    listed = client.get("/api/users").json()
    assert [u["id"] for u in listed] == list(reversed(ids))

    result = client.post("/api/users/bulk-delete", json={"ids": [ids[0], 999, ids[2]]}).json()
    assert result == {"deleted": [ids[0], ids[2]], "failed": [999]}
    assert [u["username"] for u in client.get("/api/users").json()] == ["b"]


def test_rename_to_taken_name_is_conflict(client):
    first = client.post("/api/users", json={"username": "one"}).json()
    client.post("/api/users", json={"username": "two"})

    response = client.put(f"/api/users/{first['id']}", json={"username": "two"})

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "ConflictException"


def _upload(client, user_id, folder_name, names):
    return client.post(
        "/api/batch/upload-directory",
        files=[("images", (name, b"x", "image/jpeg")) for name in names],
        data={"userId": str(user_id), "folderName": folder_name},
    ).json()


def test_folder_is_reused_and_counts_accumulate(client, user):
    first = _upload(client, user.id, "box-1", ["F1_a.jpg", "F2_a.jpg"])
    second = _upload(client, user.id, "box-1", ["F3_a.jpg"])

    assert first["folderId"] == second["folderId"]

    folders = client.get("/api/folders").json()
    assert len(folders) == 1
    assert folders[0]["numberOfUploadedProducts"] == 3
    assert folders[0]["productCount"] == 3

    detail = client.get(f"/api/folders/{first['folderId']}").json()
    assert sorted(p["managementNumber"] for p in detail["products"]) == ["F1", "F2", "F3"]


def test_folder_delete_cascades_products_and_images(client, user, image_storage):
    upload = _upload(client, user.id, "box-2", ["G1_a.jpg", "G1_b.jpg", "G2_a.jpg"])
    folder_id = upload["folderId"]
    assert image_storage.exists("G1_a.jpg")

    response = client.delete(f"/api/folders/{folder_id}")

    assert response.status_code == 200
    assert response.json() == {
        "id": folder_id,
        "deletedProducts": 2,
        "removedImages": 3,
        "failedImages": [],
    }
    assert client.get(f"/api/folders/{folder_id}").status_code == 404
    assert client.get("/api/products/G1").status_code == 404
    assert not image_storage.exists("G2_a.jpg")
    assert client.get(f"/api/folders/user/{user.id}").json() == []


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"

    deep = client.get("/health", params={"deep": "true"}).json()
    assert deep["vision"] == "connected"


def test_uploaded_images_are_served(client, user):
    _upload(client, user.id, "served", ["S1_a.jpg"])

    response = client.get("/images/S1_a.jpg")

    assert response.status_code == 200
    assert response.content == b"x"
