import io


def test_get_and_update_profile(client, make_admin, login):
    login(make_admin())

    r = client.get("/api/profile")
    assert r.status_code == 200
    assert r.json()["profile"]["login_count"] == 1

    r = client.put("/api/profile", json={"full_name": "Updated Name", "bio": "Teaches OS"})
    assert r.status_code == 200
    profile = r.json()["profile"]
    assert profile["full_name"] == "Updated Name"
    assert profile["bio"] == "Teaches OS"


def test_photo_upload(client, make_admin, login):
    login(make_admin())

    r = client.post("/api/profile/photo", files={"file": ("me.png", io.BytesIO(b"\x89PNG fake"), "image/png")})
    assert r.status_code == 200
    url = r.json()["profile"]["profile_photo_url"]
    assert url.startswith("/static/avatars/") and url.endswith(".png")

    served = client.get(url)
    assert served.status_code == 200
    assert served.content == b"\x89PNG fake"


def test_photo_rejects_other_types(client, make_admin, login):
    login(make_admin())

    r = client.post("/api/profile/photo", files={"file": ("me.txt", io.BytesIO(b"hi"), "text/plain")})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid file type. Only JPEG, PNG, WebP, and GIF are allowed."}


def test_profile_requires_login(client):
    assert client.get("/api/profile").status_code == 401
