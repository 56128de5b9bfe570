from app.models.admin_user import AdminSession


def test_login_sets_cookie_and_me_works(client, make_admin, admin_password):
    admin = make_admin()

    r = client.post("/api/auth/admin-login", json={"email": admin.email, "password": admin_password})
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["user"]["role"] == "section_admin"
    assert body["user"]["department"] == "63_A"
    assert "admin_token" in r.cookies
    assert "httponly" in r.headers["set-cookie"].lower()

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["email"] == admin.email


def test_login_records_session(client, db, make_admin, login):
    admin = make_admin()
    login(admin)

    db.expire_all()
    assert db.query(AdminSession).filter_by(user_id=admin.id).count() == 1
    db.refresh(admin)
    assert admin.login_count == 1


def test_login_wrong_password(client, make_admin):
    admin = make_admin()
    r = client.post("/api/auth/admin-login", json={"email": admin.email, "password": "nope"})
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid credentials"}


def test_login_missing_fields(client):
    r = client.post("/api/auth/admin-login", json={"email": "a@b.co"})
    assert r.status_code == 400
    assert r.json()["error"] == "Email and password are required"


def test_me_without_cookie(client):
    r = client.get("/api/auth/me")
    assert r.status_code == 401
    assert r.json() == {"error": "No token provided"}


def test_me_with_bad_token(client):
    client.cookies.set("admin_token", "not-a-jwt")
    r = client.get("/api/auth/me")
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid token"}


def test_logout_clears_cookie(client, db, make_admin, login):
    admin = make_admin()
    login(admin)

    r = client.post("/api/auth/logout")
    assert r.status_code == 200
    assert r.json()["success"] is True

    db.expire_all()
    session = db.query(AdminSession).filter_by(user_id=admin.id).one()
    assert session.is_active is False

    assert client.get("/api/auth/me").status_code == 401


def test_signup_creates_section_admin(client):
    r = client.post("/api/auth/section-admin-signup", json={
        "name": "Rafi Ahmed",
        "email": "Rafi@Example.com",
        "section": "63_G",
        "password": "hunter22",
    })
    assert r.status_code == 200
    user = r.json()["user"]
    assert user["email"] == "rafi@example.com"
    assert user["role"] == "section_admin"
    assert user["department"] == "63_G"
    assert client.get("/api/auth/me").status_code == 200


def test_signup_validation(client, make_admin):
    make_admin(email="taken@example.com")
    base = {"name": "Rafi", "email": "new@example.com", "section": "63_G", "password": "hunter22"}

    cases = [
        ({"email": None}, "All fields are required: name, email, section, and password"),
        ({"email": "not-an-email"}, "Please enter a valid email address"),
        ({"section": "63g"}, "Section must be in format '{batch}_{section_letter}' (e.g., '63_G')"),
        ({"password": "abc"}, "Password must be at least 6 characters long"),
        ({"name": "R"}, "Name must be at least 2 characters long"),
        ({"email": "taken@example.com"}, "An account with this email already exists"),
    ]
    for change, message in cases:
        r = client.post("/api/auth/section-admin-signup", json={**base, **change})
        assert r.status_code == 400, change
        assert r.json() == {"error": message}
