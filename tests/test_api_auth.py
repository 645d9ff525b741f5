from foodorder.data.seed import seed_admin
from foodorder.services.notification_service import NotificationService


def test_register_login_me_logout(client, register_and_login):
    headers = register_and_login("jan")

    resp = client.get("/auth/me", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["username"] == "jan"
    assert resp.json()["roles"] == ["customer"]

    assert client.post("/auth/logout", headers=headers).status_code == 200
    assert client.get("/auth/me", headers=headers).status_code == 401


def test_session_token_lives_in_cache_with_ttl(client, cache, register_and_login):
    headers = register_and_login("jan")
    token = headers["Authorization"].split()[1]

    assert cache.get(f"session:{token}") is not None
    assert cache.ttl(f"session:{token}") > 0


def test_register_rejects_duplicates_and_admin(client, register_and_login):
    register_and_login("jan")

    resp = client.post(
        "/auth/register",
        json={"username": "jan", "email": "other@example.com", "password": "secret123"},
    )
    assert resp.status_code == 400

    resp = client.post(
        "/auth/register",
        json={"username": "boss", "email": "boss@example.com", "password": "secret123", "role": "admin"},
    )
    assert resp.status_code == 403


def test_login_with_wrong_password(client, register_and_login):
    register_and_login("jan")
    resp = client.post("/auth/login", json={"username": "jan", "password": "wrong-one"})
    assert resp.status_code == 403


def test_invalid_token(client):
    resp = client.get("/auth/me", headers={"Authorization": "Bearer nope"})
    assert resp.status_code == 401


def test_password_reset_with_otp(client, cache, register_and_login):
    register_and_login("jan", password="secret123")

    assert client.post("/auth/forgot-password", json={"email": "nobody@example.com"}).status_code == 404

    resp = client.post("/auth/forgot-password", json={"email": "jan@example.com"})
    assert resp.status_code == 200
    otp = cache.get("otp:jan@example.com")
    assert otp is not None and len(otp) == 6
    assert 0 < cache.ttl("otp:jan@example.com") <= 300

    wrong = "000000" if otp != "000000" else "111111"
    assert client.post("/auth/verify-otp", json={"email": "jan@example.com", "otp": wrong}).status_code == 400
    assert client.post("/auth/verify-otp", json={"email": "jan@example.com", "otp": otp}).status_code == 200

    payload = {"email": "jan@example.com", "otp": otp, "new_password": "brandnew1"}
    assert client.post("/auth/reset-password", json=payload).status_code == 200
    #kod jest jednorazowy
    assert client.post("/auth/reset-password", json=payload).status_code == 400

    assert client.post("/auth/login", json={"username": "jan", "password": "secret123"}).status_code == 403
    assert client.post("/auth/login", json={"username": "jan", "password": "brandnew1"}).status_code == 200


def test_seeded_admin_lists_users(client, db, register_and_login):
    register_and_login("jan")
    seed_admin(db, "root", "root@example.com", "rootpass1")

    resp = client.post("/auth/login", json={"username": "root", "password": "rootpass1"})
    headers = {"Authorization": f"Bearer {resp.json()['access_token']}"}

    resp = client.get("/users/admin/list", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["total"] == 1
    assert resp.json()["content"][0]["full_name"] == "jan"

    assert client.get("/orders", headers=headers).status_code == 200


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "database": "ok", "redis": "ok"}


def test_forgot_password_survives_mail_queue_failure(client, cache, register_and_login, monkeypatch):
    register_and_login("jan")

    def boom(email, otp, ttl_seconds):
        raise ConnectionError("broker down")

    monkeypatch.setattr(NotificationService, "send_otp", staticmethod(boom))

    resp = client.post("/auth/forgot-password", json={"email": "jan@example.com"})

    assert resp.status_code == 200
    assert cache.get("otp:jan@example.com") is not None
