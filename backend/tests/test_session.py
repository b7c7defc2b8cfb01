from datetime import timedelta

from fastapi.testclient import TestClient

from app.auth import create_access_token


def test_login_with_username(client: TestClient, existing_user):
    response = client.post("/api/session", json={"credential": "bobby", "password": "hunter22"})
    assert response.status_code == 200
    assert response.json()["user"]["email"] == "bob@mail.com"
    assert response.cookies.get("token")


def test_login_with_email_form_encoded(client: TestClient, existing_user):
    response = client.post("/api/session", data={"credential": "bob@mail.com", "password": "hunter22"})
    assert response.status_code == 200
    assert response.json()["user"]["username"] == "bobby"


def test_login_wrong_password(client: TestClient, existing_user):
    response = client.post("/api/session", json={"credential": "bobby", "password": "wrong-password"})
    assert response.status_code == 401
    data = response.json()
    assert data["message"] == "Login failed"
    assert data["errors"] == {"credential": "The provided credentials were invalid."}
    assert "token" not in response.cookies


def test_login_unknown_user(client: TestClient):
    response = client.post("/api/session", json={"credential": "nobody", "password": "whatever"})
    assert response.status_code == 401


def test_login_requires_fields(client: TestClient):
    response = client.post("/api/session", json={})
    assert response.status_code == 400
    assert response.json()["errors"] == {
        "credential": "Please provide a valid email or username.",
        "password": "Please provide a password.",
    }


def test_restore_session_without_cookie(client: TestClient):
    response = client.get("/api/session")
    assert response.status_code == 200
    assert response.json() == {"user": None}


def test_restore_session_after_signup(client: TestClient, signup_payload):
    created = client.post("/api/users", json=signup_payload).json()["user"]
    response = client.get("/api/session")
    assert response.json() == {"user": created}


def test_restore_session_with_expired_token(client: TestClient, existing_user):
    token = create_access_token({"sub": str(existing_user.id)}, expires_delta=timedelta(minutes=-1))
    client.cookies.set("token", token)
    response = client.get("/api/session")
    assert response.json() == {"user": None}
    assert "token=" in response.headers.get("set-cookie", "")


def test_restore_session_with_forged_token(client: TestClient, existing_user):
    client.cookies.set("token", "not.a.jwt")
    response = client.get("/api/session")
    assert response.json() == {"user": None}


def test_logout_clears_cookie(client: TestClient, signup_payload):
    client.post("/api/users", json=signup_payload)
    response = client.delete("/api/session")
    assert response.status_code == 200
    assert response.json() == {"message": "success"}
    assert client.get("/api/session").json() == {"user": None}


def test_login_with_null_byte_password_fails_cleanly(client: TestClient, existing_user):
    response = client.post("/api/session", json={"credential": "bobby", "password": "hunter\x0022"})
    assert response.status_code == 401
    assert response.json()["message"] == "Login failed"
