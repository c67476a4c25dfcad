from sqlmodel import select

from Auth.models import User
from Auth.security import verify_password

PASSWORD = "hunter22"  # same as conftest


def test_signup_then_login_issues_resolvable_token(client, signup, sessions):
    user = signup().json()["user"]

    res = client.post("/api/auth/login", json={"email": "kofi@police.gov.gh", "password": PASSWORD})

    assert res.status_code == 200
    body = res.json()
    assert sessions.resolve(body["sessionId"]) == user["id"]
    assert body["user"]["id"] == user["id"]


def test_responses_never_carry_the_password(client, signup):
    signup_body = signup().json()
    login_body = client.post(
        "/api/auth/login", json={"email": "kofi@police.gov.gh", "password": PASSWORD}
    ).json()

    assert "password" not in signup_body["user"]
    assert "password" not in login_body["user"]
    assert login_body["user"]["firstName"] == "Kofi"


def test_signup_defaults_to_personnel_and_hashes_password(client, db):
    res = client.post("/api/auth/signup", json={
        "firstName": "Ama", "lastName": "Owusu", "email": "ama@police.gov.gh", "password": PASSWORD,
    })

    assert res.status_code == 200
    assert res.json()["user"]["role"] == "personnel"
    stored = db.exec(select(User).where(User.email == "ama@police.gov.gh")).one()
    assert stored.password != PASSWORD
    assert verify_password(PASSWORD, stored.password)


def test_duplicate_signup_conflicts_and_keeps_one_row(signup, db):
    assert signup().status_code == 200
    second = signup()

    assert second.status_code == 409
    assert second.json()["detail"] == "User already exists"
    rows = db.exec(select(User).where(User.email == "kofi@police.gov.gh")).all()
    assert len(rows) == 1


def test_signup_validation_errors_are_400(signup):
    res = signup(role="chief")
    assert res.status_code == 400
    assert res.json()["detail"] == "Invalid data"
    assert any(e["loc"][-1] == "role" for e in res.json()["errors"])

    assert signup(email="not-an-email").status_code == 400
    assert signup(password="123").status_code == 400
    assert signup(firstName="K").status_code == 400


def test_login_rejects_wrong_password_and_unknown_email(client, signup):
    signup()
    wrong = client.post("/api/auth/login", json={"email": "kofi@police.gov.gh", "password": "wrong-pass"})
    unknown = client.post("/api/auth/login", json={"email": "nobody@police.gov.gh", "password": PASSWORD})

    assert wrong.status_code == 401
    assert unknown.status_code == 401
    assert wrong.json()["detail"] == "Invalid email or password"


def test_login_email_match_is_case_sensitive(client, signup):
    signup()
    res = client.post("/api/auth/login", json={"email": "KOFI@police.gov.gh", "password": PASSWORD})
    assert res.status_code == 401


def test_login_with_malformed_body_is_400(client):
    res = client.post("/api/auth/login", json={"email": "kofi"})
    assert res.status_code == 400


def test_current_user_requires_a_valid_token(client, auth_headers):
    ok = client.get("/api/auth/user", headers=auth_headers)
    assert ok.status_code == 200
    assert ok.json()["email"] == "kofi@police.gov.gh"

    assert client.get("/api/auth/user").status_code == 401
    assert client.get("/api/auth/user", headers={"Authorization": "Bearer bogus"}).status_code == 401
    assert client.get("/api/auth/user", headers={"Authorization": "Basic abc"}).status_code == 401


def test_expired_session_is_rejected(client, auth_headers, clock):
    clock.advance(days=8)
    res = client.get("/api/auth/user", headers=auth_headers)
    assert res.status_code == 401
    assert res.headers["www-authenticate"] == "Bearer"


def test_current_user_404_when_row_is_gone(client, auth_headers, db):
    db.delete(db.exec(select(User)).one())
    db.commit()

    res = client.get("/api/auth/user", headers=auth_headers)
    assert res.status_code == 404


def test_logout_revokes_session(client, auth_headers):
    res = client.post("/api/auth/logout", headers=auth_headers)
    assert res.status_code == 200
    assert res.json() == {"message": "Logged out successfully"}
    assert client.get("/api/auth/user", headers=auth_headers).status_code == 401

    # second logout and logout without a token still succeed
    assert client.post("/api/auth/logout", headers=auth_headers).status_code == 200
    assert client.post("/api/auth/logout").status_code == 200


def test_profile_update(client, auth_headers):
    res = client.put("/api/auth/profile", headers=auth_headers, json={
        "firstName": "Kwame", "profileImageUrl": "https://img.example/kwame.png",
    })

    assert res.status_code == 200
    body = res.json()
    assert body["firstName"] == "Kwame"
    assert body["lastName"] == "Mensah"
    assert body["profileImageUrl"] == "https://img.example/kwame.png"
    assert "password" not in body


def test_profile_update_rejects_taken_email(client, signup, auth_headers):
    signup(email="esi@police.gov.gh")
    res = client.put("/api/auth/profile", headers=auth_headers, json={"email": "esi@police.gov.gh"})
    assert res.status_code == 409


def test_profile_update_rejects_null_name(client, auth_headers):
    res = client.put("/api/auth/profile", headers=auth_headers, json={"firstName": None})
    assert res.status_code == 400


def test_profile_update_requires_token(client):
    assert client.put("/api/auth/profile", json={"firstName": "Kwame"}).status_code == 401
