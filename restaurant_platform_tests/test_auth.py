from datetime import timedelta

import jwt
import pytest

from restaurant_platform.restaurant_service.auth import AuthContext, bearer_token, get_token_verifier, jwt_parse
from restaurant_platform.restaurant_service.config import settings
from restaurant_platform.restaurant_service.errors import UnauthorizedError
from restaurant_platform.restaurant_service.main import app

from .helpers import OTHER_KEY, SIGNING_KEY, add_user, auth_header, make_token, static_verifier


# ============================================================================
# Protected route: full jwt_check -> jwt_parse chain
# ============================================================================

def test_my_user_with_valid_token(client, db):
    user = add_user(db, auth0_id="auth0|diner", email="diner@example.com", name="Dana", city="Madrid")

    response = client.get("/my/user", headers=auth_header(make_token(sub="auth0|diner")))
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == user.id
    assert body["auth0Id"] == "auth0|diner"
    assert body["email"] == "diner@example.com"
    assert body["city"] == "Madrid"


def test_missing_authorization_header(client):
    response = client.get("/my/user")
    assert response.status_code == 401
    assert response.content == b""


def test_header_without_bearer_prefix(client, db):
    add_user(db)
    token = make_token()

    for header in (token, f"Token {token}", f"bearer{token}"):
        response = client.get("/my/user", headers={"Authorization": header})
        assert response.status_code == 401
        assert response.content == b""


def test_structurally_invalid_token(client, db):
    add_user(db)

    response = client.get("/my/user", headers=auth_header("not.a.jwt"))
    assert response.status_code == 401
    assert response.content == b""


def test_unknown_subject(client, db):
    add_user(db, auth0_id="auth0|someone-else")

    response = client.get("/my/user", headers=auth_header(make_token(sub="auth0|stranger")))
    assert response.status_code == 401
    assert response.content == b""


def test_token_signed_by_another_key(client, db):
    add_user(db)

    response = client.get("/my/user", headers=auth_header(make_token(key=OTHER_KEY)))
    assert response.status_code == 401


@pytest.mark.parametrize("overrides", [
    {"audience": "https://some-other-api.test"},
    {"issuer": "https://evil.example/"},
    {"expires_in": timedelta(minutes=-5)},
])
def test_token_failing_claim_checks(client, db, overrides):
    add_user(db)

    response = client.get("/my/user", headers=auth_header(make_token(**overrides)))
    assert response.status_code == 401


# ============================================================================
# Stage-level behaviour
# ============================================================================

def test_verifier_accepts_valid_token():
    claims = static_verifier().verify(make_token(sub="auth0|abc"))
    assert claims["sub"] == "auth0|abc"


def test_verifier_rejects_hs256_token():
    token = jwt.encode({"sub": "auth0|abc"}, "shared-secret", algorithm="HS256")
    with pytest.raises(jwt.PyJWTError):
        static_verifier().verify(token)


@pytest.mark.parametrize("header", [None, "", "Bearer ", "Basic abc", "bearer abc"])
def test_bearer_token_rejects_malformed_headers(header):
    with pytest.raises(UnauthorizedError):
        bearer_token(header)


def test_bearer_token_extracts_token():
    assert bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"


def test_jwt_parse_resolves_context_without_signature_check(db):
    user = add_user(db, auth0_id="auth0|parse-only")
    # Decoding here is structural only; the signing key does not matter
    token = make_token(sub="auth0|parse-only", key=OTHER_KEY)

    context = jwt_parse(authorization=f"Bearer {token}", db=db)
    assert context == AuthContext(auth0_id="auth0|parse-only", user_id=user.id)


def test_jwt_parse_requires_subject(db):
    add_user(db)
    token = make_token(sub=None)

    with pytest.raises(UnauthorizedError):
        jwt_parse(authorization=f"Bearer {token}", db=db)


def test_jwt_parse_unknown_subject(db):
    with pytest.raises(UnauthorizedError):
        jwt_parse(authorization=f"Bearer {make_token(sub='auth0|nobody')}", db=db)


def test_verifier_only_accepts_rs256():
    token = jwt.encode(
        {"sub": "auth0|abc", "aud": settings.AUTH0_AUDIENCE, "iss": settings.auth0_issuer},
        SIGNING_KEY,
        algorithm="RS512",
    )
    with pytest.raises(jwt.InvalidAlgorithmError):
        static_verifier().verify(token)


def test_unconfigured_identity_provider_rejects_with_401(client, db, monkeypatch):
    add_user(db)
    monkeypatch.setattr(settings, "AUTH0_ISSUER_BASE_URL", "")
    override = app.dependency_overrides.pop(get_token_verifier)
    try:
        response = client.get("/my/user", headers=auth_header(make_token()))
    finally:
        app.dependency_overrides[get_token_verifier] = override

    assert response.status_code == 401
    assert response.content == b""


def test_get_token_verifier_requires_configuration(monkeypatch):
    monkeypatch.setattr(settings, "AUTH0_AUDIENCE", "")
    with pytest.raises(UnauthorizedError):
        get_token_verifier()
