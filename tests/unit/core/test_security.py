import uuid
import app.core.security as security
import time_machine
from jose import jwt
from datetime import datetime, timezone, timedelta


def test_hash_access_code_returns_non_plaintext():
    code = "sand-owner-2025"
    h = security.hash_access_code(code)
    assert isinstance(h, str)
    assert h != code
    assert h.startswith("$argon2")


def test_verify_access_code_true_for_correct():
    code = "sand-owner-2025"
    h = security.hash_access_code(code)
    assert security.verify_access_code(code, h) is True


def test_verify_access_code_false_for_incorrect():
    h = security.hash_access_code("sand-owner-2025")
    assert security.verify_access_code("sand-owner-2024", h) is False


def test_verify_access_code_false_for_malformed_hash():
    assert security.verify_access_code("anything", "not-an-argon2-hash") is False


@time_machine.travel("2025-01-01 12:00:00", tick=False)
def test_create_access_token_contains_expected_claims(monkeypatch):
    monkeypatch.setattr(security, "SECRET_KEY", "fake-key")
    owner_id = uuid.uuid4()

    token = security.create_access_token(str(owner_id))
    payload = jwt.decode(token, "fake-key", algorithms=[security.ALGORITHM], audience=security.JWT_AUDIENCE)

    now = datetime.now(timezone.utc)
    assert payload["iat"] == int(now.timestamp())
    assert payload["exp"] == int((now + timedelta(hours=12)).timestamp())
    assert payload["sub"] == str(owner_id)
    assert payload["typ"] == "access"
    assert payload["iss"] == "billing-api"
    assert payload["aud"] == "billing-web"


def test_create_access_token_uses_given_now(monkeypatch):
    monkeypatch.setattr(security, "SECRET_KEY", "fake-key")
    issued = datetime(2025, 3, 1, 8, 0, tzinfo=timezone.utc)

    token = security.create_access_token("owner", now=issued)
    claims = jwt.get_unverified_claims(token)

    assert claims["iat"] == int(issued.timestamp())
    assert claims["exp"] - claims["iat"] == security.ACCESS_TOKEN_EXPIRE_MINUTES * 60
