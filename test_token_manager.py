import time

import pytest
from jose import jwt

from auth import CredentialVerifier, SessionGuard
from core.exceptions import ConfigurationError, InvalidCredentials
from core.settings import Settings
from main import create_app

PASSWORD = "kahve-ve-cay"
SECRET = "another-test-secret"
HOUR = 60 * 60


def make_verifier(offset: float = 0.0) -> CredentialVerifier:
    return CredentialVerifier(PASSWORD, SECRET, clock=lambda: time.time() + offset)


def test_issue_and_verify():
    token = make_verifier().issue(PASSWORD)

    verdict = SessionGuard(SECRET).verify(token)

    assert verdict.valid
    assert verdict.claims["role"] == "admin"
    assert verdict.claims["exp"] - verdict.claims["iat"] == 8 * HOUR


def test_token_valid_within_eight_hours():
    token = make_verifier(offset=-7 * HOUR).issue(PASSWORD)
    assert SessionGuard(SECRET).verify(token).valid


def test_token_expires_after_eight_hours():
    token = make_verifier(offset=-(8 * HOUR + 60)).issue(PASSWORD)
    assert not SessionGuard(SECRET).verify(token).valid


@pytest.mark.parametrize("password", ["", "wrong", PASSWORD.upper(), PASSWORD + " ", None])
def test_invalid_password_rejected(password):
    with pytest.raises(InvalidCredentials):
        make_verifier().issue(password)


@pytest.mark.parametrize(
    "token",
    [None, "", "garbage", "a.b.c", "eyJhbGciOiJIUzI1NiJ9..", "\x00\xff"],
)
def test_malformed_tokens_are_invalid(token):
    verdict = SessionGuard(SECRET).verify(token)
    assert not verdict.valid
    assert verdict.claims == {}


def test_token_signed_with_other_key_is_invalid():
    token = CredentialVerifier(PASSWORD, "some-other-key").issue(PASSWORD)
    assert not SessionGuard(SECRET).verify(token).valid


def test_token_without_admin_role_is_invalid():
    now = int(time.time())
    token = jwt.encode({"role": "guest", "iat": now, "exp": now + HOUR}, SECRET, algorithm="HS256")
    assert not SessionGuard(SECRET).verify(token).valid


def test_token_without_expiry_is_invalid():
    token = jwt.encode({"role": "admin", "iat": int(time.time())}, SECRET, algorithm="HS256")
    assert not SessionGuard(SECRET).verify(token).valid


@pytest.mark.parametrize("password, secret", [("", SECRET), (PASSWORD, ""), ("", "")])
def test_missing_configuration_is_fatal(password, secret):
    with pytest.raises(ConfigurationError):
        CredentialVerifier(password, secret)


def test_guard_requires_secret():
    with pytest.raises(ConfigurationError):
        SessionGuard("")


def test_app_refuses_to_start_without_secrets(tmp_path):
    settings = Settings(_env_file=None, jwt_secret="", admin_password="", data_dir=str(tmp_path))
    with pytest.raises(ConfigurationError):
        create_app(settings)
