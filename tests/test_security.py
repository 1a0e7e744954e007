from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from juliaydavid.core.errors import AuthError, ConfigError, ExpiredToken, Forbidden, MalformedToken
from juliaydavid.security.hashing import PasswordHasher
from juliaydavid.security.jwt import Identity, TokenService
from juliaydavid.security.policy import AccessPolicy, Action


@pytest.fixture(scope="module")
def hasher():
    return PasswordHasher(rounds=4)


def test_hash_and_verify(hasher):
    hashed = hasher.hash("te quiero")
    assert hashed != "te quiero"
    assert hasher.verify("te quiero", hashed)
    assert not hasher.verify("te odio", hashed)


@pytest.mark.parametrize("stored", [None, "", "not-a-bcrypt-hash", 42])
def test_verify_fails_closed_on_bad_hash(hasher, stored):
    assert hasher.verify("anything", stored) is False


def test_verify_rejects_empty_password(hasher):
    assert hasher.verify("", hasher.hash("x")) is False
    assert hasher.verify(None, hasher.hash("x")) is False


def test_token_round_trip():
    tokens = TokenService("secret", expire_minutes=5)
    token = tokens.create_access_token(7, "Julia")
    assert tokens.verify(token) == Identity(user_id=7, username="Julia")

    claims = jwt.get_unverified_claims(token)
    assert claims["sub"] == "7"
    assert claims["exp"] - claims["iat"] == 300


def test_expired_token():
    tokens = TokenService("secret")
    issued = datetime.now(timezone.utc) - timedelta(seconds=2)
    token = tokens.create_access_token(1, "David", expires_delta=timedelta(seconds=1), issued_at=issued)
    with pytest.raises(ExpiredToken):
        tokens.verify(token)


def test_token_signed_with_other_key_is_malformed():
    token = TokenService("other").create_access_token(1, "Julia")
    with pytest.raises(MalformedToken):
        TokenService("secret").verify(token)


def test_garbage_token_is_malformed():
    with pytest.raises(MalformedToken):
        TokenService("secret").verify("abc.def.ghi")


def test_token_without_username_is_malformed():
    token = jwt.encode(
        {"sub": "1", "exp": datetime.now(timezone.utc) + timedelta(minutes=1)},
        "secret",
        algorithm="HS256",
    )
    with pytest.raises(MalformedToken):
        TokenService("secret").verify(token)


def test_missing_secret_is_config_error():
    tokens = TokenService(None)
    with pytest.raises(ConfigError):
        tokens.create_access_token(1, "Julia")
    with pytest.raises(ConfigError):
        tokens.verify("whatever")


def test_policy_reads_are_public():
    policy = AccessPolicy(["Julia", "David"])
    assert policy.authorize(None, Action.READ)
    assert policy.authorize(Identity(3, "Mallory"), Action.READ)


@pytest.mark.parametrize("action", [Action.CREATE, Action.UPDATE, Action.DELETE])
def test_policy_mutations(action):
    policy = AccessPolicy(["Julia", "David"])
    assert policy.authorize(Identity(1, "Julia"), action)
    assert policy.authorize(Identity(2, "David"), action)
    assert not policy.authorize(Identity(3, "Mallory"), action)
    assert not policy.authorize(None, action)


def test_policy_require_raises_401_then_403():
    policy = AccessPolicy(["Julia"])
    with pytest.raises(AuthError):
        policy.require(None, Action.DELETE)
    with pytest.raises(Forbidden):
        policy.require(Identity(3, "Mallory"), Action.DELETE, "nope")
    assert policy.require(Identity(1, "Julia"), Action.DELETE).username == "Julia"
