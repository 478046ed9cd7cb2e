"""Unit tests for AuthService."""

from __future__ import annotations

from datetime import timedelta

import jwt
import pytest

from fintrack.core.config import Settings
from fintrack.core.exceptions import AuthError, InvalidTokenError, ValidationError
from fintrack.core.utils import utc_now
from fintrack.services.auth_service import AuthService, hash_password, verify_password


class TestPasswordHashing:
    """Tests for password hashing helpers."""

    def test_hash_is_not_plaintext(self):
        hashed = hash_password("pw123")
        assert hashed != "pw123"
        assert hashed.startswith("$2")

    def test_verify_matches(self):
        hashed = hash_password("pw123")
        assert verify_password("pw123", hashed)
        assert not verify_password("pw124", hashed)

    def test_verify_malformed_hash_is_false(self):
        assert not verify_password("pw123", "not-a-bcrypt-hash")


class TestRegister:
    """Tests for user registration."""

    def test_register_stores_hash_only(self, auth_service, repo):
        user = auth_service.register("alice", "alice@x.com", "pw123")

        assert user.id
        stored = repo.get_user(user.id)
        assert stored is not None
        assert stored.username == "alice"
        assert stored.email == "alice@x.com"
        assert stored.password_hash != "pw123"
        assert verify_password("pw123", stored.password_hash)

    def test_register_plaintext_never_written(self, auth_service, repo):
        user = auth_service.register("alice", "alice@x.com", "secret-pw-123")
        raw = (repo.user_dir / f"{user.id}.json").read_text(encoding="utf-8")
        assert "secret-pw-123" not in raw

    def test_email_is_lowercased(self, auth_service):
        user = auth_service.register("alice", "Alice@X.com", "pw123")
        assert user.email == "alice@x.com"

    def test_duplicate_username_rejected(self, auth_service):
        auth_service.register("alice", "alice@x.com", "pw123")
        with pytest.raises(ValidationError, match="Username already registered"):
            auth_service.register("alice", "other@x.com", "pw123")

    def test_duplicate_email_rejected(self, auth_service):
        auth_service.register("alice", "alice@x.com", "pw123")
        with pytest.raises(ValidationError, match="Email already registered"):
            auth_service.register("alicia", "ALICE@x.com", "pw123")

    def test_username_shaped_like_email_rejected(self, auth_service, repo):
        auth_service.register("carol", "carol@x.com", "pwB")

        with pytest.raises(ValidationError) as exc_info:
            auth_service.register("carol@x.com", "other@x.com", "pwA")

        assert exc_info.value.message.startswith("username:")
        assert "@" in exc_info.value.message
        assert len(list(repo.user_dir.glob("*.json"))) == 1
        assert auth_service.login("carol@x.com", "pwB")

    @pytest.mark.parametrize(
        "username,email,password,field",
        [
            ("", "alice@x.com", "pw123", "username"),
            ("alice", "not-an-email", "pw123", "email"),
            ("alice", "alice@x.com", "", "password"),
            ("alice", "alice@x.com", "x" * 73, "password"),
        ],
    )
    def test_malformed_fields_rejected(self, auth_service, repo, username, email, password, field):
        with pytest.raises(ValidationError) as exc_info:
            auth_service.register(username, email, password)
        assert exc_info.value.message.startswith(field)
        assert list(repo.user_dir.glob("*.json")) == []


class TestLogin:
    """Tests for credential checks and token issuance."""

    def test_login_with_username(self, auth_service):
        user = auth_service.register("alice", "alice@x.com", "pw123")
        issued = auth_service.login("alice", "pw123")

        identity = auth_service.verify_token(issued.token)
        assert identity.user_id == user.id
        assert identity.username == "alice"
        assert issued.expires_in == 30 * 60

    def test_login_with_email(self, auth_service):
        user = auth_service.register("alice", "alice@x.com", "pw123")
        issued = auth_service.login("ALICE@x.com", "pw123")
        assert auth_service.verify_token(issued.token).user_id == user.id

    def test_email_identifier_never_matches_a_username(self, auth_service, repo):
        # a record written before usernames were barred from containing '@'
        repo.create_user("carol@x.com", "a@x.com", hash_password("pwA"))
        carol = auth_service.register("carol", "carol@x.com", "pwB")

        issued = auth_service.login("carol@x.com", "pwB")

        assert auth_service.verify_token(issued.token).user_id == carol.id

    def test_wrong_password(self, auth_service):
        auth_service.register("alice", "alice@x.com", "pw123")
        with pytest.raises(AuthError, match="Invalid credentials"):
            auth_service.login("alice", "wrong")

    def test_unknown_identifier(self, auth_service):
        with pytest.raises(AuthError, match="Invalid credentials"):
            auth_service.login("nobody", "pw123")

    def test_token_claims(self, auth_service, settings):
        user = auth_service.register("alice", "alice@x.com", "pw123")
        issued = auth_service.login("alice", "pw123")

        claims = jwt.decode(issued.token, settings.jwt_secret, algorithms=["HS256"])
        assert claims["sub"] == user.id
        assert claims["exp"] > claims["iat"]
        assert "password" not in claims


class TestVerifyToken:
    """Tests for token verification failures."""

    def test_bad_signature(self, auth_service, repo, settings):
        user = auth_service.register("alice", "alice@x.com", "pw123")
        other = AuthService(repo, Settings(jwt_secret="another-secret", data_dir=settings.data_dir))
        token = other.issue_token(user).token

        with pytest.raises(InvalidTokenError):
            auth_service.verify_token(token)

    def test_expired(self, auth_service, settings):
        now = utc_now()
        token = jwt.encode(
            {"sub": "abc", "iat": now - timedelta(hours=2), "exp": now - timedelta(hours=1)},
            settings.jwt_secret,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError) as exc_info:
            auth_service.verify_token(token)
        assert exc_info.value.details["reason"] == "expired"

    def test_malformed(self, auth_service):
        with pytest.raises(InvalidTokenError):
            auth_service.verify_token("not.a.token")

    def test_missing_subject(self, auth_service, settings):
        token = jwt.encode(
            {"exp": utc_now() + timedelta(minutes=5)},
            settings.jwt_secret,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            auth_service.verify_token(token)
