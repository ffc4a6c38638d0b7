"""Tests for credential hashing, users and the session store."""

from datetime import datetime, timedelta

import pytest

from src.models.session import AuthSession
from src.services.auth import (
    authenticate_user,
    bootstrap_admin,
    count_users,
    create_user,
    generate_session_token,
    get_password_hash,
    get_user_by_id,
    get_user_by_username,
    verify_password,
)
from src.services.errors import ConflictError, NotFoundError
from src.services.sessions import SessionStore, should_renew, utcnow

SESSION_DURATION = timedelta(days=30)


@pytest.fixture
def store(db, clock):
    return SessionStore(db, clock=clock)


def test_password_hash_roundtrip():
    """Test hashing and verifying a password."""
    hashed = get_password_hash("s3cret-pass")
    assert hashed != "s3cret-pass"
    assert verify_password("s3cret-pass", hashed)
    assert not verify_password("wrong-pass", hashed)


def test_password_hash_is_salted():
    """Test that hashing the same password twice gives different hashes."""
    assert get_password_hash("same") != get_password_hash("same")


def test_verify_malformed_hash_returns_false():
    """Test that malformed hashes are a mismatch rather than an error."""
    assert verify_password("anything", "not-a-real-hash") is False
    assert verify_password("anything", "") is False


def test_generate_session_token_is_random():
    """Test session tokens are long and unique."""
    tokens = {generate_session_token() for _ in range(50)}
    assert len(tokens) == 50
    assert all(len(token) >= 40 for token in tokens)


def test_user_lookup(db, user):
    """Test user lookups by username and id."""
    assert get_user_by_username(db, "testuser").id == user.id
    assert get_user_by_username(db, "TestUser") is None  # case-sensitive
    assert get_user_by_id(db, user.id).username == "testuser"
    assert get_user_by_id(db, user.id + 100) is None
    assert count_users(db) == 1


def test_authenticate_user(db, user):
    """Test authentication by username and password."""
    assert authenticate_user(db, "testuser", "testpass123").id == user.id
    assert authenticate_user(db, "testuser", "wrongpass") is None
    assert authenticate_user(db, "nobody", "testpass123") is None


def test_create_duplicate_user(db, user):
    """Test that duplicate usernames are rejected."""
    with pytest.raises(ConflictError):
        create_user(db, "testuser", get_password_hash("whatever"))


def test_bootstrap_admin_only_when_empty(db):
    """Test the first-run admin is created once, and only without other users."""
    admin = bootstrap_admin(db, "admin", "adminpass")
    assert admin is not None
    assert verify_password("adminpass", admin.password_hash)

    assert bootstrap_admin(db, "second", "secondpass") is None
    assert count_users(db) == 1


def test_bootstrap_admin_requires_credentials(db):
    """Test nothing happens when the admin account is not configured."""
    assert bootstrap_admin(db, None, None) is None
    assert bootstrap_admin(db, "admin", "") is None
    assert count_users(db) == 0


def test_create_and_validate_session(store, user, clock):
    """Test a fresh session validates to its owner."""
    token = generate_session_token()
    store.create_session(token, user.id, clock() + SESSION_DURATION)

    session_user = store.validate_session(token)
    assert session_user.username == "testuser"


def test_validate_session_with_info(store, user, clock):
    """Test timestamps are surfaced right after login."""
    token = generate_session_token()
    expires_at = clock() + SESSION_DURATION
    store.create_session(token, user.id, expires_at)

    info = store.validate_session_with_info(token)
    assert info.user.id == user.id
    assert info.last_activity == clock()
    assert info.expires_at == expires_at


def test_validate_session_with_info_real_clock(db, user):
    """Test last_activity is recent when using the wall clock."""
    store = SessionStore(db)
    token = generate_session_token()
    now = utcnow()
    store.create_session(token, user.id, now + SESSION_DURATION)

    info = store.validate_session_with_info(token)
    assert abs(info.last_activity - now) < timedelta(seconds=5)
    assert info.expires_at == now + SESSION_DURATION


def test_unknown_token_is_not_found(store):
    """Test validation of a token that never existed."""
    with pytest.raises(NotFoundError):
        store.validate_session("missing-token")


def test_session_expiring_now_is_invalid(store, user, clock):
    """Test the expiry boundary is exclusive."""
    token = generate_session_token()
    store.create_session(token, user.id, clock() + timedelta(hours=1))

    clock.advance(timedelta(hours=1) - timedelta(microseconds=1))
    assert store.validate_session(token).id == user.id

    clock.advance(timedelta(microseconds=1))
    with pytest.raises(NotFoundError):
        store.validate_session(token)


def test_expired_session_row_still_present_is_invalid(store, user, clock, db):
    """Test an expired but not yet swept session is treated as absent."""
    token = generate_session_token()
    store.create_session(token, user.id, clock() - timedelta(minutes=1))

    assert db.query(AuthSession).filter(AuthSession.token == token).count() == 1
    with pytest.raises(NotFoundError):
        store.validate_session_with_info(token)


def test_renew_session(store, user, clock):
    """Test renewal moves expiry forward and touches last_activity."""
    token = generate_session_token()
    store.create_session(token, user.id, clock() + SESSION_DURATION)
    original = store.validate_session_with_info(token)

    clock.advance(timedelta(days=20))
    store.renew_session(token, clock() + SESSION_DURATION)

    updated = store.validate_session_with_info(token)
    assert updated.last_activity > original.last_activity
    assert updated.expires_at > original.expires_at
    assert updated.expires_at == clock() + SESSION_DURATION


def test_delete_session(store, user, clock):
    """Test a deleted session no longer validates."""
    token = generate_session_token()
    store.create_session(token, user.id, clock() + SESSION_DURATION)
    store.validate_session(token)

    store.delete_session(token)

    with pytest.raises(NotFoundError):
        store.validate_session(token)


def test_delete_nonexistent_session(store):
    """Test deleting an unknown token is not an error."""
    store.delete_session("does-not-exist")
    store.delete_session("does-not-exist")


def test_clean_expired_sessions(store, user, clock, db):
    """Test the sweep removes expired sessions only."""
    store.create_session("expired-1", user.id, clock() - timedelta(days=1))
    store.create_session("expired-2", user.id, clock())
    store.create_session("live", user.id, clock() + timedelta(days=1))

    assert store.clean_expired_sessions() == 2
    assert store.clean_expired_sessions() == 0

    remaining = [s.token for s in db.query(AuthSession).all()]
    assert remaining == ["live"]


def test_clean_expired_sessions_task(db, user):
    """Test the periodic sweep task."""
    from src.tasks.sessions import clean_expired_sessions

    store = SessionStore(db)
    store.create_session("old", user.id, utcnow() - timedelta(hours=1))
    store.create_session("fresh", user.id, utcnow() + timedelta(hours=1))

    result = clean_expired_sessions()

    assert result == {"removed": 1}
    db.expire_all()
    assert [s.token for s in db.query(AuthSession).all()] == ["fresh"]


@pytest.mark.parametrize(
    ("elapsed_days", "expected"),
    [(0, False), (14, False), (15, False), (16, True), (29, True)],
)
def test_should_renew_after_half_lifetime(elapsed_days, expected):
    """Test renewal fires only once less than half the lifetime remains."""
    created = datetime(2024, 1, 1)
    expires_at = created + SESSION_DURATION
    now = created + timedelta(days=elapsed_days)

    assert should_renew(expires_at, now, SESSION_DURATION) is expected


def test_renewal_never_shortens_expiry():
    """Test any renewal the policy allows extends the deadline."""
    created = datetime(2024, 1, 1)
    expires_at = created + SESSION_DURATION
    for hours in range(0, 30 * 24, 7):
        now = created + timedelta(hours=hours)
        if should_renew(expires_at, now, SESSION_DURATION):
            assert now + SESSION_DURATION > expires_at
