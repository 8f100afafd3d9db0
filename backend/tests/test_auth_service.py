"""Tests for registration, login and session-backed identity."""

import pytest

from app.errors import InvalidCredentials, Unauthenticated, UsernameTaken
from app.services.auth_service import AuthService
from app.services.session_manager import SessionManager
from app.services.storage import SessionStore, UserStore


@pytest.fixture
def auth(db):
    return AuthService(UserStore(db), SessionManager(SessionStore(db)))


async def test_register_creates_user_and_session(auth):
    result = await auth.register("alice", "secret1")

    assert result.user.username == "alice"
    assert result.user.display_name is None
    assert result.user.hashed_password != "secret1"
    assert (await auth.current_user(result.session_id)).id == result.user.id


async def test_register_same_username_twice_fails(auth):
    await auth.register("alice", "secret1")

    with pytest.raises(UsernameTaken):
        await auth.register("alice", "another1")


async def test_username_match_is_case_sensitive(auth):
    await auth.register("alice", "secret1")

    result = await auth.register("Alice", "secret1")

    assert result.user.username == "Alice"


async def test_login_success_issues_new_session(auth):
    registered = await auth.register("alice", "secret1")

    result = await auth.login("alice", "secret1")

    assert result.user.id == registered.user.id
    assert result.session_id != registered.session_id


async def test_unknown_user_and_wrong_password_fail_identically(auth):
    await auth.register("alice", "secret1")

    with pytest.raises(InvalidCredentials) as unknown:
        await auth.login("nobody", "secret1")
    with pytest.raises(InvalidCredentials) as wrong:
        await auth.login("alice", "wrong-password")

    assert unknown.value.detail == wrong.value.detail
    assert unknown.value.status_code == wrong.value.status_code


async def test_corrupt_stored_hash_reads_as_failed_login(auth, db):
    await UserStore(db).insert("broken", "not-a-valid-hash")

    with pytest.raises(InvalidCredentials):
        await auth.login("broken", "whatever")


async def test_logout_ends_session(auth):
    result = await auth.register("alice", "secret1")

    await auth.logout(result.session_id)

    with pytest.raises(Unauthenticated):
        await auth.current_user(result.session_id)


async def test_current_user_without_session(auth):
    with pytest.raises(Unauthenticated):
        await auth.current_user(None)
