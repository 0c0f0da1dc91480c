import re
import sqlite3
from unittest.mock import patch

import pytest

from streamBox.core.models import User
from streamBox.settings import REGISTERED_USERS_KEY, TOKEN_KEY, USER_KEY
from streamBox.storage import StorageError, auth_storage


def _user(**kw):
    base = dict(id=7, username="emilys", email="emily@x.com",
                first_name="Emily", last_name="Johnson", token="tok-123")
    base.update(kw)
    return User(**base)


class TestSession:
    """Saving, reading and clearing the signed-in session."""

    def test_save_and_get_user(self, raw_store):
        auth_storage.save_user(_user())

        assert auth_storage.get_user() == _user()
        assert auth_storage.get_token() == "tok-123"
        stored = raw_store.get(USER_KEY)
        assert stored["firstName"] == "Emily"
        assert stored["token"] == "tok-123"

    def test_save_user_requires_token(self):
        with pytest.raises(StorageError, match="user and token are required"):
            auth_storage.save_user(_user(token=""))
        with pytest.raises(StorageError):
            auth_storage.save_user(None)
        assert auth_storage.get_token() is None

    def test_save_user_store_failure(self):
        with patch("streamBox.storage.kv_db.set_item", side_effect=sqlite3.OperationalError("locked")):
            with pytest.raises(StorageError, match="Failed to save user data"):
                auth_storage.save_user(_user())

    def test_resave_overwrites(self):
        auth_storage.save_user(_user())
        auth_storage.save_user(_user(first_name="Em", token="tok-456"))
        assert auth_storage.get_user().first_name == "Em"
        assert auth_storage.get_token() == "tok-456"

    def test_get_user_absent(self):
        assert auth_storage.get_user() is None
        assert auth_storage.get_token() is None
        assert auth_storage.is_authenticated() is False

    def test_get_user_corrupt_json_returns_none(self, raw_store, log_text):
        raw_store.put(USER_KEY, "{not json")
        assert auth_storage.get_user() is None
        assert "Error getting user data" in log_text()

    def test_logout_removes_user_and_token(self, raw_store):
        auth_storage.save_user(_user())
        assert auth_storage.is_authenticated() is True

        auth_storage.logout_user()

        assert raw_store.get(USER_KEY) is None
        assert raw_store.get(TOKEN_KEY) is None
        assert auth_storage.is_authenticated() is False

    def test_logout_failure_raises(self):
        with patch("streamBox.storage.kv_db.multi_remove", side_effect=sqlite3.OperationalError("x")):
            with pytest.raises(StorageError, match="Failed to logout"):
                auth_storage.logout_user()

    def test_update_user_merges_fields(self):
        auth_storage.save_user(_user())
        updated = auth_storage.update_user(first_name="Em", email="em@y.org", username=None)

        assert updated.first_name == "Em"
        assert updated.email == "em@y.org"
        assert updated.username == "emilys"
        assert auth_storage.get_user() == updated

    def test_update_user_without_session(self):
        with pytest.raises(StorageError):
            auth_storage.update_user(first_name="x")

    def test_update_user_rejects_unknown_field(self):
        auth_storage.save_user(_user())
        with pytest.raises(ValueError):
            auth_storage.update_user(token="hijack")


class TestLocalAccounts:
    """Registry used for offline sign-up / sign-in."""

    def test_register_returns_session_user(self):
        user = auth_storage.register_user("newbie", "new@x.com", "Secret1")

        assert user.id == 1
        assert user.username == "newbie"
        assert user.first_name == "newbie"
        assert user.last_name == ""
        assert user.gender == "male"
        assert re.fullmatch(r"token_\d+_newbie", user.token)
        # registering does not sign in
        assert auth_storage.get_token() is None

    def test_register_ids_follow_registry_size(self):
        auth_storage.register_user("one", "one@x.com", "Secret1")
        second = auth_storage.register_user("two", "two@x.com", "Secret1")
        assert second.id == 2

    def test_password_is_not_stored_in_plaintext(self, raw_store):
        auth_storage.register_user("newbie", "new@x.com", "Secret1")
        account = raw_store.get(REGISTERED_USERS_KEY)[0]

        assert "password" not in account
        assert "Secret1" not in str(account)
        assert account["passwordHash"] and account["salt"]

    @pytest.mark.parametrize("username,email", [
        ("newbie", "other@x.com"),
        ("other", "new@x.com"),
    ])
    def test_duplicate_username_or_email(self, username, email):
        auth_storage.register_user("newbie", "new@x.com", "Secret1")
        with pytest.raises(StorageError, match="Username or email already exists"):
            auth_storage.register_user(username, email, "Secret1")

    def test_login_with_credentials(self):
        auth_storage.register_user("one", "one@x.com", "Secret1")
        auth_storage.register_user("two", "two@x.com", "Secret2")

        user = auth_storage.login_with_credentials("two", "Secret2")

        assert user is not None
        assert user.id == 2
        assert user.email == "two@x.com"
        assert user.token.startswith("token_")

    def test_login_wrong_password(self):
        auth_storage.register_user("one", "one@x.com", "Secret1")
        assert auth_storage.login_with_credentials("one", "wrong") is None
        assert auth_storage.login_with_credentials("nobody", "Secret1") is None

    def test_login_with_corrupt_registry(self, raw_store):
        raw_store.put(REGISTERED_USERS_KEY, "garbage")
        assert auth_storage.login_with_credentials("one", "Secret1") is None

    def test_login_with_non_record_accounts(self, raw_store, log_text):
        raw_store.put(REGISTERED_USERS_KEY, ["bob"])
        assert auth_storage.login_with_credentials("bob", "Secret1") is None
        assert "Error logging in" in log_text()

    def test_register_with_non_record_accounts(self, raw_store):
        raw_store.put(REGISTERED_USERS_KEY, ["bob"])
        with pytest.raises(StorageError, match="Failed to register user"):
            auth_storage.register_user("newbie", "new@x.com", "Secret1")
