"""storage.auth_storage
Local session (user profile + access token) and the on-device account
registry used for offline sign-up / sign-in.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import secrets
import sqlite3
import time
from typing import Any, Dict, Optional

from streamBox.core.models import User
from streamBox.settings import REGISTERED_USERS_KEY, TOKEN_KEY, USER_KEY
from streamBox.storage import kv_db
from streamBox.storage.errors import StorageError
from streamBox.storage.records import load_list, save_list
from streamBox.utils import log_debug

_PBKDF2_ROUNDS = 120_000
_ALLOWED_PROFILE_FIELDS = {"first_name", "last_name", "email", "username", "image", "gender"}


def _hash_password(password: str, salt: str) -> str:
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), bytes.fromhex(salt), _PBKDF2_ROUNDS)
    return digest.hex()


def _issue_token(username: str) -> str:
    return f"token_{int(time.time() * 1000)}_{username}"


class AuthStorage:
    """Session persistence. Readers never raise; writers raise `StorageError`."""

    # ───────────────────────────── session ──────────────────────────
    @staticmethod
    def save_user(user: Optional[User]) -> None:
        """Persist *user* and its token (last write wins)."""
        if not user or not user.token:
            raise StorageError("Invalid user data: user and token are required")
        try:
            kv_db.set_item(USER_KEY, json.dumps(user.to_record()))
            kv_db.set_item(TOKEN_KEY, user.token)
        except sqlite3.Error as exc:
            log_debug(f"Error saving user data: {exc}")
            raise StorageError("Failed to save user data") from exc

    @staticmethod
    def get_user() -> Optional[User]:
        """Return the stored session user or **None**."""
        try:
            raw = kv_db.get_item(USER_KEY)
            return User.from_record(json.loads(raw)) if raw else None
        except (sqlite3.Error, ValueError, TypeError, AttributeError) as exc:
            log_debug(f"Error getting user data: {exc}")
            return None

    @staticmethod
    def get_token() -> Optional[str]:
        try:
            return kv_db.get_item(TOKEN_KEY)
        except sqlite3.Error as exc:
            log_debug(f"Error getting token: {exc}")
            return None

    @staticmethod
    def logout_user() -> None:
        """Remove user data and token together."""
        try:
            kv_db.multi_remove([USER_KEY, TOKEN_KEY])
        except sqlite3.Error as exc:
            log_debug(f"Error during logout: {exc}")
            raise StorageError("Failed to logout") from exc

    @staticmethod
    def is_authenticated() -> bool:
        return AuthStorage.get_token() is not None

    @staticmethod
    def update_user(**fields: Any) -> User:
        """Merge profile edits into the stored session and save it.

        Raises
        ------
        StorageError
            No session is stored, or the write failed.
        ValueError
            Unknown profile field.
        """
        unknown = set(fields) - _ALLOWED_PROFILE_FIELDS
        if unknown:
            raise ValueError(f"Unknown profile fields: {', '.join(sorted(unknown))}")
        user = AuthStorage.get_user()
        if user is None:
            raise StorageError("No signed-in user to update")
        for name, value in fields.items():
            if value is not None:
                setattr(user, name, value)
        AuthStorage.save_user(user)
        return user

    # ───────────────────────── account registry ─────────────────────
    @staticmethod
    def register_user(username: str, email: str, password: str) -> User:
        """Add an account to the local registry and return a fresh session
        user for it. The session itself is not saved here.
        """
        try:
            accounts = load_list(REGISTERED_USERS_KEY)
        except (sqlite3.Error, ValueError) as exc:
            log_debug(f"Error registering user: {exc}")
            raise StorageError("Failed to register user") from exc

        if any(a.get("username") == username or a.get("email") == email for a in accounts):
            raise StorageError("Username or email already exists")

        salt = secrets.token_hex(16)
        account: Dict[str, Any] = {
            "username":     username,
            "email":        email,
            "passwordHash": _hash_password(password, salt),
            "salt":         salt,
            "firstName":    username,
            "lastName":     "",
            "gender":       "male",
            "image":        "",
        }
        accounts.append(account)
        try:
            save_list(REGISTERED_USERS_KEY, accounts)
        except sqlite3.Error as exc:
            log_debug(f"Error registering user: {exc}")
            raise StorageError("Failed to register user") from exc

        log_debug(f"Registered local account '{username}'")
        return User(
            id=len(accounts),
            username=username,
            email=email,
            first_name=account["firstName"],
            last_name=account["lastName"],
            gender=account["gender"],
            image=account["image"],
            token=_issue_token(username),
        )

    @staticmethod
    def login_with_credentials(username: str, password: str) -> Optional[User]:
        """Return a session user for a matching local account, else **None**."""
        try:
            accounts = load_list(REGISTERED_USERS_KEY)
        except (sqlite3.Error, ValueError) as exc:
            log_debug(f"Error logging in: {exc}")
            return None

        for position, acct in enumerate(accounts, start=1):
            if acct.get("username") != username or "salt" not in acct:
                continue
            expected = acct.get("passwordHash", "")
            if not hmac.compare_digest(expected, _hash_password(password, acct["salt"])):
                continue
            return User(
                id=position,
                username=acct["username"],
                email=acct.get("email", ""),
                first_name=acct.get("firstName", ""),
                last_name=acct.get("lastName", ""),
                gender=acct.get("gender") or "male",
                image=acct.get("image", ""),
                token=_issue_token(username),
            )
        return None


auth_storage = AuthStorage()
