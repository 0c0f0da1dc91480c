"""Form rules for sign-in, sign-up and profile edits.

The front end hands over raw text; these checks run before anything touches
the stores or the auth API. A failure raises `ValidationError` with a
message fit to show the user as-is.
"""

from __future__ import annotations

import re

_EMAIL_RE    = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_USERNAME_RE = re.compile(r"^[A-Za-z0-9_]+$")


class ValidationError(ValueError):
    """Invalid user input; the message is user-facing."""


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_RE.match(email or ""))


def validate_login(username: str, password: str) -> None:
    username = (username or "").strip()
    if not username:
        raise ValidationError("Username is required")
    if len(username) < 3:
        raise ValidationError("Username must be at least 3 characters")
    if not password:
        raise ValidationError("Password is required")
    if len(password) < 6:
        raise ValidationError("Password must be at least 6 characters")


def validate_registration(username: str, email: str, password: str, confirm: str) -> None:
    """Username, email, password strength and confirmation, in that order."""
    username = (username or "").strip()
    if not username:
        raise ValidationError("Username is required")
    if len(username) < 3:
        raise ValidationError("Username must be at least 3 characters")
    if not _USERNAME_RE.match(username):
        raise ValidationError("Username can only contain letters, numbers, and underscores")

    if not (email or "").strip():
        raise ValidationError("Email is required")
    if not is_valid_email(email.strip()):
        raise ValidationError("Please enter a valid email")

    if not password:
        raise ValidationError("Password is required")
    if len(password) < 6:
        raise ValidationError("Password must be at least 6 characters")
    if not (re.search(r"[a-z]", password) and re.search(r"[A-Z]", password)
            and re.search(r"\d", password)):
        raise ValidationError("Password must contain uppercase, lowercase & number")

    if not confirm:
        raise ValidationError("Confirm your password")
    if confirm != password:
        raise ValidationError("Passwords must match")


def validate_profile(first_name: str, last_name: str, email: str) -> None:
    if not (first_name or "").strip() or not (last_name or "").strip():
        raise ValidationError("First name and last name are required")
    if not (email or "").strip():
        raise ValidationError("Email is required")
    if not is_valid_email(email.strip()):
        raise ValidationError("Please enter a valid email address")


def password_strength(password: str) -> int:
    """0–100 in steps of 25: length ≥6, length ≥10, mixed case, digit."""
    strength = 0
    if len(password) >= 6:
        strength += 25
    if len(password) >= 10:
        strength += 25
    if re.search(r"[a-z]", password) and re.search(r"[A-Z]", password):
        strength += 25
    if re.search(r"\d", password):
        strength += 25
    return strength


def strength_label(score: int) -> str:
    if score <= 25:
        return "Weak"
    if score <= 50:
        return "Fair"
    if score <= 75:
        return "Good"
    return "Strong"
