import pytest

from streamBox.validation import (
    ValidationError,
    is_valid_email,
    password_strength,
    strength_label,
    validate_login,
    validate_profile,
    validate_registration,
)


class TestLogin:

    def test_valid(self):
        validate_login("emilys", "secret")

    @pytest.mark.parametrize("username,password,message", [
        ("", "secret", "Username is required"),
        ("   ", "secret", "Username is required"),
        ("ab", "secret", "at least 3 characters"),
        ("emilys", "", "Password is required"),
        ("emilys", "12345", "at least 6 characters"),
    ])
    def test_invalid(self, username, password, message):
        with pytest.raises(ValidationError, match=message):
            validate_login(username, password)


class TestRegistration:

    def test_valid(self):
        validate_registration("new_user1", "new@x.com", "Secret1", "Secret1")

    @pytest.mark.parametrize("username,email,password,confirm,message", [
        ("", "a@b.co", "Secret1", "Secret1", "Username is required"),
        ("bad name", "a@b.co", "Secret1", "Secret1", "letters, numbers, and underscores"),
        ("newbie", "", "Secret1", "Secret1", "Email is required"),
        ("newbie", "not-an-email", "Secret1", "Secret1", "valid email"),
        ("newbie", "a@b.co", "secret1", "secret1", "uppercase, lowercase & number"),
        ("newbie", "a@b.co", "Secret1", "", "Confirm your password"),
        ("newbie", "a@b.co", "Secret1", "Secret2", "Passwords must match"),
    ])
    def test_invalid(self, username, email, password, confirm, message):
        with pytest.raises(ValidationError, match=message):
            validate_registration(username, email, password, confirm)

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate_registration("", "", "", "")


class TestProfile:

    def test_valid(self):
        validate_profile("Emily", "Johnson", "emily@x.com")

    def test_names_required(self):
        with pytest.raises(ValidationError, match="First name and last name are required"):
            validate_profile("Emily", " ", "emily@x.com")

    def test_bad_email(self):
        with pytest.raises(ValidationError, match="valid email address"):
            validate_profile("Emily", "Johnson", "emily@")


def test_is_valid_email():
    assert is_valid_email("a@b.co")
    assert not is_valid_email("a b@c.de")
    assert not is_valid_email(None)


@pytest.mark.parametrize("password,score,label", [
    ("", 0, "Weak"),
    ("abcdef", 25, "Weak"),
    ("abcdefghij", 50, "Fair"),
    ("Abcdef1", 75, "Good"),
    ("Abcdefghij1", 100, "Strong"),
])
def test_password_strength(password, score, label):
    assert password_strength(password) == score
    assert strength_label(score) == label
