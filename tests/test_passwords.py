"""Tests for password hashing."""

from account_service.services.passwords import hash_password, verify_password


def test_hash_verifies_original_password():
    """A password verifies against its own hash."""
    password_hash = hash_password("correct horse battery")
    assert verify_password("correct horse battery", password_hash)


def test_hash_does_not_contain_password():
    """The stored hash never contains the plaintext."""
    password_hash = hash_password("s3cret-value")
    assert password_hash != "s3cret-value"
    assert "s3cret-value" not in password_hash


def test_hashes_are_salted():
    """Hashing the same password twice gives different hashes that both verify."""
    first = hash_password("samepassword")
    second = hash_password("samepassword")
    assert first != second
    assert verify_password("samepassword", first)
    assert verify_password("samepassword", second)


def test_wrong_password_fails():
    """A different password does not verify."""
    password_hash = hash_password("rightpassword")
    assert not verify_password("wrongpassword", password_hash)


def test_malformed_hash_returns_false():
    """Garbage or empty hashes are rejected without raising."""
    assert not verify_password("anything", "not-a-bcrypt-hash")
    assert not verify_password("anything", "")
    assert not verify_password("anything", None)
    assert not verify_password("anything", "$2b$04$tooshort")
