"""Unit tests for bcrypt password hashing."""

from src.cp_gateway.auth.password import hash_password, verify_password


def test_hash_is_not_plaintext() -> None:
    hashed = hash_password("Secret123")
    assert hashed != "Secret123"
    assert hashed.startswith("$2")


def test_verify_correct_and_wrong() -> None:
    hashed = hash_password("Secret123")
    assert verify_password("Secret123", hashed)
    assert not verify_password("Secret124", hashed)


def test_same_password_gets_different_salts() -> None:
    assert hash_password("Secret123") != hash_password("Secret123")


def test_long_password_is_accepted() -> None:
    long_password = "Aa1" + "ü" * 60  # > 72 UTF-8 bytes
    hashed = hash_password(long_password)
    assert verify_password(long_password, hashed)
