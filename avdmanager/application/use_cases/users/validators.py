"""Validation helpers for administrator accounts."""

MIN_PASSWORD_LENGTH = 8


def ensure_valid_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )


def normalize_email(email: str) -> str:
    normalized = email.strip().lower()
    if "@" not in normalized:
        raise ValueError("Invalid email address")
    return normalized


__all__ = ["MIN_PASSWORD_LENGTH", "ensure_valid_password", "normalize_email"]
