# validators.py
import re

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# Counters live in 32-bit integer columns
MAX_INT = 2_147_483_647


def normalize_email(email):
    return (email or "").strip().lower()


def validate_email(email):
    if not EMAIL_RE.match(email):
        raise ValueError("Invalid email address.")


def validate_length(field_name, value, max_length):
    if len(value) > max_length:
        raise ValueError(f"{field_name} must be {max_length} characters or fewer.")


def validate_password(password, min_length):
    if len(password) < min_length:
        raise ValueError(f"Password must be at least {min_length} characters.")


def validate_progress_key(field_name, value):
    if not value:
        raise ValueError(f"{field_name} is required")
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string")
    validate_length(field_name, value, 255)
    return value


def validate_non_negative_int(field_name, value, default=None, max_value=MAX_INT):
    if value is None:
        return default
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field_name} must be an integer")
    if value < 0:
        raise ValueError(f"{field_name} cannot be negative")
    if value > max_value:
        raise ValueError(f"{field_name} must be at most {max_value}")
    return value


def validate_string_list(field_name, value):
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"{field_name} must be a list of strings")
    return value


def optional_string(value):
    """Empty or non-string pointers are stored as null."""
    if isinstance(value, str) and value:
        return value
    return None
