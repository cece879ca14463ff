"""Validation predicates for the cache user password, engine, and engine version."""

import string

SUPPORTED_ENGINES = ("valkey", "redis", "memcached")
SUPPORTED_ENGINE_VERSIONS = ("7", "8")

PASSWORD_MIN_LENGTH = 16
PASSWORD_MAX_LENGTH = 128
PASSWORD_UPPERCASE = frozenset(string.ascii_uppercase)
PASSWORD_LOWERCASE = frozenset(string.ascii_lowercase)
PASSWORD_DIGITS = frozenset(string.digits)
PASSWORD_SPECIAL_CHARACTERS = frozenset(string.punctuation)

WEAK_PASSWORD_MESSAGE = (
    "Password must be at least 16 characters long, maximum 128 characters, and contain "
    "a mix of uppercase, lowercase, numbers and special characters."
)
UNSUPPORTED_ENGINE_MESSAGE = (
    f"Unsupported cache engine. Supported engines are {', '.join(SUPPORTED_ENGINES)}."
)
UNSUPPORTED_ENGINE_VERSION_MESSAGE = (
    f"Unsupported engine version. Supported versions are {' and '.join(SUPPORTED_ENGINE_VERSIONS)}."
)


def validate_password(password: str) -> bool:
    """Return True if password is 16-128 chars with ASCII upper, lower, digit and special chars."""
    if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        return False
    return (
        any(c in PASSWORD_UPPERCASE for c in password)
        and any(c in PASSWORD_LOWERCASE for c in password)
        and any(c in PASSWORD_DIGITS for c in password)
        and any(c in PASSWORD_SPECIAL_CHARACTERS for c in password)
    )


def validate_engine(engine: str) -> bool:
    return engine in SUPPORTED_ENGINES


def validate_engine_version(version: str) -> bool:
    return version in SUPPORTED_ENGINE_VERSIONS
