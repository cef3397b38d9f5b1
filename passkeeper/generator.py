"""
Password generation for the password manager.

Passwords are drawn from a fixed alphabet using the secrets module, which is
backed by the operating system's cryptographically secure random source.
"""

import secrets
import string
import logging
from typing import Tuple

from . import config

logger = logging.getLogger(__name__)

PASSWORD_ALPHABET = config.PASSWORD_GENERATOR_ALPHABET


class InvalidArgumentError(ValueError):
    """Raised when a generator argument is outside its accepted range."""


def generate_password(length: int = config.PASSWORD_GENERATOR_DEFAULT_LENGTH) -> str:
    """
    Generate a random password.

    Each character is chosen independently and uniformly from
    PASSWORD_ALPHABET.

    Args:
        length: Number of characters, must be a positive integer

    Returns:
        The generated password

    Raises:
        InvalidArgumentError: If length is not a positive integer
    """
    if isinstance(length, bool) or not isinstance(length, int):
        raise InvalidArgumentError(f"Password length must be an integer, got {type(length).__name__}")
    if length <= 0:
        raise InvalidArgumentError(f"Password length must be positive, got {length}")

    logger.debug(f"Generating password of length {length}")
    return ''.join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))


def check_strength(password: str) -> Tuple[bool, str]:
    """
    Check if password meets minimum requirements.

    Returns:
        Tuple of (is_strong, message)
    """
    if len(password) < config.PASSWORD_MIN_LENGTH:
        return False, f"Password must be at least {config.PASSWORD_MIN_LENGTH} characters long"

    has_upper = any(c.isupper() for c in password)
    has_lower = any(c.islower() for c in password)
    has_digit = any(c.isdigit() for c in password)
    has_special = any(c in string.punctuation for c in password)

    if not has_upper:
        return False, "Password must contain uppercase letters"
    if not has_lower:
        return False, "Password must contain lowercase letters"
    if not has_digit:
        return False, "Password must contain digits"
    if not has_special:
        return False, "Password must contain special characters"

    return True, "Password is strong"
