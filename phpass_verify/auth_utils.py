"""Shared credential verification: bcrypt, PHPass and legacy plaintext."""

import hmac
import logging

import bcrypt

from phpass_verify.config import get_settings
from phpass_verify.errors import IterationLimitError, MalformedPrefixError, PasswordTooLongError
from phpass_verify.phpass import PREFIXES as PHPASS_PREFIXES
from phpass_verify.phpass import check_password, parse_hash

logger = logging.getLogger(__name__)

MAX_PASSWORD_LENGTH = 128
BCRYPT_MAX_BYTES = 72

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def identify_hash(stored: str) -> str:
    """Name the scheme of a stored credential: bcrypt, phpass or plaintext."""
    if stored.startswith(BCRYPT_PREFIXES):
        return "bcrypt"
    if stored.startswith(PHPASS_PREFIXES):
        return "phpass"
    return "plaintext"


def check_iteration_limit(stored: str, max_count_log2: int) -> None:
    """Refuse PHPass hashes whose round count is above 2**max_count_log2."""
    parsed = parse_hash(stored)
    if parsed.count_log2 > max_count_log2:
        logger.warning(
            "Rejected %s hash with count exponent %d (limit %d)",
            parsed.scheme, parsed.count_log2, max_count_log2,
        )
        raise IterationLimitError(parsed.count_log2, max_count_log2)


def _bcrypt_secret(plain: str) -> bytes:
    secret = plain.encode()
    if len(secret) > BCRYPT_MAX_BYTES:
        raise PasswordTooLongError(BCRYPT_MAX_BYTES)
    return secret


def verify_password(plain: str, hashed: str, max_count_log2: int | None = None) -> bool:
    """Verify a password against a bcrypt or PHPass ($P$/$H$) hash.

    Any other prefix raises MalformedPrefixError. Malformed PHPass hashes and
    hashes over the iteration ceiling raise a PHPassError.
    """
    scheme = identify_hash(hashed)
    if scheme == "bcrypt":
        return bcrypt.checkpw(_bcrypt_secret(plain), hashed.encode())
    if scheme == "phpass":
        if max_count_log2 is None:
            max_count_log2 = get_settings().max_count_log2
        check_iteration_limit(hashed, max_count_log2)
        return check_password(plain, hashed)
    raise MalformedPrefixError()


def verify_stored_credential(plain: str, stored: str, max_count_log2: int | None = None) -> bool:
    """Like verify_password, but also accepts a legacy plaintext value."""
    if identify_hash(stored) == "plaintext":
        # Legacy plaintext — constant-time comparison
        return hmac.compare_digest(plain.encode(), stored.encode())
    return verify_password(plain, stored, max_count_log2)


def needs_rehash(stored: str) -> bool:
    """True when the stored credential is not bcrypt yet."""
    return identify_hash(stored) != "bcrypt"


def hash_password(plain: str) -> str:
    """bcrypt hash used to replace a verified legacy credential."""
    return bcrypt.hashpw(_bcrypt_secret(plain), bcrypt.gensalt()).decode()
