"""Portable PHPass hash verification.

Hashes look like ``$P$Bsaltsalt<22 chars>``: a three character prefix, one
character holding the log2 of the iteration count, an eight character salt and
the MD5 chain encoded with the crypt(3) alphabet.
"""

import hashlib

from phpass_verify.errors import (
    EmptySaltError,
    InvalidCountCharacterError,
    MalformedPrefixError,
)
from phpass_verify.models import ParsedHash

ITOA64 = "./0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
_ITOA64_INDEX = {c: i for i, c in enumerate(ITOA64)}

PREFIXES = ("$P$", "$H$")
SETTING_LENGTH = 12
DIGEST_SIZE = 16


def _to_bytes(value: str | bytes) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else value


def _count_log2(hashed: str) -> int:
    try:
        return _ITOA64_INDEX[hashed[3]]
    except (IndexError, KeyError):
        raise InvalidCountCharacterError() from None


def extract_count(hashed: str) -> int:
    """Decode the iteration count stored at offset 3."""
    return 1 << _count_log2(hashed)


def extract_salt(hashed: str) -> str:
    salt = hashed[4:SETTING_LENGTH]
    if not salt:
        raise EmptySaltError()
    return salt


def _check_prefix(hashed: str) -> None:
    if hashed[:3] not in PREFIXES:
        raise MalformedPrefixError()


def parse_hash(hashed: str) -> ParsedHash:
    """Split a hash into its fields without running the digest chain."""
    _check_prefix(hashed)
    count_log2 = _count_log2(hashed)
    salt = extract_salt(hashed)
    return ParsedHash(
        prefix=hashed[:3],
        count_char=hashed[3],
        count_log2=count_log2,
        salt=salt,
        checksum=hashed[SETTING_LENGTH:],
    )


def compute_digest(password: str | bytes, salt: str | bytes, count: int) -> bytes:
    """Chain ``state = md5(state + password)`` exactly ``count`` times, starting from the salt.

    A count of zero or less returns the salt unchanged.
    """
    password = _to_bytes(password)
    state = _to_bytes(salt)
    for _ in range(count):
        state = hashlib.md5(state + password).digest()
    return state


def pad(digest: bytes) -> bytes:
    """Zero-extend to DIGEST_SIZE bytes. Longer input is returned as-is."""
    if len(digest) < DIGEST_SIZE:
        return digest + b"\x00" * (DIGEST_SIZE - len(digest))
    return digest


def encode(data: bytes) -> str:
    """Encode bytes with the crypt(3) alphabet, least significant bits first.

    Each group of three bytes becomes four characters. A trailing pair becomes
    three characters and a trailing single byte two.
    """
    out = []
    for i in range(0, len(data), 3):
        chunk = data[i:i + 3]
        value = int.from_bytes(chunk, "little")
        for shift in range(0, 6 * (len(chunk) + 1), 6):
            out.append(ITOA64[(value >> shift) & 63])
    return "".join(out)


def crypt(password: str | bytes, hashed: str) -> str:
    """Recompute ``hashed`` for ``password``, reusing its prefix, count and salt."""
    _check_prefix(hashed)
    count = extract_count(hashed)
    salt = extract_salt(hashed)
    # One salt-seeded round, then count chained rounds.
    digest = compute_digest(password, salt, count + 1)
    return hashed[:SETTING_LENGTH] + encode(pad(digest))


def check_password(password: str | bytes, hashed: str) -> bool:
    """Return True if ``password`` produces ``hashed``.

    Raises an InvalidHashError subclass when ``hashed`` is malformed. The
    comparison is a plain string equality and is not constant-time.
    """
    return crypt(password, hashed) == hashed
