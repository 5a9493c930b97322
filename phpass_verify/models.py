"""Data models for parsed PHPass hashes."""

from dataclasses import dataclass

_SCHEMES = {
    "$P$": "wordpress",
    "$H$": "phpbb3",
}


@dataclass(frozen=True)
class ParsedHash:
    """Fields of a portable PHPass hash string."""

    prefix: str
    count_char: str
    count_log2: int
    salt: str
    checksum: str

    @property
    def count(self) -> int:
        return 1 << self.count_log2

    @property
    def setting(self) -> str:
        """Prefix, count character and salt: the first 12 characters of the hash."""
        return self.prefix + self.count_char + self.salt

    @property
    def scheme(self) -> str:
        return _SCHEMES.get(self.prefix, "unknown")
