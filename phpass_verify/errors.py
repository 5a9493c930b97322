"""Exceptions raised while parsing or checking PHPass hashes."""


class PHPassError(ValueError):
    """Base class for every error raised by the PHPass verifier."""


class InvalidHashError(PHPassError):
    """The stored hash string is structurally malformed."""


class MalformedPrefixError(InvalidHashError):
    def __init__(self, message: str = "Invalid hash: Does not start with '$P$' or '$H$'"):
        super().__init__(message)


class InvalidCountCharacterError(InvalidHashError):
    def __init__(self, message: str = "Could not extract count"):
        super().__init__(message)


class EmptySaltError(InvalidHashError):
    def __init__(self, message: str = "No salt found"):
        super().__init__(message)


class IterationLimitError(PHPassError):
    """Hash requests more digest rounds than the configured ceiling allows."""

    def __init__(self, count_log2: int, max_count_log2: int):
        self.count_log2 = count_log2
        self.max_count_log2 = max_count_log2
        super().__init__(
            f"Iteration count 2^{count_log2} exceeds the allowed maximum of 2^{max_count_log2}"
        )


class PasswordTooLongError(ValueError):
    """Password exceeds what bcrypt can hash or check."""

    def __init__(self, max_bytes: int):
        self.max_bytes = max_bytes
        super().__init__(f"Password is longer than the {max_bytes} bytes bcrypt accepts")
