"""Exceptions raised by the validated nanoid entry points."""


class NanoidError(ValueError):
    """Base exception for nanoid generation."""

    pass


class InvalidAlphabetSizeError(NanoidError):
    """Raised when the alphabet length is outside ``[1, max_len]``."""

    def __init__(self, alphabet_len: int, max_len: int):
        self.alphabet_len = alphabet_len
        self.max_len = max_len
        super().__init__(
            f"Alphabet size ({alphabet_len}) must be between 1 and {max_len}"
        )


class InvalidResultBufferSizeError(NanoidError):
    """Raised when the requested id length is zero or above the allowed bound."""

    def __init__(self, size: int, max_size: int | None = None):
        self.size = size
        self.max_size = max_size
        if max_size is None:
            message = f"Result buffer size ({size}) must be greater than 0"
        else:
            message = f"Result buffer size ({size}) must be between 1 and {max_size}"
        super().__init__(message)


class UnknownAlphabetError(NanoidError, KeyError):
    """Raised when a named alphabet does not exist."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown alphabet: {name}")

    def __str__(self) -> str:
        return self.args[0]
