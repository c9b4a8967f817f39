class TwoFactorError(Exception):
    """
    Base class for errors raised by twofactor.
    """


class DecodeError(TwoFactorError, ValueError):
    """
    The secret could not be decoded into key bytes.
    """


class InvalidCharacter(DecodeError):
    """
    A base32 string contained a character outside ``A-Z``, ``a-z`` and ``2-7``.
    """

    def __init__(self, char: str, position: int) -> None:
        self.char = char
        self.position = position
        super().__init__("Invalid base-32 character {!r} at position {}".format(char, position))


class CryptoUnavailable(TwoFactorError, RuntimeError):
    """
    HMAC-SHA1 could not be obtained from the platform.
    """
