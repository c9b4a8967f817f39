import hashlib
import hmac
import logging
from typing import Optional

from .base32 import decode_base32
from .errors import CryptoUnavailable

log = logging.getLogger(__name__)

# OTP (base class)


class OTP(object):
    """
    Base class for OTP handlers. Always HMAC-SHA1, as authenticator apps expect.
    """

    def __init__(
        self,
        s: str,
        digits: int = 6,
        name: Optional[str] = None,
        issuer: Optional[str] = None,
    ) -> None:
        self.digits = digits
        if digits > 10:
            raise ValueError("digits must be no greater than 10")
        if digits < 1:
            raise ValueError("digits must be at least 1")
        self.secret = s
        self.name = name or "Secret"
        # Account Name
        self.issuer = issuer

    def generate_otp(self, input: int) -> str:
        """
        :param input: the HMAC counter value to use as the OTP input.
            For TOTP this is the number of time steps since the Unix epoch
        """
        # Implements RFC 4226

        if input < 0:
            raise ValueError("input must be positive integer")
        if input >= 2**64:
            raise ValueError("input must fit in an unsigned 64 bit counter")
        hmac_hash = bytearray(self.hmac_sha1(self.byte_secret(), self.int_to_bytestring(input)))
        # The low nibble of the last byte picks where to read. It is 0-15
        # and the digest is 20 bytes, so four bytes are always available.
        offset = hmac_hash[-1] & 0xF
        code = (
            (hmac_hash[offset] & 0x7F) << 24
            | (hmac_hash[offset + 1] & 0xFF) << 16
            | (hmac_hash[offset + 2] & 0xFF) << 8
            | (hmac_hash[offset + 3] & 0xFF)
        )
        # & 0x7F on the first byte drops the top bit: a 31 bit, non-negative value
        return "{0:0{1}d}".format(code % 10**self.digits, self.digits)

    @staticmethod
    def hmac_sha1(key: bytes, msg: bytes) -> bytes:
        """
        HMAC-SHA1 of ``msg`` keyed with ``key``, built fresh on every call.

        :raises CryptoUnavailable: if the platform refuses SHA-1 (e.g. FIPS builds)
        """
        try:
            hasher = hmac.new(key, msg, hashlib.sha1)
        except ValueError as e:
            log.debug("HMAC-SHA1 unavailable: %s", e)
            raise CryptoUnavailable("HMAC-SHA1 is not available on this platform") from e
        return hasher.digest()

    def byte_secret(self) -> bytes:
        # "JBSWY3DPEHPK3PXP" -> b"Hello!\xde\xad\xbe\xef"
        # No "=" padding is needed, decode_base32 works on any length.
        return decode_base32(self.secret)

    @staticmethod
    def int_to_bytestring(i: int, padding: int = 8) -> bytes:
        """
        Turns an integer to the OATH specified
        bytestring, which is fed to the HMAC
        along with the secret
        """
        result = bytearray()
        while i != 0:
            result.append(i & 0xFF)
            i >>= 8
        # The loop collects the least significant byte first; reverse to
        # big-endian and left pad with zero bytes up to 8 bytes.
        return bytes(bytearray(reversed(result)).rjust(padding, b"\0"))
