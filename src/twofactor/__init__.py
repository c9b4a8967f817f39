import datetime
import logging
from re import split
from typing import Any, Dict, Optional, Union
from urllib.parse import parse_qsl, unquote, urlparse

from .base32 import decode_base32 as decode_base32
from .compat import random
from .errors import CryptoUnavailable as CryptoUnavailable
from .errors import DecodeError as DecodeError
from .errors import InvalidCharacter as InvalidCharacter
from .errors import TwoFactorError as TwoFactorError
from .otp import OTP as OTP
from .totp import TOTP as TOTP
from .utils import QR_CHART_URL, qr_image_url

logging.getLogger(__name__).addHandler(logging.NullHandler())

# 16 characters = 80 bits, the length authenticator apps have always accepted
SECRET_LENGTH = 16
BASE32_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"


def generate_secret(length: int = SECRET_LENGTH, random_source: Optional[Any] = None) -> str:
    """
    Generate a secret key in base32 format (A-Z2-7).

    Each character is one uniform draw from ``[0, 32)``: 0-25 map to ``A-Z``
    and 26-31 to ``2-7``.

    :param length: number of characters, at least 16
    :param random_source: anything with a ``randrange`` method. Defaults to
        the operating system's CSPRNG; pass a seeded :class:`random.Random`
        only for reproducible tests.
    :returns: base32 secret
    """
    if length < SECRET_LENGTH:
        raise ValueError("Secrets should be at least 80 bits")
    rng = random_source if random_source is not None else random
    return "".join(BASE32_ALPHABET[rng.randrange(32)] for _ in range(length))


def current_code(secret: str, for_time: Optional[Union[int, float, datetime.datetime]] = None) -> str:
    """
    Return the current number to be checked from user input, i.e. the 6 digit
    RFC 6238 code for ``secret`` at ``for_time`` (default: now).

    :raises DecodeError: if ``secret`` is not valid base32
    :raises CryptoUnavailable: if HMAC-SHA1 cannot be used
    """
    totp = TOTP(secret)
    if for_time is None:
        return totp.now()
    return totp.at(for_time)


def qr_enrollment_url(label: str, secret: str) -> str:
    """
    Chart service URL for a QR code that enrolls ``secret`` under ``label``.
    """
    return qr_image_url(label, secret)


# Two shapes come back to parse_uri:
#
#   otpauth://totp/FooCorp:alice?secret=JBSWY3DPEHPK3PXP&issuer=FooCorp&digits=8&period=60
#       what TOTP.provisioning_uri / build_uri produce
#
#   <QR_CHART_URL>otpauth://totp/alice%3Fsecret%3DJBSWY3DPEHPK3PXP
#       what qr_enrollment_url produces; only "?" and "=" are escaped,
#       so dropping the chart prefix and unquoting gives the first shape


def parse_uri(uri: str) -> TOTP:
    """
    Parses an enrollment URI back into a :class:`TOTP`.

    Accepts the plain ``otpauth://totp/...`` form, the ``%3F``/``%3D`` escaped
    payload and the full QR chart URL built by :func:`qr_enrollment_url`.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param uri: the totp URI to parse
    :returns: TOTP object
    """
    if uri.startswith(QR_CHART_URL):
        uri = uri[len(QR_CHART_URL):]
    parsed_uri = urlparse(unquote(uri))

    if parsed_uri.scheme != "otpauth":
        raise ValueError("Not an otpauth URI")
    if parsed_uri.netloc != "totp":
        raise ValueError("Not a supported OTP type")

    # Label is "account" or "issuer:account"
    totp_kwargs: Dict[str, Any] = {}
    label_parts = split(":|%3A", parsed_uri.path[1:], maxsplit=1)
    if len(label_parts) == 1:
        totp_kwargs["name"] = label_parts[0]
    else:
        totp_kwargs["issuer"], totp_kwargs["name"] = label_parts

    secret = None
    for key, value in parse_qsl(parsed_uri.query):
        if key == "secret":
            secret = value
        elif key == "issuer":
            if totp_kwargs.get("issuer", value) != value:
                raise ValueError("If issuer is specified in both label and parameters, it should be equal.")
            totp_kwargs["issuer"] = value
        elif key == "algorithm":
            # codes are always HMAC-SHA1
            if value.upper() != "SHA1":
                raise ValueError("Invalid value for algorithm, only SHA1 is supported")
        elif key == "digits":
            totp_kwargs["digits"] = int(value)
        elif key == "period":
            totp_kwargs["interval"] = int(value)

    if totp_kwargs.get("digits", 6) not in (6, 7, 8):
        raise ValueError("Digits may only be 6, 7, or 8")
    if not secret:
        raise ValueError("No secret found in URI")
    return TOTP(secret, **totp_kwargs)
