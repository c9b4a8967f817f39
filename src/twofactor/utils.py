import unicodedata
from hmac import compare_digest
from typing import Dict, Optional, Union
from urllib.parse import quote, urlencode

# Chart service the enrollment QR image is rendered by. The query string is
# kept byte for byte as authenticator enrollment pages have always served it.
QR_CHART_URL = (
    "https://chart.googleapis.com/chart?"
    "chs=200x200&amp;cht=qr&amp;chl=200x200&amp;chld=M|0&amp;cht=qr&amp;chl="
)


def qr_image_url(label: str, secret: str) -> str:
    """
    Returns the QR image url thanks to Google. This can be shown to the user
    and scanned by the authenticator program as an easy way to enter the secret.

    Only ``?`` and ``=`` of the embedded ``otpauth://`` payload are escaped
    (as ``%3F`` and ``%3D``); ``label`` and ``secret`` go in unchanged.

    :param label: account label shown by the authenticator app
    :param secret: base32 secret
    :returns: chart service url
    """
    return QR_CHART_URL + "otpauth://totp/" + label + "%3Fsecret%3D" + secret


def build_uri(
    secret: str,
    name: str,
    issuer: Optional[str] = None,
    digits: Optional[int] = None,
    period: Optional[int] = None,
) -> str:
    """
    Returns the provisioning URI for a TOTP secret.

    This can then be encoded in a QR Code and used to provision the Google
    Authenticator app.

    For module-internal use.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param secret: the totp secret used to generate the URI
    :param name: name of the account
    :param issuer: the name of the OTP issuer; this will be the
        organization title of the OTP entry in Authenticator
    :param digits: the length of the OTP generated code.
    :param period: the number of seconds the OTP generator is set to
        expire every code.
    :returns: provisioning uri
    """
    # Only include non-default values in the URI to keep it short.
    is_digits_set = digits is not None and digits != 6
    is_period_set = period is not None and period != 30

    base_uri = "otpauth://totp/{0}?{1}"
    url_args: Dict[str, Union[int, str]] = {"secret": secret}

    label = quote(name)
    if issuer is not None:
        label = quote(issuer) + ":" + label
        url_args["issuer"] = issuer

    if is_digits_set:
        url_args["digits"] = digits  # type: ignore
    if is_period_set:
        url_args["period"] = period  # type: ignore

    return base_uri.format(label, urlencode(url_args).replace("+", "%20"))


def strings_equal(s1: str, s2: str) -> bool:
    """
    Timing-attack resistant string comparison.

    Normal comparison using == will short-circuit on the first mismatching
    character. This avoids that by scanning the whole string, though we
    still reveal to a timing attack whether the strings are the same
    length.
    """
    s1 = unicodedata.normalize("NFKC", s1)
    s2 = unicodedata.normalize("NFKC", s2)
    return compare_digest(s1.encode("utf-8"), s2.encode("utf-8"))
