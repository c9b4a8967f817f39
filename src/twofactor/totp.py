import calendar
import datetime
import time
from typing import Optional, Union

from . import utils
from .otp import OTP

# default time-step, 30 seconds is what authenticator apps assume
TIME_STEP_SECONDS = 30
DIGITS = 6


class TOTP(OTP):
    """
    Handler for time-based OTP counters.
    """

    def __init__(
        self,
        s: str,
        digits: int = DIGITS,
        name: Optional[str] = None,
        issuer: Optional[str] = None,
        interval: int = TIME_STEP_SECONDS,
    ) -> None:
        """
        :param s: secret in base32 format
        :param interval: the time interval in seconds for OTP. This defaults to 30.
        :param digits: number of integers in the OTP. Authenticator apps expect 6.
        :param name: account name
        :param issuer: issuer
        """
        if interval <= 0:
            raise ValueError("interval must be a positive number of seconds")
        self.interval = interval
        super().__init__(s=s, digits=digits, name=name, issuer=issuer)

    def at(self, for_time: Union[int, float, datetime.datetime], counter_offset: int = 0) -> str:
        """
        Accepts either a Unix timestamp integer or a datetime object.

        To get the time until the next timecode change (seconds until the current OTP expires), use this instead:

        .. code:: python

            totp = twofactor.TOTP(...)
            time_remaining = totp.interval - datetime.datetime.now().timestamp() % totp.interval

        :param for_time: the time to generate an OTP for
        :param counter_offset: the amount of ticks to add to the time counter
        :returns: OTP value
        """
        return self.generate_otp(self.timecode(for_time) + counter_offset)

    def now(self) -> str:
        """
        Generate the current time OTP

        :returns: OTP value
        """
        return self.at(time.time())

    def verify(self, otp: str, for_time: Optional[Union[int, float, datetime.datetime]] = None, valid_window: int = 0) -> bool:
        """
        Verifies the OTP passed in against the current time OTP.

        :param otp: the OTP to check against
        :param for_time: Time to check OTP at (defaults to now)
        :param valid_window: extends the validity to this many counter ticks before and after the current one
        :returns: True if verification succeeded, False otherwise
        """
        if valid_window < 0:
            raise ValueError("valid_window must not be negative")
        if for_time is None:
            for_time = time.time()

        if valid_window:
            for i in range(-valid_window, valid_window + 1):
                if self.timecode(for_time) + i < 0:
                    continue
                if utils.strings_equal(str(otp), str(self.at(for_time, i))):
                    return True
            return False

        return utils.strings_equal(str(otp), str(self.at(for_time)))

    def provisioning_uri(self, name: Optional[str] = None, issuer_name: Optional[str] = None) -> str:
        """
        Returns the provisioning URI for the OTP.  This can then be
        encoded in a QR Code and used to provision an OTP app like
        Google Authenticator.

        See also:
            https://github.com/google/google-authenticator/wiki/Key-Uri-Format

        """
        return utils.build_uri(
            self.secret,
            name if name else self.name,
            issuer=issuer_name if issuer_name else self.issuer,
            digits=self.digits,
            period=self.interval,
        )

    def qr_image_url(self, name: Optional[str] = None) -> str:
        """
        Returns a chart-service URL rendering this secret as a QR code.
        """
        return utils.qr_image_url(name if name else self.name, self.secret)

    def timecode(self, for_time: Union[int, float, datetime.datetime]) -> int:
        """
        Number of whole intervals between the Unix epoch and ``for_time``.

        Naive datetimes are taken as local time.
        """
        if isinstance(for_time, datetime.datetime):
            if for_time.tzinfo:
                seconds = calendar.timegm(for_time.utctimetuple())
            else:
                seconds = time.mktime(for_time.timetuple())
        else:
            seconds = for_time
        return int(seconds // self.interval)
