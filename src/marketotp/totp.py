import calendar
import datetime
import logging
import time
from typing import Optional, Union

from . import utils
from .otp import DEFAULT_ISSUER, INTERVAL, OTP

logger = logging.getLogger(__name__)

ForTime = Union[int, float, datetime.datetime]


class TOTP(OTP):
    """
    Handler for time-based OTP counters.
    """

    def __init__(
        self,
        s: str,
        interval: int = INTERVAL,
        name: Optional[str] = None,
        issuer: Optional[str] = None,
    ) -> None:
        """
        :param s: secret in base32 format
        :param interval: the time interval in seconds for OTP. This defaults to 30.
        :param name: account name
        :param issuer: issuer
        """
        if interval <= 0:
            raise ValueError("interval must be a positive number of seconds")
        self.interval = interval
        super().__init__(s=s, name=name, issuer=issuer)

    def at(self, for_time: ForTime) -> str:
        """
        Accepts either a Unix timestamp integer or a datetime object.

        :param for_time: the time to generate an OTP for
        :returns: OTP value
        """
        return self.generate_otp(self.timecode(for_time))

    def now(self) -> str:
        """
        Generate the current time OTP

        :returns: OTP value
        """
        return self.at(time.time())

    def verify(self, otp: str, for_time: Optional[ForTime] = None) -> bool:
        """
        Verifies the OTP passed in against the current time OTP.

        Only the code of the time step containing ``for_time`` is accepted;
        callers that want to tolerate clock drift check neighbouring steps
        themselves.

        :param otp: the OTP to check against
        :param for_time: Time to check OTP at (defaults to now)
        :returns: True if verification succeeded, False otherwise
        """
        if otp is None:
            return False

        if for_time is None:
            for_time = time.time()

        counter = self.timecode(for_time)
        if utils.strings_equal(str(otp), self.generate_otp(counter)):
            return True
        logger.debug("TOTP mismatch for time step %d", counter)
        return False

    def remaining(self, for_time: Optional[ForTime] = None) -> int:
        """
        Seconds left before the code for ``for_time`` expires.

        :returns: a value between 1 and ``interval``
        """
        if for_time is None:
            for_time = time.time()
        return self.interval - int(self._timestamp(for_time) % self.interval)

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
            issuer_name or self.issuer or DEFAULT_ISSUER,
        )

    def timecode(self, for_time: ForTime) -> int:
        """
        Accepts either a timezone naive (`for_time.tzinfo is None`) or
        a timezone aware datetime as argument and returns the
        corresponding counter value (timecode).

        Plain ints and floats are taken as Unix timestamps.
        """
        return int(self._timestamp(for_time) // self.interval)

    @staticmethod
    def _timestamp(for_time: ForTime) -> float:
        if not isinstance(for_time, datetime.datetime):
            return for_time
        if not for_time.tzinfo:
            return time.mktime(for_time.timetuple())
        return calendar.timegm(for_time.utctimetuple())
