from typing import Optional

from . import base32
from .hotp import DIGITS, hotp

ALGORITHM = "SHA1"
INTERVAL = 30
SECRET_LENGTH = 32
DEFAULT_ISSUER = "Marketplace Services"


class OTP(object):
    """
    Base class for OTP handlers.

    Holds a base32 secret together with the account labels used when
    provisioning it. The secret is stored uppercase without padding and
    is never modified afterwards.
    """

    def __init__(
        self,
        s: str,
        name: Optional[str] = None,
        issuer: Optional[str] = None,
    ) -> None:
        self.secret = s.upper().rstrip("=")
        self.name = name or "Secret"
        self.issuer = issuer
        # fail fast on malformed secrets
        self.byte_secret()

    def generate_otp(self, input: int) -> str:
        """
        :param input: the HMAC counter value to use as the OTP input.
            Usually the integer computed from the Unix timestamp
        """
        return hotp(self.byte_secret(), input)

    def byte_secret(self) -> bytes:
        return base32.decode(self.secret)
