from re import IGNORECASE, split
from typing import Any, Dict, Optional, Sequence
from urllib.parse import parse_qsl, unquote, urlparse

from . import base32, utils
from .base32 import ALPHABET
from .base32 import InvalidSecretFormat as InvalidSecretFormat
from .compat import random
from .otp import ALGORITHM, DEFAULT_ISSUER, DIGITS, INTERVAL, SECRET_LENGTH
from .otp import OTP as OTP
from .totp import TOTP as TOTP
from .totp import ForTime


def random_base32(length: int = SECRET_LENGTH, chars: Sequence[str] = ALPHABET, rng: Any = None) -> str:
    # Note: the otpauth scheme DOES NOT use base32 padding for secret lengths not divisible by 8.
    # rng is any object with a ``choice`` method; tests pass a seeded random.Random.
    if length < SECRET_LENGTH:
        raise ValueError("Secrets should be at least 160 bits")

    rng = rng or random
    return "".join(rng.choice(chars) for _ in range(length))


def generate_secret(rng: Any = None) -> str:
    """
    Creates a new 160 bit secret for an account enrollment.
    """
    return random_base32(rng=rng)


def build_uri(secret: str, account_label: str, issuer: str = DEFAULT_ISSUER) -> str:
    """
    Returns the ``otpauth://totp/`` URI an authenticator app imports the secret from.

    :raises InvalidSecretFormat: if the secret is not valid base32
    """
    secret = secret.upper().rstrip("=")
    base32.decode(secret)
    return utils.build_uri(secret, account_label, issuer)


def current_code(secret: str, now: Optional[ForTime] = None, step: int = INTERVAL) -> str:
    """
    Returns the 6 digit code of the time step containing ``now`` (defaults to the current time).

    :raises InvalidSecretFormat: if the secret is not valid base32
    """
    totp = TOTP(secret, interval=step)
    if now is None:
        return totp.now()
    return totp.at(now)


def verify(secret: str, candidate_code: str, now: Optional[ForTime] = None, step: int = INTERVAL) -> bool:
    """
    Checks a user supplied code against the current time step only.

    A wrong code is an expected outcome and returns False.

    :raises InvalidSecretFormat: if the secret is not valid base32
    """
    return TOTP(secret, interval=step).verify(candidate_code, for_time=now)


def parse_uri(uri: str) -> TOTP:
    """
    Parses a TOTP provisioning URI back into a TOTP object.

    Only the SHA1 / 6 digit / 30 second profile is accepted.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param uri: the totp URI to parse
    :returns: TOTP object
    """

    secret = None

    # Data we'll parse to the correct constructor
    otp_data: Dict[str, Any] = {}

    parsed_uri = urlparse(uri)

    if parsed_uri.scheme != "otpauth":
        raise ValueError("Not an otpauth URI")
    if parsed_uri.netloc != "totp":
        raise ValueError("Not a supported OTP type")

    # A literal colon separates issuer and account; colons inside labels arrive as %3A
    label = parsed_uri.path[1:]
    if ":" in label:
        accountinfo_parts = label.split(":", 1)
    else:
        accountinfo_parts = split("%3A", label, maxsplit=1, flags=IGNORECASE)
    if len(accountinfo_parts) == 1:
        otp_data["name"] = unquote(accountinfo_parts[0])
    else:
        otp_data["issuer"] = unquote(accountinfo_parts[0])
        otp_data["name"] = unquote(accountinfo_parts[1])

    for key, value in parse_qsl(parsed_uri.query):
        if key == "secret":
            secret = value
        elif key == "issuer":
            if "issuer" in otp_data and otp_data["issuer"] != value:
                raise ValueError("If issuer is specified in both label and parameters, it should be equal.")
            otp_data["issuer"] = value
        elif key == "algorithm":
            if value.upper() != ALGORITHM:
                raise ValueError("Invalid value for algorithm, must be SHA1")
        elif key == "digits":
            if int(value) != DIGITS:
                raise ValueError("Digits may only be 6")
        elif key == "period":
            if int(value) != INTERVAL:
                raise ValueError("Period may only be 30")

    if not secret:
        raise ValueError("No secret found in URI")

    return TOTP(secret, **otp_data)
