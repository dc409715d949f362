from hmac import compare_digest
from typing import Dict, Union
from urllib.parse import quote, urlencode

from .otp import ALGORITHM, DIGITS, INTERVAL


def build_uri(secret: str, name: str, issuer: str) -> str:
    """
    Returns the provisioning URI for a TOTP secret.

    This can then be encoded in a QR Code and used to provision the Google
    Authenticator app. Algorithm, digits and period are always written out,
    even though they are the defaults, so every app reads the same profile.

    For module-internal use.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param secret: the base32 secret used to generate the URI
    :param name: name of the account
    :param issuer: the name of the OTP issuer; this will be the
        organization title of the OTP entry in Authenticator
    :returns: provisioning uri
    """
    if not name:
        raise ValueError("An account name is required")
    if not issuer:
        raise ValueError("An issuer is required")

    base_uri = "otpauth://totp/{0}?{1}"

    # insertion order is the order of the query string
    url_args: Dict[str, Union[int, str]] = {
        "secret": secret,
        "issuer": issuer,
        "algorithm": ALGORITHM,
        "digits": DIGITS,
        "period": INTERVAL,
    }
    label = quote(issuer, safe="") + ":" + quote(name, safe="")

    return base_uri.format(label, urlencode(url_args).replace("+", "%20"))


def strings_equal(s1: str, s2: str) -> bool:
    """
    Timing-attack resistant string comparison.

    Both strings are compared in full with hmac.compare_digest; only
    their lengths can leak through timing. No normalization is applied,
    so only an exact match succeeds.
    """
    return compare_digest(s1.encode("utf-8"), s2.encode("utf-8"))
