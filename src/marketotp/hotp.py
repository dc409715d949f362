import hashlib
import hmac

DIGITS = 6


def int_to_bytestring(i: int, padding: int = 8) -> bytes:
    """
    Turns an integer to the OATH specified
    bytestring, which is fed to the HMAC
    along with the secret

    :param i: non-negative counter value, below 2**64
    :param padding: width of the result in bytes
    :returns: big-endian counter bytes
    """
    if i < 0:
        raise ValueError("input must be positive integer")
    if i >= 1 << (8 * padding):
        raise ValueError("input must fit in {} bytes".format(padding))
    result = bytearray()
    while i != 0:
        result.append(i & 0xFF)
        i >>= 8
    # bytes were collected least significant first
    return bytes(bytearray(reversed(result)).rjust(padding, b"\0"))


def hotp(secret_bytes: bytes, counter: int) -> str:
    """
    Computes the 6 digit HMAC-SHA1 one-time code for a counter (RFC 4226).

    :param secret_bytes: the raw shared secret, used as the HMAC key
    :param counter: the moving factor, e.g. the TOTP time step
    :returns: zero-padded 6 digit code
    """
    hasher = hmac.new(secret_bytes, int_to_bytestring(counter), hashlib.sha1)
    hmac_hash = bytearray(hasher.digest())
    # dynamic truncation, section 5.3
    offset = hmac_hash[-1] & 0xF
    code = (
        (hmac_hash[offset] & 0x7F) << 24
        | (hmac_hash[offset + 1] & 0xFF) << 16
        | (hmac_hash[offset + 2] & 0xFF) << 8
        | (hmac_hash[offset + 3] & 0xFF)
    )
    return str(code % 10**DIGITS).zfill(DIGITS)
