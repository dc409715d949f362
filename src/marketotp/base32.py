import logging

logger = logging.getLogger(__name__)

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"


class InvalidSecretFormat(ValueError):
    """
    Raised when a secret is not a base32 string over the RFC 4648 alphabet.
    """

    def __init__(self, message: str, position: int = -1, character: str = "") -> None:
        super().__init__(message)
        self.position = position
        self.character = character


def decode_hex(secret: str) -> str:
    """
    Converts a base32 secret into the hex string of its 4-bit nibbles.

    Every character contributes 5 bits, most significant first. The bit
    stream is cut into nibbles from the front; bits left over at the end
    that do not fill a nibble are dropped.

    :param secret: base32 secret, any case, optional trailing ``=`` padding
    :returns: lowercase hex string, one character per nibble
    :raises InvalidSecretFormat: on an empty secret or a character outside the alphabet
    """
    secret = secret.rstrip("=")
    if not secret:
        raise InvalidSecretFormat("secret must not be empty")

    buffer = 0
    bits = 0
    nibbles = []
    for position, char in enumerate(secret):
        value = ALPHABET.find(char.upper())
        if value < 0:
            logger.debug("Rejected base32 secret at position %d", position)
            raise InvalidSecretFormat(
                "invalid base32 character at position {}".format(position),
                position=position,
                character=char,
            )
        buffer = (buffer << 5) | value
        bits += 5
        while bits >= 4:
            bits -= 4
            nibbles.append("{:x}".format((buffer >> bits) & 0xF))
        # only the bits not yet emitted are kept
        buffer &= (1 << bits) - 1
    return "".join(nibbles)


def decode(secret: str) -> bytes:
    """
    Converts a base32 secret into raw bytes, two nibbles per byte.

    A 32 character secret yields exactly 20 bytes. A trailing odd nibble
    cannot complete a byte and is discarded.

    :param secret: base32 secret, any case
    :returns: decoded secret bytes
    :raises InvalidSecretFormat: if the secret is empty or malformed
    """
    hex_secret = decode_hex(secret)
    return bytes.fromhex(hex_secret[: len(hex_secret) - len(hex_secret) % 2])
