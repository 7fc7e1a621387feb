import hmac
from typing import Any, Callable, Optional, Union

from .config import Algorithm, Config, check_digits
from .utils import BytesLike, copy_secret

MAX_COUNTER = 2**64 - 1


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
    return bytes(bytearray(reversed(result)).rjust(padding, b"\0"))


def compute(
    secret: BytesLike,
    counter: int,
    digits: int = 6,
    algorithm: Union[str, Algorithm] = Algorithm.SHA1,
) -> str:
    """
    Computes the RFC 4226 HOTP value for one counter.

    :param secret: shared secret bytes
    :param counter: the HMAC counter, a non-negative integer
    :param digits: length of the code, 6 to 10
    :param algorithm: HMAC digest
    :returns: zero-padded decimal code of exactly ``digits`` characters
    :raises UnsupportedAlgorithm: if the digest is not available
    """
    digits = check_digits(digits)
    digest = Algorithm.parse(algorithm).resolve()
    return hotp_with_digest(copy_secret(secret), counter, digits, digest)


def hotp_with_digest(secret: bytes, counter: int, digits: int, digest: Callable[..., Any]) -> str:
    # digits and digest are already validated by the caller
    if counter < 0:
        raise ValueError("input must be positive integer")
    if counter > MAX_COUNTER:
        raise ValueError("counter must fit in 8 bytes")
    hmac_hash = hmac.new(secret, int_to_bytestring(counter), digest).digest()
    # Dynamic truncation: the low nibble of the last byte picks where the
    # four bytes start; the top bit is masked so the value is 31 bits.
    offset = hmac_hash[-1] & 0xF
    code = (
        (hmac_hash[offset] & 0x7F) << 24
        | (hmac_hash[offset + 1] & 0xFF) << 16
        | (hmac_hash[offset + 2] & 0xFF) << 8
        | (hmac_hash[offset + 3] & 0xFF)
    )
    # Adding 10**10 keeps the leading zeros when the tail is sliced off.
    str_code = str(10_000_000_000 + (code % 10**digits))
    return str_code[-digits:]


class OTP(object):
    """
    Base class for OTP handlers.
    """

    def __init__(self, s: BytesLike, config: Optional[Config] = None) -> None:
        """
        :param s: shared secret bytes; copied, the caller keeps ownership of its buffer
        :param config: digits, algorithm and period, defaults to Config()
        """
        self._secret = copy_secret(s)
        self.config = config if config is not None else Config()

    @property
    def digits(self) -> int:
        return self.config.digits

    @property
    def algorithm(self) -> Algorithm:
        return self.config.algorithm

    def generate_otp(self, input: int) -> str:
        """
        :param input: the HMAC counter value to use as the OTP input.
            Usually either the counter, or the computed integer based on the Unix timestamp
        """
        return hotp_with_digest(self._secret, input, self.config.digits, self.config.digest)

    def byte_secret(self) -> bytes:
        return bytes(self._secret)

    def __repr__(self) -> str:
        return "{}(config={!r})".format(type(self).__name__, self.config)
