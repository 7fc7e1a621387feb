import enum
import hashlib
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Union

from .exceptions import InvalidConfiguration, UnsupportedAlgorithm

logger = logging.getLogger(__name__)

DEFAULT_DIGITS = 6
DEFAULT_PERIOD = 30

# The truncated value is a 31-bit integer (at most 2147483647), so ten
# decimal places is the widest code it can fill.
MIN_DIGITS = 6
MAX_DIGITS = 10


class Algorithm(enum.Enum):
    """
    HMAC digests usable for OTP generation.
    """

    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA512 = "sha512"

    @classmethod
    def parse(cls, value: Union[str, "Algorithm"]) -> "Algorithm":
        """
        Accepts an Algorithm or a name such as "SHA256", "sha-256" or "HmacSHA256".
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise UnsupportedAlgorithm("Algorithm must be a string or Algorithm, got {!r}".format(value))
        name = value.strip().upper().replace("-", "").replace("_", "")
        if name.startswith("HMAC"):
            name = name[len("HMAC") :]
        try:
            return cls[name]
        except KeyError:
            raise UnsupportedAlgorithm("Invalid value for algorithm, must be SHA1, SHA256 or SHA512") from None

    def resolve(self) -> Callable[..., Any]:
        """
        Returns the hashlib constructor for this digest.

        :raises UnsupportedAlgorithm: if the runtime cannot provide it
        """
        try:
            hashlib.new(self.value)
        except ValueError as e:
            raise UnsupportedAlgorithm("{} is not available in this runtime".format(self.name)) from e
        return getattr(hashlib, self.value)


def _require_int(name: str, value: Any) -> int:
    # bool is an int subclass; True digits is never what the caller meant
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfiguration("{} must be an integer, got {!r}".format(name, value))
    return value


@dataclass(frozen=True)
class Config(object):
    """
    Immutable OTP settings. Validated on construction, so an instance
    always holds usable values.

    :param digits: length of generated codes, 6 to 10
    :param algorithm: HMAC digest, as Algorithm or name
    :param period: TOTP time step in seconds
    """

    digits: int = DEFAULT_DIGITS
    algorithm: Algorithm = Algorithm.SHA1
    period: int = DEFAULT_PERIOD
    digest: Callable[..., Any] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        check_digits(self.digits)
        if _require_int("period", self.period) <= 0:
            raise InvalidConfiguration("period must be a positive number of seconds")
        algorithm = Algorithm.parse(self.algorithm)
        object.__setattr__(self, "algorithm", algorithm)
        object.__setattr__(self, "digest", algorithm.resolve())


def check_digits(digits: Any) -> int:
    digits = _require_int("digits", digits)
    if not MIN_DIGITS <= digits <= MAX_DIGITS:
        raise InvalidConfiguration("digits must be between {} and {}".format(MIN_DIGITS, MAX_DIGITS))
    return digits


def make_config(
    digits: int = DEFAULT_DIGITS,
    algorithm: Union[str, Algorithm] = Algorithm.SHA1,
    period: int = DEFAULT_PERIOD,
) -> Config:
    """
    Builds a validated Config.

    :raises InvalidConfiguration: digits or period out of range
    :raises UnsupportedAlgorithm: unknown or unavailable digest
    """
    return Config(digits=digits, algorithm=Algorithm.parse(algorithm), period=period)


def _env_int(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidConfiguration("{} must be an integer, got {!r}".format(key, raw)) from None


def config_from_env(environ: Optional[Mapping[str, str]] = None, prefix: str = "OTP_") -> Config:
    """
    Reads {prefix}DIGITS, {prefix}ALGORITHM and {prefix}PERIOD, falling back
    to the RFC defaults for any that are unset.
    """
    if environ is None:
        environ = os.environ
    config = make_config(
        digits=_env_int(environ, prefix + "DIGITS", DEFAULT_DIGITS),
        algorithm=environ.get(prefix + "ALGORITHM") or Algorithm.SHA1,
        period=_env_int(environ, prefix + "PERIOD", DEFAULT_PERIOD),
    )
    logger.debug("Loaded OTP configuration from environment: %r", config)
    return config
