import calendar
import datetime
import logging
import time
from typing import Optional, Union

from . import utils
from .config import Config
from .otp import OTP, compute, hotp_with_digest
from .utils import BytesLike, copy_secret

logger = logging.getLogger(__name__)

Timestamp = Union[int, float, datetime.datetime]


def _to_seconds(for_time: Timestamp) -> float:
    if isinstance(for_time, datetime.datetime):
        if for_time.tzinfo:
            return calendar.timegm(for_time.utctimetuple())
        return time.mktime(for_time.timetuple())
    return for_time


def timecode(for_time: Timestamp, period: int) -> int:
    """
    Maps a point in time to its TOTP counter, floor(unix_time / period).

    :param for_time: Unix timestamp in seconds, or a datetime
        (naive values are taken as local time)
    :param period: time step in seconds
    """
    seconds = _to_seconds(for_time)
    if seconds < 0:
        raise ValueError("time must not be before the Unix epoch")
    return int(seconds // period)


def generate_at(secret: BytesLike, config: Config, timestamp: Timestamp) -> str:
    """
    Generates the code valid at ``timestamp``.
    """
    return compute(secret, timecode(timestamp, config.period), config.digits, config.algorithm)


def now(secret: BytesLike, config: Config) -> str:
    """
    Generates the code for the current time.
    """
    return generate_at(secret, config, time.time())


def verify(
    secret: BytesLike,
    config: Config,
    candidate: Optional[str],
    window: int = 1,
    for_time: Optional[Timestamp] = None,
) -> bool:
    """
    Checks a user-supplied code against the current period and ``window``
    periods on either side of it.

    Codes of the wrong length are rejected before any HMAC is computed; the
    content of a correctly sized code is only ever compared in constant time.

    :param secret: shared secret bytes
    :param config: digits, algorithm and period
    :param candidate: the code the user typed; None is treated as a miss
    :param window: number of periods to accept before and after the current one
    :param for_time: time to verify against, defaults to now
    :returns: True if the code matches any period in the window
    :raises UnsupportedAlgorithm: if the digest is unavailable, before any comparison
    """
    if window < 0:
        raise ValueError("window must be a non-negative integer")
    if candidate is None:
        logger.debug("Rejected OTP candidate: no code supplied")
        return False
    candidate = str(candidate)
    if len(candidate) != config.digits:
        logger.debug("Rejected OTP candidate: expected %d digits, got %d", config.digits, len(candidate))
        return False

    key = copy_secret(secret)
    digest = config.algorithm.resolve()
    if for_time is None:
        for_time = time.time()
    current = timecode(for_time, config.period)

    for offset in range(-window, window + 1):
        counter = current + offset
        if counter < 0:
            continue
        if utils.strings_equal(candidate, hotp_with_digest(key, counter, config.digits, digest)):
            logger.debug("OTP accepted at period offset %+d", offset)
            return True

    logger.debug("OTP rejected: no match within %d period(s)", window)
    return False


def time_remaining(period: int, for_time: Optional[Timestamp] = None) -> int:
    """
    Seconds until the code for ``for_time`` (default now) rolls over.
    """
    if period <= 0:
        raise ValueError("period must be a positive number of seconds")
    if for_time is None:
        for_time = time.time()
    seconds = int(_to_seconds(for_time))
    if seconds < 0:
        raise ValueError("time must not be before the Unix epoch")
    return period - seconds % period


class TOTP(OTP):
    """
    Handler for time-based OTP counters.
    """

    @property
    def interval(self) -> int:
        return self.config.period

    def at(self, for_time: Timestamp, counter_offset: int = 0) -> str:
        """
        Accepts either a Unix timestamp integer or a datetime object.

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

    def verify(self, otp: Optional[str], for_time: Optional[Timestamp] = None, valid_window: int = 1) -> bool:
        """
        Verifies the OTP passed in against the current time OTP.

        :param otp: the OTP to check against
        :param for_time: Time to check OTP at (defaults to now)
        :param valid_window: extends the validity to this many counter ticks before and after the current one
        :returns: True if verification succeeded, False otherwise
        """
        return verify(self._secret, self.config, otp, window=valid_window, for_time=for_time)

    def timecode(self, for_time: Timestamp) -> int:
        return timecode(for_time, self.interval)

    def time_remaining(self, for_time: Optional[Timestamp] = None) -> int:
        return time_remaining(self.interval, for_time)
