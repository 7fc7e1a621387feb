from typing import Optional

from . import utils
from .config import Config
from .otp import OTP
from .utils import BytesLike


class HOTP(OTP):
    """
    Handler for HMAC-based OTP counters.
    """

    def __init__(
        self,
        s: BytesLike,
        config: Optional[Config] = None,
        initial_count: int = 0,
    ) -> None:
        """
        :param s: shared secret bytes
        :param config: digits and algorithm; the period is ignored for counter-based codes
        :param initial_count: starting HMAC counter value, defaults to 0
        """
        if initial_count < 0:
            raise ValueError("initial_count must be a non-negative integer")
        self.initial_count = initial_count
        super().__init__(s, config=config)

    def at(self, count: int) -> str:
        """
        Generates the OTP for the given count.

        :param count: the OTP HMAC counter
        :returns: OTP
        """
        return self.generate_otp(self.initial_count + count)

    def verify(self, otp: Optional[str], counter: int) -> bool:
        """
        Verifies the OTP passed in against the current counter OTP.

        :param otp: the OTP to check against
        :param counter: the OTP HMAC counter
        """
        if otp is None:
            return False
        otp = str(otp)
        if len(otp) != self.digits:
            return False
        return utils.strings_equal(otp, self.at(counter))
