class OTPError(ValueError):
    """
    Base class for errors raised by otpcore.
    """


class InvalidConfiguration(OTPError):
    """
    Raised when digits, period or secret are unusable. Surfaced when the
    configuration or handler is built, never during verification.
    """


class UnsupportedAlgorithm(OTPError):
    """
    Raised when the requested HMAC digest is unknown or not available
    in the running interpreter's hashlib.
    """
