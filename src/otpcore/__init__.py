import logging

from .config import Algorithm as Algorithm
from .config import Config as Config
from .config import config_from_env as config_from_env
from .config import make_config as make_config
from .exceptions import InvalidConfiguration as InvalidConfiguration
from .exceptions import OTPError as OTPError
from .exceptions import UnsupportedAlgorithm as UnsupportedAlgorithm
from .hotp import HOTP as HOTP
from .otp import OTP as OTP
from .otp import compute as compute
from .totp import TOTP as TOTP
from .totp import generate_at as generate_at
from .totp import now as now
from .totp import verify as verify
from .utils import decode_base32 as decode_base32
from .utils import random_base32 as random_base32
from .utils import random_secret as random_secret

logging.getLogger(__name__).addHandler(logging.NullHandler())
