import base64
import binascii
import secrets
import unicodedata
from hmac import compare_digest
from typing import Optional, Sequence, Union

from .exceptions import InvalidConfiguration

BytesLike = Union[bytes, bytearray, memoryview]

BASE32_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"

_random = secrets.SystemRandom()


def strings_equal(s1: str, s2: str) -> bool:
    """
    Timing-attack resistant string comparison.

    Normal comparison using == will short-circuit on the first mismatching
    character. This avoids that by scanning the whole string, though we
    still reveal to a timing attack whether the strings are the same
    length.
    """
    s1 = unicodedata.normalize("NFKC", s1)
    s2 = unicodedata.normalize("NFKC", s2)
    return compare_digest(s1.encode("utf-8"), s2.encode("utf-8"))


def copy_secret(secret: Optional[BytesLike]) -> bytes:
    """
    Returns an immutable private copy of a caller-owned secret buffer.

    :raises InvalidConfiguration: if the secret is missing or empty
    """
    if secret is None:
        raise InvalidConfiguration("Secret key must be set")
    if isinstance(secret, str):
        raise InvalidConfiguration("Secret must be bytes; decode Base32 text with decode_base32() first")
    try:
        copied = bytes(memoryview(secret))
    except TypeError:
        raise InvalidConfiguration("Secret must be a bytes-like object") from None
    if not copied:
        raise InvalidConfiguration("Secret key must not be empty")
    return copied


def random_secret(length: int = 20) -> bytes:
    """
    Generates a random shared secret; 20 bytes (160 bits) by default.
    """
    if length < 16:
        raise ValueError("Secrets should be at least 128 bits")
    return secrets.token_bytes(length)


def random_base32(length: int = 32, chars: Sequence[str] = BASE32_ALPHABET) -> str:
    # Note: the otpauth scheme DOES NOT use base32 padding for secret lengths not divisible by 8.
    if length < 32:
        raise ValueError("Secrets should be at least 160 bits")

    return "".join(_random.choice(chars) for _ in range(length))


def decode_base32(text: str) -> bytes:
    """
    Decodes a Base32 secret as shown by authenticator apps: case-insensitive,
    spaces allowed, padding optional.

    :raises InvalidConfiguration: if the text is not valid Base32
    """
    secret = "".join(text.split()).upper()
    missing_padding = len(secret) % 8
    if missing_padding != 0:
        secret += "=" * (8 - missing_padding)
    try:
        decoded = base64.b32decode(secret, casefold=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidConfiguration("Secret is not valid Base32") from e
    if not decoded:
        raise InvalidConfiguration("Secret key must not be empty")
    return decoded
