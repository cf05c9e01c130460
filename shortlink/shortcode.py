"""Short code generation utilities."""

import re
import secrets
import string
from typing import Optional

from .errors import EntropyError


class ShortCodeGenerator:
    """Generate random hexadecimal short codes.

    Codes are drawn from the operating system's cryptographically strong
    random source. No collision check happens here; the store's unique
    index rejects a duplicate and the caller reports it as a conflict.
    """

    HEX_CHARS = string.digits + "abcdef"

    def __init__(self, default_length: int = 8):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes (even, at least 2)
        """
        self._check_length(default_length)
        self.default_length = default_length

    def generate(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Args:
            length: Number of hex characters (uses default if not specified)

        Returns:
            ``length`` lowercase hex characters, i.e. ``length / 2`` random bytes

        Raises:
            EntropyError: If the random source is unavailable
        """
        if length is None:
            length = self.default_length
        self._check_length(length)

        try:
            return secrets.token_hex(length // 2)
        except (NotImplementedError, OSError) as e:
            raise EntropyError(f"Random source unavailable: {e}") from e

    @staticmethod
    def _check_length(length: int) -> None:
        if length < 2 or length % 2:
            raise ValueError(f"Short code length must be an even number >= 2, got {length}")

    @staticmethod
    def is_valid_format(code: str, length: Optional[int] = None) -> bool:
        """Check if code looks like a generated code.

        Args:
            code: Code to validate
            length: Expected length, any positive length if not specified

        Returns:
            True if code is lowercase hex of the expected length
        """
        if length is not None and len(code) != length:
            return False
        return re.fullmatch(r"[0-9a-f]+", code) is not None
