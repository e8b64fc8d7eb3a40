"""Base58 (Bitcoin alphabet) codec used for raw public-key address checks."""

from __future__ import annotations

import math

ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"

_INDEX = {char: value for value, char in enumerate(ALPHABET)}
_SIZE_FACTOR = math.log(58) / math.log(256)


class InvalidCharacterError(ValueError):
    """Raised when a string contains a character outside the Base58 alphabet."""

    def __init__(self, character: str, position: int) -> None:
        super().__init__(f"Invalid Base58 character {character!r} at position {position}")
        self.character = character
        self.position = position


def b58decode(text: str) -> bytes:
    """Decode a Base58 string into raw bytes.

    Every leading ``'1'`` maps to exactly one leading zero byte; the big-number
    conversion alone would drop them.
    """
    leading_zeros = 0
    for char in text:
        if char != "1":
            break
        leading_zeros += 1

    size = math.ceil(len(text) * _SIZE_FACTOR) + 1
    buffer = bytearray(size)

    for position, char in enumerate(text):
        value = _INDEX.get(char)
        if value is None:
            raise InvalidCharacterError(char, position)

        carry = value
        for i in range(size - 1, -1, -1):
            carry += 58 * buffer[i]
            buffer[i] = carry & 0xFF
            carry >>= 8

    start = 0
    while start < size and buffer[start] == 0:
        start += 1

    return bytes(leading_zeros) + bytes(buffer[start:])


def b58encode(data: bytes) -> str:
    """Encode raw bytes as a Base58 string."""
    leading_zeros = 0
    for byte in data:
        if byte != 0:
            break
        leading_zeros += 1

    number = int.from_bytes(data, "big")
    digits = []
    while number > 0:
        number, remainder = divmod(number, 58)
        digits.append(ALPHABET[remainder])

    return "1" * leading_zeros + "".join(reversed(digits))


__all__ = ["ALPHABET", "InvalidCharacterError", "b58decode", "b58encode"]
