"""Pure-Python Keccak-256 as used by Ethereum.

This is the original Keccak submission, not the finalized NIST SHA3-256: the
two differ only in the padding byte (``0x01`` here, ``0x06`` for SHA-3) and
therefore produce different digests for the same input.
"""

from __future__ import annotations

from typing import List

RATE_BYTES = 136
DIGEST_BYTES = 32

_MASK = (1 << 64) - 1

_ROUND_CONSTANTS = (
    0x0000000000000001, 0x0000000000008082, 0x800000000000808A, 0x8000000080008000,
    0x000000000000808B, 0x0000000080000001, 0x8000000080008081, 0x8000000000008009,
    0x000000000000008A, 0x0000000000000088, 0x0000000080008009, 0x000000008000000A,
    0x000000008000808B, 0x800000000000008B, 0x8000000000008089, 0x8000000000008003,
    0x8000000000008002, 0x8000000000000080, 0x000000000000800A, 0x800000008000000A,
    0x8000000080008081, 0x8000000000008080, 0x0000000080000001, 0x8000000080008008,
)

# Rotation offsets indexed [x][y].
_ROTATIONS = (
    (0, 36, 3, 41, 18),
    (1, 44, 10, 45, 2),
    (62, 6, 43, 15, 61),
    (28, 55, 25, 21, 56),
    (27, 20, 39, 8, 14),
)


def _rotl(value: int, shift: int) -> int:
    if shift == 0:
        return value
    return ((value << shift) | (value >> (64 - shift))) & _MASK


def keccak_f1600(lanes: List[int]) -> None:
    """Apply the 24-round Keccak-f[1600] permutation in place.

    ``lanes`` holds 25 64-bit integers, lane (x, y) at index ``x + 5 * y``.
    """
    for round_constant in _ROUND_CONSTANTS:
        # theta
        columns = [
            lanes[x] ^ lanes[x + 5] ^ lanes[x + 10] ^ lanes[x + 15] ^ lanes[x + 20]
            for x in range(5)
        ]
        for x in range(5):
            delta = columns[(x - 1) % 5] ^ _rotl(columns[(x + 1) % 5], 1)
            for y in range(0, 25, 5):
                lanes[x + y] ^= delta

        # rho and pi
        shuffled = [0] * 25
        for x in range(5):
            for y in range(5):
                shuffled[y + 5 * ((2 * x + 3 * y) % 5)] = _rotl(lanes[x + 5 * y], _ROTATIONS[x][y])

        # chi
        for y in range(0, 25, 5):
            row = shuffled[y:y + 5]
            for x in range(5):
                lanes[x + y] = row[x] ^ ((~row[(x + 1) % 5] & _MASK) & row[(x + 2) % 5])

        # iota
        lanes[0] ^= round_constant


class Keccak256:
    """Incremental Keccak-256 hasher with a ``hashlib``-like interface."""

    name = "keccak-256"
    digest_size = DIGEST_BYTES
    block_size = RATE_BYTES

    def __init__(self, data: bytes = b"") -> None:
        self._lanes = [0] * 25
        self._buffer = bytearray()
        if data:
            self.update(data)

    def _absorb_block(self, block: bytes) -> None:
        for i in range(RATE_BYTES // 8):
            self._lanes[i] ^= int.from_bytes(block[8 * i:8 * i + 8], "little")
        keccak_f1600(self._lanes)

    def update(self, data: bytes) -> None:
        self._buffer.extend(data)
        while len(self._buffer) >= RATE_BYTES:
            self._absorb_block(bytes(self._buffer[:RATE_BYTES]))
            del self._buffer[:RATE_BYTES]

    def copy(self) -> "Keccak256":
        clone = Keccak256()
        clone._lanes = list(self._lanes)
        clone._buffer = bytearray(self._buffer)
        return clone

    def digest(self) -> bytes:
        """Return the digest of everything absorbed so far without consuming the state."""
        lanes = list(self._lanes)
        block = bytearray(self._buffer)
        block.append(0x01)
        block.extend(bytes(RATE_BYTES - len(block)))
        block[-1] |= 0x80

        for i in range(RATE_BYTES // 8):
            lanes[i] ^= int.from_bytes(block[8 * i:8 * i + 8], "little")
        keccak_f1600(lanes)

        output = b"".join(lane.to_bytes(8, "little") for lane in lanes[: DIGEST_BYTES // 8])
        return output[:DIGEST_BYTES]

    def hexdigest(self) -> str:
        return self.digest().hex()


def keccak256(data: bytes) -> bytes:
    """Return the 32-byte Keccak-256 digest of ``data``."""
    return Keccak256(data).digest()


__all__ = ["Keccak256", "keccak256", "keccak_f1600", "RATE_BYTES", "DIGEST_BYTES"]
