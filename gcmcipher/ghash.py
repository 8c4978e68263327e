"""GHASH universal hash over GF(2^128), as used by Galois/Counter Mode."""

from __future__ import annotations

BLOCK_SIZE = 16

# Reduction constant for x^128 + x^7 + x^2 + x + 1 in GCM's reflected bit order.
_R = 0xE1 << 120


def _gf_mult(x: int, y: int) -> int:
    """Multiply two field elements given as big-endian 128-bit integers."""
    z = 0
    v = y
    for bit in range(127, -1, -1):
        if (x >> bit) & 1:
            z ^= v
        v = (v >> 1) ^ _R if v & 1 else v >> 1
    return z


class GHash:
    """Incremental GHASH keyed by a 16-byte hash subkey."""

    __slots__ = ("_h", "_state")

    def __init__(self, key: bytes) -> None:
        key = bytes(key)
        if len(key) != BLOCK_SIZE:
            raise ValueError(f"GHASH key must be {BLOCK_SIZE} bytes, got {len(key)}")
        self._h = int.from_bytes(key, "big")
        self._state = 0

    def update_block(self, block: bytes) -> None:
        """Absorb exactly one 16-byte block."""
        block = bytes(block)
        if len(block) != BLOCK_SIZE:
            raise ValueError(f"GHASH block must be {BLOCK_SIZE} bytes, got {len(block)}")
        self._state = _gf_mult(self._state ^ int.from_bytes(block, "big"), self._h)

    def update_padded(self, data: bytes) -> None:
        """Absorb data, zero-padding the final partial block."""
        data = bytes(data)
        for start in range(0, len(data), BLOCK_SIZE):
            self.update_block(data[start:start + BLOCK_SIZE].ljust(BLOCK_SIZE, b"\x00"))

    def finalize(self) -> bytes:
        """Return the current 16-byte digest without altering the state."""
        return self._state.to_bytes(BLOCK_SIZE, "big")

    def copy(self) -> "GHash":
        """Return an independent copy of this hasher."""
        clone = GHash.__new__(GHash)
        clone._h = self._h
        clone._state = self._state
        return clone