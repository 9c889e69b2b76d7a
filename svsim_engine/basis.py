"""Basis-state encoding.

Endianness: little-endian (qubit k = bit k of the state-vector index).
The integer value of a basis state IS its index in the amplitude array.

The module-level helpers work on Python ints and on numpy integer arrays,
so the kernels and ``BasisState`` share exactly one encoding.
"""
from __future__ import annotations

from dataclasses import dataclass


def get_bit(x, k: int):
    """Value (0/1) of bit k.  Bits beyond the register read as 0."""
    return (x >> k) & 1


def set_bit(x, k: int, v: int):
    """Copy of x with bit k forced to v."""
    return (x & ~(1 << k)) | (v << k)


def insert_bit(x, pos: int):
    """Open a zero bit at ``pos``; bits at positions >= pos move up one slot."""
    low = x & ((1 << pos) - 1)
    return ((x >> pos) << (pos + 1)) | low


def remove_bit(x, pos: int):
    """Inverse of :func:`insert_bit`: drop bit ``pos``, shift higher bits down."""
    low = x & ((1 << pos) - 1)
    return ((x >> (pos + 1)) << pos) | low


@dataclass(frozen=True, order=True)
class BasisState:
    """One joint assignment of qubit values, packed into an unsigned int."""

    state: int = 0

    def __post_init__(self):
        if self.state < 0:
            raise ValueError(f"basis state must be non-negative, got {self.state}")

    def __int__(self) -> int:
        return self.state

    def __index__(self) -> int:
        return self.state

    def get_bit(self, k: int) -> int:
        return get_bit(self.state, k)

    def set_bit(self, k: int, v: int) -> BasisState:
        return BasisState(set_bit(self.state, k, v))

    def insert(self, pos: int) -> BasisState:
        return BasisState(insert_bit(self.state, pos))

    def remove(self, pos: int) -> BasisState:
        return BasisState(remove_bit(self.state, pos))

    def ket(self, nqubit: int) -> str:
        """Fixed-width ket, qubit 0 first:  BasisState(1).ket(3) == '|100>'."""
        return "|" + "".join(str(self.get_bit(i)) for i in range(nqubit)) + ">"

    def __str__(self) -> str:
        return self.ket(max(self.state.bit_length(), 1))
