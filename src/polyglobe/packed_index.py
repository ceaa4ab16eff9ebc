"""Packed (seed face, lattice index) keys.

A packed index is a plain ``int``: the lattice index shifted left by five
bits, OR-ed with the seed-face id.  Keys are hashable, totally ordered and
dense enough to use directly as dict keys without a secondary lookup table.
"""

from __future__ import annotations

from typing import Tuple

from .errors import InvalidPackedIndex

FACE_BITS = 5
FACE_MASK = (1 << FACE_BITS) - 1
MAX_FACES = 1 << FACE_BITS


def pack(face_id: int, lattice_index: int) -> int:
    if not 0 <= face_id < MAX_FACES:
        raise InvalidPackedIndex(f"face id {face_id} outside [0, {MAX_FACES})")
    if lattice_index < 0:
        raise InvalidPackedIndex(f"lattice index must be >= 0, got {lattice_index}")
    return (lattice_index << FACE_BITS) | face_id


def face_of(packed: int) -> int:
    return packed & FACE_MASK


def lattice_of(packed: int) -> int:
    return packed >> FACE_BITS


def unpack(packed: int) -> Tuple[int, int]:
    """Return ``(face_id, lattice_index)``."""
    if packed < 0:
        raise InvalidPackedIndex(f"packed index must be >= 0, got {packed}")
    return face_of(packed), lattice_of(packed)
