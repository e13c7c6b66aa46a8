from __future__ import annotations
from dataclasses import dataclass
from functools import total_ordering
from typing import Tuple

BASE_BITS = 16
BASE_MASK = (1 << BASE_BITS) - 1


def pack(base: int, penalty: int) -> int:
    """Manhattan base in the low 16 bits, linear-conflict penalty above them."""
    if base < 0 or penalty < 0:
        raise ValueError(f"Score fields must be non-negative (base={base}, penalty={penalty})")
    if base > BASE_MASK:
        raise ValueError(f"Base value {base} does not fit in {BASE_BITS} bits; widen the packing for this board size")
    return base | (penalty << BASE_BITS)


def unpack(value: int) -> Tuple[int, int]:
    if value < 0:
        raise ValueError(f"Packed score must be non-negative, got {value}")
    return value & BASE_MASK, value >> BASE_BITS


@total_ordering
@dataclass(frozen=True)
class PackedScore:
    """
    Result of one heuristic evaluation.

    ``base`` is the Manhattan distance, ``penalty`` twice the number of
    linear-conflict pairs. ``total`` is the admissible estimate used as h in
    f = g + h. Scores compare like their packed integers, i.e. by penalty
    first and base second.
    """
    base: int
    penalty: int = 0

    def __post_init__(self):
        pack(self.base, self.penalty)

    @property
    def total(self) -> int:
        return self.base + self.penalty

    @property
    def packed(self) -> int:
        return self.base | (self.penalty << BASE_BITS)

    @classmethod
    def from_packed(cls, value: int) -> "PackedScore":
        base, penalty = unpack(value)
        return cls(base, penalty)

    def __int__(self) -> int:
        return self.packed

    def __lt__(self, other):
        if not isinstance(other, PackedScore):
            return NotImplemented
        return self.packed < other.packed
