from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional, Protocol, Tuple

from slidesolver.heuristics.score import PackedScore


class PuzzleStateView(Protocol):
    """What a heuristic may read from a state."""
    dimension: int

    def tile_at(self, col: int, row: int) -> int: ...

    def empty_position(self) -> Tuple[int, int]: ...

    def parent(self) -> Optional["PuzzleStateView"]: ...

    def cached_base_value(self, heuristic: "Heuristic") -> Optional[int]: ...


class MissingMemoError(RuntimeError):
    """A child state was scored before its parent's base value was stored."""


class Heuristic(ABC):
    name = "heuristic"

    @abstractmethod
    def evaluate(self, state: PuzzleStateView) -> PackedScore:
        """Score ``state``. Must not mutate it."""

    def __call__(self, state: PuzzleStateView) -> PackedScore:
        return self.evaluate(state)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
