from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from slidesolver.domains.puzzlen import EMPTY, Board, NPuzzle

if TYPE_CHECKING:
    from slidesolver.heuristics.base import Heuristic
    from slidesolver.heuristics.score import PackedScore


@dataclass
class _Record:
    board: Board
    empty: int
    parent: Optional[int]
    depth: int
    memo: Dict["Heuristic", int] = field(default_factory=dict)
    scores: Dict["Heuristic", "PackedScore"] = field(default_factory=dict)


class StateArena:
    """
    Append-only store of search states for one board size.

    Every state is a record indexed by its integer id; a record knows its
    parent only by id, so chains of states never form reference cycles.
    Depth-first searches can drop everything created after a ``mark()``
    with ``rollback(mark)`` once a subtree has been explored.
    """
    def __init__(self, puzzle: NPuzzle):
        self.puzzle = puzzle
        self._records: List[_Record] = []

    @property
    def dimension(self) -> int:
        return self.puzzle.N

    def __len__(self) -> int:
        return len(self._records)

    def add_root(self, board: Board) -> "PuzzleState":
        board = tuple(board)
        self.puzzle.validate(board)
        self._records.append(_Record(board, board.index(EMPTY), None, 0))
        return PuzzleState(self, len(self._records) - 1)

    def add_child(self, parent_id: int, board: Board, empty: int) -> "PuzzleState":
        parent = self._records[parent_id]
        self._records.append(_Record(board, empty, parent_id, parent.depth + 1))
        return PuzzleState(self, len(self._records) - 1)

    def view(self, state_id: int) -> "PuzzleState":
        if not 0 <= state_id < len(self._records):
            raise IndexError(f"No state with id {state_id} (arena holds {len(self._records)})")
        return PuzzleState(self, state_id)

    def record(self, state_id: int) -> _Record:
        return self._records[state_id]

    def mark(self) -> int:
        return len(self._records)

    def rollback(self, mark: int) -> None:
        """Forget every state created after ``mark``. Views of them become invalid."""
        if mark > len(self._records):
            raise ValueError(f"Cannot roll back to {mark}: arena holds {len(self._records)} states")
        del self._records[mark:]


class PuzzleState:
    """Read-only view of one arena record."""
    __slots__ = ("arena", "id")

    def __init__(self, arena: StateArena, state_id: int):
        self.arena = arena
        self.id = state_id

    @property
    def _rec(self) -> _Record:
        return self.arena.record(self.id)

    @property
    def dimension(self) -> int:
        return self.arena.puzzle.N

    @property
    def board(self) -> Board:
        return self._rec.board

    @property
    def depth(self) -> int:
        return self._rec.depth

    def tile_at(self, col: int, row: int) -> int:
        return self._rec.board[row * self.arena.puzzle.N + col]

    def empty_index(self) -> int:
        return self._rec.empty

    def empty_position(self) -> Tuple[int, int]:
        row, col = divmod(self._rec.empty, self.arena.puzzle.N)
        return col, row

    def parent(self) -> Optional["PuzzleState"]:
        pid = self._rec.parent
        return None if pid is None else PuzzleState(self.arena, pid)

    def is_goal(self) -> bool:
        return self._rec.board == self.arena.puzzle.GOAL

    # ---------- per-heuristic memo ----------
    def cached_base_value(self, heuristic: "Heuristic") -> Optional[int]:
        return self._rec.memo.get(heuristic)

    def store_base_value(self, heuristic: "Heuristic", base: int) -> None:
        self._rec.memo[heuristic] = base

    def heuristic_value(self, heuristic: "Heuristic") -> "PackedScore":
        """Score this state once per heuristic and memoize its base value for the children."""
        rec = self._rec
        score = rec.scores.get(heuristic)
        if score is None:
            score = heuristic.evaluate(self)
            rec.memo[heuristic] = score.base
            rec.scores[heuristic] = score
        return score

    # ---------- transitions ----------
    def successors(self) -> List["PuzzleState"]:
        """One child per legal slide, except the slide that undoes the last move."""
        rec = self._rec
        back = None if rec.parent is None else self.arena.record(rec.parent).empty
        z = rec.empty
        out: List[PuzzleState] = []
        for j in self.arena.puzzle.blank_neighbors(z):
            if j == back:
                continue
            lst = list(rec.board)
            lst[z], lst[j] = lst[j], lst[z]
            out.append(self.arena.add_child(self.id, tuple(lst), j))
        return out

    def path(self) -> List[Board]:
        boards: List[Board] = []
        node: Optional[PuzzleState] = self
        while node is not None:
            boards.append(node.board)
            node = node.parent()
        boards.reverse()
        return boards

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PuzzleState) and other.arena is self.arena and other.id == self.id

    def __hash__(self) -> int:
        return hash((id(self.arena), self.id))

    def __repr__(self) -> str:
        return f"PuzzleState(id={self.id}, board={self._rec.board})"
