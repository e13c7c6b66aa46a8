from __future__ import annotations
from typing import Dict, List, Sequence, Tuple
import random

Board = Tuple[int, ...]  # row-major, EMPTY marks the blank

EMPTY = -1
DEFAULT_DIMENSION = 5


class NPuzzle:
    """Generic N×N sliding-tile puzzle.

    Tiles are labelled 0..N*N-2 and EMPTY is the blank. Tile ``p`` belongs at
    column ``p % N``, row ``p // N``; the blank ends in the bottom-right cell.
    """
    def __init__(self, n: int = DEFAULT_DIMENSION):
        assert n >= 2
        self.N = n
        self.size = n * n
        self.GOAL: Board = tuple(range(self.size - 1)) + (EMPTY,)
        # Precompute neighbors for blank moves
        self._nei: Dict[int, Tuple[int, ...]] = {}
        for i in range(self.size):
            r, c = divmod(i, n)
            moves = []
            if r > 0:       moves.append(i - n)
            if r < n - 1:   moves.append(i + n)
            if c > 0:       moves.append(i - 1)
            if c < n - 1:   moves.append(i + 1)
            self._nei[i] = tuple(moves)

    def goal_position(self, label: int) -> Tuple[int, int]:
        """(col, row) where ``label`` sits in the goal board."""
        return label % self.N, label // self.N

    def blank_neighbors(self, index: int) -> Tuple[int, ...]:
        return self._nei[index]

    # ---------- Board helpers ----------
    def from_rows(self, rows: Sequence[Sequence[int]]) -> Board:
        board = tuple(t for row in rows for t in row)
        self.validate(board)
        return board

    def to_rows(self, board: Board) -> List[List[int]]:
        n = self.N
        return [list(board[r * n:(r + 1) * n]) for r in range(n)]

    def validate(self, board: Board) -> None:
        """Raise ValueError unless ``board`` is a permutation of the goal."""
        if len(board) != self.size:
            raise ValueError(f"Board has {len(board)} cells, expected {self.size} for N={self.N}")
        if board.count(EMPTY) != 1:
            raise ValueError(f"Board must contain exactly one empty cell, found {board.count(EMPTY)}")
        if sorted(board) != sorted(self.GOAL):
            raise ValueError(f"Board labels must be 0..{self.size - 2} each exactly once: {board}")

    # ---------- Core dynamics ----------
    def neighbors(self, s: Board) -> List[Tuple[Board, int]]:
        """Return list of (next_board, cost). Unit edge costs."""
        z = s.index(EMPTY)
        out: List[Tuple[Board, int]] = []
        for j in self._nei[z]:
            lst = list(s)
            lst[z], lst[j] = lst[j], lst[z]
            out.append((tuple(lst), 1))
        return out

    # ---------- Instance generation ----------
    def scramble(self, depth: int, seed: int) -> Board:
        """Depth-limited random walk from GOAL with no immediate backtrack."""
        rng = random.Random(seed)
        s = self.GOAL
        last_blank = None
        for _ in range(depth):
            z = s.index(EMPTY)
            cand = list(self._nei[z])
            if last_blank in cand and len(cand) > 1:
                cand.remove(last_blank)
            j = rng.choice(cand)
            lst = list(s)
            lst[z], lst[j] = lst[j], lst[z]
            last_blank = z
            s = tuple(lst)
        return s

    def is_solvable(self, s: Board) -> bool:
        """Solvability rules:
           - N odd: inversions must be even
           - N even: (inversions + blank_row_from_bottom) must be ODD
             (row count is 1-based from the bottom)
        """
        arr = [x for x in s if x != EMPTY]
        inv = 0
        for i in range(len(arr)):
            for j in range(i + 1, len(arr)):
                if arr[i] > arr[j]:
                    inv += 1
        if self.N % 2 == 1:
            return (inv % 2) == 0
        blank_row_top_idx = s.index(EMPTY) // self.N
        blank_row_from_bottom = self.N - blank_row_top_idx
        return ((inv + blank_row_from_bottom) % 2) == 1
