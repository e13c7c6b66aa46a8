"""Tests for the board model and the state arena."""

import pytest

from slidesolver.domains.puzzlen import DEFAULT_DIMENSION, EMPTY, NPuzzle
from slidesolver.domains.state import StateArena


class TestNPuzzle:

    def test_default_dimension(self):
        dom = NPuzzle()
        assert dom.N == DEFAULT_DIMENSION == 5
        assert dom.GOAL[-1] == EMPTY
        assert dom.GOAL[:-1] == tuple(range(24))

    def test_goal_position(self, puzzle3):
        assert puzzle3.goal_position(0) == (0, 0)
        assert puzzle3.goal_position(5) == (2, 1)
        assert puzzle3.goal_position(7) == (1, 2)

    def test_rows_round_trip(self, puzzle3, scenario_rows):
        board = puzzle3.from_rows(scenario_rows)
        assert board == (1, 2, EMPTY, 3, 4, 0, 6, 7, 5)
        assert puzzle3.to_rows(board) == scenario_rows

    @pytest.mark.parametrize("board,msg", [
        ((0, 1, 2, 3, 4, 5, 6, EMPTY), "cells"),
        ((0, 1, 2, 3, 4, 5, 6, EMPTY, EMPTY), "empty"),
        ((0, 1, 2, 3, 4, 5, 6, 6, EMPTY), "labels"),
        ((0, 1, 2, 3, 4, 5, 6, 9, EMPTY), "labels"),
    ])
    def test_validate_rejects_malformed(self, puzzle3, board, msg):
        with pytest.raises(ValueError, match=msg):
            puzzle3.validate(board)

    def test_neighbors_are_single_slides(self, puzzle3, scenario_rows):
        board = puzzle3.from_rows(scenario_rows)
        nbrs = puzzle3.neighbors(board)
        assert sorted(b for b, _ in nbrs) == sorted([
            (1, 2, 0, 3, 4, EMPTY, 6, 7, 5),
            (1, EMPTY, 2, 3, 4, 0, 6, 7, 5),
        ])
        assert all(c == 1 for _, c in nbrs)

    @pytest.mark.parametrize("n", [3, 4])
    def test_scramble_is_solvable_and_deterministic(self, n):
        dom = NPuzzle(n)
        for seed in range(10):
            s = dom.scramble(20, seed)
            dom.validate(s)
            assert dom.is_solvable(s)
            assert s == dom.scramble(20, seed)

    def test_swapped_tiles_unsolvable(self, puzzle3):
        assert not puzzle3.is_solvable((1, 0, 2, 3, 4, 5, 6, 7, EMPTY))


class TestStateArena:

    def test_root_view(self, arena3, puzzle3, scenario_rows):
        root = arena3.add_root(puzzle3.from_rows(scenario_rows))
        assert root.parent() is None
        assert root.depth == 0
        assert root.dimension == 3
        assert root.empty_position() == (2, 0)
        assert root.tile_at(2, 1) == 0
        assert root.tile_at(0, 2) == 6
        assert root.tile_at(2, 0) == EMPTY

    def test_add_root_validates(self, arena3):
        with pytest.raises(ValueError):
            arena3.add_root((0, 1, 2))

    def test_successors_link_parent(self, arena3, puzzle3):
        root = arena3.add_root(puzzle3.GOAL)
        children = root.successors()
        assert len(children) == 2
        for child in children:
            assert child.parent() == root
            assert child.depth == 1
            assert child.tile_at(*root.empty_position()) != EMPTY

    def test_successors_skip_undo(self, arena3, puzzle3):
        root = arena3.add_root(puzzle3.GOAL)
        child = root.successors()[0]
        assert all(g.board != root.board for g in child.successors())

    def test_memo(self, arena3, puzzle3, heuristic):
        root = arena3.add_root(puzzle3.GOAL)
        assert root.cached_base_value(heuristic) is None
        root.store_base_value(heuristic, 3)
        assert root.cached_base_value(heuristic) == 3

    def test_heuristic_value_stores_base(self, arena3, puzzle3, heuristic, scenario_rows):
        root = arena3.add_root(puzzle3.from_rows(scenario_rows))
        score = root.heuristic_value(heuristic)
        assert root.cached_base_value(heuristic) == score.base == 6
        assert root.heuristic_value(heuristic) is score

    def test_path(self, arena3, puzzle3):
        root = arena3.add_root(puzzle3.GOAL)
        child = root.successors()[0]
        grandchild = child.successors()[0]
        assert grandchild.path() == [root.board, child.board, grandchild.board]

    def test_mark_and_rollback(self, arena3, puzzle3):
        root = arena3.add_root(puzzle3.GOAL)
        mark = arena3.mark()
        root.successors()
        assert len(arena3) == 3
        arena3.rollback(mark)
        assert len(arena3) == 1
        with pytest.raises(IndexError):
            arena3.view(1)
        with pytest.raises(ValueError):
            arena3.rollback(5)

    def test_view_equality(self, arena3, puzzle3):
        root = arena3.add_root(puzzle3.GOAL)
        assert arena3.view(root.id) == root
        assert hash(arena3.view(root.id)) == hash(root)
        assert StateArena(puzzle3).add_root(puzzle3.GOAL) != root
