"""
Tests for the minimax engine.
"""

from functools import lru_cache

import pytest

from logic.board import Board, Marker
from logic.errors import NoLegalMovesError
from logic.minimax import MinimaxEngine

X, O, _ = Marker.COMPUTER, Marker.HUMAN, None


@pytest.fixture(params=[True, False], ids=["depth-weighted", "unit-scores"])
def engine(request):
    return MinimaxEngine(depth_weighted=request.param)


# ==================== REFERENCE VALUE ====================
# Independent minimax over plain tuples: +1 computer wins, -1 human wins.

_LINES = ((0, 1, 2), (3, 4, 5), (6, 7, 8), (0, 3, 6), (1, 4, 7), (2, 5, 8), (0, 4, 8), (2, 4, 6))


@lru_cache(maxsize=None)
def reference_value(cells, to_move):
    for a, b, c in _LINES:
        if cells[a] is not None and cells[a] == cells[b] == cells[c]:
            return 1 if cells[a] == X else -1
    empties = [i for i, cell in enumerate(cells) if cell is None]
    if not empties:
        return 0

    values = []
    for i in empties:
        child = cells[:i] + (to_move,) + cells[i + 1:]
        values.append(reference_value(child, to_move.opposite()))
    return max(values) if to_move == X else min(values)


# ==================== CONCRETE POSITIONS ====================

def test_blocks_middle_column(engine):
    board = Board.from_cells([_, _, X, X, O, O, _, O, X])
    move = engine.best_move(board, Marker.COMPUTER)
    assert move == 1

    board.place(move, Marker.COMPUTER)
    assert board.cells == (_, X, X, X, O, O, _, O, X)


def test_empty_board_picks_lowest_index(engine):
    assert engine.best_move(Board(), Marker.COMPUTER) == 0


def test_takes_diagonal_win(engine):
    board = Board.from_cells([X, O, X, O, X, O, _, _, _])
    assert engine.best_move(board, Marker.COMPUTER) == 6


@pytest.mark.parametrize(
    "cells, expected",
    [
        ([X, _, _, _, O, _, _, O, _], 1),
        ([X, X, O, _, O, _, X, O, _], 3),
        ([X, O, O, X, _, O, _, _, _], 6),
    ],
)
def test_known_positions(engine, cells, expected):
    assert engine.best_move(Board.from_cells(cells), Marker.COMPUTER) == expected


def test_plays_for_the_human_too(engine):
    # Computer threatens the top row, the human has to block
    board = Board.from_cells([X, X, _, _, O, _, _, _, _])
    assert engine.best_move(board, Marker.HUMAN) == 2


def test_prefers_immediate_win_when_depth_weighted():
    # Both 6 and 7 win for the computer, but 7 only wins a move later
    board = Board.from_cells([X, O, X, O, X, O, _, _, _])
    engine = MinimaxEngine(depth_weighted=True)
    root = engine.expand(board, Marker.COMPUTER)
    engine.score(root)

    scores = {index: child.score for index, child in root.children.items()}
    assert scores[6] == scores[8] == 3
    assert 0 < scores[7] < scores[6]


def test_board_is_not_modified(engine):
    board = Board.from_cells([X, _, _, _, O, _, _, O, _])
    before = board.copy()
    engine.best_move(board, Marker.COMPUTER)
    assert board == before


@pytest.mark.parametrize(
    "cells",
    [
        [X, X, X, O, O, _, _, _, _],
        [X, O, X, X, O, O, O, X, X],
    ],
)
def test_finished_board_has_no_moves(engine, cells):
    with pytest.raises(NoLegalMovesError):
        engine.best_move(Board.from_cells(cells), Marker.COMPUTER)


# ==================== TREE ====================

def test_root_has_one_child_per_legal_move():
    engine = MinimaxEngine()
    root = engine.expand(Board.from_cells([_, _, X, X, O, O, _, O, X]), Marker.COMPUTER)

    assert list(root.children) == [0, 1, 6]
    assert all(child.to_move == Marker.HUMAN for child in root.children.values())
    assert root.score is None


def test_child_scores_depth_weighted():
    engine = MinimaxEngine(depth_weighted=True)
    root = engine.expand(Board.from_cells([_, _, X, X, O, O, _, O, X]), Marker.COMPUTER)

    assert engine.score(root) == 0
    assert {i: c.score for i, c in root.children.items()} == {0: -2, 1: 0, 6: -2}


def test_child_scores_unit():
    engine = MinimaxEngine(depth_weighted=False)
    root = engine.expand(Board.from_cells([_, _, X, X, O, O, _, O, X]), Marker.COMPUTER)

    assert engine.score(root) == 0
    assert {i: c.score for i, c in root.children.items()} == {0: -1, 1: 0, 6: -1}


def test_shared_positions_shrink_the_tree():
    board = Board.from_cells([_, _, X, X, O, O, _, O, X])

    plain = MinimaxEngine(share_transpositions=False)
    plain.expand(board, Marker.COMPUTER)
    shared = MinimaxEngine(share_transpositions=True)
    shared.expand(board, Marker.COMPUTER)

    assert plain.last_search_size == 14
    assert shared.last_search_size == 12


@pytest.mark.parametrize(
    "cells, to_move",
    [
        ([X, _, _, _, O, _, _, _, _], Marker.HUMAN),
        ([_, O, _, _, X, _, _, _, _], Marker.HUMAN),
        ([O, _, _, _, X, _, _, _, O], Marker.COMPUTER),
        ([_, _, X, X, O, O, _, O, X], Marker.COMPUTER),
    ],
)
def test_sharing_does_not_change_the_move(cells, to_move):
    board = Board.from_cells(cells)
    plain = MinimaxEngine(share_transpositions=False).best_move(board, to_move)
    shared = MinimaxEngine(share_transpositions=True).best_move(board, to_move)
    assert plain == shared


# ==================== NEVER LOSES ====================

def _explore(engine, board, to_move, outcomes):
    """Play every human reply against the engine, recording the winners."""
    if board.is_terminal():
        outcomes.append(board.winner())
        return

    if to_move == Marker.COMPUTER:
        child = board.copy()
        child.place(engine.best_move(board, Marker.COMPUTER), Marker.COMPUTER)
        _explore(engine, child, Marker.HUMAN, outcomes)
        return

    for index in board.legal_moves():
        child = board.copy()
        child.place(index, Marker.HUMAN)
        _explore(engine, child, Marker.COMPUTER, outcomes)


@pytest.mark.parametrize("first", [Marker.HUMAN, Marker.COMPUTER])
def test_never_loses_against_any_human(engine, first):
    outcomes = []
    _explore(engine, Board(), first, outcomes)

    assert outcomes
    assert Marker.HUMAN not in outcomes


def test_move_keeps_the_position_value():
    """Every computer move after three plies keeps the best reachable result."""
    engine = MinimaxEngine()
    seen = set()
    checked = 0
    for h1 in range(9):
        for c1 in range(9):
            for h2 in range(9):
                if len({h1, c1, h2}) < 3:
                    continue
                board = Board()
                board.place(h1, Marker.HUMAN)
                board.place(c1, Marker.COMPUTER)
                board.place(h2, Marker.HUMAN)
                if board.cells in seen:
                    continue
                seen.add(board.cells)

                value = reference_value(board.cells, Marker.COMPUTER)
                move = engine.best_move(board, Marker.COMPUTER)
                board.place(move, Marker.COMPUTER)
                assert reference_value(board.cells, Marker.HUMAN) == value
                checked += 1

    # Two human cells (unordered) and one computer cell
    assert checked == 36 * 7


@pytest.mark.parametrize("first", [Marker.HUMAN, Marker.COMPUTER])
def test_optimal_play_is_a_tie(engine, first):
    board = Board()
    to_move = first
    while not board.is_terminal():
        board.place(engine.best_move(board, to_move), to_move)
        to_move = to_move.opposite()

    assert board.winner() is None
    assert board.is_full()
