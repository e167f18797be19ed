"""
Tests for the turn controller, driven through a scripted display.
"""

import pytest

from logic.board import Board, Marker
from logic.cursor import Direction
from logic.errors import GameCancelled
from logic.match import MatchHistory
from logic.minimax import MinimaxEngine
from logic.turn_controller import TurnController, TurnState


def path_to(start, target):
    """Arrow presses that take the cursor from start to target."""
    row, col = divmod(start, 3)
    target_row, target_col = divmod(target, 3)
    moves = []
    if target_row > row:
        moves += [Direction.DOWN] * (target_row - row)
    else:
        moves += [Direction.UP] * (row - target_row)
    if target_col > col:
        moves += [Direction.RIGHT] * (target_col - col)
    else:
        moves += [Direction.LEFT] * (col - target_col)
    return moves


class FakeDisplay:
    """
    Records every call and plays back scripted input.

    ``directions`` are returned first. After that ``human_policy`` (a
    function of the board returning a cell) is turned into arrow presses
    and SELECT. With neither left, CANCEL is returned.
    """

    def __init__(self, directions=None, human_policy=None, first_player=Marker.HUMAN, play_again=()):
        self.directions = list(directions or [])
        self.human_policy = human_policy
        self.first_player = first_player
        self.play_again = list(play_again)

        self.calls = []
        self.cursor = None
        self.board = None
        self._pending = []

    def names(self):
        return [call[0] for call in self.calls]

    def start_game(self, board):
        self.board = board
        self.calls.append(("start_game",))

    def choose_first_player(self):
        self.calls.append(("choose_first_player",))
        return self.first_player

    def show_turn(self, marker):
        self.calls.append(("show_turn", marker))

    def render_move(self, index, marker):
        self.calls.append(("render_move", index, marker))

    def move_cursor(self, position):
        self.cursor = position
        self.calls.append(("move_cursor", position))

    def read_direction(self):
        if self.directions:
            return self.directions.pop(0)
        if self.human_policy is None:
            return Direction.CANCEL
        if not self._pending:
            target = self.human_policy(self.board)
            self._pending = path_to(self.cursor, target) + [Direction.SELECT]
        return self._pending.pop(0)

    def report_out_of_bounds(self):
        self.calls.append(("report_out_of_bounds",))

    def report_invalid_selection(self):
        self.calls.append(("report_invalid_selection",))

    def report_outcome(self, winner):
        self.calls.append(("report_outcome", winner))

    def report_score(self, history):
        self.calls.append(("report_score", history.games_played))

    def ask_play_again(self):
        self.calls.append(("ask_play_again",))
        return self.play_again.pop(0) if self.play_again else False


def optimal_human(board):
    return MinimaxEngine().best_move(board, Marker.HUMAN)


def lowest_cell(board):
    return board.legal_moves()[0]


def test_optimal_human_ties():
    for first in (Marker.HUMAN, Marker.COMPUTER):
        display = FakeDisplay(human_policy=optimal_human)
        controller = TurnController(display)

        winner = controller.play_game(first)

        assert winner is None
        assert controller.state == TurnState.TERMINAL
        assert controller.board.is_full()
        assert ("report_outcome", None) in display.calls
        assert controller.history.ties == 1


def test_weak_human_loses():
    display = FakeDisplay(human_policy=lowest_cell)
    controller = TurnController(display)

    winner = controller.play_game(Marker.HUMAN)

    assert winner == Marker.COMPUTER
    assert display.calls[-1] == ("report_outcome", Marker.COMPUTER)
    assert controller.history.computer_wins == 1


def test_taken_cell_is_reported_and_turn_retried():
    # Computer opens at 0, the human first tries 0 then takes 1
    display = FakeDisplay(
        directions=[
            Direction.UP, Direction.LEFT, Direction.SELECT,
            Direction.RIGHT, Direction.SELECT,
        ]
    )
    controller = TurnController(display)

    with pytest.raises(GameCancelled):
        controller.play_game(Marker.COMPUTER)

    assert display.names().count("report_invalid_selection") == 1
    assert controller.board[0] == Marker.COMPUTER
    assert controller.board[1] == Marker.HUMAN
    assert controller.board.cells.count(Marker.COMPUTER) == 2
    assert controller.state == TurnState.HUMAN_TURN


def test_out_of_bounds_is_reported_and_cursor_stays():
    display = FakeDisplay(directions=[Direction.UP, Direction.UP])
    controller = TurnController(display)

    with pytest.raises(GameCancelled):
        controller.play_game(Marker.HUMAN)

    assert display.names().count("report_out_of_bounds") == 1
    assert controller.cursor.position == 1
    assert display.cursor == 1
    assert controller.board == Board()
    assert controller.state == TurnState.HUMAN_TURN


def test_cursor_starts_in_center_each_human_turn():
    display = FakeDisplay(human_policy=optimal_human)
    controller = TurnController(display)
    controller.play_game(Marker.HUMAN)

    turn_starts = [
        display.calls[i + 1]
        for i, call in enumerate(display.calls)
        if call == ("show_turn", Marker.HUMAN)
    ]
    assert turn_starts
    assert all(call == ("move_cursor", 4) for call in turn_starts)


def test_every_move_is_rendered():
    display = FakeDisplay(human_policy=optimal_human)
    controller = TurnController(display)
    controller.play_game(Marker.COMPUTER)

    rendered = [call for call in display.calls if call[0] == "render_move"]
    assert len(rendered) == 9
    assert rendered[0] == ("render_move", 0, Marker.COMPUTER)
    for _, index, marker in rendered:
        assert controller.board[index] == marker


def test_first_player_is_asked_when_not_given():
    display = FakeDisplay(human_policy=optimal_human, first_player=Marker.COMPUTER)
    controller = TurnController(display)
    controller.play_game()

    assert "choose_first_player" in display.names()
    first_move = next(call for call in display.calls if call[0] == "render_move")
    assert first_move[2] == Marker.COMPUTER


def test_first_player_not_asked_when_given():
    display = FakeDisplay(human_policy=optimal_human)
    TurnController(display).play_game(Marker.HUMAN)
    assert "choose_first_player" not in display.names()


def test_fixed_number_of_games():
    display = FakeDisplay(human_policy=optimal_human)
    controller = TurnController(display)

    history = controller.play_match(Marker.COMPUTER, games=3)

    assert history.games_played == 3
    assert history.ties == 3
    assert [c for c in display.calls if c[0] == "report_score"] == [
        ("report_score", 1), ("report_score", 2), ("report_score", 3),
    ]
    assert "ask_play_again" not in display.names()


def test_match_until_player_stops():
    display = FakeDisplay(human_policy=optimal_human, play_again=[True, False])
    history = MatchHistory()
    controller = TurnController(display, history=history)

    result = controller.play_match(Marker.HUMAN)

    assert result is history
    assert history.games_played == 2
    assert display.names().count("ask_play_again") == 2
    # Each game starts on a fresh board
    assert display.names().count("start_game") == 2


def test_cancel_ends_the_match():
    display = FakeDisplay(directions=[Direction.CANCEL])
    controller = TurnController(display)

    with pytest.raises(GameCancelled):
        controller.play_match(Marker.HUMAN)

    assert controller.history.games_played == 0
    assert "report_score" not in display.names()


def test_invalid_state_transitions():
    controller = TurnController(FakeDisplay())

    with pytest.raises(RuntimeError):
        controller.step()

    controller.start(Marker.HUMAN)
    with pytest.raises(RuntimeError):
        controller.start(Marker.HUMAN)

    with pytest.raises(ValueError):
        controller.play_match(games=0)
