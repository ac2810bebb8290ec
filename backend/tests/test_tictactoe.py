import random

import pytest

from arcade.errors import IllegalEvent
from arcade.services.games.base import GAME_OVER, PLAYING
from arcade.services.games.tictactoe import (
    AI, HUMAN, TicTacToe, best_move, check_winner, choose_ai_move, minimax,
)

kernel = TicTacToe()


def start(difficulty='hard', seed='t'):
    state = kernel.initial_state(seed, {'difficulty': difficulty})
    return kernel.transition(state, {'type': 'start'}).state


def test_check_winner():
    assert check_winner(['X', 'X', 'X'] + [None] * 6) == 'X'
    assert check_winner(['O', None, None, None, 'O', None, None, None, 'O']) == 'O'
    assert check_winner(['X', 'O', 'X', 'X', 'O', 'O', 'O', 'X', 'X']) == 'draw'
    assert check_winner([None] * 9) is None


def test_minimax_utilities():
    ai_won = [AI, AI, AI, HUMAN, HUMAN, None, None, None, None]
    assert minimax(ai_won, 2, True, 9) == 8
    human_won = [HUMAN, HUMAN, HUMAN, AI, AI, None, None, None, None]
    assert minimax(human_won, 3, False, 9) == -7
    assert minimax([None] * 9, 9, True, 9) == 0


def test_ai_takes_the_win_and_blocks():
    board = [AI, AI, None, HUMAN, HUMAN, None, HUMAN, None, None]
    assert best_move(board, 9) == 2
    board = [HUMAN, HUMAN, None, None, AI, None, None, None, None]
    assert best_move(board, 9) == 2


def test_tie_break_is_first_best_in_scan_order():
    assert best_move([None] * 9, 9) == 0
    assert best_move([HUMAN] * 9, 9) == -1


def test_mistake_rate_zero_is_deterministic():
    board = [HUMAN, None, None, None, None, None, None, None, None]
    picks = {choose_ai_move(board, 'hard', random.Random(i)) for i in range(20)}
    assert picks == {best_move(board, 9)}


def _play_all(state, outcomes):
    for cell in range(9):
        if state['board'][cell] is not None:
            continue
        nxt = kernel.transition(state, {'type': 'move', 'cell': cell}).state
        if nxt['phase'] == GAME_OVER:
            outcomes.append(nxt['winner'])
        else:
            _play_all(nxt, outcomes)


def test_hard_ai_never_loses():
    outcomes = []
    _play_all(start('hard'), outcomes)
    assert outcomes
    assert HUMAN not in outcomes
    assert set(outcomes) <= {AI, 'draw'}


def test_scoring_and_streak():
    state = start('easy')
    state['board'] = [HUMAN, HUMAN, None, AI, AI, None, None, None, None]
    won = kernel.transition(state, {'type': 'move', 'cell': 2}).state
    assert won['winner'] == HUMAN
    assert won['score'] == 1 + 1
    assert won['streak'] == 1
    assert kernel.final_score(won) == 2

    again = kernel.transition(won, {'type': 'start'}).state
    assert again['phase'] == PLAYING
    assert again['score'] == 0
    assert again['streak'] == 1


def test_draw_scores_one():
    state = start('hard')
    state['board'] = [HUMAN, AI, HUMAN, HUMAN, AI, AI, AI, HUMAN, None]
    done = kernel.transition(state, {'type': 'move', 'cell': 8}).state
    assert done['winner'] == 'draw'
    assert done['score'] == 1


def test_illegal_moves():
    state = start()
    with pytest.raises(IllegalEvent):
        kernel.transition(state, {'type': 'move', 'cell': 9})
    state = kernel.transition(state, {'type': 'move', 'cell': 4}).state
    with pytest.raises(IllegalEvent):
        kernel.transition(state, {'type': 'move', 'cell': 4})
    with pytest.raises(IllegalEvent):
        kernel.transition(kernel.initial_state('x'), {'type': 'move', 'cell': 0})
