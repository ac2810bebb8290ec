"""Tic-tac-toe against a minimax opponent.

The human plays X and always moves first; the AI plays O. Difficulty
selects the search horizon and a "mistake rate", the probability that the
AI plays a uniformly random legal move instead of the searched one:

    easy    depth 3, 30% random
    medium  depth 6, 10% random
    hard    depth 9 (full game), never random

Terminal utility seen from the AI is ``10 - depth`` for an AI win,
``depth - 10`` for a human win and 0 for a draw or a depth cutoff, so the
AI prefers quick wins and slow losses. Among equally good moves the first
empty cell in board order wins. With depth 9 and no mistakes the AI never
loses.
"""

import functools
from typing import List, Optional, Sequence

from arcade.errors import IllegalEvent
from .base import PLAYING, GameKernel, GameType

HUMAN = 'X'
AI = 'O'
DRAW = 'draw'

WIN_PATTERNS = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),             # diagonals
)

# difficulty -> (max search depth, mistake rate)
AI_LEVELS = {
    'easy': (3, 0.3),
    'medium': (6, 0.1),
    'hard': (9, 0.0),
}

WIN_POINTS = {'easy': 1, 'medium': 3, 'hard': 5}
DRAW_POINTS = 1


def check_winner(board: Sequence[Optional[str]]) -> Optional[str]:
    """Return 'X', 'O', 'draw' or None while the game is still open."""
    for a, b, c in WIN_PATTERNS:
        if board[a] and board[a] == board[b] == board[c]:
            return board[a]
    if all(cell is not None for cell in board):
        return DRAW
    return None


def available_moves(board: Sequence[Optional[str]]) -> List[int]:
    return [i for i, cell in enumerate(board) if cell is None]


@functools.lru_cache(maxsize=None)
def _minimax(board: tuple, depth: int, maximizing: bool, max_depth: int) -> int:
    winner = check_winner(board)
    if winner == AI:
        return 10 - depth
    if winner == HUMAN:
        return depth - 10
    if winner == DRAW or depth >= max_depth:
        return 0

    mark = AI if maximizing else HUMAN
    scores = []
    for i in available_moves(board):
        child = board[:i] + (mark,) + board[i + 1:]
        scores.append(_minimax(child, depth + 1, not maximizing, max_depth))
    return max(scores) if maximizing else min(scores)


def minimax(board: Sequence[Optional[str]], depth: int, maximizing: bool, max_depth: int) -> int:
    return _minimax(tuple(board), depth, maximizing, max_depth)


def best_move(board: Sequence[Optional[str]], max_depth: int) -> int:
    """Searched move for O, or -1 on a full board."""
    best_score = None
    best = -1
    for move in available_moves(board):
        child = list(board)
        child[move] = AI
        score = minimax(child, 0, False, max_depth)
        if best_score is None or score > best_score:
            best_score = score
            best = move
    return best


def choose_ai_move(board: Sequence[Optional[str]], difficulty: str, rng) -> int:
    moves = available_moves(board)
    if not moves:
        return -1
    max_depth, mistake_rate = AI_LEVELS[difficulty]
    if mistake_rate and rng.random() < mistake_rate:
        return rng.choice(moves)
    return best_move(board, max_depth)


class TicTacToe(GameKernel):
    game_type = GameType.TICTACTOE
    title = 'Tic-Tac-Toe'
    default_options = {'difficulty': 'medium', 'streak': 0}

    def new_game(self, state, rng):
        state['board'] = [None] * 9
        state['current'] = HUMAN
        state['winner'] = None
        state.setdefault('streak', int(state['options'].get('streak') or 0))
        state['phase'] = PLAYING

    def on_move(self, state, event, rng):
        self.require_phase(state, PLAYING)
        cell = event.get('cell')
        if not isinstance(cell, int) or not 0 <= cell < 9:
            raise IllegalEvent('cell must be an integer 0-8')
        board = state['board']
        if board[cell] is not None:
            raise IllegalEvent('Cell already taken')

        board[cell] = HUMAN
        effects = [{'type': 'placed', 'mark': HUMAN, 'cell': cell}]
        result = check_winner(board)
        if result:
            effects.append(self._end(state, result))
            return effects

        ai_cell = choose_ai_move(board, state['options']['difficulty'], rng)
        board[ai_cell] = AI
        effects.append({'type': 'placed', 'mark': AI, 'cell': ai_cell})
        result = check_winner(board)
        if result:
            effects.append(self._end(state, result))
        else:
            state['current'] = HUMAN
        return effects

    def _end(self, state, result):
        state['winner'] = result
        difficulty = state['options']['difficulty']
        if result == HUMAN:
            state['streak'] += 1
            score = WIN_POINTS[difficulty] + state['streak']
        elif result == AI:
            state['streak'] = 0
            score = 0
        else:
            score = DRAW_POINTS
        return self.finish(state, score)
