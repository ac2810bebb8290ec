"""Chess-lite: hot-seat chess with pseudo-legal moves.

No check, castling, en passant or promotion. The game ends when a king is
captured; the capture is worth 1 point.
"""

from arcade.errors import IllegalEvent
from .base import PLAYING, GameKernel, GameType

BACK_RANK = ['r', 'n', 'b', 'q', 'k', 'b', 'n', 'r']

KNIGHT = [(-2, -1), (-2, 1), (-1, -2), (-1, 2), (1, -2), (1, 2), (2, -1), (2, 1)]
ROOK = [(1, 0), (-1, 0), (0, 1), (0, -1)]
BISHOP = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
QUEEN_KING = ROOK + BISHOP

KING_CAPTURE_POINTS = 1


def start_board():
    def piece(t, c):
        return {'t': t, 'c': c}

    board = [[None] * 8 for _ in range(8)]
    board[0] = [piece(t, 'b') for t in BACK_RANK]
    board[1] = [piece('p', 'b') for _ in range(8)]
    board[6] = [piece('p', 'w') for _ in range(8)]
    board[7] = [piece(t, 'w') for t in BACK_RANK]
    return board


def in_bounds(r, c) -> bool:
    return 0 <= r < 8 and 0 <= c < 8


def moves(board, r, c):
    """Pseudo-legal destinations for the piece on (r, c)."""
    p = board[r][c]
    if not p:
        return []
    out = []

    def open_or_enemy(nr, nc):
        target = board[nr][nc]
        return target is None or target['c'] != p['c']

    if p['t'] == 'p':
        step = -1 if p['c'] == 'w' else 1
        start_row = 6 if p['c'] == 'w' else 1
        if in_bounds(r + step, c) and board[r + step][c] is None:
            out.append((r + step, c))
            if r == start_row and board[r + 2 * step][c] is None:
                out.append((r + 2 * step, c))
        for dc in (-1, 1):
            nr, nc = r + step, c + dc
            if in_bounds(nr, nc) and board[nr][nc] and board[nr][nc]['c'] != p['c']:
                out.append((nr, nc))
    elif p['t'] in ('n', 'k'):
        for dr, dc in (KNIGHT if p['t'] == 'n' else QUEEN_KING):
            nr, nc = r + dr, c + dc
            if in_bounds(nr, nc) and open_or_enemy(nr, nc):
                out.append((nr, nc))
    else:
        vectors = {'r': ROOK, 'b': BISHOP, 'q': QUEEN_KING}[p['t']]
        for dr, dc in vectors:
            nr, nc = r + dr, c + dc
            while in_bounds(nr, nc) and board[nr][nc] is None:
                out.append((nr, nc))
                nr, nc = nr + dr, nc + dc
            if in_bounds(nr, nc) and open_or_enemy(nr, nc):
                out.append((nr, nc))
    return out


class ChessLite(GameKernel):
    game_type = GameType.CHESS
    title = 'Chess Mini'

    def new_game(self, state, rng):
        state['board'] = start_board()
        state['turn'] = 'w'
        state['winner'] = None
        state['captured'] = []
        state['phase'] = PLAYING

    def on_move(self, state, event, rng):
        self.require_phase(state, PLAYING)
        try:
            fr, fc = event['from']
            tr, tc = event['to']
        except (KeyError, TypeError, ValueError):
            raise IllegalEvent("move needs 'from' and 'to' as [row, col]")
        if not all(isinstance(v, int) for v in (fr, fc, tr, tc)) or not (in_bounds(fr, fc) and in_bounds(tr, tc)):
            raise IllegalEvent('Square off the board')

        board = state['board']
        piece = board[fr][fc]
        if piece is None or piece['c'] != state['turn']:
            raise IllegalEvent('No piece of the side to move on that square')
        if (tr, tc) not in moves(board, fr, fc):
            raise IllegalEvent('Illegal move')

        target = board[tr][tc]
        board[tr][tc] = piece
        board[fr][fc] = None
        state['turn'] = 'b' if state['turn'] == 'w' else 'w'
        effects = [{'type': 'moved', 'from': [fr, fc], 'to': [tr, tc]}]
        if target:
            state['captured'].append(target)
            effects.append({'type': 'captured', 'piece': target})
            if target['t'] == 'k':
                state['winner'] = piece['c']
                effects.append(self.finish(state, KING_CAPTURE_POINTS))
        return effects
