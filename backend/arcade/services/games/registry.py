from typing import Dict

from .base import GameKernel, GameType
from .chess import ChessLite
from .flappy import FlappyBird
from .game2048 import Game2048
from .memory import MemoryMatch
from .puzzle15 import FifteenPuzzle
from .rps import RockPaperScissors
from .simon import SimonSays
from .snake import Snake
from .sudoku import Sudoku
from .tictactoe import TicTacToe
from .trivia import Trivia

KERNELS: Dict[GameType, GameKernel] = {
    kernel.game_type: kernel
    for kernel in (
        Snake(), Trivia(), TicTacToe(), MemoryMatch(), RockPaperScissors(),
        FlappyBird(), FifteenPuzzle(), SimonSays(), Sudoku(), ChessLite(), Game2048(),
    )
}


def get_kernel(game_type) -> GameKernel:
    return KERNELS[GameType(game_type)]
