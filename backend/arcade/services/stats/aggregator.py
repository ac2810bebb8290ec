"""Pure fold of final scores into cumulative player statistics.

``apply_score`` never touches the database; the repository loads a
``PlayerStats`` snapshot, folds one score into it and writes the result
back under the player's version counter.
"""

import copy
import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Dict, List, Optional, Tuple

from arcade.errors import ValidationError
from arcade.services.rewards.tiers import BestReward, RewardTier, evaluate


@dataclass
class GameStats:
    played: int = 0
    high_score: float = 0
    total_score: float = 0

    def to_dict(self):
        return {'played': self.played, 'highScore': self.high_score, 'totalScore': self.total_score}


@dataclass
class PlayerStats:
    total_score: float = 0
    games_played: int = 0
    highest_score: float = 0
    tokens_earned: int = 0
    nft_badges: List[str] = field(default_factory=list)
    last_played: Optional[int] = None
    game_stats: Dict[str, GameStats] = field(default_factory=dict)

    def to_dict(self):
        return {
            'totalScore': self.total_score,
            'gamesPlayed': self.games_played,
            'highestScore': self.highest_score,
            'tokensEarned': self.tokens_earned,
            'nftBadges': list(self.nft_badges),
            'lastPlayed': self.last_played,
            'gameStats': {game: gs.to_dict() for game, gs in self.game_stats.items()},
        }


def validate_score(value):
    """Return ``value`` if it is a finite real number, else raise ValidationError."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError('Score must be a number')
    try:
        finite = math.isfinite(value)
    except OverflowError:
        raise ValidationError('Score is out of range')
    if not finite:
        raise ValidationError('Score must be finite')
    return value


def apply_score(stats: PlayerStats, game_type, score, timestamp: int,
                tiers: List[RewardTier]) -> Tuple[PlayerStats, BestReward]:
    """Fold one completed game into ``stats``.

    Returns the new stats and the reward earned. ``stats`` is left as is.
    Negative scores count as 0 so totals never go down.
    """
    score = max(0, validate_score(score))
    game = getattr(game_type, 'value', game_type)
    reward = evaluate(score, tiers)

    out = copy.deepcopy(stats)
    out.games_played += 1
    out.total_score += score
    out.highest_score = max(out.highest_score, score)
    out.tokens_earned += reward.tokens
    if reward.badge and reward.badge not in out.nft_badges:
        out.nft_badges.append(reward.badge)
    out.last_played = timestamp

    bucket = out.game_stats.setdefault(game, GameStats())
    bucket.played += 1
    bucket.total_score += score
    bucket.high_score = max(bucket.high_score, score)
    return out, reward
