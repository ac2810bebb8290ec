"""Reward tiers and the evaluator that picks the best tier a score earns.

The evaluator does not trust the order tiers are listed in: among the
tiers whose threshold the score meets, the one with the highest
``min_score`` wins. Ties on ``min_score`` go to more tokens, then to the
tier carrying a badge, then to the alphabetically first badge, so any
permutation of a tier list gives the same result.

Tokens only grow with the score when a table pays at least as much for a
higher threshold. ``load_tier_table`` enforces that for configured
tables; ``evaluate`` itself accepts any list.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional

from arcade.services.games.base import GameType


@dataclass(frozen=True)
class RewardTier:
    min_score: float
    tokens: int
    badge: Optional[str] = None

    @classmethod
    def from_dict(cls, data) -> 'RewardTier':
        return cls(
            min_score=data.get('min_score', data.get('minScore')),
            tokens=data['tokens'],
            badge=data.get('badge'),
        )

    def to_dict(self):
        out = {'minScore': self.min_score, 'tokens': self.tokens}
        if self.badge:
            out['badge'] = self.badge
        return out


@dataclass(frozen=True)
class BestReward:
    tokens: int = 0
    badge: Optional[str] = None

    def to_dict(self):
        out = {'tokens': self.tokens}
        if self.badge:
            out['badge'] = self.badge
        return out


NO_REWARD = BestReward()

DEFAULT_TIERS: Dict[GameType, List[RewardTier]] = {
    GameType.SNAKE: [
        RewardTier(50, 5),
        RewardTier(100, 10),
        RewardTier(200, 25),
        RewardTier(500, 50, 'Snake Master'),
    ],
    GameType.TRIVIA: [
        RewardTier(60, 10),
        RewardTier(80, 20),
        RewardTier(90, 50),
        RewardTier(100, 100, 'Trivia Champion'),
    ],
    GameType.TICTACTOE: [
        RewardTier(3, 3),
        RewardTier(5, 8),
        RewardTier(10, 20),
        RewardTier(25, 50, 'Strategy Master'),
    ],
}


def _rank(tier: RewardTier):
    return (tier.min_score, tier.tokens, tier.badge is not None, _reverse_text(tier.badge or ''))


def _reverse_text(text):
    # Larger key for alphabetically earlier badges
    return tuple(-ord(ch) for ch in text) + (1,)


def evaluate(score, tiers: Iterable[RewardTier]) -> BestReward:
    score = max(0, score)
    best = None
    for tier in tiers:
        if score >= tier.min_score and (best is None or _rank(tier) > _rank(best)):
            best = tier
    if best is None:
        return NO_REWARD
    return BestReward(tokens=best.tokens, badge=best.badge)


def load_tier_table(raw: Optional[Mapping]) -> Dict[GameType, List[RewardTier]]:
    """Build a tier table from config, falling back to the built-in one.

    Raises ValueError for unknown game types or for a table where a higher
    threshold pays fewer tokens than a lower one.
    """
    if raw is None:
        return {game: list(tiers) for game, tiers in DEFAULT_TIERS.items()}
    table = {}
    for key, tiers in raw.items():
        game = GameType.parse(key)
        if game is None:
            raise ValueError(f'Unknown game type in REWARD_TIERS: {key}')
        parsed = [t if isinstance(t, RewardTier) else RewardTier.from_dict(t) for t in tiers]
        ordered = sorted(parsed, key=_rank)
        for lower, higher in zip(ordered, ordered[1:]):
            if higher.tokens < lower.tokens:
                raise ValueError(
                    f'REWARD_TIERS[{key}]: {higher.min_score} pays less than {lower.min_score}'
                )
        table[game] = parsed
    return table


def tiers_for(table: Mapping[GameType, List[RewardTier]], game_type) -> List[RewardTier]:
    """Tiers for a game; games without a configured list earn nothing."""
    game = GameType.parse(getattr(game_type, 'value', game_type))
    return list(table.get(game, [])) if game else []
