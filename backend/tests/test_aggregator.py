import math

import pytest

from arcade.errors import ValidationError
from arcade.services.games.base import GameType
from arcade.services.rewards.tiers import DEFAULT_TIERS
from arcade.services.stats.aggregator import PlayerStats, apply_score, validate_score

SNAKE = DEFAULT_TIERS[GameType.SNAKE]


def test_first_score_builds_stats():
    stats, reward = apply_score(PlayerStats(), 'snake', 150, 1000, SNAKE)
    assert reward.tokens == 10
    assert stats.games_played == 1
    assert stats.total_score == 150
    assert stats.highest_score == 150
    assert stats.tokens_earned == 10
    assert stats.last_played == 1000
    assert stats.game_stats['snake'].played == 1
    assert stats.game_stats['snake'].high_score == 150


def test_input_stats_are_not_mutated():
    before = PlayerStats()
    apply_score(before, 'snake', 600, 1, SNAKE)
    assert before == PlayerStats()


def test_n_submissions_are_linear():
    stats = PlayerStats()
    scores = [10, 75, 150, 40, 220]
    for i, score in enumerate(scores):
        stats, _ = apply_score(stats, GameType.SNAKE, score, i, SNAKE)
    assert stats.games_played == len(scores)
    assert stats.total_score == sum(scores)
    assert stats.highest_score == max(scores)
    assert stats.tokens_earned == 0 + 5 + 10 + 0 + 25
    assert stats.last_played == len(scores) - 1


def test_badge_is_added_once_and_keeps_order():
    stats = PlayerStats(nft_badges=['First Steps'])
    stats, reward = apply_score(stats, 'snake', 550, 1, SNAKE)
    assert reward.badge == 'Snake Master'
    stats, _ = apply_score(stats, 'snake', 800, 2, SNAKE)
    assert stats.nft_badges == ['First Steps', 'Snake Master']
    assert stats.tokens_earned == 100


def test_unconfigured_game_earns_nothing_but_counts():
    stats, reward = apply_score(PlayerStats(), 'memory', 80, 5, [])
    assert reward.tokens == 0
    assert stats.games_played == 1
    assert stats.game_stats['memory'].total_score == 80


def test_negative_score_never_decrements():
    stats, _ = apply_score(PlayerStats(), 'snake', 100, 1, SNAKE)
    stats, reward = apply_score(stats, 'snake', -40, 2, SNAKE)
    assert reward.tokens == 0
    assert stats.total_score == 100
    assert stats.games_played == 2


def test_per_game_buckets_are_separate():
    stats, _ = apply_score(PlayerStats(), 'snake', 100, 1, SNAKE)
    stats, _ = apply_score(stats, 'trivia', 85, 2, DEFAULT_TIERS[GameType.TRIVIA])
    assert stats.game_stats['snake'].total_score == 100
    assert stats.game_stats['trivia'].total_score == 85
    assert stats.tokens_earned == 10 + 20
    assert stats.to_dict()['gameStats']['trivia'] == {'played': 1, 'highScore': 85, 'totalScore': 85}


@pytest.mark.parametrize('bad', ['12', None, True, math.nan, math.inf, [3]])
def test_validate_score_rejects_non_numbers(bad):
    with pytest.raises(ValidationError):
        validate_score(bad)


def test_validate_score_accepts_numbers():
    assert validate_score(12) == 12
    assert validate_score(12.5) == 12.5
