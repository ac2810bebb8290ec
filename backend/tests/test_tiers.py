import itertools

import pytest

from arcade.services.games.base import GameType
from arcade.services.rewards.tiers import (
    DEFAULT_TIERS, NO_REWARD, BestReward, RewardTier, evaluate, load_tier_table, tiers_for,
)

SNAKE = DEFAULT_TIERS[GameType.SNAKE]


@pytest.mark.parametrize('score,tokens,badge', [
    (150, 10, None),
    (49, 0, None),
    (50, 5, None),
    (200, 25, None),
    (499, 25, None),
    (500, 50, 'Snake Master'),
    (10_000, 50, 'Snake Master'),
    (-30, 0, None),
])
def test_snake_tiers(score, tokens, badge):
    assert evaluate(score, SNAKE) == BestReward(tokens, badge)


def test_no_tiers_means_no_reward():
    assert evaluate(1000, []) == NO_REWARD
    assert NO_REWARD.to_dict() == {'tokens': 0}


def test_order_independent():
    for perm in itertools.permutations(SNAKE):
        for score in (0, 49, 50, 99, 100, 150, 200, 500, 900):
            assert evaluate(score, perm) == evaluate(score, SNAKE)


def test_equal_thresholds_prefer_more_tokens():
    tiers = [RewardTier(10, 3), RewardTier(10, 7), RewardTier(10, 5)]
    for perm in itertools.permutations(tiers):
        assert evaluate(10, perm).tokens == 7


def test_equal_thresholds_and_tokens_prefer_badge():
    tiers = [RewardTier(10, 5, 'Zeta'), RewardTier(10, 5), RewardTier(10, 5, 'Alpha')]
    for perm in itertools.permutations(tiers):
        assert evaluate(10, perm) == BestReward(5, 'Alpha')


def test_monotone_in_score():
    for tiers in DEFAULT_TIERS.values():
        previous = -1
        for score in range(-5, 700):
            tokens = evaluate(score, tiers).tokens
            assert tokens >= previous
            previous = tokens


def test_negative_threshold_matches_clamped_score():
    tiers = [RewardTier(-10, 1)]
    assert evaluate(-50, tiers).tokens == 1


def test_load_tier_table_defaults_and_override():
    table = load_tier_table(None)
    assert set(table) == {GameType.SNAKE, GameType.TRIVIA, GameType.TICTACTOE}

    table = load_tier_table({'memory': [{'minScore': 20, 'tokens': 2}, {'min_score': 60, 'tokens': 6}]})
    assert tiers_for(table, 'memory') == [RewardTier(20, 2), RewardTier(60, 6)]
    assert tiers_for(table, 'snake') == []
    assert tiers_for(table, 'not-a-game') == []


def test_load_tier_table_rejects_bad_tables():
    with pytest.raises(ValueError):
        load_tier_table({'pong': [{'minScore': 1, 'tokens': 1}]})
    with pytest.raises(ValueError):
        load_tier_table({'snake': [{'minScore': 10, 'tokens': 5}, {'minScore': 20, 'tokens': 1}]})


def test_tier_to_dict_is_camel_case():
    assert RewardTier(500, 50, 'Snake Master').to_dict() == {'minScore': 500, 'tokens': 50, 'badge': 'Snake Master'}
