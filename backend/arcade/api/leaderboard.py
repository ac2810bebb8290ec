from flask import Blueprint, jsonify, request, current_app

from arcade.api.payloads import json_object
from arcade.errors import ValidationError
from arcade.services.games.base import GameType
from arcade.services.leaderboard import current_leaderboard
from arcade.services.rewards.issuance import enqueue_rewards
from arcade.services.stats.aggregator import validate_score
from arcade.services.stats.repository import PlayerStatsRepository

leaderboard = Blueprint('leaderboard', __name__)


@leaderboard.route('', methods=['GET'])
def get_leaderboard():
    limit = request.args.get('limit', type=int)
    entries = current_leaderboard(limit=limit if limit and limit > 0 else None)
    return jsonify({'leaderboard': [e.to_dto() for e in entries]})


@leaderboard.route('/submit', methods=['POST'])
def submit_score():
    data = json_object()
    address = data.get('address')
    score = data.get('score')
    if not address or score is None:
        raise ValidationError('Address and score are required')
    validate_score(score)
    game = GameType.parse(data.get('gameType'))
    if game is None:
        raise ValidationError(f"Unknown game type: {data.get('gameType')}")

    # Rewards are recomputed from the tier table; client figures are informational
    claimed_tokens = data.get('tokensEarned')
    claimed_badges = data.get('badgesAwarded')

    repo = PlayerStatsRepository.from_app(current_app)
    result = repo.submit_score(address, game, score, display_name=data.get('displayName'))
    if claimed_tokens is not None and claimed_tokens != result.reward.tokens:
        try:
            current_app.logger.info(
                f"[score-claim-mismatch] address={address} claimed={claimed_tokens} "
                f"awarded={result.reward.tokens} badges={claimed_badges}"
            )
        except Exception:
            pass
    attempts = enqueue_rewards(current_app._get_current_object(), result)

    return jsonify({
        'success': True,
        'message': 'Score submitted successfully',
        'reward': result.reward.to_dict(),
        'stats': result.stats.to_dict(),
        'rewardAttempts': [a.to_dict() for a in attempts],
    })
