from flask import Blueprint, jsonify, current_app

from arcade.errors import NotFound
from arcade.models import RewardAttempt
from arcade.services.rewards.catalog import BADGE_CATALOG, badge_metadata
from arcade.services.rewards.issuance import retry_attempt
from arcade.services.stats.repository import PlayerStatsRepository

rewards = Blueprint('rewards', __name__)


@rewards.route('/rewards/<string:address>', methods=['GET'])
def list_rewards(address):
    player = PlayerStatsRepository.get_player(address)
    if player is None:
        raise NotFound('Player not found')
    attempts = (
        RewardAttempt.query.filter_by(player_id=player.id)
        .populate_existing()
        .order_by(RewardAttempt.created_at.desc(), RewardAttempt.id.desc())
        .all()
    )
    confirmed = sum(a.amount or 0 for a in attempts if a.kind == 'token' and a.status == 'confirmed')
    pending = sum(a.amount or 0 for a in attempts if a.kind == 'token' and a.status == 'pending')
    return jsonify({
        'address': address,
        'confirmedTokens': confirmed,
        'pendingTokens': pending,
        'attempts': [a.to_dict() for a in attempts],
    })


@rewards.route('/rewards/attempts/<int:attempt_id>/retry', methods=['POST'])
def retry(attempt_id):
    attempt = retry_attempt(current_app._get_current_object(), attempt_id)
    return jsonify({'success': True, 'attempt': attempt.to_dict()})


@rewards.route('/badges', methods=['GET'])
def list_badges():
    badges = []
    for badge in BADGE_CATALOG:
        meta = badge_metadata(badge['name'])
        badges.append({
            'name': badge['name'],
            'description': badge['description'],
            'image': badge['image'],
            'gameType': badge['game_type'],
            'requirement': badge['requirement'],
            'rarity': badge['rarity'],
            'metadata': meta,
        })
    return jsonify({'badges': badges})
