from flask import Blueprint, jsonify, request

from arcade.errors import NotFound
from arcade.services.stats.repository import PlayerStatsRepository

players = Blueprint('players', __name__)


@players.route('/<string:address>', methods=['GET'])
def get_player(address):
    player = PlayerStatsRepository.get_player(address)
    if player is None:
        raise NotFound('Player not found')
    limit = request.args.get('limit', default=20, type=int)
    limit = min(max(limit or 20, 1), 100)
    payload = player.to_dict()
    payload['history'] = [e.to_dict() for e in PlayerStatsRepository.history(player, limit)]
    return jsonify(payload)
