from flask import Blueprint, jsonify, request, current_app
from flask_login import current_user

from arcade.errors import IdentityMissing, ValidationError
from arcade.api.payloads import json_object
from arcade.services.games.base import GameType
from arcade.services.games.registry import KERNELS
from arcade.services.games.sessions import apply_event, create_session, load_session, submit_session
from arcade.services.rewards.tiers import evaluate, tiers_for
from arcade.services.stats.aggregator import validate_score

games = Blueprint('games', __name__)


def _game_or_400(game_type) -> GameType:
    game = GameType.parse(game_type)
    if game is None:
        raise ValidationError(f'Unknown game type: {game_type}')
    return game


def _tier_table():
    return current_app.extensions['arcade']['tier_table']


def _session_payload(gs, effects=None):
    payload = gs.to_dict()
    if effects is not None:
        payload['effects'] = effects
    return payload


@games.route('/catalog', methods=['GET'])
def catalog():
    table = _tier_table()
    out = []
    for game, kernel in KERNELS.items():
        out.append({
            'game_type': game.value,
            'title': kernel.title,
            'realtime': bool(kernel.tick_phases),
            'tiers': [t.to_dict() for t in tiers_for(table, game)],
        })
    return jsonify({'games': out})


@games.route('/<string:game_type>/tiers', methods=['GET'])
def get_tiers(game_type):
    game = _game_or_400(game_type)
    return jsonify({'game_type': game.value, 'tiers': [t.to_dict() for t in tiers_for(_tier_table(), game)]})


@games.route('/<string:game_type>/reward', methods=['GET'])
def check_reward(game_type):
    game = _game_or_400(game_type)
    score = request.args.get('score', type=float)
    if score is None:
        return jsonify({'error': 'score query parameter is required'}), 400
    validate_score(score)
    reward = evaluate(score, tiers_for(_tier_table(), game))
    return jsonify({'game_type': game.value, 'score': score, 'reward': reward.to_dict()})


@games.route('/<string:game_type>/sessions', methods=['POST'])
def new_session(game_type):
    data = json_object()
    player = current_user._get_current_object() if current_user.is_authenticated else None
    gs = create_session(game_type, options=data.get('options'), seed=data.get('seed'), player=player)
    try:
        current_app.logger.info(f"[session-create] session={gs.id} game={gs.game_type}")
    except Exception:
        pass
    return jsonify(_session_payload(gs)), 201


@games.route('/sessions/<string:session_id>', methods=['GET'])
def get_session(session_id):
    return jsonify(_session_payload(load_session(session_id)))


@games.route('/sessions/<string:session_id>/events', methods=['POST'])
def post_event(session_id):
    event = request.get_json(silent=True)
    gs, effects = apply_event(current_app._get_current_object(), session_id, event)
    return jsonify(_session_payload(gs, effects))


@games.route('/sessions/<string:session_id>/submit', methods=['POST'])
def submit(session_id):
    if not current_user.is_authenticated:
        raise IdentityMissing()
    data = json_object()
    result, attempts = submit_session(
        current_app._get_current_object(), session_id, current_user.address, data.get('displayName'),
    )
    return jsonify({
        'success': True,
        'score': result.event.to_dict(),
        'reward': result.reward.to_dict(),
        'stats': result.stats.to_dict(),
        'rewardAttempts': [a.to_dict() for a in attempts],
    })
