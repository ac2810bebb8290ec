from flask import Blueprint, jsonify, current_app
from flask_login import current_user, login_required, login_user, logout_user
import httpx

from arcade.api.payloads import json_object
from arcade.errors import ValidationError
from arcade.services.stats.repository import PlayerStatsRepository
from arcade.services.wallet import AlgodClient

wallet = Blueprint('wallet', __name__)


@wallet.route('/<string:address>/balance', methods=['GET'])
def get_balance(address):
    client = AlgodClient.from_config(current_app.config)
    try:
        return jsonify(client.balance(address))
    except (httpx.HTTPError, ValueError) as exc:
        current_app.logger.warning(f"[balance-fail] address={address} error={exc}")
        return jsonify({'error': 'Failed to fetch balance'}), 500


@wallet.route('/connect', methods=['POST'])
def connect():
    data = json_object()
    address = data.get('address')
    if not address:
        raise ValidationError('Address is required')
    repo = PlayerStatsRepository.from_app(current_app)
    player = repo.get_or_create_player(address, data.get('displayName'))
    login_user(player, remember=True)
    try:
        current_app.logger.info(f"[wallet-connect] address={address} player={player.id}")
    except Exception:
        pass
    return jsonify({'success': True, 'player': player.to_dict()})


@wallet.route('/disconnect', methods=['POST'])
@login_required
def disconnect():
    logout_user()
    return jsonify({'success': True})


@wallet.route('/me', methods=['GET'])
@login_required
def me():
    return jsonify({'success': True, 'player': current_user.to_dict()})
