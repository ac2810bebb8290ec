import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm.exc import StaleDataError

from arcade import db
from arcade.errors import LedgerTimeout, PersistenceFailure, RewardIssuanceFailure
from arcade.models import Player, RewardAttempt
from arcade.services.rewards import issuance
from arcade.services.rewards.catalog import badge_metadata
from arcade.services.rewards.ledger import SimulatedLedger
from arcade.services.rewards.tiers import load_tier_table
from arcade.services.stats.repository import PlayerStatsRepository

ADDR = 'ALGOISSUANCE0042'


def submit(client, score=150, game='snake'):
    res = client.post('/api/leaderboard/submit', json={'address': ADDR, 'gameType': game, 'score': score})
    assert res.status_code == 200
    return res.get_json()


def test_transient_failure_is_retried(client, ledger):
    ledger.failures = 1
    attempt = submit(client)['rewardAttempts'][0]
    assert attempt['status'] == 'confirmed'
    assert attempt['attempts'] == 2
    assert attempt['txId'] == 'TX2'
    assert ledger.calls[-1] == ('transfer', ADDR, 10, 'snake reward')


def test_exhausted_attempts_fail_without_touching_stats(client, ledger):
    ledger.failures = 10
    attempt = submit(client)['rewardAttempts'][0]
    assert attempt['status'] == 'failed'
    assert attempt['attempts'] == 3
    assert attempt['error'] == 'ledger unavailable'

    player = Player.query.filter_by(address=ADDR).first()
    assert player.tokens_earned == 10
    assert player.games_played == 1

    rewards = client.get(f'/api/rewards/{ADDR}').get_json()
    assert rewards['confirmedTokens'] == 0

    ledger.failures = 0
    res = client.post(f"/api/rewards/attempts/{attempt['id']}/retry")
    assert res.status_code == 200
    retried = res.get_json()['attempt']
    assert retried['status'] == 'confirmed'
    assert retried['attempts'] == 4
    assert client.get(f'/api/rewards/{ADDR}').get_json()['confirmedTokens'] == 10


def test_retry_rules(client, ledger):
    attempt = submit(client)['rewardAttempts'][0]
    assert client.post(f"/api/rewards/attempts/{attempt['id']}/retry").status_code == 409
    assert client.post('/api/rewards/attempts/9999/retry').status_code == 404


def test_unexpected_ledger_errors_leave_attempt_retryable(client, ledger):
    ledger.failures = 10
    ledger.error = ConnectionError('node unreachable')
    res = client.post('/api/leaderboard/submit', json={'address': ADDR, 'gameType': 'snake', 'score': 150})
    assert res.status_code == 200
    attempt = res.get_json()['rewardAttempts'][0]
    assert attempt['status'] == 'failed'
    assert attempt['attempts'] == 3
    assert attempt['error'] == 'ConnectionError: node unreachable'
    assert Player.query.filter_by(address=ADDR).one().games_played == 1

    ledger.failures = 0
    retried = client.post(f"/api/rewards/attempts/{attempt['id']}/retry").get_json()['attempt']
    assert retried['status'] == 'confirmed'


def test_worker_crash_marks_attempt_failed(client, ledger, monkeypatch):
    def broken_catalog(name):
        raise RuntimeError('catalog offline')

    monkeypatch.setattr(issuance, 'badge_metadata', broken_catalog)
    data = submit(client, score=500)
    badge = next(a for a in data['rewardAttempts'] if a['kind'] == 'badge')
    assert badge['status'] == 'failed'
    assert badge['error'] == 'RuntimeError: catalog offline'

    monkeypatch.undo()
    res = client.post(f"/api/rewards/attempts/{badge['id']}/retry")
    assert res.get_json()['attempt']['status'] == 'confirmed'


def test_badge_mint_uses_catalog_metadata(client, ledger):
    submit(client, score=500)
    mint = next(c for c in ledger.calls if c[0] == 'mint')
    assert mint[1] == ADDR
    assert mint[2] == badge_metadata('Snake Master')
    badge = RewardAttempt.query.filter_by(kind='badge').one()
    assert badge.asset_id == 99


def test_badge_without_template_fails(flask_app, client, ledger):
    flask_app.extensions['arcade']['tier_table'] = load_tier_table(
        {'memory': [{'minScore': 1, 'tokens': 1, 'badge': 'Mystery Badge'}]}
    )
    data = submit(client, score=5, game='memory')
    badge = next(a for a in data['rewardAttempts'] if a['kind'] == 'badge')
    assert badge['status'] == 'failed'
    assert badge['error'] == 'Badge template not found'
    assert data['stats']['nftBadges'] == ['Mystery Badge']
    assert all(c[0] == 'transfer' for c in ledger.calls)


def test_badge_metadata_shape():
    meta = badge_metadata('Trivia Champion')
    assert meta['external_url'] == 'https://algorandgamehub.com'
    assert {'trait_type': 'Rarity', 'value': 'legendary'} in meta['attributes']
    assert badge_metadata('Unknown') is None


def test_simulated_ledger():
    slept = []
    ledger = SimulatedLedger(delay=2, sleep=slept.append)
    tx = ledger.transfer(ADDR, 5, 'memo', timeout=15)
    assert tx.tx_id.startswith('SIM')
    assert slept == [2]

    with pytest.raises(LedgerTimeout):
        ledger.mint(ADDR, badge_metadata('First Steps'), timeout=1)
    with pytest.raises(RewardIssuanceFailure):
        ledger.transfer(ADDR, 0, 'memo', timeout=15)
    assert LedgerTimeout.status_code == 504


# ---- persistence ----

def test_stale_write_is_retried_once(flask_app, monkeypatch):
    repo = PlayerStatsRepository.from_app(flask_app)
    original = PlayerStatsRepository._store
    calls = []

    def flaky_store(player, stats):
        calls.append(stats.games_played)
        if len(calls) == 1:
            raise StaleDataError('version mismatch')
        original(player, stats)

    monkeypatch.setattr(PlayerStatsRepository, '_store', staticmethod(flaky_store))
    result = repo.submit_score(ADDR, 'snake', 120)
    assert calls == [1, 1]
    assert result.stats.games_played == 1
    assert Player.query.filter_by(address=ADDR).one().total_score == 120


def test_persistent_staleness_gives_up(flask_app, monkeypatch):
    repo = PlayerStatsRepository.from_app(flask_app)

    def always_stale(player, stats):
        raise StaleDataError('version mismatch')

    monkeypatch.setattr(PlayerStatsRepository, '_store', staticmethod(always_stale))
    with pytest.raises(PersistenceFailure) as info:
        repo.submit_score(ADDR, 'snake', 120)
    assert info.value.stats.total_score == 120
    assert info.value.reward.tokens == 10


def test_database_failure_reports_computed_result(client, monkeypatch):
    def broken_commit():
        raise OperationalError('COMMIT', {}, Exception('disk I/O error'))

    monkeypatch.setattr(db.session, 'commit', broken_commit)
    res = client.post('/api/leaderboard/submit', json={'address': ADDR, 'gameType': 'snake', 'score': 200})
    assert res.status_code == 503
    data = res.get_json()
    assert data['success'] is False
    assert data['stats']['totalScore'] == 200
    assert data['reward'] == {'tokens': 25}


def test_version_counter_moves_on_each_write(flask_app):
    repo = PlayerStatsRepository.from_app(flask_app)
    repo.submit_score(ADDR, 'snake', 10)
    first = Player.query.filter_by(address=ADDR).one().version
    repo.submit_score(ADDR, 'snake', 10)
    assert Player.query.filter_by(address=ADDR).one().version == first + 1
