import os
import sys
import pytest

# Ensure the backend root (containing the `arcade` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from arcade import create_app, db, socketio
from arcade.errors import RewardIssuanceFailure
from arcade.services.rewards.ledger import TxResult


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    ALGOD_URL = 'https://algod.test'
    ALGOD_TOKEN = ''
    ALGOD_TIMEOUT_SEC = 1
    LEDGER_DELAY_SEC = 0
    REWARD_TIMEOUT_SEC = 5
    REWARD_MAX_ATTEMPTS = 3
    REWARD_BACKOFF_SEC = 0
    STATS_MAX_RETRIES = 5
    SESSION_MAX_RETRIES = 5
    TICK_INTERVALS_MS = {'snake': 1, 'flappy': 1, 'trivia': 1, 'memory': 1, 'puzzle15': 1, 'sudoku': 1, 'simon': 1}
    REWARD_TIERS = None


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import arcade.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass


@pytest.fixture()
def connected(client):
    """A test client with a connected wallet."""
    res = client.post('/api/wallet/connect', json={'address': 'ALGOTESTADDR0001', 'displayName': 'Tester'})
    assert res.status_code == 200
    return client


class ScriptedLedger:
    """Ledger double that fails a fixed number of calls before confirming."""

    def __init__(self, failures=0, error=None):
        self.failures = failures
        self.error = error or RewardIssuanceFailure('ledger unavailable')
        self.calls = []

    def _call(self, kind, *args):
        self.calls.append((kind,) + args)
        if self.failures > 0:
            self.failures -= 1
            raise self.error
        return TxResult(tx_id=f'TX{len(self.calls)}', asset_id=99 if kind == 'mint' else None)

    def transfer(self, address, amount, memo, timeout):
        return self._call('transfer', address, amount, memo)

    def mint(self, address, metadata, timeout):
        return self._call('mint', address, metadata)


@pytest.fixture()
def ledger(flask_app):
    scripted = ScriptedLedger()
    flask_app.extensions['arcade']['ledger'] = scripted
    return scripted
