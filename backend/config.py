import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///arcade.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Algorand node used for wallet balance lookups
    ALGOD_URL = os.environ.get('ALGOD_URL', 'https://testnet-api.algonode.cloud')
    ALGOD_TOKEN = os.environ.get('ALGOD_TOKEN', '')
    ALGOD_TIMEOUT_SEC = float(os.environ.get('ALGOD_TIMEOUT_SEC', '10'))
    # Simulated ledger confirmation delay (seconds)
    LEDGER_DELAY_SEC = float(os.environ.get('LEDGER_DELAY_SEC', '2'))
    # Reward issuance: per-call timeout, attempts, backoff base (seconds)
    REWARD_TIMEOUT_SEC = float(os.environ.get('REWARD_TIMEOUT_SEC', '15'))
    REWARD_MAX_ATTEMPTS = int(os.environ.get('REWARD_MAX_ATTEMPTS', '3'))
    REWARD_BACKOFF_SEC = float(os.environ.get('REWARD_BACKOFF_SEC', '1'))
    # Compare-and-swap retries for concurrent submissions by one player
    STATS_MAX_RETRIES = int(os.environ.get('STATS_MAX_RETRIES', '5'))
    SESSION_MAX_RETRIES = int(os.environ.get('SESSION_MAX_RETRIES', '5'))
    # Tick interval per real-time game (ms)
    TICK_INTERVALS_MS = {
        'snake': int(os.environ.get('SNAKE_TICK_MS', '150')),
        'flappy': int(os.environ.get('FLAPPY_TICK_MS', '16')),
        'trivia': 1000,
        'memory': 1000,
        'puzzle15': 1000,
        'sudoku': 1000,
        'simon': int(os.environ.get('SIMON_TICK_MS', '650')),
    }
    # Optional: heartbeat interval for tick worker logs (sec). 0 disables.
    TIMER_HEARTBEAT_SEC = int(os.environ.get('TIMER_HEARTBEAT_SEC', '0'))
    # Optional override of the built-in reward tier table, keyed by game type
    REWARD_TIERS = None
