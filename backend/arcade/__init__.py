from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()
allowed_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:5174",
    "http://127.0.0.1:5174",
]
socketio = SocketIO(cors_allowed_origins=allowed_origins, async_mode=None)

# Demo players seeded by `flask db-reset`, as (address, name, [(game, score), ...])
DEMO_PLAYERS = [
    ('ALGO123...XYZ', 'CryptoGamer', [('snake', 520), ('trivia', 95), ('tictactoe', 12), ('snake', 310)]),
    ('ALGO456...ABC', 'SnakeMaster', [('snake', 540), ('snake', 260), ('snake', 180)]),
    ('ALGO789...DEF', 'TriviaKing', [('trivia', 100), ('trivia', 80), ('memory', 60)]),
    ('ALGO012...GHI', 'Player4', [('tictactoe', 6), ('rps', 4), ('snake', 120)]),
    ('ALGO345...JKL', 'GameNinja', [('game2048', 512), ('tictactoe', 3)]),
]


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from arcade.errors import ArcadeError, IdentityMissing
    from arcade.services.rewards.ledger import SimulatedLedger
    from arcade.services.rewards.tiers import load_tier_table

    flask_app.extensions['arcade'] = {
        'ledger': SimulatedLedger(delay=float(flask_app.config.get('LEDGER_DELAY_SEC', 2))),
        'tier_table': load_tier_table(flask_app.config.get('REWARD_TIERS')),
        'ticking': set(),
    }

    @flask_app.errorhandler(ArcadeError)
    def handle_arcade_error(err):
        return jsonify(err.to_dict()), err.status_code

    # Blueprints, mounted under /api to match the frontend API client
    from arcade.api.leaderboard import leaderboard
    flask_app.register_blueprint(leaderboard, url_prefix='/api/leaderboard')

    from arcade.api.wallet import wallet
    flask_app.register_blueprint(wallet, url_prefix='/api/wallet')

    from arcade.api.games import games
    flask_app.register_blueprint(games, url_prefix='/api/games')

    from arcade.api.rewards import rewards
    flask_app.register_blueprint(rewards, url_prefix='/api')

    from arcade.api.players import players
    flask_app.register_blueprint(players, url_prefix='/api/players')

    # Register Socket.IO event handlers
    from arcade.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    # Flask-Login keeps the connected wallet's player id in the session
    from arcade.models import Player

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(Player, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        err = IdentityMissing()
        return jsonify(err.to_dict()), err.status_code

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        from arcade.services.stats.repository import PlayerStatsRepository
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            # Seed through the repository so totals, bests and badges agree
            repo = PlayerStatsRepository.from_app(flask_app)
            for address, name, plays in DEMO_PLAYERS:
                for game, score in plays:
                    repo.submit_score(address, game, score, display_name=name)

            print('Database has been reset and seeded!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app
