from arcade import db
from flask_login import UserMixin
import json
import time
import uuid


def now_ms() -> int:
    return int(time.time() * 1000)


def as_number(value):
    """Render whole floats as ints so JSON scores read 2450 rather than 2450.0."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class Player(UserMixin, db.Model):
    __tablename__ = 'player'
    # Autoincrement id doubles as leaderboard arrival order
    id = db.Column(db.Integer, primary_key=True)
    address = db.Column(db.String(64), unique=True, nullable=False, index=True)
    display_name = db.Column(db.String(64), nullable=False)
    total_score = db.Column(db.Float, default=0, nullable=False)
    games_played = db.Column(db.Integer, default=0, nullable=False)
    highest_score = db.Column(db.Float, default=0, nullable=False)
    tokens_earned = db.Column(db.Integer, default=0, nullable=False)
    last_played = db.Column(db.BigInteger, nullable=True)
    # Compare-and-swap counter for concurrent submissions
    version = db.Column(db.Integer, nullable=False)

    game_stats = db.relationship('GameStat', back_populates='player', cascade='all, delete-orphan')
    badges = db.relationship(
        'PlayerBadge', back_populates='player', cascade='all, delete-orphan',
        order_by='PlayerBadge.position',
    )

    __mapper_args__ = {'version_id_col': version}

    @staticmethod
    def default_name(address: str) -> str:
        return f"Player_{address[-4:]}"

    def badge_names(self):
        return [b.name for b in self.badges]

    def to_dict(self):
        return {
            'address': self.address,
            'displayName': self.display_name,
            'totalScore': as_number(self.total_score),
            'gamesPlayed': self.games_played,
            'highestScore': as_number(self.highest_score),
            'tokensEarned': self.tokens_earned,
            'nftBadges': self.badge_names(),
            'lastPlayed': self.last_played,
            'gameStats': {gs.game_type: gs.to_dict() for gs in self.game_stats},
        }


class GameStat(db.Model):
    __tablename__ = 'game_stat'
    __table_args__ = (db.UniqueConstraint('player_id', 'game_type', name='uq_game_stat_player_game'),)
    id = db.Column(db.Integer, primary_key=True)
    player_id = db.Column(db.Integer, db.ForeignKey('player.id'), nullable=False, index=True)
    game_type = db.Column(db.String(32), nullable=False)
    played = db.Column(db.Integer, default=0, nullable=False)
    high_score = db.Column(db.Float, default=0, nullable=False)
    total_score = db.Column(db.Float, default=0, nullable=False)
    player = db.relationship('Player', back_populates='game_stats')

    def to_dict(self):
        return {
            'played': self.played,
            'highScore': as_number(self.high_score),
            'totalScore': as_number(self.total_score),
        }


class PlayerBadge(db.Model):
    __tablename__ = 'player_badge'
    __table_args__ = (db.UniqueConstraint('player_id', 'name', name='uq_player_badge_name'),)
    id = db.Column(db.Integer, primary_key=True)
    player_id = db.Column(db.Integer, db.ForeignKey('player.id'), nullable=False, index=True)
    name = db.Column(db.String(64), nullable=False)
    position = db.Column(db.Integer, nullable=False)  # insertion order within the player's set
    earned_at = db.Column(db.BigInteger, default=now_ms, nullable=False)
    player = db.relationship('Player', back_populates='badges')


class ScoreEvent(db.Model):
    """One completed game. Rows are only ever inserted."""
    __tablename__ = 'score_event'
    id = db.Column(db.String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    player_id = db.Column(db.Integer, db.ForeignKey('player.id'), nullable=False, index=True)
    game_type = db.Column(db.String(32), nullable=False)
    score = db.Column(db.Float, nullable=False)
    timestamp = db.Column(db.BigInteger, nullable=False, index=True)
    difficulty = db.Column(db.String(16), nullable=True)
    reward_tokens = db.Column(db.Integer, nullable=True)
    nft_badge_earned = db.Column(db.String(64), nullable=True)
    session_id = db.Column(db.String(32), db.ForeignKey('game_session.id'), nullable=True)
    player = db.relationship('Player')

    def to_dict(self):
        return {
            'id': self.id,
            'gameType': self.game_type,
            'score': as_number(self.score),
            'timestamp': self.timestamp,
            'playerAddress': self.player.address if self.player else None,
            'difficulty': self.difficulty,
            'rewardTokens': self.reward_tokens,
            'nftBadgeEarned': self.nft_badge_earned,
        }


class RewardAttempt(db.Model):
    __tablename__ = 'reward_attempt'
    id = db.Column(db.Integer, primary_key=True)
    player_id = db.Column(db.Integer, db.ForeignKey('player.id'), nullable=False, index=True)
    score_event_id = db.Column(db.String(32), db.ForeignKey('score_event.id'), nullable=True)
    kind = db.Column(db.String(16), nullable=False)  # token, badge
    amount = db.Column(db.Integer, nullable=True)
    badge = db.Column(db.String(64), nullable=True)
    status = db.Column(db.String(16), default='pending', nullable=False)  # pending, confirmed, failed
    attempts = db.Column(db.Integer, default=0, nullable=False)
    tx_id = db.Column(db.String(64), nullable=True)
    asset_id = db.Column(db.BigInteger, nullable=True)
    last_error = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.BigInteger, default=now_ms, nullable=False)
    updated_at = db.Column(db.BigInteger, default=now_ms, onupdate=now_ms, nullable=False)
    player = db.relationship('Player')
    score_event = db.relationship('ScoreEvent')

    def to_dict(self):
        return {
            'id': self.id,
            'address': self.player.address if self.player else None,
            'kind': self.kind,
            'amount': self.amount,
            'badge': self.badge,
            'status': self.status,
            'attempts': self.attempts,
            'txId': self.tx_id,
            'assetId': self.asset_id,
            'error': self.last_error,
            'scoreEventId': self.score_event_id,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
        }


class GameSession(db.Model):
    __tablename__ = 'game_session'
    id = db.Column(db.String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    game_type = db.Column(db.String(32), nullable=False)
    state_json = db.Column(db.Text, nullable=False)
    player_id = db.Column(db.Integer, db.ForeignKey('player.id'), nullable=True)
    submitted = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.BigInteger, default=now_ms, nullable=False)
    updated_at = db.Column(db.BigInteger, default=now_ms, onupdate=now_ms, nullable=False)
    # Bumped on every committed transition; ticks and inputs race on it
    version = db.Column(db.Integer, nullable=False)
    player = db.relationship('Player')

    __mapper_args__ = {'version_id_col': version}

    @property
    def state(self):
        return json.loads(self.state_json)

    @state.setter
    def state(self, value):
        self.state_json = json.dumps(value)

    def to_dict(self):
        return {
            'id': self.id,
            'game_type': self.game_type,
            'state': self.state,
            'submitted': self.submitted,
        }
