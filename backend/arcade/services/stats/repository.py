from typing import List, NamedTuple, Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError

from arcade import db
from arcade.errors import IdentityMissing, PersistenceFailure
from arcade.models import GameStat, Player, PlayerBadge, ScoreEvent, as_number, now_ms
from arcade.services.rewards.tiers import BestReward, tiers_for
from .aggregator import GameStats, PlayerStats, apply_score, validate_score


class SubmitResult(NamedTuple):
    player: Player
    stats: PlayerStats
    reward: BestReward
    event: ScoreEvent
    new_badge: Optional[str]


class PlayerStatsRepository:
    """Loads and stores ``PlayerStats`` on top of the player tables.

    Writes for one player are serialized by the ``version`` column on
    ``Player``: a submission that lost the race gets ``StaleDataError`` on
    flush, reloads the fresh row and folds its score in again.
    """

    def __init__(self, tier_table, max_retries: int = 5):
        self.tier_table = tier_table
        self.max_retries = max(1, int(max_retries))

    @classmethod
    def from_app(cls, app) -> 'PlayerStatsRepository':
        return cls(app.extensions['arcade']['tier_table'], app.config.get('STATS_MAX_RETRIES', 5))

    # ---- players ----

    @staticmethod
    def get_player(address: str) -> Optional[Player]:
        return Player.query.filter_by(address=address).first()

    def get_or_create_player(self, address: str, display_name: Optional[str] = None) -> Player:
        if not address:
            raise IdentityMissing()
        player = self.get_player(address)
        if player:
            if display_name and display_name != player.display_name:
                player.display_name = display_name
                db.session.commit()
            return player
        player = Player(address=address, display_name=display_name or Player.default_name(address))
        db.session.add(player)
        try:
            db.session.commit()
        except IntegrityError:
            # Created concurrently by another request
            db.session.rollback()
            player = self.get_player(address)
        return player

    @staticmethod
    def all_players() -> List[Player]:
        return Player.query.order_by(Player.id).all()

    @staticmethod
    def history(player: Player, limit: int = 20) -> List[ScoreEvent]:
        return (
            ScoreEvent.query.filter_by(player_id=player.id)
            .order_by(ScoreEvent.timestamp.desc(), ScoreEvent.id.desc())
            .limit(limit)
            .all()
        )

    # ---- stats ----

    @staticmethod
    def load(player: Player) -> PlayerStats:
        return PlayerStats(
            total_score=as_number(player.total_score or 0),
            games_played=player.games_played or 0,
            highest_score=as_number(player.highest_score or 0),
            tokens_earned=player.tokens_earned or 0,
            nft_badges=player.badge_names(),
            last_played=player.last_played,
            game_stats={
                gs.game_type: GameStats(
                    played=gs.played or 0,
                    high_score=as_number(gs.high_score or 0),
                    total_score=as_number(gs.total_score or 0),
                )
                for gs in player.game_stats
            },
        )

    @staticmethod
    def _store(player: Player, stats: PlayerStats) -> None:
        player.total_score = stats.total_score
        player.games_played = stats.games_played
        player.highest_score = stats.highest_score
        player.tokens_earned = stats.tokens_earned
        player.last_played = stats.last_played

        rows = {gs.game_type: gs for gs in player.game_stats}
        for game, bucket in stats.game_stats.items():
            row = rows.get(game)
            if row is None:
                row = GameStat(game_type=game)
                player.game_stats.append(row)
            row.played = bucket.played
            row.high_score = bucket.high_score
            row.total_score = bucket.total_score

        owned = player.badge_names()
        for name in stats.nft_badges:
            if name not in owned:
                player.badges.append(PlayerBadge(name=name, position=len(owned)))
                owned.append(name)

    def submit_score(self, address, game_type, score, display_name=None, timestamp=None,
                     difficulty=None, game_session=None) -> SubmitResult:
        """Fold one final score into the player's stats and record the event.

        Raises IdentityMissing without an address, ValidationError for a
        non-numeric score and PersistenceFailure when the write cannot be
        committed. The failure carries the stats and reward computed in
        memory.
        """
        if not address:
            raise IdentityMissing()
        score = validate_score(score)
        game = getattr(game_type, 'value', game_type)
        tiers = tiers_for(self.tier_table, game)
        timestamp = timestamp if timestamp is not None else now_ms()
        computed = (None, None)

        for attempt in range(1, self.max_retries + 1):
            try:
                player = self.get_player(address)
                if player is None:
                    player = Player(address=address, display_name=display_name or Player.default_name(address))
                    db.session.add(player)
                elif display_name:
                    player.display_name = display_name

                before = self.load(player)
                stats, reward = apply_score(before, game, score, timestamp, tiers)
                computed = (stats, reward)
                self._store(player, stats)

                event = ScoreEvent(
                    player=player,
                    game_type=game,
                    score=score,
                    timestamp=timestamp,
                    difficulty=difficulty,
                    reward_tokens=reward.tokens,
                    nft_badge_earned=reward.badge,
                    session_id=game_session.id if game_session is not None else None,
                )
                db.session.add(event)
                if game_session is not None:
                    game_session.submitted = True
                    game_session.player = player
                db.session.commit()
            except (StaleDataError, IntegrityError) as exc:
                db.session.rollback()
                try:
                    current_app.logger.info(
                        f"[stats-retry] address={address} attempt={attempt} reason={type(exc).__name__}"
                    )
                except Exception:
                    pass
                continue
            except SQLAlchemyError as exc:
                db.session.rollback()
                raise PersistenceFailure('Failed to save score', *computed) from exc

            new_badge = reward.badge if reward.badge and reward.badge not in before.nft_badges else None
            try:
                current_app.logger.info(
                    f"[score-submit] address={address} game={game} score={score} tokens={reward.tokens} badge={new_badge}"
                )
            except Exception:
                pass
            return SubmitResult(player, stats, reward, event, new_badge)

        raise PersistenceFailure('Too many concurrent updates for this player', *computed)
