"""create player stats, score history, reward attempt and session tables

Revision ID: 5c2a9d71e0b4
Revises:
Create Date: 2026-10-19 09:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2a9d71e0b4'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'player' not in existing_tables:
        op.create_table(
            'player',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('address', sa.String(length=64), nullable=False),
            sa.Column('display_name', sa.String(length=64), nullable=False),
            sa.Column('total_score', sa.Float(), nullable=False, server_default='0'),
            sa.Column('games_played', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('highest_score', sa.Float(), nullable=False, server_default='0'),
            sa.Column('tokens_earned', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('last_played', sa.BigInteger(), nullable=True),
            sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        )
        op.create_index('ix_player_address', 'player', ['address'], unique=True)

    if 'game_stat' not in existing_tables:
        op.create_table(
            'game_stat',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('player_id', sa.Integer(), sa.ForeignKey('player.id'), nullable=False),
            sa.Column('game_type', sa.String(length=32), nullable=False),
            sa.Column('played', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('high_score', sa.Float(), nullable=False, server_default='0'),
            sa.Column('total_score', sa.Float(), nullable=False, server_default='0'),
            sa.UniqueConstraint('player_id', 'game_type', name='uq_game_stat_player_game'),
        )
        op.create_index('ix_game_stat_player_id', 'game_stat', ['player_id'])

    if 'player_badge' not in existing_tables:
        op.create_table(
            'player_badge',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('player_id', sa.Integer(), sa.ForeignKey('player.id'), nullable=False),
            sa.Column('name', sa.String(length=64), nullable=False),
            sa.Column('position', sa.Integer(), nullable=False),
            sa.Column('earned_at', sa.BigInteger(), nullable=False),
            sa.UniqueConstraint('player_id', 'name', name='uq_player_badge_name'),
        )
        op.create_index('ix_player_badge_player_id', 'player_badge', ['player_id'])

    if 'game_session' not in existing_tables:
        op.create_table(
            'game_session',
            sa.Column('id', sa.String(length=32), primary_key=True),
            sa.Column('game_type', sa.String(length=32), nullable=False),
            sa.Column('state_json', sa.Text(), nullable=False),
            sa.Column('player_id', sa.Integer(), sa.ForeignKey('player.id'), nullable=True),
            sa.Column('submitted', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('created_at', sa.BigInteger(), nullable=False),
            sa.Column('updated_at', sa.BigInteger(), nullable=False),
            sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        )

    if 'score_event' not in existing_tables:
        op.create_table(
            'score_event',
            sa.Column('id', sa.String(length=32), primary_key=True),
            sa.Column('player_id', sa.Integer(), sa.ForeignKey('player.id'), nullable=False),
            sa.Column('game_type', sa.String(length=32), nullable=False),
            sa.Column('score', sa.Float(), nullable=False),
            sa.Column('timestamp', sa.BigInteger(), nullable=False),
            sa.Column('difficulty', sa.String(length=16), nullable=True),
            sa.Column('reward_tokens', sa.Integer(), nullable=True),
            sa.Column('nft_badge_earned', sa.String(length=64), nullable=True),
            sa.Column('session_id', sa.String(length=32), sa.ForeignKey('game_session.id'), nullable=True),
        )
        op.create_index('ix_score_event_player_id', 'score_event', ['player_id'])
        op.create_index('ix_score_event_timestamp', 'score_event', ['timestamp'])

    if 'reward_attempt' not in existing_tables:
        op.create_table(
            'reward_attempt',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('player_id', sa.Integer(), sa.ForeignKey('player.id'), nullable=False),
            sa.Column('score_event_id', sa.String(length=32), sa.ForeignKey('score_event.id'), nullable=True),
            sa.Column('kind', sa.String(length=16), nullable=False),
            sa.Column('amount', sa.Integer(), nullable=True),
            sa.Column('badge', sa.String(length=64), nullable=True),
            sa.Column('status', sa.String(length=16), nullable=False, server_default='pending'),
            sa.Column('attempts', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('tx_id', sa.String(length=64), nullable=True),
            sa.Column('asset_id', sa.BigInteger(), nullable=True),
            sa.Column('last_error', sa.Text(), nullable=True),
            sa.Column('created_at', sa.BigInteger(), nullable=False),
            sa.Column('updated_at', sa.BigInteger(), nullable=False),
        )
        op.create_index('ix_reward_attempt_player_id', 'reward_attempt', ['player_id'])


def downgrade():
    op.drop_table('reward_attempt')
    op.drop_table('score_event')
    op.drop_table('game_session')
    op.drop_table('player_badge')
    op.drop_table('game_stat')
    op.drop_table('player')
