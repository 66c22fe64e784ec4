"""Initial standings tables

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

sport_division = sa.Enum('men', 'women', 'mixed', name='sportdivision')
sport_level = sa.Enum('elementary', 'high_school', 'college', name='sportlevel')
competition_stage = sa.Enum('group_stage', 'playins', 'playoffs', 'finals', name='competitionstage')
match_status = sa.Enum('upcoming', 'ongoing', 'finished', 'canceled', name='matchstatus')


def upgrade() -> None:
    # Seasons
    op.create_table(
        'seasons',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('start_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_seasons_start_end', 'seasons', ['start_at', 'end_at'])

    # Sports and categories
    op.create_table(
        'sports',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_table(
        'sports_categories',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('sport_id', sa.Integer(), nullable=False),
        sa.Column('division', sport_division, nullable=False),
        sa.Column('levels', sport_level, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['sport_id'], ['sports.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('sport_id', 'division', 'levels', name='uq_sports_categories_triple')
    )
    op.create_index('ix_sports_categories_sport_id', 'sports_categories', ['sport_id'])

    # Stages
    op.create_table(
        'sports_seasons_stages',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('sport_category_id', sa.Integer(), nullable=False),
        sa.Column('season_id', sa.Integer(), nullable=False),
        sa.Column('competition_stage', competition_stage, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('order_index', sa.Integer(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['sport_category_id'], ['sports_categories.id'], ),
        sa.ForeignKeyConstraint(['season_id'], ['seasons.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_sports_seasons_stages_season_id', 'sports_seasons_stages', ['season_id'])
    op.create_index(
        'ix_stages_category_season', 'sports_seasons_stages', ['sport_category_id', 'season_id']
    )

    # Schools and their teams
    op.create_table(
        'schools',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('abbreviation', sa.String(length=20), nullable=False),
        sa.Column('logo_url', sa.String(length=500), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default='true', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_table(
        'schools_teams',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('school_id', sa.Integer(), nullable=False),
        sa.Column('season_id', sa.Integer(), nullable=False),
        sa.Column('sport_category_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default='true', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['school_id'], ['schools.id'], ),
        sa.ForeignKeyConstraint(['season_id'], ['seasons.id'], ),
        sa.ForeignKeyConstraint(['sport_category_id'], ['sports_categories.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_schools_teams_school_id', 'schools_teams', ['school_id'])
    op.create_index(
        'ix_schools_teams_season_category', 'schools_teams', ['season_id', 'sport_category_id']
    )

    # Matches
    op.create_table(
        'matches',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('stage_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('venue', sa.String(length=255), nullable=True),
        sa.Column('status', match_status, server_default='upcoming', nullable=False),
        sa.Column('scheduled_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('best_of', sa.Integer(), server_default='1', nullable=False),
        sa.Column('bracket_round', sa.Integer(), nullable=True),
        sa.Column('bracket_position', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['stage_id'], ['sports_seasons_stages.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_matches_stage_scheduled', 'matches', ['stage_id', 'scheduled_at'])

    op.create_table(
        'match_participants',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('match_id', sa.Integer(), nullable=False),
        sa.Column('team_id', sa.Integer(), nullable=False),
        sa.Column('match_score', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['match_id'], ['matches.id'], ),
        sa.ForeignKeyConstraint(['team_id'], ['schools_teams.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('match_id', 'team_id', name='uq_match_participants_match_team')
    )
    op.create_index('ix_match_participants_match_id', 'match_participants', ['match_id'])
    op.create_index('ix_match_participants_team_id', 'match_participants', ['team_id'])


def downgrade() -> None:
    op.drop_table('match_participants')
    op.drop_table('matches')
    op.drop_table('schools_teams')
    op.drop_table('schools')
    op.drop_table('sports_seasons_stages')
    op.drop_table('sports_categories')
    op.drop_table('sports')
    op.drop_table('seasons')

    bind = op.get_bind()
    for enum_type in (match_status, competition_stage, sport_level, sport_division):
        enum_type.drop(bind, checkfirst=True)
