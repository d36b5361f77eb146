"""initial_schema

Revision ID: 4c7d2e91a0b3
Revises:
Create Date: 2026-03-02 19:14:06.221873

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '4c7d2e91a0b3'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'profiles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('display_name', sa.String(length=100), nullable=True),
        sa.Column('zip_code', sa.String(length=10), nullable=True),
        sa.Column('hardiness_zone', sa.String(length=5), nullable=True),
        sa.Column('last_frost_date', sa.Date(), nullable=True),
        sa.Column('first_frost_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'seeds',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('profile_id', sa.Integer(), nullable=False),
        sa.Column('variety_name', sa.String(length=200), nullable=False),
        sa.Column('common_name', sa.String(length=200), nullable=True),
        sa.Column('seed_company', sa.String(length=200), nullable=True),
        sa.Column('product_url', sa.Text(), nullable=True),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('purchase_year', sa.Integer(), nullable=True),
        sa.Column('quantity_packets', sa.Integer(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('days_to_maturity_min', sa.Integer(), nullable=True),
        sa.Column('days_to_maturity_max', sa.Integer(), nullable=True),
        sa.Column('planting_depth_inches', sa.Float(), nullable=True),
        sa.Column('spacing_inches', sa.Integer(), nullable=True),
        sa.Column('row_spacing_inches', sa.Integer(), nullable=True),
        sa.Column('sun_requirement', sa.Enum('full_sun', 'partial_shade', 'shade', name='seed_sun_req_enum'), nullable=True),
        sa.Column('water_requirement', sa.Enum('low', 'medium', 'high', name='seed_water_req_enum'), nullable=True),
        sa.Column('planting_method', sa.Enum('direct_sow', 'start_indoors', name='planting_method_enum'), nullable=True),
        sa.Column('weeks_before_last_frost', sa.Integer(), nullable=True),
        sa.Column('weeks_after_last_frost', sa.Integer(), nullable=True),
        sa.Column('cold_hardy', sa.Boolean(), nullable=False),
        sa.Column('weeks_before_last_frost_outdoor', sa.Integer(), nullable=True),
        sa.Column('succession_planting', sa.Boolean(), nullable=False),
        sa.Column('succession_interval_days', sa.Integer(), nullable=True),
        sa.Column('fall_planting', sa.Boolean(), nullable=False),
        sa.Column('cold_stratification_required', sa.Boolean(), nullable=False),
        sa.Column('cold_stratification_weeks', sa.Integer(), nullable=True),
        sa.Column('is_favorite', sa.Boolean(), nullable=False),
        sa.Column('is_planted', sa.Boolean(), nullable=False),
        sa.Column('ai_extracted', sa.Boolean(), nullable=False),
        sa.Column('ai_extraction_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('raw_ai_response', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_seeds_profile_id'), 'seeds', ['profile_id'], unique=False)
    op.create_index(op.f('ix_seeds_variety_name'), 'seeds', ['variety_name'], unique=False)
    op.create_index(op.f('ix_seeds_common_name'), 'seeds', ['common_name'], unique=False)
    op.create_index(op.f('ix_seeds_is_favorite'), 'seeds', ['is_favorite'], unique=False)
    op.create_index(op.f('ix_seeds_is_planted'), 'seeds', ['is_planted'], unique=False)
    op.create_index(op.f('ix_seeds_created_at'), 'seeds', ['created_at'], unique=False)

    op.create_table(
        'zip_frost_data',
        sa.Column('zip_code', sa.String(length=5), nullable=False),
        sa.Column('hardiness_zone', sa.String(length=5), nullable=True),
        sa.Column('last_frost_date_avg', sa.Date(), nullable=True),
        sa.Column('first_frost_date_avg', sa.Date(), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('station_name', sa.String(length=200), nullable=True),
        sa.PrimaryKeyConstraint('zip_code'),
    )
    op.create_index(op.f('ix_zip_frost_data_hardiness_zone'), 'zip_frost_data', ['hardiness_zone'], unique=False)

    op.create_table(
        'pipeline_runs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('pipeline_name', sa.String(length=100), nullable=False),
        sa.Column('status', sa.Enum('running', 'success', 'failed', 'skipped', name='pipeline_status_enum'), nullable=False),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('finished_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('duration_ms', sa.Integer(), nullable=True),
        sa.Column('records_processed', sa.Integer(), nullable=True),
        sa.Column('error_message', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_pipeline_runs_pipeline_name'), 'pipeline_runs', ['pipeline_name'], unique=False)

    op.create_table(
        'api_request_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.Column('method', sa.String(length=10), nullable=False),
        sa.Column('endpoint', sa.String(length=255), nullable=False),
        sa.Column('status_code', sa.Integer(), nullable=False),
        sa.Column('latency_ms', sa.Integer(), nullable=False),
        sa.Column('ip_address', sa.String(length=45), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_api_request_logs_timestamp'), 'api_request_logs', ['timestamp'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_api_request_logs_timestamp'), table_name='api_request_logs')
    op.drop_table('api_request_logs')
    op.drop_index(op.f('ix_pipeline_runs_pipeline_name'), table_name='pipeline_runs')
    op.drop_table('pipeline_runs')
    op.drop_index(op.f('ix_zip_frost_data_hardiness_zone'), table_name='zip_frost_data')
    op.drop_table('zip_frost_data')
    for column in ('created_at', 'is_planted', 'is_favorite', 'common_name', 'variety_name', 'profile_id'):
        op.drop_index(op.f(f'ix_seeds_{column}'), table_name='seeds')
    op.drop_table('seeds')
    op.drop_table('profiles')

    # Postgres keeps enum types after their tables are dropped
    for enum_name in ('pipeline_status_enum', 'planting_method_enum', 'seed_water_req_enum', 'seed_sun_req_enum'):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
