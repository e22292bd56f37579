"""create site_settings table

Revision ID: 001_create_site_settings
Revises:
Create Date: 2026-10-17
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '001_create_site_settings'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'site_settings',
        sa.Column('id', postgresql.UUID(as_uuid=True), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('main_logo', sa.String(255), nullable=True),
        sa.Column('footer_logo', sa.String(255), nullable=True),
        sa.Column('browser_tab_name', sa.Text(), nullable=True),
        sa.Column('smtp_host', sa.String(255), nullable=True),
        sa.Column('smtp_port', sa.Integer(), nullable=True),
        sa.Column('smtp_user', sa.String(255), nullable=True),
        sa.Column('smtp_password_encrypted', sa.Text(), nullable=True),
        sa.Column('smtp_secure', sa.Boolean(), nullable=True),
        sa.Column('solicitacoes_email', sa.String(255), nullable=True),
        sa.Column('api_url', sa.String(500), nullable=True),
        sa.Column('api_token_encrypted', sa.Text(), nullable=True),
        sa.Column('api_port', sa.Integer(), nullable=True),
        sa.Column('atualizado_em', sa.TIMESTAMP(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        comment='Configurações do site (linha única)'
    )


def downgrade() -> None:
    op.drop_table('site_settings')
