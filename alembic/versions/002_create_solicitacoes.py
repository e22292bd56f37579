"""create solicitacoes table

Revision ID: 002_create_solicitacoes
Revises: 001_create_site_settings
Create Date: 2026-10-17
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '002_create_solicitacoes'
down_revision: Union[str, None] = '001_create_site_settings'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'solicitacoes',
        sa.Column('id', postgresql.UUID(as_uuid=True), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('tipo_solicitacao', sa.String(100), nullable=False),
        sa.Column('nome_solicitacao', sa.String(255), nullable=False),
        sa.Column('dados_formulario', sa.JSON(), nullable=False),
        sa.Column('criado_em', sa.TIMESTAMP(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        comment='Solicitações recebidas pelo site'
    )

    op.create_index('idx_solicitacao_tipo', 'solicitacoes', ['tipo_solicitacao'])


def downgrade() -> None:
    op.drop_index('idx_solicitacao_tipo', table_name='solicitacoes')
    op.drop_table('solicitacoes')
