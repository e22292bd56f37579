"""create contact_messages table

Revision ID: 003_create_contact_messages
Revises: 002_create_solicitacoes
Create Date: 2026-10-17
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '003_create_contact_messages'
down_revision: Union[str, None] = '002_create_solicitacoes'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'contact_messages',
        sa.Column('id', postgresql.UUID(as_uuid=True), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('nome', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('telefone', sa.String(20), nullable=False),
        sa.Column('mensagem', sa.Text(), nullable=False),
        sa.Column('anexos', sa.JSON(), nullable=True),
        sa.Column('lido', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('criado_em', sa.TIMESTAMP(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        comment='Mensagens enviadas pelo formulário de contato'
    )


def downgrade() -> None:
    op.drop_table('contact_messages')
