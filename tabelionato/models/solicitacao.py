"""
Model SQLAlchemy para solicitações enviadas pelos formulários públicos
"""
from sqlalchemy import Column, String, JSON, TIMESTAMP, Index, text
from sqlalchemy.dialects.postgresql import UUID
import uuid

from ..database import Base


class Solicitacao(Base):
    """
    Solicitação de serviço (certidões, escrituras, procurações...).

    Os campos variam conforme o formulário, por isso ficam todos em
    dados_formulario. Campos de arquivo guardam listas de caminhos /uploads/...
    """
    __tablename__ = "solicitacoes"

    id = Column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Identificador único da solicitação"
    )

    tipo_solicitacao = Column(
        String(100),
        nullable=False,
        comment="Slug do formulário (ex: certidao-de-protesto)"
    )

    nome_solicitacao = Column(
        String(255),
        nullable=False,
        comment="Nome legível (ex: Certidão de Protesto)"
    )

    dados_formulario = Column(
        JSON,
        nullable=False,
        comment="Todos os demais campos enviados"
    )

    criado_em = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="Data e hora de criação"
    )

    __table_args__ = (
        Index('idx_solicitacao_tipo', 'tipo_solicitacao'),
        {'comment': 'Solicitações recebidas pelo site'}
    )

    def __repr__(self) -> str:
        return (
            f"<Solicitacao("
            f"id={self.id}, "
            f"tipo_solicitacao={self.tipo_solicitacao}"
            f")>"
        )
