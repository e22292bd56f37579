"""
Model SQLAlchemy para mensagens do formulário de contato
"""
from sqlalchemy import Column, String, Text, Boolean, JSON, TIMESTAMP, text
from sqlalchemy.dialects.postgresql import UUID
import uuid

from ..database import Base


class MensagemContato(Base):
    __tablename__ = "contact_messages"

    id = Column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    nome = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    telefone = Column(String(20), nullable=False)
    mensagem = Column(Text, nullable=False)
    anexos = Column(JSON, nullable=True, comment="Lista de caminhos /uploads/...")
    lido = Column(Boolean, nullable=False, default=False, server_default=text("false"))

    criado_em = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        {'comment': 'Mensagens enviadas pelo formulário de contato'},
    )

    def __repr__(self) -> str:
        return f"<MensagemContato(id={self.id}, email={self.email})>"
