"""
Model SQLAlchemy para as configurações do site (linha única)
"""
from sqlalchemy import Column, String, Text, Integer, Boolean, TIMESTAMP, text
from sqlalchemy.dialects.postgresql import UUID
from datetime import datetime, timezone
import uuid

from ..database import Base


class SiteSettings(Base):
    """
    Configurações gerais do site: identidade visual, SMTP e API de consulta
    de processos.

    Existe no máximo uma linha; ela é criada na primeira gravação.
    Token da API e senha SMTP ficam criptografados (ver crypto.py).
    """
    __tablename__ = "site_settings"

    id = Column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    main_logo = Column(String(255), nullable=True)
    footer_logo = Column(String(255), nullable=True)
    browser_tab_name = Column(Text, nullable=True, comment="Título exibido na aba do navegador")

    smtp_host = Column(String(255), nullable=True)
    smtp_port = Column(Integer, nullable=True)
    smtp_user = Column(String(255), nullable=True)
    smtp_password_encrypted = Column(Text, nullable=True)
    smtp_secure = Column(Boolean, nullable=True, default=True)
    solicitacoes_email = Column(
        String(255),
        nullable=True,
        comment="Destinatário das notificações de solicitações e contatos"
    )

    api_url = Column(String(500), nullable=True, comment="Host da API de consulta de processos")
    api_token_encrypted = Column(Text, nullable=True)
    api_port = Column(Integer, nullable=True)

    atualizado_em = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="Data e hora da última atualização"
    )

    __table_args__ = (
        {'comment': 'Configurações do site (linha única)'},
    )

    def __repr__(self) -> str:
        return f"<SiteSettings(id={self.id}, api_url={self.api_url}, api_port={self.api_port})>"

    def touch(self) -> None:
        self.atualizado_em = datetime.now(timezone.utc)

    @property
    def api_token_configurado(self) -> bool:
        return bool(self.api_token_encrypted)

    @property
    def smtp_password_configurado(self) -> bool:
        return bool(self.smtp_password_encrypted)
