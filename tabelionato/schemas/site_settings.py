"""
Schemas Pydantic para as configurações do site
"""
import re
from pydantic import BaseModel, Field, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class SiteSettingsUpdate(BaseModel):
    """
    Atualização parcial: campos omitidos não são alterados.
    apiToken/smtpPassword vazios removem o segredo gravado.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    main_logo: Optional[str] = Field(None, max_length=255)
    footer_logo: Optional[str] = Field(None, max_length=255)
    browser_tab_name: Optional[str] = None
    smtp_host: Optional[str] = Field(None, max_length=255)
    smtp_port: Optional[int] = Field(None, ge=1, le=65535)
    smtp_user: Optional[str] = Field(None, max_length=255)
    smtp_password: Optional[str] = None
    smtp_secure: Optional[bool] = None
    solicitacoes_email: Optional[str] = Field(None, max_length=255)
    api_url: Optional[str] = Field(None, max_length=500)
    api_token: Optional[str] = Field(None, max_length=500)
    api_port: Optional[int] = Field(None, ge=1, le=65535)

    @field_validator('solicitacoes_email')
    @classmethod
    def validar_email(cls, v: Optional[str]) -> Optional[str]:
        if v and not _EMAIL_RE.match(v.strip()):
            raise ValueError("Email inválido")
        return v.strip() if v else v

    @field_validator('api_url', 'smtp_host')
    @classmethod
    def strip_espacos(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v else v


class SiteSettingsResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    main_logo: Optional[str] = None
    footer_logo: Optional[str] = None
    browser_tab_name: Optional[str] = None
    smtp_host: Optional[str] = None
    smtp_port: Optional[int] = None
    smtp_user: Optional[str] = None
    smtp_secure: Optional[bool] = None
    smtp_password_configurado: bool = False
    solicitacoes_email: Optional[str] = None
    api_url: Optional[str] = None
    api_port: Optional[int] = None
    api_token_configurado: bool = False
    atualizado_em: Optional[datetime] = None
