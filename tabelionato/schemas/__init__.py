"""
Schemas Pydantic para validação e serialização
"""
from .site_settings import SiteSettingsUpdate, SiteSettingsResponse
from .consulta import ConsultaProcessoRequest, TesteConexaoResponse, MensagemResponse
from .intake import (
    SolicitacaoResponse,
    SolicitacaoCriadaResponse,
    MensagemContatoCreate,
    MensagemContatoResponse,
)

__all__ = [
    "SiteSettingsUpdate",
    "SiteSettingsResponse",
    "ConsultaProcessoRequest",
    "TesteConexaoResponse",
    "MensagemResponse",
    "SolicitacaoResponse",
    "SolicitacaoCriadaResponse",
    "MensagemContatoCreate",
    "MensagemContatoResponse",
]
