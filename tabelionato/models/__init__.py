"""
Models do banco de dados
"""
from .site_settings import SiteSettings
from .solicitacao import Solicitacao
from .mensagem_contato import MensagemContato

__all__ = [
    "SiteSettings",
    "Solicitacao",
    "MensagemContato",
]
